from pathlib import Path
from typing import List

import pytest
from reportlab.lib.pagesizes import LETTER
from reportlab.pdfgen import canvas

from assessment_extractor.extractor import AssessmentExtractor

from .samples import ASSESSMENT_PAGE_ONE, ASSESSMENT_PAGE_TWO, GROCERY_LIST


def _create_pdf(path: Path, pages: List[List[str]]) -> None:
    """Creates a deterministic PDF with one text object per page."""
    c = canvas.Canvas(str(path), pagesize=LETTER)
    width, height = LETTER

    for lines in pages:
        text = c.beginText(40, height - 50)
        for line in lines:
            text.textLine(line)
        c.drawText(text)
        c.showPage()

    c.save()


@pytest.fixture(scope="module")
def pdf_dir(tmp_path_factory: pytest.TempPathFactory) -> Path:
    """Create all test PDFs once per module."""
    dir_path: Path = tmp_path_factory.mktemp("pdfs")

    _create_pdf(dir_path / "assessment.pdf", [ASSESSMENT_PAGE_ONE, ASSESSMENT_PAGE_TWO])
    _create_pdf(dir_path / "grocery.pdf", [GROCERY_LIST.strip().splitlines()])
    _create_pdf(dir_path / "blank.pdf", [[]])

    return dir_path


@pytest.fixture(scope="module")
def assessment_pdf(pdf_dir: Path) -> bytes:
    return (pdf_dir / "assessment.pdf").read_bytes()


@pytest.fixture(scope="module")
def blank_pdf(pdf_dir: Path) -> bytes:
    return (pdf_dir / "blank.pdf").read_bytes()


@pytest.fixture
def extractor() -> AssessmentExtractor:
    return AssessmentExtractor()
