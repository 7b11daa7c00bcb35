import threading

import pytest
from pdfplumber.page import Page as PdfplumberPage

from assessment_extractor import text_extractor
from assessment_extractor.errors import ExtractionCancelled, RenderAccessError
from assessment_extractor.text_extractor import (
    PAGE_SEPARATOR,
    TextExtractor,
    TextFragment,
    reconstruct_page,
    reconstruct_text,
)


def _frag(text: str, x: float, y: float, width: float) -> TextFragment:
    return TextFragment(text=text, origin_x=x, origin_y=y, width=width)


class TestReconstructPage:
    def test_space_inserted_for_wide_gap(self) -> None:
        """A gap above the word threshold on the same line becomes one space."""
        text, count = reconstruct_page([_frag("Hello", 0, 100, 20), _frag("World", 30, 100, 25)])

        assert text == "Hello World"
        assert count == 2

    def test_narrow_gap_joins_fragments(self) -> None:
        """Fragments closer than the word threshold are concatenated."""
        text, _ = reconstruct_page([_frag("Hel", 0, 100, 15), _frag("lo", 17, 100, 10)])

        assert text == "Hello"

    def test_gap_equal_to_threshold_adds_nothing(self) -> None:
        """Only a gap strictly greater than the threshold inserts a space."""
        text, _ = reconstruct_page([_frag("ab", 0, 100, 10), _frag("cd", 15, 100, 10)])

        assert text == "abcd"

    def test_vertical_move_starts_new_line(self) -> None:
        """A vertical delta above the line threshold inserts a newline."""
        text, _ = reconstruct_page([_frag("Line one", 0, 100, 40), _frag("Line two", 0, 114.4, 40)])

        assert text == "Line one\nLine two"

    def test_upward_move_also_breaks_line(self) -> None:
        """The vertical delta is compared by absolute value."""
        text, _ = reconstruct_page([_frag("lower", 0, 200, 30), _frag("upper", 0, 100, 30)])

        assert text == "lower\nupper"

    def test_small_baseline_shift_stays_on_line(self) -> None:
        """Superscript-like shifts within the threshold do not break the line."""
        text, _ = reconstruct_page([_frag("x", 0, 100, 5), _frag("2", 5, 97, 3)])

        assert text == "x2"

    def test_blank_fragments_are_skipped(self) -> None:
        """Whitespace-only fragments neither print nor move the trackers."""
        text, count = reconstruct_page([
            _frag("A", 0, 100, 5),
            _frag("   ", 10, 300, 5),
            _frag("B", 20, 100, 5),
        ])

        assert text == "A B"
        assert count == 2

    def test_empty_page(self) -> None:
        """A page with no fragments reconstructs to an empty string."""
        assert reconstruct_page([]) == ("", 0)


class TestReconstructText:
    def test_every_page_followed_by_separator(self) -> None:
        """Each page ends with a blank-line separator."""
        pages = [[_frag("A", 0, 100, 5)], [_frag("B", 0, 100, 5)]]

        assert reconstruct_text(pages) == "A" + PAGE_SEPARATOR + "B" + PAGE_SEPARATOR

    def test_trackers_reset_per_page(self) -> None:
        """The first fragment of a page never gets a leading newline or space."""
        pages = [[_frag("End", 0, 700, 15)], [_frag("Start", 0, 50, 25)]]

        assert reconstruct_text(pages) == "End\n\nStart\n\n"

    def test_no_fragments_gives_empty_text(self) -> None:
        """A document without any text fragments yields an empty string."""
        assert reconstruct_text([[], [_frag("  ", 0, 0, 5)]]) == ""

    def test_cancel_before_first_page(self) -> None:
        """A set cancel event raises instead of returning partial text."""
        event = threading.Event()
        event.set()

        with pytest.raises(ExtractionCancelled):
            reconstruct_text([[_frag("A", 0, 100, 5)]], cancel_event=event)

    def test_cancel_between_pages(self) -> None:
        """Cancellation is honoured at the next page boundary."""
        event = threading.Event()

        def pages():
            yield [_frag("First", 0, 100, 25)]
            event.set()
            yield [_frag("Second", 0, 100, 30)]

        with pytest.raises(ExtractionCancelled):
            reconstruct_text(pages(), cancel_event=event)


class TestTextExtractor:
    def test_reconstructs_pdf_text(self, assessment_pdf: bytes) -> None:
        """Lines of a rendered PDF come back as separate lines."""
        text = TextExtractor().extract_text(assessment_pdf)

        assert "Client Name: Jane Doe\nDate of Birth: 03/14/1975" in text
        assert "Safety Hazards:\n- Loose rugs in hallway" in text
        assert text.endswith(PAGE_SEPARATOR)

    def test_pages_are_separated(self, assessment_pdf: bytes) -> None:
        """The page break appears as a blank line."""
        text = TextExtractor().extract_text(assessment_pdf)

        assert "Naproxen 500 mg twice daily\n\nHome Environment" in text

    def test_iter_pages_yields_one_list_per_page(self, assessment_pdf: bytes) -> None:
        """Pages are produced lazily, one fragment list per page."""
        pages = list(TextExtractor().iter_pages(assessment_pdf))

        assert len(pages) == 2
        assert all(isinstance(fragment, TextFragment) for fragment in pages[0])

    def test_blank_pdf_gives_empty_text(self, blank_pdf: bytes) -> None:
        """A PDF without a text layer reconstructs to an empty string."""
        assert TextExtractor().extract_text(blank_pdf) == ""

    def test_pdfplumber_fallback(self, assessment_pdf: bytes, monkeypatch: pytest.MonkeyPatch) -> None:
        """When PyMuPDF cannot open the document, pdfplumber reads it."""
        def broken_open(*args, **kwargs):
            raise RuntimeError("cannot open")

        monkeypatch.setattr(text_extractor.fitz, "open", broken_open)

        text = TextExtractor().extract_text(assessment_pdf)

        assert "Client Name: Jane Doe" in text

    def test_unreadable_document_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """When no renderer can open the bytes a RenderAccessError is raised."""
        def broken_open(*args, **kwargs):
            raise RuntimeError("cannot open")

        monkeypatch.setattr(text_extractor.fitz, "open", broken_open)
        monkeypatch.setattr(text_extractor.pdfplumber, "open", broken_open)

        with pytest.raises(RenderAccessError):
            TextExtractor().extract_text(b"not a pdf")

    def test_cancelled_extraction(self, assessment_pdf: bytes) -> None:
        """Cancellation propagates out of extract_text."""
        event = threading.Event()
        event.set()

        with pytest.raises(ExtractionCancelled):
            TextExtractor().extract_text(assessment_pdf, cancel_event=event)

    def test_page_read_failure_raises_render_error(self, assessment_pdf: bytes,
                                                   monkeypatch: pytest.MonkeyPatch) -> None:
        """A renderer error while reading a page surfaces as RenderAccessError."""
        def broken_get_text(*args, **kwargs):
            raise RuntimeError("corrupt content stream")

        monkeypatch.setattr(text_extractor.fitz.Page, "get_text", broken_get_text)

        with pytest.raises(RenderAccessError, match="page 1"):
            TextExtractor().extract_text(assessment_pdf)

    def test_pdfplumber_page_failure_raises_render_error(self, assessment_pdf: bytes,
                                                         monkeypatch: pytest.MonkeyPatch) -> None:
        """The pdfplumber path wraps page errors the same way."""
        def broken_lines(*args, **kwargs):
            raise ValueError("bad glyph table")

        monkeypatch.setattr(PdfplumberPage, "extract_text_lines", broken_lines)
        extractor = TextExtractor()
        extractor.use_pymupdf = False

        with pytest.raises(RenderAccessError, match="page 1"):
            extractor.extract_text(assessment_pdf)
