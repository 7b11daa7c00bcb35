"""Text extraction from PDF using PyMuPDF and pdfplumber, with layout-based text reconstruction"""
import io
import logging
import threading
from dataclasses import dataclass
from typing import Iterable, Iterator, List, Optional, Tuple

import fitz  # PyMuPDF
import pdfplumber

from .config import LINE_BREAK_THRESHOLD, WORD_GAP_THRESHOLD
from .errors import ExtractionCancelled, RenderAccessError

logger = logging.getLogger(__name__)

PAGE_SEPARATOR = "\n\n"


@dataclass(frozen=True)
class TextFragment:
    """One positioned run of glyphs as reported by the PDF text layer"""
    text: str
    origin_x: float
    origin_y: float
    width: float

    def __repr__(self):
        return f"TextFragment(text='{self.text[:30]}', origin=({self.origin_x}, {self.origin_y}), width={self.width})"


def reconstruct_page(fragments: Iterable[TextFragment],
                     line_break_threshold: float = LINE_BREAK_THRESHOLD,
                     word_gap_threshold: float = WORD_GAP_THRESHOLD) -> Tuple[str, int]:
    """
    Rebuild one page of text from positioned fragments.

    Newlines are inserted when the vertical origin moves more than
    ``line_break_threshold``; a single space is inserted when a fragment on the
    same line starts more than ``word_gap_threshold`` past the previous one's end.

    Returns:
        Tuple of (page text, number of non-blank fragments used)
    """
    parts = []
    last_x_end: Optional[float] = None
    last_y: Optional[float] = None
    count = 0

    for fragment in fragments:
        if not fragment.text.strip():
            continue

        if last_y is not None and last_x_end is not None:
            if abs(fragment.origin_y - last_y) > line_break_threshold:
                parts.append("\n")
            elif fragment.origin_x - last_x_end > word_gap_threshold:
                parts.append(" ")

        parts.append(fragment.text)
        last_x_end = fragment.origin_x + fragment.width
        last_y = fragment.origin_y
        count += 1

    return "".join(parts), count


def reconstruct_text(pages: Iterable[Iterable[TextFragment]],
                     cancel_event: Optional[threading.Event] = None) -> str:
    """
    Rebuild the full document text, one page at a time.

    Args:
        pages: Page-major iterable of fragment sequences (render order within a page)
        cancel_event: Checked between pages; when set, extraction stops

    Returns:
        The reconstructed text, or an empty string when no fragment carried text

    Raises:
        ExtractionCancelled: if ``cancel_event`` was set before all pages were read
    """
    page_texts = []
    total_fragments = 0

    for page_number, fragments in enumerate(pages, start=1):
        if cancel_event is not None and cancel_event.is_set():
            raise ExtractionCancelled(f"Extraction cancelled before page {page_number}")

        page_text, count = reconstruct_page(fragments)
        logger.debug("Page %d: %d fragments, %d characters", page_number, count, len(page_text))
        total_fragments += count
        page_texts.append(page_text + PAGE_SEPARATOR)

    if total_fragments == 0:
        return ""
    return "".join(page_texts)


class TextExtractor:
    """Reads positioned text fragments from PDF bytes, page by page"""

    def __init__(self):
        self.use_pymupdf = True  # Prefer PyMuPDF for better performance

    def extract_text(self, pdf_bytes: bytes,
                     cancel_event: Optional[threading.Event] = None) -> str:
        """
        Extract and reconstruct the document text from PDF bytes

        Raises:
            RenderAccessError: if no renderer can open the document
            ExtractionCancelled: if ``cancel_event`` is set between pages
        """
        pages = self.iter_pages(pdf_bytes)
        try:
            text = reconstruct_text(pages, cancel_event)
        finally:
            pages.close()
        logger.info("Reconstructed %d characters of text", len(text))
        return text

    def iter_pages(self, pdf_bytes: bytes) -> Iterator[List[TextFragment]]:
        """
        Open the document and return a generator yielding one page of fragments at a time.

        The document is opened eagerly so that unreadable input fails here,
        before any page is consumed.
        """
        if self.use_pymupdf:
            try:
                doc = fitz.open(stream=pdf_bytes, filetype="pdf")
            except Exception as e:
                # Fallback to pdfplumber if PyMuPDF fails
                logger.warning("PyMuPDF could not open document (%s), trying pdfplumber", e)
            else:
                if doc.needs_pass:
                    doc.close()
                    raise RenderAccessError("Document is password protected")
                return self._iter_pymupdf(doc)

        try:
            pdf = pdfplumber.open(io.BytesIO(pdf_bytes))
        except Exception as e:
            raise RenderAccessError(f"Failed to open PDF: {e}") from e
        return self._iter_pdfplumber(pdf)

    def _iter_pymupdf(self, doc) -> Iterator[List[TextFragment]]:
        """Yield fragments per page using PyMuPDF spans"""
        logger.info("PDF loaded with %d pages (PyMuPDF)", len(doc))
        try:
            for page_number in range(1, len(doc) + 1):
                try:
                    fragments = self._pymupdf_fragments(doc[page_number - 1])
                except Exception as e:
                    raise RenderAccessError(f"Failed to read page {page_number}: {e}") from e
                yield fragments
        finally:
            doc.close()

    @staticmethod
    def _pymupdf_fragments(page) -> List[TextFragment]:
        fragments = []
        text_dict = page.get_text("dict")

        for block in text_dict["blocks"]:
            if "lines" not in block:  # Image block
                continue
            for line in block["lines"]:
                for span in line["spans"]:
                    x0, _, x1, _ = span["bbox"]
                    origin_x, origin_y = span.get("origin", (x0, span["bbox"][3]))
                    fragments.append(TextFragment(
                        text=span["text"],
                        origin_x=origin_x,
                        origin_y=origin_y,
                        width=x1 - x0,
                    ))
        return fragments

    def _iter_pdfplumber(self, pdf) -> Iterator[List[TextFragment]]:
        """Yield fragments per page using pdfplumber text lines (fallback)"""
        try:
            try:
                pages = pdf.pages
            except Exception as e:
                raise RenderAccessError(f"Failed to read page tree: {e}") from e
            logger.info("PDF loaded with %d pages (pdfplumber)", len(pages))

            for page_number, page in enumerate(pages, start=1):
                try:
                    fragments = self._pdfplumber_fragments(page)
                except Exception as e:
                    raise RenderAccessError(f"Failed to read page {page_number}: {e}") from e
                yield fragments
        finally:
            pdf.close()

    @staticmethod
    def _pdfplumber_fragments(page) -> List[TextFragment]:
        fragments = []
        # One fragment per text line, inter-word spaces included
        for line in page.extract_text_lines(return_chars=False):
            x0 = line.get("x0", 0)
            fragments.append(TextFragment(
                text=line.get("text", ""),
                origin_x=x0,
                origin_y=line.get("top", 0),
                width=line.get("x1", x0) - x0,
            ))
        return fragments
