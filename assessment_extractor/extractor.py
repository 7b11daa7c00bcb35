"""Main extraction orchestrator"""
import logging
import threading
from typing import Optional

from .domain_mapper import DomainMapper
from .models import MappingOutcome
from .pipeline import ExtractionPipeline
from .text_extractor import TextExtractor

logger = logging.getLogger(__name__)


class AssessmentExtractor:
    """Main orchestrator for assessment PDF extraction"""

    def __init__(self, pipeline: Optional[ExtractionPipeline] = None,
                 mapper: Optional[DomainMapper] = None):
        self.text_extractor = TextExtractor()
        self.pipeline = pipeline or ExtractionPipeline()
        self.mapper = mapper or DomainMapper()

    def extract(self, pdf_bytes: bytes,
                cancel_event: Optional[threading.Event] = None) -> MappingOutcome:
        """
        Main extraction method

        Args:
            pdf_bytes: PDF file as bytes
            cancel_event: Optional event checked between pages

        Returns:
            DomainRecord, or ExtractionFailure when nothing usable was found

        Raises:
            RenderAccessError: if the PDF cannot be opened
            ExtractionCancelled: if ``cancel_event`` is set mid-document
        """
        # 1. Reconstruct text page by page
        raw_text = self.text_extractor.extract_text(pdf_bytes, cancel_event)

        # 2-3. Match sections and map onto the assessment model
        return self.extract_from_text(raw_text)

    def extract_from_text(self, raw_text: str) -> MappingOutcome:
        """Run matching and mapping on already reconstructed text"""
        # 2. Run every section matcher
        result = self.pipeline.run(raw_text)

        # 3. Map onto the assessment data model
        outcome = self.mapper.map(result)
        if outcome.failed:
            logger.info("No usable data extracted: %s", outcome.reason)
        return outcome
