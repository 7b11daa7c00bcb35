"""Extraction pipeline: runs every section matcher over the reconstructed text"""
import logging
from typing import Dict, List, Optional, Sequence

from .config import NO_STRUCTURE_REASON, NO_TEXT_REASON
from .matchers import SectionMatcher, default_registry
from .models import ExtractionResult, ExtractionStage, SectionRecord
from .scorer import clamp

logger = logging.getLogger(__name__)


class ExtractionPipeline:
    """Turns raw document text into a confidence-scored ExtractionResult"""

    def __init__(self, matchers: Optional[Sequence[SectionMatcher]] = None):
        self.matchers: List[SectionMatcher] = list(matchers) if matchers is not None else default_registry()

    def run(self, raw_text: str) -> ExtractionResult:
        """
        Run each matcher exactly once over the full text

        Args:
            raw_text: Reconstructed document text

        Returns:
            ExtractionResult; ``failed`` is set when the text is blank or no
            matcher detected or extracted anything
        """
        if not raw_text or not raw_text.strip():
            logger.info("Extraction failed: %s", NO_TEXT_REASON)
            return ExtractionResult(
                original_text=raw_text or "",
                failed=True,
                failure_reason=NO_TEXT_REASON,
                stage=ExtractionStage.RECONSTRUCTING,
            )

        sections: Dict[str, SectionRecord] = {}
        section_confidence: Dict[str, float] = {}
        field_confidence: Dict[str, Dict[str, float]] = {}

        for matcher in self.matchers:
            try:
                detected = matcher.detect(raw_text)
                record = matcher.extract(raw_text)
                if not detected and not record.has_content():
                    continue

                score = clamp(matcher.score_confidence(record))
                field_scores = {name: clamp(value) for name, value in matcher.field_confidence(record).items()}
            except Exception:
                # One faulty matcher never aborts the document
                logger.exception("Matcher %s failed; section omitted", matcher.section_id)
                continue

            sections[matcher.section_id] = record
            section_confidence[matcher.section_id] = score
            field_confidence[matcher.section_id] = field_scores
            logger.debug("Section %s: detected=%s confidence=%.2f", matcher.section_id, detected, score)

        if not sections:
            logger.info("Extraction failed: %s", NO_STRUCTURE_REASON)
            return ExtractionResult(
                original_text=raw_text,
                failed=True,
                failure_reason=NO_STRUCTURE_REASON,
                stage=ExtractionStage.FAILED,
            )

        logger.info("Found %d sections: %s", len(sections), ", ".join(sections))
        return ExtractionResult(
            sections=sections,
            section_confidence=section_confidence,
            field_confidence=field_confidence,
            original_text=raw_text,
        )
