"""Base class shared by all section matchers"""
import logging
import re
from typing import Dict, Pattern, Sequence, Tuple, Type

from ..models import SectionRecord
from ..scorer import Weight, weighted_confidence

logger = logging.getLogger(__name__)


class SectionMatcher:
    """
    Detection patterns, extraction rules and a confidence table for one section.

    Subclasses declare everything as class-level data. ``rules`` are applied in
    order and the first rule that yields a value for a field wins; ``refine``
    is the hook for fallbacks that do not fit a rule. Matchers hold no state, so
    one instance can serve any number of documents concurrently.
    """
    section_id: str = ""
    record_type: Type[SectionRecord] = SectionRecord
    detect_patterns: Sequence[str] = ()
    rules: Sequence = ()
    weights: Sequence[Weight] = ()

    def __init__(self):
        self._detectors: Tuple[Pattern, ...] = tuple(
            re.compile(pattern, re.IGNORECASE) for pattern in self.detect_patterns
        )

    def detect(self, text: str) -> bool:
        """True when any detection pattern occurs anywhere in the text"""
        return any(detector.search(text) for detector in self._detectors)

    def extract(self, text: str) -> SectionRecord:
        """Build the section record from the full text; never depends on ``detect``"""
        values: Dict[str, object] = {}
        for rule in self.rules:
            if rule.name in values:
                continue
            value = rule.apply(text)
            if value:
                logger.debug("%s: %s <- %r", self.section_id, rule.name, value)
                values[rule.name] = value

        values = self.refine(text, values)
        return self.record_type(**{name: value for name, value in values.items() if value})

    def refine(self, text: str, values: Dict[str, object]) -> Dict[str, object]:
        """Fill or post-process fields the declarative rules could not"""
        return values

    def score_confidence(self, record: SectionRecord) -> float:
        score, _ = weighted_confidence(record.to_dict(), self.weights)
        return score

    def field_confidence(self, record: SectionRecord) -> Dict[str, float]:
        """Sub-scores for the weighted fields of ``record``"""
        _, field_scores = weighted_confidence(record.to_dict(), self.weights)
        return field_scores

    def __repr__(self):
        return f"{type(self).__name__}(section_id={self.section_id!r})"
