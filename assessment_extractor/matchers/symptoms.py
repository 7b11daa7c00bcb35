"""Symptoms: physical, cognitive and emotional complaints"""
import re
from typing import Dict

from ..models import SymptomsRecord
from ..patterns import BlockList, KeywordList, LabeledField, dedupe, normalize_whitespace
from ..scorer import Weight
from .base import SectionMatcher

_PAIN_REPORT = re.compile(
    r"\b(?:reports|complains\s+of|experiences)\s+(?:pain|discomfort)\s+(?:in|at|with)\s+(?P<value>[^.\n]+)",
    re.IGNORECASE,
)
_PAIN_RATING = re.compile(r"\bpain\b[^.\n]*?(?P<value>\d{1,2})\s*/\s*10\b", re.IGNORECASE)

# Words that make a symptoms header specific rather than general
_SYMPTOM_QUALIFIERS = r"physical|cognitive|emotional|psychological|behaviou?ral|somatic"

COGNITIVE_DIFFICULTIES = KeywordList("cognitive", r"\b(?:difficulty|problems?|issues?|impairment)\s+(?:with|in)\s+"
    r"(?:memory|concentration|attention|focus|processing|planning|organization|problem\s+solving|multitasking|word\s+finding)")

EMOTIONAL_COMPLAINTS = KeywordList("emotional", r"\b(?:anxiety|depressed\s+mood|depression|irritability|"
    r"frustration|low\s+mood|mood\s+swings|fear\s+of\s+driving|nightmares|flashbacks|tearfulness)\b")


class SymptomsMatcher(SectionMatcher):
    section_id = SymptomsRecord.section_id
    record_type = SymptomsRecord

    detect_patterns = (
        r"(?:physical|cognitive|emotional)\s*symptoms",
        r"(?:reported|presenting|current)\s*(?:symptoms|problems|complaints)",
        r"chief\s*complaint|primary\s*concern|presenting\s*concerns",
        r"\bsymptoms\s*:",
    )

    rules = (
        BlockList("physical", r"physical\s+(?:symptoms|complaints)|somatic\s+symptoms"),
        BlockList("cognitive", r"cognitive\s+(?:symptoms|complaints|issues)"),
        BlockList("emotional", r"(?:emotional|psychological|behavioural|behavioral)\s+(?:symptoms|complaints|issues)"),
        BlockList("physical", r"(?:reported\s+|presenting\s+|current\s+)?symptoms"
                              r"|chief\s+complaints?|presenting\s+(?:concerns|complaints)",
                  not_after=_SYMPTOM_QUALIFIERS),
        LabeledField("pain_location", r"(?:pain[ \t]+location|location[ \t]+of[ \t]+pain)"),
        LabeledField("pain_severity", r"pain[ \t]+(?:rating|level|intensity|severity)"),
    )

    weights = (
        Weight("physical", 0.40, saturate_at=3),
        Weight("cognitive", 0.25, saturate_at=2),
        Weight("emotional", 0.25, saturate_at=2),
        Weight("pain_severity", 0.10),
    )

    def refine(self, text: str, values: Dict[str, object]) -> Dict[str, object]:
        if not values.get("physical"):
            reports = [
                "Pain: " + normalize_whitespace(match.group("value"))
                for match in _PAIN_REPORT.finditer(text)
            ]
            if reports:
                values["physical"] = dedupe(reports)

        if not values.get("cognitive"):
            values["cognitive"] = COGNITIVE_DIFFICULTIES.apply(text)

        if not values.get("emotional"):
            values["emotional"] = EMOTIONAL_COMPLAINTS.apply(text)

        if not values.get("pain_severity"):
            rating = _PAIN_RATING.search(text)
            if rating:
                values["pain_severity"] = f"{rating.group('value')}/10"
        return values
