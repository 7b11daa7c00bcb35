"""Purpose of the assessment and the methodology used to conduct it"""
import re
from typing import Dict

from ..models import MethodologyRecord, PurposeRecord
from ..patterns import BlockList, BlockText, LabeledField, PatternField, dedupe, normalize_whitespace
from ..scorer import Weight
from .base import SectionMatcher


class PurposeMatcher(SectionMatcher):
    section_id = PurposeRecord.section_id
    record_type = PurposeRecord

    detect_patterns = (
        r"(?:purpose|objective)s?\s*of\s*(?:the\s*)?(?:assessment|evaluation|referral)",
        r"(?:reason|rationale)\s*for\s*(?:referral|assessment)",
        r"assessment\s*(?:purpose|goals|objectives)",
        r"referral\s*questions",
    )

    rules = (
        BlockText("primary_purpose", r"purpose(?:\s+of\s+(?:the\s+)?(?:assessment|evaluation|report|referral))?"
                                     r"|reason\s+for\s+(?:referral|assessment)"),
        PatternField("primary_purpose", r"\b(?:this|the)\s+(?:assessment|evaluation|report)\s+(?:was|is)\s+"
                                        r"(?:conducted|completed|requested|prepared)\s+to\s+(?P<value>[^\n.]+)"),
        BlockList("objectives", r"(?:assessment\s+)?objectives|assessment\s+goals|goals\s+of\s+(?:the\s+)?assessment"),
        BlockList("referral_questions", r"referral\s+questions|questions\s+to\s+(?:address|be\s+answered)"
                                        r"|(?:key|specific)\s+questions", questions=True),
        LabeledField("referral_source", r"referral[ \t]+source|referred[ \t]+by|referring[ \t]+(?:party|agent|physician)"),
        LabeledField("referral_date", r"date[ \t]+of[ \t]+referral|referral[ \t]+date"),
        LabeledField("assessment_date", r"date[ \t]+of[ \t]+assessment|assessment[ \t]+date"),
    )

    weights = (
        Weight("primary_purpose", 0.30, saturate_at=5),
        Weight("objectives", 0.35, saturate_at=3),
        Weight("referral_questions", 0.35, saturate_at=3),
    )


_INTERVIEWEE = re.compile(r"\binterview(?:ed|s)?\s+(?:with|of)\s+(?:the\s+)?(?P<value>[^.,;:\n]+)", re.IGNORECASE)
_OBSERVED = re.compile(r"\bobservation(?:s)?\s+of\s+(?:the\s+)?(?P<value>[^.,;:\n]+)", re.IGNORECASE)


class MethodologyMatcher(SectionMatcher):
    section_id = MethodologyRecord.section_id
    record_type = MethodologyRecord

    detect_patterns = (
        r"\bmethodology\b",
        r"assessment\s*(?:methods?|approach|procedures?)",
        r"standardized\s*(?:tests|measures|assessments)",
    )

    rules = (
        BlockList("methods", r"methodology|(?:assessment|evaluation)\s+(?:methods|methodology|procedures?)"),
        BlockList("instruments", r"standardized\s+(?:tests|measures|assessments)|assessment\s+(?:tools|instruments)"
                                 r"|instruments|tests\s+administered", comma_split=True),
        BlockList("interviews", r"interviews?(?:\s+conducted)?", comma_split=True),
        BlockList("observations", r"observations?", comma_split=True),
    )

    weights = (
        Weight("methods", 0.40, saturate_at=3),
        Weight("instruments", 0.30, saturate_at=2),
        Weight("interviews", 0.15),
        Weight("observations", 0.15),
    )

    def refine(self, text: str, values: Dict[str, object]) -> Dict[str, object]:
        methods = values.get("methods") or []
        if not values.get("interviews"):
            people = [normalize_whitespace(m.group("value")) for item in methods for m in _INTERVIEWEE.finditer(item)]
            values["interviews"] = dedupe(people)
        if not values.get("observations"):
            activities = [normalize_whitespace(m.group("value")) for item in methods for m in _OBSERVED.finditer(item)]
            values["observations"] = dedupe(activities)
        return values
