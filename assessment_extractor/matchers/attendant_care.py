"""Attendant care: care needs, current caregivers and recommended hours"""
from ..models import AttendantCareRecord
from ..patterns import BlockList, LabeledField, PatternField
from ..scorer import Weight
from .base import SectionMatcher

_HOURS = r"(?P<value>\d+(?:\.\d+)?)\s*(?:hours?|hrs?\.?)"


class AttendantCareMatcher(SectionMatcher):
    section_id = AttendantCareRecord.section_id
    record_type = AttendantCareRecord

    detect_patterns = (
        r"attendant\s*care",
        r"(?:personal|care)\s*(?:support|assistance)\s*needs",
        r"form\s*1\b",
        r"care\s*(?:needs|requirements)\s*assessment",
    )

    rules = (
        BlockList("personal_care", r"personal\s+care(?:\s+needs)?|(?:level\s+1|self[- ]care)\s+needs"),
        BlockList("housekeeping", r"housekeeping(?:\s+needs)?|(?:basic\s+)?homecare(?:\s+needs)?"),
        BlockList("supervision", r"supervision(?:\s+needs)?|(?:level\s+3\s+)?supervisory\s+care"),
        LabeledField("caregiver", r"(?:primary[ \t]+)?caregiver|care[ \t]+provided[ \t]+by|current[ \t]+care[ \t]+provider"),
        BlockList("current_services", r"current\s+(?:services|care|supports)", comma_split=True),
        PatternField("daily_hours", _HOURS + r"\s*(?:per|a|/)\s*day\b"),
        PatternField("daily_hours", r"(?:daily|total)\s+(?:care\s+)?hours\s*:\s*(?P<value>\d+(?:\.\d+)?)"),
        PatternField("weekly_hours", _HOURS + r"\s*(?:per|a|/)\s*week\b"),
        PatternField("weekly_hours", r"(?:weekly|care)\s+hours\s*:\s*(?P<value>\d+(?:\.\d+)?)"),
        BlockList("recommendations", r"(?:attendant\s+)?care\s+recommendations"),
    )

    weights = (
        Weight("personal_care", 0.25),
        Weight("housekeeping", 0.15),
        Weight("supervision", 0.10),
        Weight("daily_hours", 0.25, alternates=("weekly_hours",)),
        Weight("caregiver", 0.10),
        Weight("recommendations", 0.15),
    )
