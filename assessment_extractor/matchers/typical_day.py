"""Typical day: routines by time of day, wake and bed times"""
from ..models import TypicalDayRecord
from ..patterns import BlockList, LabeledField, PatternField
from ..scorer import Weight
from .base import SectionMatcher

_CLOCK_TIME = r"(?P<value>\d{1,2}(?::\d{2})?\s*(?:a\.?m\.?|p\.?m\.?)?)"


class TypicalDayMatcher(SectionMatcher):
    section_id = TypicalDayRecord.section_id
    record_type = TypicalDayRecord

    detect_patterns = (
        r"typical\s*day",
        r"daily\s*routine",
        r"day\s*in\s*the\s*life",
    )

    rules = (
        LabeledField("wake_time", r"wake(?:[ -]?up)?[ \t]+time|waking[ \t]+time"),
        PatternField("wake_time", r"\b(?:wakes(?:\s+up)?|gets\s+up|awakens|rises)\s+(?:at|around|by)\s+(?:approximately\s+)?" + _CLOCK_TIME),
        LabeledField("bed_time", r"bed[ \t]*time"),
        PatternField("bed_time", r"\b(?:goes\s+to\s+bed|retires|falls\s+asleep)\s+(?:at|around|by)\s+(?:approximately\s+)?" + _CLOCK_TIME),
        BlockList("morning", r"morning(?:\s+routine)?", comma_split=True),
        BlockList("afternoon", r"afternoon(?:\s+routine)?", comma_split=True),
        BlockList("evening", r"evening(?:\s+routine)?", comma_split=True),
        BlockList("night", r"night(?:time)?(?:\s+routine)?|bedtime\s+routine|overnight", comma_split=True),
    )

    weights = (
        Weight("morning", 0.20),
        Weight("afternoon", 0.20),
        Weight("evening", 0.20),
        Weight("night", 0.20),
        Weight("wake_time", 0.10),
        Weight("bed_time", 0.10),
    )
