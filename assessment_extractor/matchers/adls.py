"""Activities of daily living: basic and instrumental task levels, leisure"""
import re
from typing import Dict, Optional

from ..models import ADLsRecord
from ..patterns import BlockList, normalize_whitespace
from ..scorer import Weight
from .base import SectionMatcher

BASIC_TASKS = {
    "bathing": r"bathing|showering",
    "dressing": r"dressing",
    "toileting": r"toileting",
    "feeding": r"feeding|eating",
    "grooming": r"grooming|(?:personal\s+)?hygiene",
    "transfers": r"transfers?",
    "mobility": r"mobility|ambulation",
}

INSTRUMENTAL_TASKS = {
    "mealPrep": r"meal\s+prep(?:aration)?|cooking",
    "housekeeping": r"housekeeping|(?:house|home)\s+cleaning|household\s+chores",
    "shopping": r"(?:grocery\s+)?shopping",
    "finances": r"finances|money\s+management|banking",
    "medication": r"medications?(?:\s+management)?",
    "transportation": r"transportation|driving|community\s+access",
    "laundry": r"laundry",
}

_INSTRUMENTAL_HEADER = r"instrumental\s+(?:adls|activities\s+of\s+daily\s+living)|iadls"
_BASIC_HEADER = (r"basic\s+(?:adls|activities\s+of\s+daily\s+living)|(?<!instrumental\s)activities\s+of\s+daily\s+living"
                 r"|(?<!instrumental\s)b?adls|self[- ]care\s+activities")

# A header line opens a region that runs to a blank line or the instrumental header
_BASIC_REGION = re.compile(
    r"(?<![\w-])(?:" + _BASIC_HEADER + r")[^\n]*\n(?P<body>.*?)"
    r"(?=\n[ \t]*\n|\n[ \t]*(?:" + _INSTRUMENTAL_HEADER + r")|\Z)",
    re.IGNORECASE | re.DOTALL,
)
_INSTRUMENTAL_REGION = re.compile(
    r"(?<![\w-])(?:" + _INSTRUMENTAL_HEADER + r")[^\n]*\n(?P<body>.*?)(?=\n[ \t]*\n|\Z)",
    re.IGNORECASE | re.DOTALL,
)

_LEVELS = (
    ("modified independent", r"modified\s+independen(?:t|ce)|independent\s+with\s+(?:aids?|devices?|equipment)"),
    ("dependent", r"\bdependent\b|unable|total\s+assist(?:ance)?"),
    ("assistance", r"assist(?:ance|ed)?|requires\s+help|needs\s+help|with\s+help"),
    ("supervision", r"supervis(?:ion|ed)|stand-?by|cue(?:s|ing)?"),
    ("independent", r"independen(?:t|tly|ce)"),
)


def normalize_adl_level(text: Optional[str]) -> str:
    """
    Map a free-text ADL description onto a level name.

    Args:
        text: The description captured after the task label

    Returns:
        One of "modified independent", "dependent", "assistance", "supervision",
        "independent", or "unknown" when no level word is present
    """
    if not text:
        return "unknown"
    for level, pattern in _LEVELS:
        if re.search(pattern, text, re.IGNORECASE):
            return level
    return "unknown"


def _task_lines(region: str, tasks: Dict[str, str]) -> Dict[str, str]:
    found = {}
    for task, label in tasks.items():
        match = re.search(
            r"(?:^|\n)[ \t]*(?:[-•●▪◦*][ \t]*)?(?:" + label + r")[ \t]*(?::|[ \t][-–][ \t])[ \t]*(?P<value>[^\n]*\S)",
            region,
            re.IGNORECASE,
        )
        if match:
            found[task] = normalize_whitespace(match.group("value")).rstrip(" .;,")
    return {task: value for task, value in found.items() if value}


class ADLsMatcher(SectionMatcher):
    section_id = ADLsRecord.section_id
    record_type = ADLsRecord

    detect_patterns = (
        r"activities\s*of\s*daily\s*living",
        r"\bi?adls?\b",
        r"self[- ]?care\s*activities",
    )

    rules = (
        BlockList("leisure", r"leisure(?:\s+activities)?|recreation(?:al\s+activities)?|hobbies", comma_split=True),
    )

    weights = (
        Weight("basic", 0.50, saturate_at=4),
        Weight("instrumental", 0.30, saturate_at=3),
        Weight("leisure", 0.20),
    )

    def refine(self, text: str, values: Dict[str, object]) -> Dict[str, object]:
        basic = _BASIC_REGION.search(text)
        if basic:
            values["basic"] = _task_lines(basic.group("body"), BASIC_TASKS)

        instrumental = _INSTRUMENTAL_REGION.search(text)
        if instrumental:
            values["instrumental"] = _task_lines(instrumental.group("body"), INSTRUMENTAL_TASKS)
        return values
