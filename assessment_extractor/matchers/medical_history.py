"""Medical history: conditions, medications, surgeries, allergies and pre-accident status"""
import re
from typing import Dict

from ..models import MedicalHistoryRecord
from ..patterns import BlockList, BlockText, KeywordList, dedupe, normalize_whitespace
from ..scorer import Weight
from .base import SectionMatcher

# General section headers; their blocks stop at the first specific sub-header
GENERAL_HEADER = r"(?:past\s+)?medical\s+history|health\s+history|pmh|medical\s+background"

_CONDITION_INDICATOR = re.compile(
    r"\b(?:diagnosed\s+with|suffers?\s+from|(?:has|had|reports)\s+a\s+(?:past\s+)?history\s+of)\s+(?P<value>[^,.;\n]+)",
    re.IGNORECASE,
)

COMMON_CONDITIONS = KeywordList("conditions", r"\b(?:"
    r"diabetes|hypertension|asthma|(?:osteo|rheumatoid\s+)?arthritis|depression|anxiety|copd|heart\s+disease|"
    r"cancer|stroke|obesity|fibromyalgia|migraines?|epilepsy|multiple\s+sclerosis|parkinson'?s|"
    r"chronic\s+pain|bipolar\s+disorder|ptsd|hypothyroidism|concussion|traumatic\s+brain\s+injury|"
    r"whiplash|herniated\s+disc|spinal\s+stenosis|radiculopathy|neuropathy"
    r")\b")


class MedicalHistoryMatcher(SectionMatcher):
    section_id = MedicalHistoryRecord.section_id
    record_type = MedicalHistoryRecord

    detect_patterns = (
        r"(?:medical|health)\s*history",
        r"past\s*(?:medical|health)",
        r"previous\s*(?:conditions|diagnoses)",
        r"(?:current|chronic|pre-?existing)\s*conditions",
        r"pre-?accident\s*(?:health|functioning|status|conditions)",
        r"prior\s*to\s*the\s*accident",
        r"relevant\s*medical\s*(?:information|background)",
        r"\bpmh\b",
        r"medical\s*background",
    )

    rules = (
        BlockList("conditions", r"(?:current|chronic|medical|pre-?existing)\s+conditions|(?:past\s+)?diagnoses"),
        BlockList("medications", r"(?:current\s+)?medications?"),
        BlockList("surgeries", r"surger(?:y|ies)|surgical\s+history|(?:past\s+)?operations"),
        BlockList("allergies", r"(?:known\s+)?allergies", comma_split=True),
        BlockText("primary_diagnosis", r"(?:primary|working|current)\s+diagnosis|diagnosis"),
        BlockText("pre_accident_status", r"pre-?accident\s+(?:status|health|functioning|history)|prior\s+to\s+the\s+accident"),
        # The general block only fills what the specific sub-headers left empty
        BlockList("conditions", GENERAL_HEADER),
    )

    weights = (
        Weight("conditions", 0.30),
        Weight("medications", 0.25),
        Weight("surgeries", 0.15),
        Weight("allergies", 0.10),
        Weight("pre_accident_status", 0.10),
        Weight("primary_diagnosis", 0.10),
    )

    def refine(self, text: str, values: Dict[str, object]) -> Dict[str, object]:
        if not values.get("conditions"):
            found = [
                normalize_whitespace(match.group("value"))
                for match in _CONDITION_INDICATOR.finditer(text)
            ]
            found = [condition for condition in found if len(condition) > 3]
            if not found:
                found = COMMON_CONDITIONS.apply(text) or []
            if found:
                values["conditions"] = dedupe(found)
        return values
