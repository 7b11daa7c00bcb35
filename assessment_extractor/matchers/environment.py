"""Environmental assessment: dwelling, safety hazards, barriers and equipment"""
from ..models import EnvironmentRecord
from ..patterns import BlockList, LabeledField, PatternField
from ..scorer import Weight
from .base import SectionMatcher


class EnvironmentMatcher(SectionMatcher):
    section_id = EnvironmentRecord.section_id
    record_type = EnvironmentRecord

    detect_patterns = (
        r"(?:environmental|home)\s*(?:assessment|environment|safety)",
        r"(?:home|housing|living)\s*(?:evaluation|environment)",
        r"safety\s*(?:hazards|concerns|risks)",
        r"accessibility\s*(?:issues|barriers|concerns)",
    )

    rules = (
        LabeledField("home_type", r"type[ \t]+of[ \t]+(?:residence|home|dwelling)|(?:home|residence|dwelling)[ \t]+type|dwelling"),
        PatternField("home_type", r"\b(?:resides|lives)\s+in\s+(?:a|an)\s+(?P<value>[^\n,.;]*?"
                                  r"(?:house|home|apartment|condo(?:minium)?|bungalow|townhouse|duplex))\b"),
        LabeledField("living_arrangement", r"living[ \t]+arrangements?|lives[ \t]+with"),
        BlockList("layout", r"(?:home\s+)?layout|floor\s+plan", comma_split=True),
        LabeledField("entrance", r"entrance|entry|access[ \t]+to[ \t]+(?:the[ \t]+)?(?:home|residence)"),
        BlockList("safety_hazards", r"safety\s+(?:hazards|concerns|risks)|(?:identified\s+)?hazards"),
        BlockList("barriers", r"(?:accessibility\s+)?barriers|accessibility(?:\s+issues)?"),
        BlockList("equipment", r"(?:current\s+|existing\s+|assistive\s+)?equipment", comma_split=True),
        BlockList("recommendations", r"(?:environmental|home(?:\s+(?:safety|modification))?)\s+recommendations"),
    )

    weights = (
        Weight("home_type", 0.20),
        Weight("layout", 0.10),
        Weight("safety_hazards", 0.30),
        Weight("barriers", 0.20),
        Weight("recommendations", 0.20),
    )
