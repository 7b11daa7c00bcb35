"""Functional status: mobility, transfers, balance, endurance and limitations"""
import re
from typing import Dict

from ..models import FunctionalStatusRecord
from ..patterns import BlockList, LabeledField, PatternField, dedupe, normalize_whitespace
from ..scorer import Weight
from .base import SectionMatcher

_DEVICE_USE = re.compile(
    r"\b(?:uses|using|requires|relies\s+on|ambulates\s+with)\s+(?:a|an|the|his|her|their)?\s*"
    r"(?P<value>(?:[\w-]+\s+){0,2}?(?:walker|cane|wheelchair|crutches|brace|rollator|scooter))\b",
    re.IGNORECASE,
)


class FunctionalStatusMatcher(SectionMatcher):
    section_id = FunctionalStatusRecord.section_id
    record_type = FunctionalStatusRecord

    detect_patterns = (
        r"functional\s*(?:status|assessment|evaluation|abilities|limitations)",
        r"(?:mobility|physical\s*function)\s*assessment",
        r"physical\s*(?:abilities|capabilities|limitations)",
    )

    rules = (
        LabeledField("ambulation", r"ambulation|gait|walking|mobility"),
        PatternField("ambulation", r"\b(?:ambulates|walks)\s+(?P<value>[^\n.;]+)"),
        LabeledField("transfers", r"transfers?(?:[ \t]+(?:ability|status))?"),
        PatternField("transfers", r"\btransfers\s+(?P<value>(?:independently|with\s+[^\n.;]+))"),
        LabeledField("balance", r"balance"),
        PatternField("balance", r"\bbalance\s+(?:is|was|appears|remains)\s+(?P<value>[^\n.;]+)"),
        LabeledField("endurance", r"endurance|activity[ \t]+tolerance"),
        PatternField("endurance", r"\bendurance\s+(?:is|was|appears|remains)\s+(?P<value>[^\n.;]+)"),
        BlockList("assistive_devices", r"assistive\s+devices?|mobility\s+aids?", comma_split=True),
        BlockList("limitations", r"(?:functional\s+|physical\s+)?limitations|restrictions"),
        LabeledField("upper_extremity", r"upper[ \t]+extremit(?:y|ies)(?:[ \t]+function)?|hand[ \t]+function|grip(?:[ \t]+strength)?"),
        LabeledField("posture", r"posture|sitting[ \t]+tolerance"),
    )

    weights = (
        Weight("ambulation", 0.25),
        Weight("transfers", 0.15),
        Weight("balance", 0.15),
        Weight("endurance", 0.10),
        Weight("assistive_devices", 0.15),
        Weight("limitations", 0.20),
    )

    def refine(self, text: str, values: Dict[str, object]) -> Dict[str, object]:
        if not values.get("assistive_devices"):
            devices = [normalize_whitespace(m.group("value")) for m in _DEVICE_USE.finditer(text)]
            values["assistive_devices"] = dedupe(devices)
        return values
