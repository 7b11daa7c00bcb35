"""Demographics: client identity, contact details and claim references"""
import re
from typing import Dict

from ..models import DemographicsRecord
from ..patterns import LabeledField, PatternField
from ..scorer import Weight
from .base import SectionMatcher

_HONORIFIC = re.compile(r"^(?:mr|mrs|ms|miss|dr)\.?\s+", re.IGNORECASE)


class DemographicsMatcher(SectionMatcher):
    section_id = DemographicsRecord.section_id
    record_type = DemographicsRecord

    detect_patterns = (
        r"client\s*(?:name|information|details)",
        r"(?:personal|patient)\s*(?:information|details)",
        r"demographic(?:s|\s+(?:information|details|data))",
        r"date\s*of\s*(?:birth|loss)",
        r"\bfile\s*(?:no|number)\b",
        r"medical\s*legal\s*assessment",
    )

    rules = (
        LabeledField("name", r"(?:client|patient|claimant)(?:'s)?[ \t]+(?:full[ \t]+)?name"),
        LabeledField("name", r"(?:full[ \t]+)?name", line_start=True),
        LabeledField("name", r"(?:re:[ \t]*)?(?:client|patient|claimant)", line_start=True),
        PatternField("name", r"\b(?:report|assessment)\s+(?:for|of|on)\s*:\s*(?P<value>[^\n,]+)"),

        LabeledField("date_of_birth", r"date\s+of\s+birth|d\.?o\.?b\.?|birth\s*date"),
        PatternField("date_of_birth", r"\bborn\s+(?:on\s+)?(?P<value>(?:[A-Z][a-z]+\s+\d{1,2},?\s+\d{4})|(?:\d{1,2}[-/]\d{1,2}[-/]\d{2,4}))"),

        LabeledField("age", r"age"),
        PatternField("age", r"\b(?P<value>\d{1,3})[ -]?(?:years?|yrs?)[ -]?old\b"),

        LabeledField("gender", r"gender|sex"),
        PatternField("gender", r"\b\d{1,3}[ -]?(?:years?|yrs?)[ -]?old\s+(?P<value>male|female|man|woman)\b"),

        LabeledField("address", r"(?:home[ \t]+|mailing[ \t]+|residential[ \t]+)?address"),
        PatternField("address", r"\b(?:resides|lives|residing|living)\s+at\s+(?P<value>\d+[^\n]+)"),

        LabeledField("phone", r"(?:home[ \t]+|cell[ \t]+|mobile[ \t]+)?(?:phone|telephone|tel)(?:[ \t]+(?:number|no\.?|#))?|cell|mobile"),
        PatternField("phone", r"(?P<value>(?:\+?1[-.\s]?)?\(?\d{3}\)?[-.\s]?\d{3}[-.\s]\d{4})"),

        LabeledField("email", r"e-?mail(?:[ \t]+address)?"),
        PatternField("email", r"(?P<value>[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,})"),

        LabeledField("insurance", r"insurance(?:[ \t]+(?:company|provider|carrier))?|insurer"),
        LabeledField("claim_number", r"claim[ \t]*(?:number|no\.?|#)"),
        LabeledField("file_number", r"(?:file|case|reference)[ \t]*(?:number|no\.?|#)"),
        LabeledField("date_of_loss", r"date[ \t]+of[ \t]+(?:loss|accident|injury)|(?:accident|loss|injury)[ \t]+date"),

        LabeledField("occupation", r"occupation|profession|job[ \t]+title"),
        PatternField("occupation", r"\b(?:works|worked|employed|working)\s+as\s+an?\s+(?P<value>[^\n,.;]+)"),
    )

    weights = (
        Weight("name", 0.30),
        Weight("date_of_birth", 0.20, alternates=("age",)),
        Weight("address", 0.15),
        Weight("phone", 0.15),
        Weight("insurance", 0.20),
    )

    def refine(self, text: str, values: Dict[str, object]) -> Dict[str, object]:
        if values.get("name"):
            values["name"] = _HONORIFIC.sub("", values["name"]).strip()
        return values
