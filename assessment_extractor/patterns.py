"""Declarative extraction rules: labeled fields, header-bounded blocks, list splitting"""
import re
from dataclasses import dataclass, field
from functools import lru_cache
from typing import List, Optional, Pattern

FLAGS = re.IGNORECASE

# Headers that end a block when they open a line (or follow a sentence end) and carry a colon.
# More specific sub-headers are listed alongside the general ones so a general block always
# stops at the first specific header inside it.
SECTION_HEADERS = (
    # demographics
    r"client\s+(?:name|information|details)", r"(?:personal|patient)\s+(?:information|details)",
    r"demographics?(?:\s+information)?", r"date\s+of\s+(?:birth|loss|assessment|referral)", r"address", r"phone",
    r"insurance(?:\s+(?:company|provider|carrier))?", r"claim\s+(?:number|no\.?|#)",
    r"file\s+(?:number|no\.?|#)", r"occupation",
    # medical history
    r"(?:past\s+)?medical\s+history", r"health\s+history", r"pmh", r"medical\s+background",
    r"pre-?accident\s+(?:status|health|functioning|history)", r"pre-?existing\s+conditions",
    r"(?:current\s+|chronic\s+|medical\s+)?conditions", r"(?:primary\s+)?diagnos(?:is|es)",
    r"(?:current\s+)?medications?", r"surger(?:y|ies)", r"surgical\s+history", r"allergies",
    # symptoms
    r"(?:reported\s+|presenting\s+|current\s+)?symptoms", r"(?:physical|cognitive|emotional)\s+symptoms",
    r"pain(?:\s+(?:location|rating|level))?", r"chief\s+complaints?", r"presenting\s+(?:concerns|complaints)",
    # purpose and methodology
    r"purpose(?:\s+of\s+(?:the\s+)?(?:assessment|evaluation|report))?", r"reason\s+for\s+(?:referral|assessment)",
    r"(?:assessment\s+)?objectives", r"(?:assessment\s+)?goals", r"referral\s+questions",
    r"questions\s+to\s+(?:address|be\s+answered)", r"referral\s+(?:source|date)", r"assessment\s+date",
    r"methodology", r"(?:assessment|evaluation)\s+methods", r"(?:standardized\s+tests|assessment\s+tools|instruments)",
    r"interviews?", r"observations?",
    # functional status
    r"functional\s+(?:status|abilities|limitations)", r"mobility", r"ambulation", r"transfers",
    r"balance", r"endurance", r"assistive\s+devices?", r"(?:functional\s+)?limitations",
    r"upper\s+extremit(?:y|ies)(?:\s+function)?", r"posture",
    # environment
    r"(?:environmental|home)\s+assessment", r"home\s+environment", r"(?:type\s+of\s+(?:residence|home|dwelling)|home\s+type|dwelling)",
    r"living\s+arrangements?", r"(?:home\s+)?layout", r"entrance", r"safety\s+(?:hazards|concerns|risks)",
    r"hazards", r"(?:accessibility\s+)?barriers", r"accessibility(?:\s+issues)?", r"(?:current\s+)?equipment",
    r"(?:(?:attendant\s+)?care\s+|environmental\s+|home\s+)?recommendations",
    # typical day
    r"typical\s+day", r"daily\s+routine", r"morning(?:\s+routine)?", r"afternoon(?:\s+routine)?",
    r"evening(?:\s+routine)?", r"(?:night|bedtime)(?:\s+routine)?",
    # adls
    r"activities\s+of\s+daily\s+living", r"(?:basic|instrumental)\s+(?:adls|activities\s+of\s+daily\s+living)",
    r"b?adls", r"iadls", r"leisure(?:\s+activities)?", r"recreation", r"hobbies",
    # attendant care
    r"attendant\s+care(?:\s+needs)?", r"personal\s+care", r"housekeeping", r"supervision",
    r"caregiver", r"current\s+services", r"care\s+hours",
    # closing
    r"summary", r"conclusions?", r"(?:treatment\s+)?plan",
)

_HEADER_ALTERNATION = "|".join(SECTION_HEADERS)
_BLOCK_END = (
    r"(?=\n[ \t]*\n"
    r"|\n[ \t]*(?:" + _HEADER_ALTERNATION + r")[ \t]*:"
    r"|[.;][ \t]+(?:" + _HEADER_ALTERNATION + r")[ \t]*:"
    r"|\Z)"
)

_BULLET_OR_NEWLINE = re.compile(r"\n+|[•●▪◦]|^[ \t]*[-–*]|(?<=\s)[-–*](?=\s)", re.MULTILINE)
_ENUMERATOR = re.compile(r"^(?:\(?\d{1,2}[.)]|[a-z][.)])\s+", re.IGNORECASE)
_LEADING_MARKS = re.compile(r"^[\s•●▪◦*\-–]+")
_COMMA_OR_SEMICOLON = re.compile(r"\s*[,;]\s*")


def normalize_whitespace(text: str) -> str:
    """Collapse runs of whitespace to single spaces"""
    return " ".join(text.split())


def _clean_item(segment: str) -> str:
    item = _LEADING_MARKS.sub("", segment)
    item = _ENUMERATOR.sub("", item)
    return normalize_whitespace(item).rstrip(" .;,")


def split_list_items(text: str, comma_split: bool = False) -> List[str]:
    """
    Split a block body into list items.

    Items are delimited by newlines, bullet glyphs, and list-marker hyphens
    (a hyphen opening a line or standing alone between spaces, so hyphenated
    words stay whole). Leading enumerators such as ``1.`` or ``a)`` are removed.
    With ``comma_split`` a single remaining item is further split on commas
    and semicolons.
    """
    items = []
    for segment in _BULLET_OR_NEWLINE.split(text):
        item = _clean_item(segment)
        if item:
            items.append(item)

    if comma_split and len(items) == 1:
        items = [part for part in (_clean_item(p) for p in _COMMA_OR_SEMICOLON.split(items[0])) if part]
    return items


def split_questions(text: str) -> List[str]:
    """
    Split a block into questions on '?', falling back to list splitting.

    Every non-empty segment is re-suffixed with '?', including trailing text
    after the last question mark.
    """
    if "?" not in text:
        return split_list_items(text)

    questions = []
    for segment in text.split("?"):
        question = _clean_item(segment)
        if question:
            questions.append(question + "?")
    return questions


@lru_cache(maxsize=None)
def _block_regex(header: str) -> Pattern:
    return re.compile(
        r"(?<![\w-])(?:" + header + r")[ \t]*:[ \t]*\n?(?P<body>.*?)" + _BLOCK_END,
        re.IGNORECASE | re.DOTALL,
    )


@lru_cache(maxsize=None)
def _qualifier_regex(qualifiers: str) -> Pattern:
    return re.compile(r"(?<![\w-])(?:" + qualifiers + r")\s+\Z", FLAGS)


def capture_block(text: str, header: str, not_after: Optional[str] = None) -> Optional[str]:
    """
    Return the body following ``header:`` up to the next known header, a blank
    line, or the end of the text. The first occurrence with a non-empty body wins.

    ``not_after`` names qualifiers that disqualify a header occurrence when
    they directly precede it, separated by any whitespace (line breaks included).
    """
    qualifier = _qualifier_regex(not_after) if not_after else None
    for match in _block_regex(header).finditer(text):
        if qualifier and qualifier.search(text, max(0, match.start() - 80), match.start()):
            continue
        body = match.group("body").strip()
        if body:
            return body
    return None


def extract_severity(text: str) -> Optional[str]:
    """Pull a pain-scale rating (``7/10``) or a severity word out of text"""
    scale = re.search(r"(\d{1,2})\s*/\s*10\b", text)
    if scale:
        return f"{scale.group(1)}/10"

    word = re.search(r"\b(mild|moderate|severe|extreme|significant|minimal)\b", text, FLAGS)
    if word:
        return word.group(1).lower()
    return None


def extract_impact(text: str) -> Optional[str]:
    """Pull a functional-impact phrase ("interferes with sleep") out of text"""
    match = re.search(r"\b(?:affects|impacts|interferes\s+with|limits|restricts)\s+([^.;]+)", text, FLAGS)
    if match:
        return match.group(1).strip()
    return None


def dedupe(values: List[str]) -> List[str]:
    """Drop case-insensitive duplicates, keeping first-appearance order"""
    seen = set()
    unique = []
    for value in values:
        key = value.lower()
        if key not in seen:
            seen.add(key)
            unique.append(value)
    return unique


# Extraction rules. Every rule exposes ``name`` (the record field it fills) and
# ``apply(text)``, which returns a value or None when nothing was captured.

@dataclass(frozen=True)
class LabeledField:
    """``Label: value`` on a single line, label given as a synonym alternation"""
    name: str
    label: str
    line_start: bool = False
    regex: Pattern = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        prefix = r"(?:^|(?<=\n))[ \t]*" if self.line_start else r"(?<![\w-])"
        pattern = prefix + r"(?:" + self.label + r")[ \t]*(?::|[ \t][-–][ \t])[ \t]*(?P<value>[^\n]*\S)"
        object.__setattr__(self, "regex", re.compile(pattern, FLAGS))

    def apply(self, text: str) -> Optional[str]:
        match = self.regex.search(text)
        if not match:
            return None
        value = match.group("value").strip().rstrip(" ;,")
        return value or None


@dataclass(frozen=True)
class PatternField:
    """Free-form regex; the named group ``value`` is the captured field"""
    name: str
    pattern: str
    regex: Pattern = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "regex", re.compile(self.pattern, FLAGS))

    def apply(self, text: str) -> Optional[str]:
        match = self.regex.search(text)
        if not match or not match.group("value"):
            return None
        value = normalize_whitespace(match.group("value")).rstrip(" .;,")
        return value or None


@dataclass(frozen=True)
class BlockText:
    """A header-bounded block kept as one whitespace-collapsed string"""
    name: str
    header: str

    def apply(self, text: str) -> Optional[str]:
        body = capture_block(text, self.header)
        if body is None:
            return None
        return normalize_whitespace(body) or None


@dataclass(frozen=True)
class BlockList:
    """A header-bounded block split into list items (or questions)"""
    name: str
    header: str
    questions: bool = False
    comma_split: bool = False
    not_after: Optional[str] = None

    def apply(self, text: str) -> Optional[List[str]]:
        body = capture_block(text, self.header, self.not_after)
        if body is None:
            return None
        items = split_questions(body) if self.questions else split_list_items(body, self.comma_split)
        return items or None


@dataclass(frozen=True)
class KeywordList:
    """Every occurrence of a vocabulary pattern, de-duplicated"""
    name: str
    pattern: str
    regex: Pattern = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "regex", re.compile(self.pattern, FLAGS))

    def apply(self, text: str) -> Optional[List[str]]:
        found = [normalize_whitespace(m.group(0)) for m in self.regex.finditer(text)]
        return dedupe(found) or None
