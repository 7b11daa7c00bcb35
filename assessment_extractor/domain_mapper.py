"""Maps pipeline section records onto the assessment data model"""
import logging
import re
from dataclasses import fields
from typing import Callable, Dict, List, Optional

from .config import NO_VALID_DATA_REASON
from .matchers.adls import BASIC_TASKS, INSTRUMENTAL_TASKS, normalize_adl_level
from .models import (
    ADLsRecord, AttendantCareRecord, DemographicsRecord, DomainRecord, EnvironmentRecord,
    ExtractionFailure, ExtractionResult, FunctionalStatusRecord, MappingOutcome,
    MedicalHistoryRecord, MethodologyRecord, PurposeRecord, SECTION_RECORD_TYPES,
    SectionRecord, SymptomsRecord, TypicalDayRecord,
)
from .patterns import extract_impact, extract_severity

logger = logging.getLogger(__name__)

# Fixed schema defaults that do not count as extracted content
DEFAULT_MARKERS = {"unknown", "Active", "current"}

# Hours split of total daily attendant care: self-care, homecare, supervision
CARE_HOURS_SPLIT = (0.4, 0.4, 0.2)

_HONORIFIC = re.compile(r"^(?:mr|mrs|ms|miss|dr)\.?\s+", re.IGNORECASE)
_YEAR = re.compile(r"\b((?:19|20)\d{2})\b")
_NUMBER = re.compile(r"\d+(?:\.\d+)?")
_MEDICATION = re.compile(
    r"^(?P<name>[A-Za-z][\w\-]*(?:\s+[A-Za-z][\w\-]*)*?)\s+"
    r"(?P<dosage>\d+(?:\.\d+)?\s*(?:mg|mcg|g|ml|units?|iu)\b)"
    r"(?:\s*,?\s*(?P<frequency>.+))?$",
    re.IGNORECASE,
)


def camel_case(name: str) -> str:
    """date_of_birth -> dateOfBirth"""
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)


def has_content(value) -> bool:
    """
    True when a mapped value carries extracted data.

    Empty strings and lists, ``0`` and the fixed schema defaults
    ("unknown" ADL levels, "Active"/"current" statuses) do not count.
    """
    if isinstance(value, dict):
        return any(has_content(item) for item in value.values())
    if isinstance(value, (list, tuple)):
        return any(has_content(item) for item in value)
    if isinstance(value, str):
        return bool(value.strip()) and value not in DEFAULT_MARKERS
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0
    return value is not None


def _text(value: Optional[str]) -> str:
    return value or ""


def _items(value: Optional[List[str]]) -> List[str]:
    return list(value) if value else []


def _number(value: Optional[str]) -> float:
    if not value:
        return 0
    match = _NUMBER.search(value)
    if not match:
        return 0
    number = float(match.group(0))
    return int(number) if number.is_integer() else number


def split_name(name: Optional[str]):
    """Split a full name into (first name, remaining names)"""
    if not name:
        return "", ""
    tokens = _HONORIFIC.sub("", name.strip()).split()
    if not tokens:
        return "", ""
    return tokens[0], " ".join(tokens[1:])


def parse_medication(item: str) -> Dict[str, str]:
    """Split "Naproxen 500 mg twice daily" into name, dosage and frequency"""
    match = _MEDICATION.match(item.strip())
    if not match:
        return {"name": item, "dosage": "", "frequency": "", "status": "current"}
    return {
        "name": match.group("name"),
        "dosage": match.group("dosage"),
        "frequency": _text(match.group("frequency")).strip(),
        "status": "current",
    }


def map_demographics(record: DemographicsRecord) -> Dict:
    first_name, last_name = split_name(record.name)
    return {
        "personalInfo": {
            "firstName": first_name,
            "lastName": last_name,
            "dateOfBirth": _text(record.date_of_birth),
            "age": _number(record.age),
            "gender": _text(record.gender),
            "phone": _text(record.phone),
            "email": _text(record.email),
            "address": _text(record.address),
            "occupation": _text(record.occupation),
        },
        "referralInfo": {
            "insurance": {
                "provider": _text(record.insurance),
                "claimNumber": _text(record.claim_number),
            },
            "fileNumber": _text(record.file_number),
            "dateOfLoss": _text(record.date_of_loss),
        },
    }


def map_medical_history(record: MedicalHistoryRecord) -> Dict:
    surgeries = []
    for item in _items(record.surgeries):
        year = _YEAR.search(item)
        surgeries.append({"procedure": item, "date": year.group(1) if year else "", "notes": ""})

    return {
        "conditions": [
            {"condition": item, "diagnosisDate": "", "currentStatus": "Active", "notes": ""}
            for item in _items(record.conditions)
        ],
        "surgeries": surgeries,
        "medications": [parse_medication(item) for item in _items(record.medications)],
        "allergies": _items(record.allergies),
        "preExistingConditions": _text(record.pre_accident_status),
        "injuryDetails": {"description": _text(record.primary_diagnosis)},
    }


def map_symptoms(record: SymptomsRecord) -> Dict:
    physical = []
    for item in _items(record.physical):
        is_pain = "pain" in item.lower()
        severity = extract_severity(item) or (record.pain_severity if is_pain else None)
        physical.append({
            "symptom": item,
            "severity": _text(severity),
            "location": _text(record.pain_location) if is_pain else "",
            "impact": _text(extract_impact(item)),
        })

    return {
        "physical": physical,
        "cognitive": [{"symptom": item, "impact": _text(extract_impact(item))} for item in _items(record.cognitive)],
        "emotional": [{"symptom": item, "impact": _text(extract_impact(item))} for item in _items(record.emotional)],
    }


def map_purpose(record: PurposeRecord) -> Dict:
    return {
        "assessmentPurpose": _text(record.primary_purpose),
        "objectives": _items(record.objectives),
        "referralQuestions": _items(record.referral_questions),
        "referralSource": _text(record.referral_source),
        "referralDate": _text(record.referral_date),
        "assessmentDate": _text(record.assessment_date),
    }


def map_methodology(record: MethodologyRecord) -> Dict:
    return {
        "assessmentMethods": _items(record.methods),
        "assessmentTools": [{"name": item} for item in _items(record.instruments)],
        "interviews": [{"person": item} for item in _items(record.interviews)],
        "observations": [{"activity": item} for item in _items(record.observations)],
    }


def map_functional_status(record: FunctionalStatusRecord) -> Dict:
    return {
        "mobility": {
            "ambulation": _text(record.ambulation),
            "transfers": _text(record.transfers),
            "balance": _text(record.balance),
            "assistiveDevices": _items(record.assistive_devices),
            "limitations": _items(record.limitations),
        },
        "endurance": _text(record.endurance),
        "upperExtremity": _text(record.upper_extremity),
        "posture": _text(record.posture),
    }


def map_environment(record: EnvironmentRecord) -> Dict:
    return {
        "dwelling": {
            "homeType": _text(record.home_type),
            "livingArrangement": _text(record.living_arrangement),
            "layout": _items(record.layout),
            "entrance": _text(record.entrance),
        },
        "safety": {"hazards": _items(record.safety_hazards)},
        "accessibility": {
            "barriers": _items(record.barriers),
            "recommendations": _items(record.recommendations),
        },
        "equipment": {"current": _items(record.equipment)},
    }


def map_typical_day(record: TypicalDayRecord) -> Dict:
    return {
        "wakeTime": _text(record.wake_time),
        "bedTime": _text(record.bed_time),
        "morning": {"routines": _items(record.morning)},
        "afternoon": {"routines": _items(record.afternoon)},
        "evening": {"routines": _items(record.evening)},
        "night": {"routines": _items(record.night)},
    }


def _adl_tasks(found: Optional[Dict[str, str]], tasks) -> Dict[str, Dict[str, str]]:
    found = found or {}
    return {
        task: {"level": normalize_adl_level(found.get(task)), "notes": _text(found.get(task))}
        for task in tasks
    }


def map_adls(record: ADLsRecord) -> Dict:
    return {
        "basic": _adl_tasks(record.basic, BASIC_TASKS),
        "instrumental": _adl_tasks(record.instrumental, INSTRUMENTAL_TASKS),
        "leisure": {"activities": _items(record.leisure)},
    }


def daily_care_hours(record: AttendantCareRecord) -> float:
    """Total daily care hours, derived from weekly hours when only those are given"""
    if record.daily_hours:
        return float(_number(record.daily_hours))
    if record.weekly_hours:
        return float(_number(record.weekly_hours)) / 7
    return 0.0


def map_attendant_care(record: AttendantCareRecord) -> Dict:
    daily = daily_care_hours(record)
    self_care, homecare, supervision = (round(daily * share, 2) for share in CARE_HOURS_SPLIT)
    return {
        "selfCare": {"needs": _items(record.personal_care), "hours": self_care},
        "homecare": {"needs": _items(record.housekeeping), "hours": homecare},
        "supervision": {"needs": _items(record.supervision), "hours": supervision},
        "currentCare": {
            "provider": _text(record.caregiver),
            "services": _items(record.current_services),
        },
        "recommendations": {"items": _items(record.recommendations)},
    }


def map_generic(record: SectionRecord) -> Dict:
    """Sections without a dedicated mapping keep their fields under camelCase keys"""
    return {camel_case(name): value for name, value in record.to_dict().items()}


SECTION_MAPPERS: Dict[str, Callable[[SectionRecord], Dict]] = {
    DemographicsRecord.section_id: map_demographics,
    MedicalHistoryRecord.section_id: map_medical_history,
    SymptomsRecord.section_id: map_symptoms,
    PurposeRecord.section_id: map_purpose,
    MethodologyRecord.section_id: map_methodology,
    FunctionalStatusRecord.section_id: map_functional_status,
    EnvironmentRecord.section_id: map_environment,
    TypicalDayRecord.section_id: map_typical_day,
    ADLsRecord.section_id: map_adls,
    AttendantCareRecord.section_id: map_attendant_care,
}


class DomainMapper:
    """Pure transformation from ExtractionResult to the assessment data model"""

    def __init__(self, section_mappers: Optional[Dict[str, Callable[[SectionRecord], Dict]]] = None):
        self.section_mappers = dict(SECTION_MAPPERS if section_mappers is None else section_mappers)

    def map(self, result: ExtractionResult) -> MappingOutcome:
        """
        Map every present section; never raises and never mutates ``result``

        Args:
            result: Output of ExtractionPipeline.run

        Returns:
            DomainRecord, or ExtractionFailure when the pipeline failed or no
            mapped section carries any data
        """
        if result.failed:
            return ExtractionFailure(reason=result.failure_reason or NO_VALID_DATA_REASON, stage=result.stage)

        sections = {}
        field_confidence = {}
        for section_id, record in result.sections.items():
            sections[section_id] = self._map_section(section_id, record)
            field_confidence[section_id] = self._field_confidence(
                record,
                result.section_confidence.get(section_id, 0.0),
                result.field_confidence.get(section_id, {}),
            )

        if not any(has_content(section) for section in sections.values()):
            logger.info("Extraction failed: %s", NO_VALID_DATA_REASON)
            return ExtractionFailure(reason=NO_VALID_DATA_REASON)

        return DomainRecord(
            sections=sections,
            section_confidence=dict(result.section_confidence),
            field_confidence=field_confidence,
            original_text=result.original_text,
        )

    def _map_section(self, section_id: str, record: SectionRecord) -> Dict:
        mapper = self.section_mappers.get(section_id, map_generic)
        try:
            return mapper(record)
        except Exception:
            logger.exception("Mapping section %s failed; using schema defaults", section_id)

        record_type = SECTION_RECORD_TYPES.get(section_id, type(record))
        try:
            return mapper(record_type())
        except Exception:
            logger.exception("Mapping defaults for section %s failed", section_id)
            return {}

    @staticmethod
    def _field_confidence(record: SectionRecord, section_score: float,
                          weighted_scores: Dict[str, float]) -> Dict[str, float]:
        """
        Confidence per record field, keyed by camelCase name.

        Weighted fields carry their own sub-score; other present fields inherit
        the section score; absent fields score 0.
        """
        present = record.to_dict()
        scores = {}
        for name in (f.name for f in fields(record)):
            if name not in present:
                score = 0.0
            elif name in weighted_scores:
                score = weighted_scores[name]
            else:
                score = section_score
            scores[camel_case(name)] = score
        return scores
