"""Data models: per-section records, extraction results, and domain records"""
import enum
from dataclasses import dataclass, field, fields
from typing import ClassVar, Dict, List, Optional, Union


class ExtractionStage(enum.Enum):
    """Lifecycle of one document through the pipeline"""
    START = "start"
    RECONSTRUCTING = "reconstructing"
    MATCHING = "matching"
    SUCCESS = "success"
    FAILED = "failed"


@dataclass(frozen=True)
class SectionRecord:
    """Base of the per-section record variants, discriminated by ``section_id``"""
    section_id: ClassVar[str] = ""

    def to_dict(self) -> Dict[str, object]:
        """Non-empty fields only; absent fields are omitted rather than set to empty"""
        values = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if not value:
                continue
            if isinstance(value, list):
                value = list(value)
            elif isinstance(value, dict):
                value = dict(value)
            values[f.name] = value
        return values

    def has_content(self) -> bool:
        return bool(self.to_dict())


@dataclass(frozen=True)
class DemographicsRecord(SectionRecord):
    section_id: ClassVar[str] = "demographics"

    name: Optional[str] = None
    date_of_birth: Optional[str] = None
    age: Optional[str] = None
    gender: Optional[str] = None
    address: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    insurance: Optional[str] = None
    claim_number: Optional[str] = None
    file_number: Optional[str] = None
    date_of_loss: Optional[str] = None
    occupation: Optional[str] = None


@dataclass(frozen=True)
class MedicalHistoryRecord(SectionRecord):
    section_id: ClassVar[str] = "medicalHistory"

    pre_accident_status: Optional[str] = None
    primary_diagnosis: Optional[str] = None
    conditions: Optional[List[str]] = None
    surgeries: Optional[List[str]] = None
    medications: Optional[List[str]] = None
    allergies: Optional[List[str]] = None


@dataclass(frozen=True)
class SymptomsRecord(SectionRecord):
    section_id: ClassVar[str] = "symptoms"

    physical: Optional[List[str]] = None
    cognitive: Optional[List[str]] = None
    emotional: Optional[List[str]] = None
    pain_location: Optional[str] = None
    pain_severity: Optional[str] = None


@dataclass(frozen=True)
class PurposeRecord(SectionRecord):
    section_id: ClassVar[str] = "purpose"

    primary_purpose: Optional[str] = None
    objectives: Optional[List[str]] = None
    referral_questions: Optional[List[str]] = None
    referral_source: Optional[str] = None
    referral_date: Optional[str] = None
    assessment_date: Optional[str] = None


@dataclass(frozen=True)
class MethodologyRecord(SectionRecord):
    section_id: ClassVar[str] = "methodology"

    methods: Optional[List[str]] = None
    instruments: Optional[List[str]] = None
    interviews: Optional[List[str]] = None
    observations: Optional[List[str]] = None


@dataclass(frozen=True)
class FunctionalStatusRecord(SectionRecord):
    section_id: ClassVar[str] = "functionalStatus"

    ambulation: Optional[str] = None
    transfers: Optional[str] = None
    balance: Optional[str] = None
    endurance: Optional[str] = None
    assistive_devices: Optional[List[str]] = None
    limitations: Optional[List[str]] = None
    upper_extremity: Optional[str] = None
    posture: Optional[str] = None


@dataclass(frozen=True)
class EnvironmentRecord(SectionRecord):
    section_id: ClassVar[str] = "environment"

    home_type: Optional[str] = None
    living_arrangement: Optional[str] = None
    layout: Optional[List[str]] = None
    entrance: Optional[str] = None
    safety_hazards: Optional[List[str]] = None
    barriers: Optional[List[str]] = None
    equipment: Optional[List[str]] = None
    recommendations: Optional[List[str]] = None


@dataclass(frozen=True)
class TypicalDayRecord(SectionRecord):
    section_id: ClassVar[str] = "typicalDay"

    wake_time: Optional[str] = None
    bed_time: Optional[str] = None
    morning: Optional[List[str]] = None
    afternoon: Optional[List[str]] = None
    evening: Optional[List[str]] = None
    night: Optional[List[str]] = None


@dataclass(frozen=True)
class ADLsRecord(SectionRecord):
    section_id: ClassVar[str] = "adls"

    basic: Optional[Dict[str, str]] = None          # task -> level
    instrumental: Optional[Dict[str, str]] = None   # task -> level
    leisure: Optional[List[str]] = None


@dataclass(frozen=True)
class AttendantCareRecord(SectionRecord):
    section_id: ClassVar[str] = "attendantCare"

    personal_care: Optional[List[str]] = None
    housekeeping: Optional[List[str]] = None
    supervision: Optional[List[str]] = None
    caregiver: Optional[str] = None
    current_services: Optional[List[str]] = None
    daily_hours: Optional[str] = None
    weekly_hours: Optional[str] = None
    recommendations: Optional[List[str]] = None


SECTION_RECORD_TYPES = {
    record_type.section_id: record_type
    for record_type in (
        DemographicsRecord, MedicalHistoryRecord, SymptomsRecord, PurposeRecord,
        MethodologyRecord, FunctionalStatusRecord, EnvironmentRecord, TypicalDayRecord,
        ADLsRecord, AttendantCareRecord,
    )
}


@dataclass(frozen=True)
class ExtractionResult:
    """Pipeline output for one document; ownership passes to the domain mapper"""
    sections: Dict[str, SectionRecord] = field(default_factory=dict)
    section_confidence: Dict[str, float] = field(default_factory=dict)
    field_confidence: Dict[str, Dict[str, float]] = field(default_factory=dict)
    original_text: str = ""
    failed: bool = False
    failure_reason: Optional[str] = None
    stage: ExtractionStage = ExtractionStage.SUCCESS


@dataclass(frozen=True)
class ExtractionFailure:
    """Sentinel returned instead of a domain record when nothing usable was extracted"""
    reason: str
    stage: ExtractionStage = ExtractionStage.FAILED
    failed: ClassVar[bool] = True

    def to_dict(self) -> Dict[str, object]:
        return {"_extractionFailed": True, "_reason": self.reason}


@dataclass(frozen=True)
class DomainRecord:
    """Assessment-schema-shaped output handed to the import selector"""
    sections: Dict[str, dict]
    section_confidence: Dict[str, float]
    field_confidence: Dict[str, Dict[str, float]]
    original_text: str
    failed: ClassVar[bool] = False

    def to_dict(self) -> Dict[str, object]:
        record = dict(self.sections)
        record["confidence"] = {
            "sections": dict(self.section_confidence),
            "fields": {section: dict(scores) for section, scores in self.field_confidence.items()},
        }
        record["originalText"] = self.original_text
        return record


MappingOutcome = Union[DomainRecord, ExtractionFailure]
