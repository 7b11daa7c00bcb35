import logging

import pytest

from assessment_extractor.config import NO_STRUCTURE_REASON, NO_VALID_DATA_REASON
from assessment_extractor.domain_mapper import (
    SECTION_MAPPERS,
    DomainMapper,
    camel_case,
    has_content,
    map_demographics,
    parse_medication,
)
from assessment_extractor.models import (
    ADLsRecord,
    AttendantCareRecord,
    DemographicsRecord,
    DomainRecord,
    ExtractionFailure,
    ExtractionResult,
    ExtractionStage,
    MedicalHistoryRecord,
    SymptomsRecord,
    TypicalDayRecord,
)
from assessment_extractor.pipeline import ExtractionPipeline


def _result(sections, confidence=0.5) -> ExtractionResult:
    return ExtractionResult(
        sections=sections,
        section_confidence={section_id: confidence for section_id in sections},
        field_confidence={section_id: {} for section_id in sections},
        original_text="original",
    )


class TestDomainMapper:
    def test_failed_result_becomes_failure_sentinel(self) -> None:
        result = ExtractionResult(failed=True, failure_reason=NO_STRUCTURE_REASON, stage=ExtractionStage.FAILED)

        outcome = DomainMapper().map(result)

        assert isinstance(outcome, ExtractionFailure)
        assert outcome.to_dict() == {"_extractionFailed": True, "_reason": NO_STRUCTURE_REASON}

    def test_demographics_shape(self) -> None:
        """The full name is split and the insurance nested under referral info."""
        outcome = DomainMapper().map(_result({
            "demographics": DemographicsRecord(name="Jane Anne Doe", age="45", insurance="Acme", claim_number="C-1"),
        }))

        section = outcome.to_dict()["demographics"]
        assert section["personalInfo"]["firstName"] == "Jane"
        assert section["personalInfo"]["lastName"] == "Anne Doe"
        assert section["personalInfo"]["age"] == 45
        assert section["personalInfo"]["phone"] == ""
        assert section["referralInfo"]["insurance"] == {"provider": "Acme", "claimNumber": "C-1"}

    def test_medical_history_shape(self) -> None:
        outcome = DomainMapper().map(_result({
            "medicalHistory": MedicalHistoryRecord(
                conditions=["Whiplash"],
                medications=["Naproxen 500 mg twice daily"],
                surgeries=["Knee arthroscopy 2018"],
            ),
        }))

        section = outcome.to_dict()["medicalHistory"]
        assert section["conditions"] == [
            {"condition": "Whiplash", "diagnosisDate": "", "currentStatus": "Active", "notes": ""},
        ]
        assert section["medications"] == [
            {"name": "Naproxen", "dosage": "500 mg", "frequency": "twice daily", "status": "current"},
        ]
        assert section["surgeries"] == [{"procedure": "Knee arthroscopy 2018", "date": "2018", "notes": ""}]
        assert section["allergies"] == []

    def test_symptom_severity_location_and_impact(self) -> None:
        outcome = DomainMapper().map(_result({
            "symptoms": SymptomsRecord(
                physical=["Neck pain rated 7/10, interferes with sleep", "Fatigue"],
                pain_location="neck",
            ),
        }))

        physical = outcome.to_dict()["symptoms"]["physical"]
        assert physical[0] == {
            "symptom": "Neck pain rated 7/10, interferes with sleep",
            "severity": "7/10",
            "location": "neck",
            "impact": "sleep",
        }
        assert physical[1] == {"symptom": "Fatigue", "severity": "", "location": "", "impact": ""}

    def test_adl_levels_default_to_unknown(self) -> None:
        """Tasks not mentioned keep the unknown level."""
        outcome = DomainMapper().map(_result({
            "adls": ADLsRecord(basic={"bathing": "Requires assistance"}, leisure=["Reading"]),
        }))

        section = outcome.to_dict()["adls"]
        assert section["basic"]["bathing"] == {"level": "assistance", "notes": "Requires assistance"}
        assert section["basic"]["dressing"] == {"level": "unknown", "notes": ""}
        assert section["instrumental"]["mealPrep"] == {"level": "unknown", "notes": ""}
        assert section["leisure"] == {"activities": ["Reading"]}

    def test_attendant_hours_split_from_daily_hours(self) -> None:
        outcome = DomainMapper().map(_result({
            "attendantCare": AttendantCareRecord(daily_hours="5", personal_care=["Bathing"]),
        }))

        section = outcome.to_dict()["attendantCare"]
        assert section["selfCare"] == {"needs": ["Bathing"], "hours": 2.0}
        assert section["homecare"]["hours"] == 2.0
        assert section["supervision"]["hours"] == 1.0

    def test_attendant_hours_from_weekly_hours(self) -> None:
        outcome = DomainMapper().map(_result({
            "attendantCare": AttendantCareRecord(weekly_hours="21"),
        }))

        section = outcome.to_dict()["attendantCare"]
        assert section["selfCare"]["hours"] == pytest.approx(1.2)
        assert section["homecare"]["hours"] == pytest.approx(1.2)
        assert section["supervision"]["hours"] == pytest.approx(0.6)

    def test_every_present_section_is_kept(self) -> None:
        """Empty sections are mapped to defaults, never dropped."""
        outcome = DomainMapper().map(_result({
            "demographics": DemographicsRecord(name="Jane Doe"),
            "typicalDay": TypicalDayRecord(),
        }))

        record = outcome.to_dict()
        assert record["typicalDay"]["morning"] == {"routines": []}
        assert record["confidence"]["sections"] == {"demographics": 0.5, "typicalDay": 0.5}

    def test_mapping_fault_falls_back_to_defaults(self, caplog: pytest.LogCaptureFixture) -> None:
        """A failing section mapping is logged and replaced by schema defaults."""
        def fragile(record):
            if record.name:
                raise ValueError("unexpected name format")
            return map_demographics(record)

        mappers = dict(SECTION_MAPPERS, demographics=fragile)
        with caplog.at_level(logging.ERROR, logger="assessment_extractor.domain_mapper"):
            outcome = DomainMapper(mappers).map(_result({
                "demographics": DemographicsRecord(name="Jane Doe"),
                "adls": ADLsRecord(leisure=["Gardening"]),
            }))

        record = outcome.to_dict()
        assert record["demographics"] == map_demographics(DemographicsRecord())
        assert record["adls"]["leisure"] == {"activities": ["Gardening"]}
        assert "demographics" in caplog.text

    def test_no_content_is_a_failure(self) -> None:
        """Sections holding only defaults count as no valid data."""
        outcome = DomainMapper().map(_result({"adls": ADLsRecord()}))

        assert outcome.failed
        assert outcome.reason == NO_VALID_DATA_REASON

    def test_field_confidence_policy(self) -> None:
        """Weighted fields keep their sub-score, other present fields inherit the section score."""
        result = ExtractionPipeline().run("Client Name: Jane Doe\nGender: Female")

        outcome = DomainMapper().map(result)

        fields = outcome.to_dict()["confidence"]["fields"]["demographics"]
        assert fields["name"] == 1.0
        assert fields["gender"] == pytest.approx(0.3)
        assert fields["dateOfBirth"] == 0.0

    def test_result_is_not_mutated(self) -> None:
        result = ExtractionPipeline().run("Client Name: Jane Doe")
        sections_before = dict(result.sections)

        outcome = DomainMapper().map(result)

        assert isinstance(outcome, DomainRecord)
        assert result.sections == sections_before
        assert outcome.original_text == "Client Name: Jane Doe"


class TestHelpers:
    def test_camel_case(self) -> None:
        assert camel_case("date_of_birth") == "dateOfBirth"
        assert camel_case("name") == "name"

    @pytest.mark.parametrize("value, expected", [
        ("", False),
        ("unknown", False),
        ("Active", False),
        (0, False),
        ([], False),
        ({"level": "unknown", "notes": ""}, False),
        ([{"condition": "", "currentStatus": "Active"}], False),
        ("Jane", True),
        (2.5, True),
        ({"routines": ["Walk"]}, True),
    ])
    def test_has_content(self, value, expected) -> None:
        assert has_content(value) is expected

    def test_medication_without_dosage(self) -> None:
        assert parse_medication("Tylenol as needed") == {
            "name": "Tylenol as needed", "dosage": "", "frequency": "", "status": "current",
        }
