"""Section matcher registry"""
from typing import List

from .adls import ADLsMatcher
from .attendant_care import AttendantCareMatcher
from .base import SectionMatcher
from .demographics import DemographicsMatcher
from .environment import EnvironmentMatcher
from .functional_status import FunctionalStatusMatcher
from .medical_history import MedicalHistoryMatcher
from .purpose import MethodologyMatcher, PurposeMatcher
from .symptoms import SymptomsMatcher
from .typical_day import TypicalDayMatcher

MATCHER_TYPES = (
    DemographicsMatcher,
    MedicalHistoryMatcher,
    SymptomsMatcher,
    PurposeMatcher,
    MethodologyMatcher,
    FunctionalStatusMatcher,
    EnvironmentMatcher,
    TypicalDayMatcher,
    ADLsMatcher,
    AttendantCareMatcher,
)

# Matchers are stateless, so one set is shared by every pipeline
_DEFAULT_MATCHERS = tuple(matcher_type() for matcher_type in MATCHER_TYPES)


def default_registry() -> List[SectionMatcher]:
    """The standard matchers, in section order"""
    return list(_DEFAULT_MATCHERS)


__all__ = [
    "SectionMatcher",
    "default_registry",
    "MATCHER_TYPES",
] + [matcher_type.__name__ for matcher_type in MATCHER_TYPES]
