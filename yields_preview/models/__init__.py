"""Data models for the yields preview engine."""

from yields_preview.models.arguments import Argument, build_arguments
from yields_preview.models.requirement import (
    ResolvedRequirement,
    ResolvedRequirementSet,
    EMPTY_REQUIREMENT_SET,
)
from yields_preview.models.modifier import ResolvedModifier
from yields_preview.models.subject import (
    Subject,
    SubjectKind,
    CitySubject,
    PlotSubject,
    PlayerSubject,
    UnitSubject,
    EmptySubject,
)
from yields_preview.models.yields import YieldsDelta, BaselineYield, PreviewResult, create_empty_delta

__all__ = [
    'Argument',
    'build_arguments',
    'ResolvedRequirement',
    'ResolvedRequirementSet',
    'EMPTY_REQUIREMENT_SET',
    'ResolvedModifier',
    'Subject',
    'SubjectKind',
    'CitySubject',
    'PlotSubject',
    'PlayerSubject',
    'UnitSubject',
    'EmptySubject',
    'YieldsDelta',
    'BaselineYield',
    'PreviewResult',
    'create_empty_delta',
]
