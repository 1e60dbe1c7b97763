"""
Subjects a modifier can apply to.

A subject is one of CitySubject, PlotSubject, PlayerSubject, UnitSubject or
EmptySubject, discriminated by `kind`. EmptySubject stands for "nothing
resolvable right now" (e.g. a player without a capital) and always
contributes zero.
"""

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Optional, Union

from yields_preview.game.state import City, Plot, Player, Unit


class SubjectKind(str, Enum):
    CITY = 'City'
    PLOT = 'Plot'
    PLAYER = 'Player'
    UNIT = 'Unit'
    EMPTY = 'Empty'


@dataclass(frozen=True)
class CitySubject:
    city: City
    kind: ClassVar[SubjectKind] = SubjectKind.CITY


@dataclass(frozen=True)
class PlotSubject:
    """A purchased plot, always paired with the city that owns it."""
    city: City
    plot: Plot
    kind: ClassVar[SubjectKind] = SubjectKind.PLOT


@dataclass(frozen=True)
class PlayerSubject:
    player: Player
    kind: ClassVar[SubjectKind] = SubjectKind.PLAYER


@dataclass(frozen=True)
class UnitSubject:
    unit: Unit
    kind: ClassVar[SubjectKind] = SubjectKind.UNIT


@dataclass(frozen=True)
class EmptySubject:
    reason: Optional[str] = None
    kind: ClassVar[SubjectKind] = SubjectKind.EMPTY


Subject = Union[CitySubject, PlotSubject, PlayerSubject, UnitSubject, EmptySubject]


def subject_city(subject: Subject) -> Optional[City]:
    """The city a subject belongs to, if any."""
    if isinstance(subject, (CitySubject, PlotSubject)):
        return subject.city
    return None


def describe_subject(subject: Subject) -> str:
    if isinstance(subject, CitySubject):
        return f"City({subject.city.name})"
    if isinstance(subject, PlotSubject):
        return f"Plot({subject.plot.index}@{subject.city.name})"
    if isinstance(subject, PlayerSubject):
        return f"Player({subject.player.id})"
    if isinstance(subject, UnitSubject):
        return f"Unit({subject.unit.id}:{subject.unit.unit_type})"
    return "Empty"
