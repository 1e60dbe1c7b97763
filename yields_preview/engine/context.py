"""
Execution context for one preview call.

Carries the collaborators every component needs (game state, rule database,
caches, settings), collects diagnostics, and guards against modifier cycles.
"""

import logging
from contextlib import contextmanager
from typing import Any, List, Optional

from yields_preview.config import Settings
from yields_preview.database.cache import RuleCache
from yields_preview.database.rule_database import RuleDatabase
from yields_preview.engine.accumulator import (
    add_amount, add_amount_no_multiplier, add_percent, parse_yield_types
)
from yields_preview.engine.yields_resolver import unwrap_yields_of_type
from yields_preview.game.state import City, GameState, Player, Plot, Unit
from yields_preview.models.arguments import Argument
from yields_preview.models.modifier import ResolvedModifier
from yields_preview.models.subject import (
    CitySubject, PlayerSubject, PlotSubject, Subject, UnitSubject, describe_subject
)
from yields_preview.models.yields import YieldsDelta

logger = logging.getLogger(__name__)


class RuleError(Exception):
    """A modifier whose arguments or subject do not fit its effect."""
    pass


class MissingArgumentError(RuleError):
    """A required modifier argument is absent."""
    pass


class InvalidArgumentError(RuleError):
    """A modifier argument is present but cannot be parsed."""
    pass


class SubjectMismatchError(RuleError):
    """An effect was applied to a subject of the wrong kind."""
    pass


class ModifierCycleError(Exception):
    """A modifier attaches itself, directly or through other modifiers."""
    pass


class ExecutionContext:
    """Diagnostics collected while previewing."""

    def __init__(self):
        self.errors: List[str] = []
        self.missings: List[str] = []
        self.ignored: List[str] = []

    def add_error(self, message: str) -> None:
        logger.error(message)
        self.errors.append(message)

    def add_missing(self, message: str) -> None:
        logger.warning(message)
        self.missings.append(message)

    def add_ignored(self, message: str) -> None:
        logger.debug(message)
        self.ignored.append(message)

    @staticmethod
    def assert_city_subject(subject: Subject) -> City:
        if not isinstance(subject, CitySubject):
            raise SubjectMismatchError(f"Expected City subject, got {describe_subject(subject)}")
        return subject.city

    @staticmethod
    def assert_plot_subject(subject: Subject) -> PlotSubject:
        if not isinstance(subject, PlotSubject):
            raise SubjectMismatchError(f"Expected Plot subject, got {describe_subject(subject)}")
        return subject

    @staticmethod
    def assert_player_subject(subject: Subject) -> Player:
        if not isinstance(subject, PlayerSubject):
            raise SubjectMismatchError(f"Expected Player subject, got {describe_subject(subject)}")
        return subject.player

    @staticmethod
    def assert_unit_subject(subject: Subject) -> Unit:
        if not isinstance(subject, UnitSubject):
            raise SubjectMismatchError(f"Expected Unit subject, got {describe_subject(subject)}")
        return subject.unit


class PreviewContext(ExecutionContext):
    """Everything one preview call reads, plus its diagnostics."""

    def __init__(self,
                 game: GameState,
                 database: RuleDatabase,
                 cache: RuleCache,
                 settings: Settings):
        """
        Initialize the PreviewContext.

        Args:
            game: Game state snapshot
            database: Rule database
            cache: Rule cache over the same database
            settings: Engine settings
        """
        super().__init__()
        self.game = game
        self.database = database
        self.cache = cache
        self.settings = settings
        self.player = game.local_player

        # Wired by PreviewEngine
        self.resolver: Any = None
        self.evaluator: Any = None
        self.subject_resolver: Any = None
        self.dispatcher: Any = None

        self._modifier_stack: List[str] = []

    @contextmanager
    def entering(self, modifier: ResolvedModifier):
        """Track a modifier being applied, raising on re-entry."""
        if modifier.modifier_id in self._modifier_stack:
            chain = ' -> '.join(self._modifier_stack + [modifier.modifier_id])
            raise ModifierCycleError(f"Modifier cycle detected: {chain}")
        self._modifier_stack.append(modifier.modifier_id)
        try:
            yield
        finally:
            self._modifier_stack.pop()

    def plot_at(self, index: Optional[int]) -> Optional[Plot]:
        return self.game.map.get_plot(index)


# ==================== ARGUMENTS ====================

def require_argument(modifier: ResolvedModifier, name: str) -> Argument:
    if not modifier.has_argument(name):
        raise MissingArgumentError(f"Modifier {modifier.modifier_id} is missing a {name} argument")
    return modifier.argument(name)


def require_number(modifier: ResolvedModifier, name: str) -> float:
    argument = require_argument(modifier, name)
    try:
        return argument.as_number()
    except ValueError:
        raise InvalidArgumentError(
            f"Modifier {modifier.modifier_id} has a non-numeric {name} argument: {argument.value!r}"
        )


def optional_number(modifier: ResolvedModifier, name: str) -> Optional[float]:
    if not modifier.has_argument(name):
        return None
    return require_number(modifier, name)


def optional_flag(modifier: ResolvedModifier, name: str) -> bool:
    return modifier.has_argument(name) and modifier.argument(name).as_bool()


# ==================== YIELDS ====================

def add_yields_amount(delta: YieldsDelta, modifier: ResolvedModifier, amount: float) -> None:
    """
    Add a flat amount to every YieldType of the modifier.

    With PercentMultiplier = true the amount bypasses baseline multipliers.
    """
    yield_types = require_argument(modifier, 'YieldType').value
    if optional_flag(modifier, 'PercentMultiplier'):
        add_amount_no_multiplier(delta, yield_types, amount)
    else:
        add_amount(delta, yield_types, amount)


def add_yields_times(delta: YieldsDelta, modifier: ResolvedModifier, count: float) -> None:
    """Add Amount x count, the shape of every "per X" effect."""
    add_yields_amount(delta, modifier, require_number(modifier, 'Amount') * count)


def add_yields_percent(delta: YieldsDelta, modifier: ResolvedModifier, percent: float) -> None:
    add_percent(delta, require_argument(modifier, 'YieldType').value, percent)


def add_yields_percent_for_city(delta: YieldsDelta,
                                modifier: ResolvedModifier,
                                city: City,
                                percent: float) -> None:
    """
    Add a percentage of the city's own baseline yield as a flat amount.

    Player-level percent stacking is left to finalization, so a percent bonus
    scoped to one city has to be converted here against that city's yields.
    """
    for yield_type in parse_yield_types(require_argument(modifier, 'YieldType').value):
        baseline = unwrap_yields_of_type(city.yield_traces.get(yield_type))
        add_amount(delta, yield_type, baseline.base_amount * percent / 100)


def calculate_maintenance_reduction(modifier: ResolvedModifier, count: float, maintenance_cost: float) -> float:
    """
    Convert a maintenance efficiency modifier into the yield it saves.

    A positive Percent increases the yield, so the saving is
    cost - cost / (1 + percent). A negative Percent applies to the cost
    directly.
    """
    amount = optional_number(modifier, 'Amount')
    if amount is not None:
        return amount * count

    percent = optional_number(modifier, 'Percent')
    if percent is not None:
        percent = percent / 100
        if percent > 0:
            return maintenance_cost - maintenance_cost / (1 + percent)
        return maintenance_cost * percent

    raise MissingArgumentError(
        f"Modifier {modifier.modifier_id} has neither Amount nor Percent, cannot calculate maintenance reduction"
    )
