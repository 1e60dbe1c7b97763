"""
Requirement Evaluator - evaluates requirement set trees against a subject.

Requirement types are dispatched through a table of predicates grouped by the
entity they read (city, plot, player, unit). An unknown requirement type is
never an error: it evaluates to False and is reported as missing.
"""

from typing import Callable, Dict, Optional

from yields_preview.engine.context import PreviewContext
from yields_preview.game.city import count_city_terrain, has_city_building
from yields_preview.game.plot import (
    has_plot_constructible, is_plot_adjacent_to_coast, is_plot_quarter, plot_district_class
)
from yields_preview.game.player import allied_majors, is_at_peace_with_all_majors
from yields_preview.game.state import City, Player, Plot, Unit
from yields_preview.models.requirement import ResolvedRequirement, ResolvedRequirementSet
from yields_preview.models.subject import (
    CitySubject, PlayerSubject, PlotSubject, Subject, UnitSubject, describe_subject
)
from yields_preview.utils.constants import (
    REQUIREMENT_SET_ALL, REQUIREMENT_SET_ANY, REQUIREMENTSET_IS_MET
)


class RequirementEvaluator:
    """Evaluates requirements for the local player against candidate subjects."""

    def __init__(self, context: PreviewContext):
        self.context = context
        self.cache = context.cache

        self._city_requirements: Dict[str, Callable[[Player, City, ResolvedRequirement], bool]] = {
            'REQUIREMENT_CITY_IS_CAPITAL': lambda p, c, r: c.is_capital,
            'REQUIREMENT_CITY_IS_CITY': lambda p, c, r: not c.is_town,
            'REQUIREMENT_CITY_IS_TOWN': lambda p, c, r: c.is_town,
            'REQUIREMENT_CITY_IS_ORIGINAL_OWNER': lambda p, c, r: c.original_owner == p.id,
            'REQUIREMENT_CITY_IS_DISTANT_LANDS': lambda p, c, r: c.is_distant_lands,
            'REQUIREMENT_CITY_HAS_BUILDING': self._city_has_building,
            'REQUIREMENT_CITY_HAS_PROJECT': self._city_has_project,
            'REQUIREMENT_CITY_HAS_TERRAIN': self._city_has_terrain,
            'REQUIREMENT_CITY_POPULATION': self._city_population,
            'REQUIREMENT_CITY_FOLLOWS_RELIGION': self._city_follows_religion,
        }
        self._plot_requirements: Dict[str, Callable[[Player, Plot, ResolvedRequirement], bool]] = {
            'REQUIREMENT_PLOT_DISTRICT_CLASS': self._plot_district_class,
            'REQUIREMENT_PLOT_RESOURCE_VISIBLE': lambda p, t, r: bool(t.resource_type) and t.resource_revealed,
            'REQUIREMENT_PLOT_IS_COASTAL_LAND': lambda p, t, r: t.is_coastal_land,
            'REQUIREMENT_PLOT_ADJACENT_TO_COAST': lambda p, t, r: is_plot_adjacent_to_coast(self.context.game.map, t),
            'REQUIREMENT_PLOT_HAS_CONSTRUCTIBLE': lambda p, t, r: has_plot_constructible(self.cache, t, r.arguments),
            'REQUIREMENT_PLOT_HAS_NUM_CONSTRUCTIBLES': lambda p, t, r: len(t.constructibles) >= self._amount(r),
            'REQUIREMENT_PLOT_IS_QUARTER': lambda p, t, r: is_plot_quarter(self.cache, t),
            'REQUIREMENT_PLOT_TERRAIN_TYPE_MATCHES': lambda p, t, r: t.terrain_type == self._value(r, 'TerrainType'),
            'REQUIREMENT_PLOT_FEATURE_TYPE_MATCHES': lambda p, t, r: t.feature_type == self._value(r, 'FeatureType'),
        }
        self._player_requirements: Dict[str, Callable[[Player, ResolvedRequirement], bool]] = {
            'REQUIREMENT_PLAYER_IS_AT_PEACE_WITH_ALL_MAJORS':
                lambda p, r: is_at_peace_with_all_majors(self.context.game, p),
            'REQUIREMENT_PLAYER_HAS_CIVILIZATION_OR_LEADER_TRAIT': self._player_has_trait,
            'REQUIREMENT_PLAYER_LEADER_TYPE_MATCHES': lambda p, r: p.leader_type == self._value(r, 'LeaderType'),
            'REQUIREMENT_PLAYER_HAS_NUM_ALLIANCES':
                lambda p, r: len(allied_majors(self.context.game, p)) >= self._amount(r),
        }
        self._unit_requirements: Dict[str, Callable[[Unit, ResolvedRequirement], bool]] = {
            'REQUIREMENT_UNIT_DOMAIN_MATCHES': self._unit_domain_matches,
            'REQUIREMENT_UNIT_TAG_MATCHES':
                lambda u, r: self.cache.has_type_tag(u.unit_type, self._value(r, 'Tag')),
            'REQUIREMENT_UNIT_TYPE_MATCHES': lambda u, r: u.unit_type == self._value(r, 'UnitType'),
        }

    # ==================== SETS ====================

    def evaluate_set(self, player: Player, subject: Subject, requirement_set: ResolvedRequirementSet) -> bool:
        """
        Evaluate a requirement set: ALL is a conjunction, ANY a disjunction.

        Each child's result is negated by its own Inverse flag before being
        combined. An empty set is always satisfied.
        """
        if requirement_set.is_empty:
            return True

        results = (self._evaluate_child(player, subject, r) for r in requirement_set.requirements)

        if requirement_set.set_type == REQUIREMENT_SET_ANY:
            return any(results)
        if requirement_set.set_type != REQUIREMENT_SET_ALL:
            self.context.add_missing(
                f"Unknown RequirementSetType {requirement_set.set_type} "
                f"for {requirement_set.requirement_set_id}, using {REQUIREMENT_SET_ALL}"
            )
        return all(results)

    def _evaluate_child(self, player: Player, subject: Subject, requirement: ResolvedRequirement) -> bool:
        if requirement.requirement_type == REQUIREMENTSET_IS_MET:
            if requirement.nested_set is None:
                self.context.add_missing(f"Requirement {requirement.requirement_id} has no nested requirement set")
                satisfied = False
            else:
                satisfied = self.evaluate_set(player, subject, requirement.nested_set)
        else:
            satisfied = self.is_satisfied(player, subject, requirement)
        return satisfied != requirement.inverse

    # ==================== REQUIREMENTS ====================

    def is_satisfied(self, player: Player, subject: Subject, requirement: ResolvedRequirement) -> bool:
        """Evaluate one requirement (ignoring its Inverse flag)."""
        requirement_type = requirement.requirement_type

        if requirement_type in self._city_requirements:
            city = self._city_of(subject)
            if city is None:
                return self._wrong_subject(requirement, subject)
            return bool(self._city_requirements[requirement_type](player, city, requirement))

        if requirement_type in self._plot_requirements:
            plot = self._plot_of(subject)
            if plot is None:
                return self._wrong_subject(requirement, subject)
            return bool(self._plot_requirements[requirement_type](player, plot, requirement))

        if requirement_type in self._player_requirements:
            target = subject.player if isinstance(subject, PlayerSubject) else player
            return bool(self._player_requirements[requirement_type](target, requirement))

        if requirement_type in self._unit_requirements:
            if not isinstance(subject, UnitSubject):
                return self._wrong_subject(requirement, subject)
            return bool(self._unit_requirements[requirement_type](subject.unit, requirement))

        self.context.add_missing(f"Unhandled RequirementType: {requirement_type} ({requirement.requirement_id})")
        return False

    def _city_of(self, subject: Subject) -> Optional[City]:
        if isinstance(subject, (CitySubject, PlotSubject)):
            return subject.city
        return None

    def _plot_of(self, subject: Subject) -> Optional[Plot]:
        if isinstance(subject, PlotSubject):
            return subject.plot
        if isinstance(subject, CitySubject):
            return self.context.plot_at(subject.city.location)
        if isinstance(subject, UnitSubject):
            return self.context.plot_at(subject.unit.location)
        return None

    def _wrong_subject(self, requirement: ResolvedRequirement, subject: Subject) -> bool:
        self.context.add_missing(
            f"Requirement {requirement.requirement_id} ({requirement.requirement_type}) "
            f"cannot be evaluated on {describe_subject(subject)}"
        )
        return False

    # ==================== ARGUMENTS ====================

    @staticmethod
    def _value(requirement: ResolvedRequirement, name: str) -> Optional[str]:
        argument = requirement.argument(name)
        return argument.value if argument else None

    def _amount(self, requirement: ResolvedRequirement, name: str = 'Amount', default: int = 1) -> float:
        """Numeric threshold argument, defaulting to 1 when absent."""
        value = self._value(requirement, name)
        if value in (None, ''):
            return default
        try:
            return float(value)
        except ValueError:
            self.context.add_error(
                f"Requirement {requirement.requirement_id} has a non-numeric {name}: {value!r}, using {default}"
            )
            return default

    # ==================== CITY ====================

    def _city_has_building(self, player: Player, city: City, requirement: ResolvedRequirement) -> bool:
        return has_city_building(self.context.game.map, self.cache, city, requirement.arguments)

    def _city_has_project(self, player: Player, city: City, requirement: ResolvedRequirement) -> bool:
        if self._value(requirement, 'HasAnyProject') == 'true':
            return city.project_type is not None
        if city.project_type is None:
            return False
        return city.project_type == self._value(requirement, 'ProjectType')

    def _city_has_terrain(self, player: Player, city: City, requirement: ResolvedRequirement) -> bool:
        terrain_type = self._value(requirement, 'TerrainType')
        if not terrain_type:
            self.context.add_missing(f"Requirement {requirement.requirement_id} has no TerrainType argument")
            return False
        return count_city_terrain(self.context.game.map, city, terrain_type) >= self._amount(requirement)

    def _city_population(self, player: Player, city: City, requirement: ResolvedRequirement) -> bool:
        if self._value(requirement, 'MinUrbanPopulation'):
            return city.urban_population >= self._amount(requirement, 'MinUrbanPopulation')
        self.context.add_missing(
            f"Unhandled arguments for REQUIREMENT_CITY_POPULATION ({requirement.requirement_id}): "
            f"{sorted(requirement.arguments)}"
        )
        return False

    def _city_follows_religion(self, player: Player, city: City, requirement: ResolvedRequirement) -> bool:
        if player.religion is None and self._value(requirement, 'hasReligion') == 'true':
            return False
        if city.majority_religion is None and self._value(requirement, 'cityReligion') == 'true':
            return False
        return player.religion is not None and city.majority_religion == player.religion

    # ==================== PLOT ====================

    def _plot_district_class(self, player: Player, plot: Plot, requirement: ResolvedRequirement) -> bool:
        argument = requirement.argument('DistrictClass')
        required_classes = argument.as_list() if argument else []
        return plot_district_class(self.cache, plot) in required_classes

    # ==================== PLAYER ====================

    def _player_has_trait(self, player: Player, requirement: ResolvedRequirement) -> bool:
        trait_type = self._value(requirement, 'TraitType')
        return (
            trait_type in self.cache.leader_traits(player.leader_type)
            or trait_type in self.cache.civilization_traits(player.civilization_type)
        )

    # ==================== UNIT ====================

    def _unit_domain_matches(self, unit: Unit, requirement: ResolvedRequirement) -> bool:
        row = self.context.database.unit(unit.unit_type)
        return row is not None and row['Domain'] == self._value(requirement, 'UnitDomain')
