"""Tests for requirement set evaluation."""

import itertools

import pytest

from yields_preview.models import (
    CitySubject, PlayerSubject, PlotSubject, ResolvedRequirement, ResolvedRequirementSet, UnitSubject
)
from yields_preview.models.arguments import Argument
from yields_preview.utils.constants import REQUIREMENT_SET_ALL, REQUIREMENT_SET_ANY, REQUIREMENTSET_IS_MET


def requirement(requirement_type, inverse=False, **arguments):
    return ResolvedRequirement(
        requirement_id=f'REQ_{requirement_type}',
        requirement_type=requirement_type,
        inverse=inverse,
        arguments={name: Argument(name=name, value=str(value)) for name, value in arguments.items()},
    )


def requirement_set(set_type, *requirements):
    return ResolvedRequirementSet(requirement_set_id='SET_TEST', set_type=set_type, requirements=tuple(requirements))


@pytest.fixture
def evaluator(reference_rules, make_context):
    return make_context(reference_rules.build()).evaluator


@pytest.fixture
def capital(player):
    return CitySubject(player.capital)


@pytest.fixture
def town(player):
    return CitySubject(player.cities[1])


class TestRequirementSets:

    def test_empty_set_is_satisfied(self, evaluator, player, capital):
        assert evaluator.evaluate_set(player, capital, requirement_set(REQUIREMENT_SET_ALL))

    @pytest.mark.parametrize('set_type', [REQUIREMENT_SET_ALL, REQUIREMENT_SET_ANY])
    def test_combinator_truth_table(self, evaluator, player, capital, set_type):
        """ALL needs every child, ANY at least one, after each child's own Inverse."""
        leaves = {
            True: 'REQUIREMENT_CITY_IS_CAPITAL',
            False: 'REQUIREMENT_CITY_IS_TOWN',
        }
        for values in itertools.product([True, False], repeat=3):
            for inverses in itertools.product([True, False], repeat=3):
                children = [
                    requirement(leaves[value != inverse], inverse=inverse)
                    for value, inverse in zip(values, inverses)
                ]
                expected = all(values) if set_type == REQUIREMENT_SET_ALL else any(values)
                assert evaluator.evaluate_set(player, capital, requirement_set(set_type, *children)) == expected

    def test_inverse_negates_child_not_set(self, evaluator, player, capital):
        children = [
            requirement('REQUIREMENT_CITY_IS_CAPITAL'),
            requirement('REQUIREMENT_CITY_IS_TOWN', inverse=True),
        ]
        assert evaluator.evaluate_set(player, capital, requirement_set(REQUIREMENT_SET_ALL, *children))

    def test_unknown_set_type_is_conjunction(self, evaluator, player, capital):
        context = evaluator.context
        children = [requirement('REQUIREMENT_CITY_IS_CAPITAL'), requirement('REQUIREMENT_CITY_IS_TOWN')]
        assert not evaluator.evaluate_set(player, capital, requirement_set('REQUIREMENTSET_TEST_WEIRD', *children))
        assert any('REQUIREMENTSET_TEST_WEIRD' in m for m in context.missings)

    def test_nested_set(self, evaluator, player, capital, town):
        nested = requirement_set(REQUIREMENT_SET_ANY, requirement('REQUIREMENT_CITY_IS_TOWN'))
        child = ResolvedRequirement(
            requirement_id='REQ_NESTED', requirement_type=REQUIREMENTSET_IS_MET, nested_set=nested
        )
        outer = requirement_set(REQUIREMENT_SET_ALL, child)
        assert evaluator.evaluate_set(player, town, outer)
        assert not evaluator.evaluate_set(player, capital, outer)

    def test_inverted_nested_set(self, evaluator, player, capital):
        nested = requirement_set(REQUIREMENT_SET_ALL, requirement('REQUIREMENT_CITY_IS_TOWN'))
        child = ResolvedRequirement(
            requirement_id='REQ_NESTED', requirement_type=REQUIREMENTSET_IS_MET, inverse=True, nested_set=nested
        )
        assert evaluator.evaluate_set(player, capital, requirement_set(REQUIREMENT_SET_ALL, child))


class TestRequirements:

    def test_unknown_requirement_type_is_false_and_reported(self, evaluator, player, capital):
        assert evaluator.is_satisfied(player, capital, requirement('REQUIREMENT_FROM_THE_FUTURE')) is False
        assert any('REQUIREMENT_FROM_THE_FUTURE' in m for m in evaluator.context.missings)

    def test_city_flags(self, evaluator, player, capital, town):
        assert evaluator.is_satisfied(player, capital, requirement('REQUIREMENT_CITY_IS_CITY'))
        assert not evaluator.is_satisfied(player, town, requirement('REQUIREMENT_CITY_IS_CITY'))
        assert evaluator.is_satisfied(player, capital, requirement('REQUIREMENT_CITY_IS_ORIGINAL_OWNER'))
        assert not evaluator.is_satisfied(player, town, requirement('REQUIREMENT_CITY_IS_ORIGINAL_OWNER'))

    def test_city_has_terrain_amount_defaults_to_one(self, evaluator, player, capital, town):
        assert evaluator.is_satisfied(player, capital, requirement('REQUIREMENT_CITY_HAS_TERRAIN', TerrainType='TERRAIN_PLAINS'))
        assert not evaluator.is_satisfied(player, town, requirement('REQUIREMENT_CITY_HAS_TERRAIN', TerrainType='TERRAIN_PLAINS'))
        assert evaluator.is_satisfied(
            player, capital, requirement('REQUIREMENT_CITY_HAS_TERRAIN', TerrainType='TERRAIN_PLAINS', Amount=2)
        )
        assert not evaluator.is_satisfied(
            player, capital, requirement('REQUIREMENT_CITY_HAS_TERRAIN', TerrainType='TERRAIN_PLAINS', Amount=3)
        )

    def test_city_has_building(self, evaluator, player, capital, town):
        assert evaluator.is_satisfied(player, capital, requirement('REQUIREMENT_CITY_HAS_BUILDING', BuildingType='BUILDING_LIBRARY'))
        assert evaluator.is_satisfied(player, capital, requirement('REQUIREMENT_CITY_HAS_BUILDING', Tag='GOLD'))
        assert not evaluator.is_satisfied(player, town, requirement('REQUIREMENT_CITY_HAS_BUILDING', Tag='GOLD'))

    def test_city_population(self, evaluator, player, capital):
        assert evaluator.is_satisfied(player, capital, requirement('REQUIREMENT_CITY_POPULATION', MinUrbanPopulation=4))
        assert not evaluator.is_satisfied(player, capital, requirement('REQUIREMENT_CITY_POPULATION', MinUrbanPopulation=5))

    def test_city_has_project(self, evaluator, player, capital):
        assert not evaluator.is_satisfied(player, capital, requirement('REQUIREMENT_CITY_HAS_PROJECT', HasAnyProject='true'))
        capital.city.project_type = 'PROJECT_TOWN_FISHING'
        assert evaluator.is_satisfied(player, capital, requirement('REQUIREMENT_CITY_HAS_PROJECT', HasAnyProject='true'))
        assert evaluator.is_satisfied(
            player, capital, requirement('REQUIREMENT_CITY_HAS_PROJECT', ProjectType='PROJECT_TOWN_FISHING')
        )

    def test_city_requirement_on_plot_reads_owning_city(self, evaluator, player, game):
        plot_subject = PlotSubject(city=player.capital, plot=game.map.get_plot(13))
        assert evaluator.is_satisfied(player, plot_subject, requirement('REQUIREMENT_CITY_IS_CAPITAL'))

    def test_city_requirement_on_player_is_false(self, evaluator, player):
        assert not evaluator.is_satisfied(player, PlayerSubject(player), requirement('REQUIREMENT_CITY_IS_CAPITAL'))
        assert any('cannot be evaluated' in m for m in evaluator.context.missings)

    def test_plot_requirements(self, evaluator, player, game):
        library_plot = PlotSubject(city=player.capital, plot=game.map.get_plot(13))
        farm_plot = PlotSubject(city=player.cities[1], plot=game.map.get_plot(1))

        assert evaluator.is_satisfied(player, library_plot, requirement('REQUIREMENT_PLOT_HAS_CONSTRUCTIBLE', Tag='SCIENCE'))
        assert not evaluator.is_satisfied(player, farm_plot, requirement('REQUIREMENT_PLOT_HAS_CONSTRUCTIBLE', Tag='SCIENCE'))
        assert evaluator.is_satisfied(
            player, farm_plot, requirement('REQUIREMENT_PLOT_HAS_CONSTRUCTIBLE', ConstructibleType='IMPROVEMENT_FARM')
        )
        assert evaluator.is_satisfied(player, library_plot, requirement('REQUIREMENT_PLOT_HAS_NUM_CONSTRUCTIBLES'))
        assert evaluator.is_satisfied(player, library_plot, requirement('REQUIREMENT_PLOT_HAS_NUM_CONSTRUCTIBLES', Amount=2))
        assert not evaluator.is_satisfied(player, farm_plot, requirement('REQUIREMENT_PLOT_HAS_NUM_CONSTRUCTIBLES', Amount=2))
        assert evaluator.is_satisfied(player, library_plot, requirement('REQUIREMENT_PLOT_IS_QUARTER'))
        assert not evaluator.is_satisfied(player, farm_plot, requirement('REQUIREMENT_PLOT_IS_QUARTER'))
        assert evaluator.is_satisfied(player, farm_plot, requirement('REQUIREMENT_PLOT_RESOURCE_VISIBLE'))
        assert evaluator.is_satisfied(
            player, library_plot, requirement('REQUIREMENT_PLOT_TERRAIN_TYPE_MATCHES', TerrainType='TERRAIN_PLAINS')
        )

    def test_plot_requirement_on_city_reads_city_center(self, evaluator, player, capital):
        assert evaluator.is_satisfied(
            player, capital, requirement('REQUIREMENT_PLOT_DISTRICT_CLASS', DistrictClass='CITY_CENTER, URBAN')
        )

    def test_player_requirements(self, evaluator, player):
        subject = PlayerSubject(player)
        assert evaluator.is_satisfied(player, subject, requirement('REQUIREMENT_PLAYER_IS_AT_PEACE_WITH_ALL_MAJORS'))
        assert evaluator.is_satisfied(player, subject, requirement('REQUIREMENT_PLAYER_HAS_NUM_ALLIANCES'))
        assert not evaluator.is_satisfied(player, subject, requirement('REQUIREMENT_PLAYER_HAS_NUM_ALLIANCES', Amount=2))
        assert evaluator.is_satisfied(
            player, subject, requirement('REQUIREMENT_PLAYER_HAS_CIVILIZATION_OR_LEADER_TRAIT', TraitType='TRAIT_LEADER_TEST')
        )
        assert evaluator.is_satisfied(
            player, subject, requirement('REQUIREMENT_PLAYER_LEADER_TYPE_MATCHES', LeaderType='LEADER_TEST')
        )

    def test_at_war_with_a_major(self, evaluator, player):
        player.at_war_with = [4]
        assert not evaluator.is_satisfied(
            player, PlayerSubject(player), requirement('REQUIREMENT_PLAYER_IS_AT_PEACE_WITH_ALL_MAJORS')
        )

    def test_player_requirement_on_city_reads_player(self, evaluator, player, capital):
        assert evaluator.is_satisfied(
            player, capital, requirement('REQUIREMENT_PLAYER_LEADER_TYPE_MATCHES', LeaderType='LEADER_TEST')
        )

    def test_unit_requirements(self, evaluator, player):
        warrior = UnitSubject(player.units[0])
        galley = UnitSubject(player.units[2])
        assert evaluator.is_satisfied(player, warrior, requirement('REQUIREMENT_UNIT_DOMAIN_MATCHES', UnitDomain='DOMAIN_LAND'))
        assert not evaluator.is_satisfied(player, galley, requirement('REQUIREMENT_UNIT_DOMAIN_MATCHES', UnitDomain='DOMAIN_LAND'))
        assert evaluator.is_satisfied(player, galley, requirement('REQUIREMENT_UNIT_TAG_MATCHES', Tag='UNIT_CLASS_NAVAL'))
        assert evaluator.is_satisfied(player, warrior, requirement('REQUIREMENT_UNIT_TYPE_MATCHES', UnitType='UNIT_WARRIOR'))
