"""
Pytest fixtures for yields preview tests.

Provides an in-memory rule table builder and a small game snapshot:
a 5x5 map, a local player (id 0) with a capital and a town, an allied major
(id 1), two city-states under the local player's suzerainty (ids 2, 3) and a
rival major (id 4).
"""

from collections import defaultdict
from typing import Dict, List, Optional

import pytest

from yields_preview.config import Settings
from yields_preview.database import RuleCache, RuleDatabase
from yields_preview.engine import PreviewEngine
from yields_preview.game import GameState
from yields_preview.utils.constants import REQUIREMENT_SET_ALL


def yield_trace(base_amount: float, percent: float) -> Dict:
    """A host-game yield trace as unwrapped by the baseline cache."""
    return {'base': {'steps': [{'base': {'value': base_amount}, 'modifier': {'value': percent}}]}}


class RuleTablesBuilder:
    """Builds rule tables row by row, then a RuleDatabase from them."""

    def __init__(self):
        self.tables: Dict[str, List[Dict]] = defaultdict(list)

    def add_rows(self, table_name: str, *rows: Dict) -> 'RuleTablesBuilder':
        self.tables[table_name].extend(rows)
        return self

    def add_modifier(self,
                     modifier_id: str,
                     effect_type: str,
                     collection_type: str,
                     arguments: Optional[Dict[str, object]] = None,
                     subject_set: Optional[str] = None,
                     owner_set: Optional[str] = None,
                     new_only: bool = False,
                     tradition: Optional[str] = None) -> 'RuleTablesBuilder':
        modifier_type = f'{modifier_id}_TYPE'
        self.tables['Modifiers'].append({
            'ModifierId': modifier_id,
            'ModifierType': modifier_type,
            'SubjectRequirementSetId': subject_set,
            'OwnerRequirementSetId': owner_set,
            'NewOnly': new_only,
        })
        self.tables['DynamicModifiers'].append({
            'ModifierType': modifier_type,
            'EffectType': effect_type,
            'CollectionType': collection_type,
        })
        for name, value in (arguments or {}).items():
            self.tables['ModifierArguments'].append({'ModifierId': modifier_id, 'Name': name, 'Value': value})
        if tradition:
            self.tables['TraditionModifiers'].append({'TraditionType': tradition, 'ModifierId': modifier_id})
        return self

    def add_requirement(self,
                        requirement_id: str,
                        requirement_type: str,
                        arguments: Optional[Dict[str, object]] = None,
                        inverse: bool = False) -> 'RuleTablesBuilder':
        self.tables['Requirements'].append({
            'RequirementId': requirement_id,
            'RequirementType': requirement_type,
            'Inverse': inverse,
        })
        for name, value in (arguments or {}).items():
            self.tables['RequirementArguments'].append({'RequirementId': requirement_id, 'Name': name, 'Value': value})
        return self

    def add_requirement_set(self,
                            requirement_set_id: str,
                            requirement_ids: List[str],
                            set_type: str = REQUIREMENT_SET_ALL) -> 'RuleTablesBuilder':
        self.tables['RequirementSets'].append({
            'RequirementSetId': requirement_set_id,
            'RequirementSetType': set_type,
        })
        for requirement_id in requirement_ids:
            self.tables['RequirementSetRequirements'].append({
                'RequirementSetId': requirement_set_id,
                'RequirementId': requirement_id,
            })
        return self

    def build(self) -> RuleDatabase:
        return RuleDatabase.from_tables(dict(self.tables))


def _game_data() -> Dict:
    plots = [
        {'index': i, 'x': i % 5, 'y': i // 5, 'terrain_type': 'TERRAIN_GRASS'}
        for i in range(25)
    ]
    plots[11]['terrain_type'] = 'TERRAIN_PLAINS'
    plots[13]['terrain_type'] = 'TERRAIN_PLAINS'
    plots[12]['district_type'] = 'DISTRICT_CITY_CENTER'
    plots[12]['constructibles'] = ['BUILDING_PALACE']
    plots[13]['constructibles'] = ['BUILDING_LIBRARY', 'BUILDING_MARKET']
    plots[13]['is_river'] = True
    plots[1]['constructibles'] = ['IMPROVEMENT_FARM']
    plots[1]['resource_type'] = 'RESOURCE_WHEAT'

    capital = {
        'id': 1,
        'name': 'Capital',
        'owner': 0,
        'original_owner': 0,
        'location': 12,
        'is_capital': True,
        'population': 10,
        'urban_population': 4,
        'rural_population': 3,
        'purchased_plots': [12, 13, 11],
        'great_works': 2,
        'resources': ['RESOURCE_GOLD'],
        'yield_traces': {'YIELD_FOOD': yield_trace(20, 0)},
    }
    town = {
        'id': 2,
        'name': 'Town',
        'owner': 0,
        'original_owner': 4,
        'location': 1,
        'is_town': True,
        'population': 3,
        'rural_population': 3,
        'purchased_plots': [1, 0],
    }
    return {
        'local_player_id': 0,
        'age': 'AGE_ANTIQUITY',
        'map': {'width': 5, 'height': 5, 'plots': plots},
        'players': [
            {
                'id': 0,
                'leader_type': 'LEADER_TEST',
                'civilization_type': 'CIVILIZATION_TEST',
                'cities': [capital, town],
                'units': [
                    {'id': 1, 'unit_type': 'UNIT_WARRIOR', 'owner': 0, 'location': 12, 'maintenance': 2},
                    {'id': 2, 'unit_type': 'UNIT_WARRIOR', 'owner': 0, 'location': 13, 'maintenance': 2},
                    {'id': 3, 'unit_type': 'UNIT_GALLEY', 'owner': 0, 'location': 0, 'maintenance': 3},
                    {'id': 4, 'unit_type': 'UNIT_ARMY_COMMANDER', 'owner': 0, 'location': 12,
                     'is_commander': True, 'level': 3},
                ],
                'active_traditions': ['TRADITION_A', 'TRADITION_B'],
                'spent_attribute_points': {'ATTRIBUTE_ECONOMIC': 2},
                'resources': ['RESOURCE_GOLD', 'RESOURCE_WHEAT', 'RESOURCE_SALT'],
                'allies': [1],
                'yield_traces': {
                    'YIELD_GOLD': yield_trace(0, 0),
                    'YIELD_SCIENCE': yield_trace(10, 50),
                },
            },
            {'id': 1, 'leader_type': 'LEADER_ALLY', 'allies': [0]},
            {'id': 2, 'is_major': False, 'suzerain': 0},
            {'id': 3, 'is_major': False, 'suzerain': 0},
            {'id': 4, 'leader_type': 'LEADER_RIVAL'},
        ],
    }


@pytest.fixture
def rules():
    """Empty rule table builder."""
    return RuleTablesBuilder()


@pytest.fixture
def game():
    """Fresh game snapshot for each test."""
    return GameState.from_dict(_game_data())


@pytest.fixture
def player(game):
    return game.local_player


@pytest.fixture
def make_engine(game):
    """Factory: engine over a database and the game snapshot, with settings overrides."""
    def factory(database: RuleDatabase, **settings) -> PreviewEngine:
        return PreviewEngine(database, game, settings=Settings(**settings))
    return factory


@pytest.fixture
def make_context(make_engine):
    """Factory: fully wired PreviewContext over a database."""
    def factory(database: RuleDatabase, **settings):
        return make_engine(database, **settings).create_context()
    return factory


@pytest.fixture
def reference_rules(rules):
    """Builder pre-filled with tags, units, districts and constructibles."""
    rules.add_rows(
        'TypeTags',
        {'Type': 'UNIT_WARRIOR', 'Tag': 'UNIT_CLASS_MELEE'},
        {'Type': 'UNIT_WARRIOR', 'Tag': 'UNIT_CLASS_INFANTRY'},
        {'Type': 'UNIT_GALLEY', 'Tag': 'UNIT_CLASS_NAVAL'},
        {'Type': 'BUILDING_LIBRARY', 'Tag': 'SCIENCE'},
        {'Type': 'BUILDING_MARKET', 'Tag': 'GOLD'},
    )
    rules.add_rows(
        'Units',
        {'UnitType': 'UNIT_WARRIOR', 'Domain': 'DOMAIN_LAND'},
        {'UnitType': 'UNIT_GALLEY', 'Domain': 'DOMAIN_SEA'},
        {'UnitType': 'UNIT_ARMY_COMMANDER', 'Domain': 'DOMAIN_LAND'},
    )
    rules.add_rows(
        'Districts',
        {'DistrictType': 'DISTRICT_CITY_CENTER', 'DistrictClass': 'CITY_CENTER'},
    )
    rules.add_rows(
        'Constructibles',
        {'ConstructibleType': 'BUILDING_PALACE', 'ConstructibleClass': 'BUILDING'},
        {'ConstructibleType': 'BUILDING_LIBRARY', 'ConstructibleClass': 'BUILDING'},
        {'ConstructibleType': 'BUILDING_MARKET', 'ConstructibleClass': 'BUILDING'},
        {'ConstructibleType': 'IMPROVEMENT_FARM', 'ConstructibleClass': 'IMPROVEMENT'},
    )
    rules.add_rows(
        'LeaderTraits',
        {'LeaderType': 'LEADER_TEST', 'TraitType': 'TRAIT_LEADER_TEST'},
    )
    return rules


@pytest.fixture
def cache(rules):
    return RuleCache(rules.build())
