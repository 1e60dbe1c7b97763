"""
Adjacency yields - the yield a plot gets from its neighbours.
"""

import logging
from typing import Any, Dict, List

from yields_preview.database.cache import RuleCache
from yields_preview.game.plot import is_plot_quarter
from yields_preview.game.state import GameMap, Plot

logger = logging.getLogger(__name__)

# Predicate columns of Adjacency_YieldChanges that are not enforced
_UNENFORCED_COLUMNS = ('ProjectMaxYield', 'Age')


def is_adjacency_neighbour(cache: RuleCache, neighbour: Plot, adjacency: Dict[str, Any]) -> bool:
    """Every predicate set on the adjacency row must hold for the neighbour."""
    if adjacency.get('AdjacentTerrain') and neighbour.terrain_type != adjacency['AdjacentTerrain']:
        return False
    if adjacency.get('AdjacentFeature') and neighbour.feature_type != adjacency['AdjacentFeature']:
        return False
    if adjacency.get('AdjacentDistrict') and neighbour.district_type != adjacency['AdjacentDistrict']:
        return False
    if adjacency.get('AdjacentConstructible'):
        if adjacency['AdjacentConstructible'] not in neighbour.constructibles:
            return False
    if adjacency.get('AdjacentConstructibleTag'):
        tag = adjacency['AdjacentConstructibleTag']
        if not any(cache.has_type_tag(c, tag) for c in neighbour.constructibles):
            return False
    if adjacency.get('AdjacentResource') and not neighbour.resource_type:
        return False
    if adjacency.get('AdjacentRiver') and not neighbour.is_river:
        return False
    if adjacency.get('AdjacentNaturalWonder') and not neighbour.is_natural_wonder:
        return False
    if adjacency.get('AdjacentQuarter') and not is_plot_quarter(cache, neighbour):
        return False
    return True


def qualifying_neighbours(game_map: GameMap, cache: RuleCache, plot: Plot,
                          adjacency: Dict[str, Any]) -> List[Plot]:
    return [
        neighbour for neighbour in game_map.adjacent_plots(plot.index)
        if is_adjacency_neighbour(cache, neighbour, adjacency)
    ]


def get_yields_for_adjacency(game_map: GameMap, cache: RuleCache, plot: Plot,
                             adjacency: Dict[str, Any]) -> float:
    """
    Total adjacency yield for a plot.

    Each qualifying neighbour adds YieldChange, but only when at least
    TilesRequired neighbours qualify; below that the total is zero.
    """
    for column in _UNENFORCED_COLUMNS:
        if adjacency.get(column):
            logger.debug(f"Adjacency {adjacency.get('ID')}: {column} is not enforced")

    neighbours = qualifying_neighbours(game_map, cache, plot, adjacency)
    tiles_required = adjacency.get('TilesRequired') or 1
    if len(neighbours) < tiles_required:
        return 0
    return len(neighbours) * (adjacency.get('YieldChange') or 0)
