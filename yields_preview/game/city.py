"""
City queries over the game state snapshot.
"""

import logging
from typing import Dict, List

from yields_preview.database.cache import RuleCache
from yields_preview.game.state import City, GameMap
from yields_preview.models.arguments import Argument

logger = logging.getLogger(__name__)


def city_constructibles(game_map: GameMap, city: City) -> List[str]:
    """Constructible types on every purchased plot of the city, in plot order."""
    constructibles = []
    for index in city.purchased_plots:
        plot = game_map.get_plot(index)
        if plot is not None:
            constructibles.extend(plot.constructibles)
    return constructibles


def has_city_building(game_map: GameMap, cache: RuleCache, city: City, args: Dict[str, Argument]) -> bool:
    """
    Check if the city has a certain building.

    Supported arguments:
    - BuildingType: exact constructible type
    - Tag: any building carrying the tag
    """
    constructibles = city_constructibles(game_map, city)
    if 'BuildingType' in args:
        return args['BuildingType'].value in constructibles
    if 'Tag' in args:
        tagged = cache.types_with_tag(args['Tag'].value)
        return any(c in tagged for c in constructibles)

    logger.warning(f"Unhandled building arguments: {sorted(args)}")
    return False


def count_city_terrain(game_map: GameMap, city: City, terrain_type: str) -> int:
    count = 0
    for index in city.purchased_plots:
        plot = game_map.get_plot(index)
        if plot is not None and plot.terrain_type == terrain_type:
            count += 1
    return count


def count_city_constructibles(game_map: GameMap, cache: RuleCache, city: City, args: Dict[str, Argument]) -> int:
    """Count constructibles matching a ConstructibleType or Tag argument."""
    constructibles = city_constructibles(game_map, city)
    if 'ConstructibleType' in args:
        wanted = args['ConstructibleType'].value
        return sum(1 for c in constructibles if c == wanted)
    if 'Tag' in args:
        tagged = cache.types_with_tag(args['Tag'].value)
        return sum(1 for c in constructibles if c in tagged)
    return 0
