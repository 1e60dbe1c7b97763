"""
Plot queries over the game state snapshot.
"""

from typing import Dict, Optional

from yields_preview.database.cache import RuleCache
from yields_preview.game.state import GameMap, Plot
from yields_preview.models.arguments import Argument


def plot_district_class(cache: RuleCache, plot: Plot) -> Optional[str]:
    if not plot.district_type:
        return None
    district = cache.database.district(plot.district_type)
    return district['DistrictClass'] if district else None


def has_plot_constructible(cache: RuleCache, plot: Plot, args: Dict[str, Argument]) -> bool:
    """Any constructible on the plot matching a ConstructibleType or Tag argument."""
    for constructible_type in plot.constructibles:
        if 'ConstructibleType' in args and args['ConstructibleType'].value:
            if constructible_type == args['ConstructibleType'].value:
                return True
        elif 'Tag' in args and args['Tag'].value:
            if cache.has_type_tag(constructible_type, args['Tag'].value):
                return True
    return False


def is_constructible_valid_for_quarter(cache: RuleCache, constructible_type: str) -> bool:
    constructible = cache.database.constructible(constructible_type)
    return constructible is not None and constructible['ConstructibleClass'] == 'BUILDING'


def is_plot_quarter(cache: RuleCache, plot: Plot) -> bool:
    """A quarter is a plot holding at least two buildings."""
    buildings = [c for c in plot.constructibles if is_constructible_valid_for_quarter(cache, c)]
    return len(buildings) >= 2


def is_plot_adjacent_to_coast(game_map: GameMap, plot: Plot) -> bool:
    if plot.is_coastal_land:
        return True
    return any(p.is_coastal_land for p in game_map.adjacent_plots(plot.index))
