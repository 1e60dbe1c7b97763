"""
Unit queries over the game state snapshot.
"""

from dataclasses import dataclass
from typing import Dict, FrozenSet, Optional

from yields_preview.database.cache import RuleCache
from yields_preview.game.state import Player, Unit
from yields_preview.models.modifier import ResolvedModifier


@dataclass
class UnitTypeInfo:
    """Aggregated maintenance info for every unit of one type."""
    unit_type: str
    domain: Optional[str]
    tags: FrozenSet[str]
    count: int = 0
    maintenance_cost: float = 0.0


def unit_domain(cache: RuleCache, unit_type: str) -> Optional[str]:
    row = cache.database.unit(unit_type)
    return row['Domain'] if row else None


def unit_types_maintenance(cache: RuleCache, player: Player) -> Dict[str, UnitTypeInfo]:
    """Group the player's units by type, summing counts and maintenance."""
    unit_types: Dict[str, UnitTypeInfo] = {}
    for unit in player.units:
        info = unit_types.get(unit.unit_type)
        if info is None:
            info = UnitTypeInfo(
                unit_type=unit.unit_type,
                domain=unit_domain(cache, unit.unit_type),
                tags=cache.type_tags(unit.unit_type),
            )
            unit_types[unit.unit_type] = info
        info.count += 1
        info.maintenance_cost += unit.maintenance
    return unit_types


def is_unit_type_target_of_modifier(unit_type: UnitTypeInfo, modifier: ResolvedModifier) -> bool:
    """Check the UnitTag / UnitClass / UnitDomain filters of a modifier."""
    if modifier.has_argument('UnitTag'):
        tags = modifier.argument('UnitTag').as_list()
        if not any(tag in unit_type.tags for tag in tags):
            return False
    if modifier.has_argument('UnitClass'):
        if modifier.argument('UnitClass').value not in unit_type.tags:
            return False
    if modifier.has_argument('UnitDomain'):
        if unit_type.domain != modifier.argument('UnitDomain').value:
            return False
    return True


def unit_type_info_for(cache: RuleCache, unit: Unit) -> UnitTypeInfo:
    return UnitTypeInfo(
        unit_type=unit.unit_type,
        domain=unit_domain(cache, unit.unit_type),
        tags=cache.type_tags(unit.unit_type),
        count=1,
        maintenance_cost=unit.maintenance,
    )
