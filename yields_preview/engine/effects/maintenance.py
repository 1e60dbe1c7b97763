"""
Maintenance efficiency effects, shared by player, city and unit handlers.

Reductions go to the AmountNoMultiplier channel: a saved maintenance cost is
not subject to yield percent bonuses.
"""

from typing import Iterable

from yields_preview.engine.accumulator import add_amount_no_multiplier
from yields_preview.engine.context import (
    MissingArgumentError, PreviewContext, calculate_maintenance_reduction
)
from yields_preview.game.city import city_constructibles
from yields_preview.game.state import City, Player
from yields_preview.game.units import is_unit_type_target_of_modifier, unit_types_maintenance
from yields_preview.models.modifier import ResolvedModifier
from yields_preview.models.yields import YieldsDelta

UNIT_MAINTENANCE_YIELD = 'YIELD_GOLD'


def add_unit_maintenance_reduction(context: PreviewContext,
                                   delta: YieldsDelta,
                                   modifier: ResolvedModifier,
                                   player: Player) -> None:
    reduction = 0.0
    for unit_type in unit_types_maintenance(context.cache, player).values():
        if is_unit_type_target_of_modifier(unit_type, modifier):
            reduction += calculate_maintenance_reduction(modifier, unit_type.count, unit_type.maintenance_cost)

    yield_types = modifier.argument('YieldType').value if modifier.has_argument('YieldType') else UNIT_MAINTENANCE_YIELD
    add_amount_no_multiplier(delta, yield_types, reduction)


def is_constructible_target_of_modifier(context: PreviewContext,
                                        constructible_type: str,
                                        modifier: ResolvedModifier) -> bool:
    if modifier.has_argument('ConstructibleType'):
        return constructible_type == modifier.argument('ConstructibleType').value
    if modifier.has_argument('Tag'):
        return context.cache.has_type_tag(constructible_type, modifier.argument('Tag').value)
    return True


def add_constructible_maintenance_reduction(context: PreviewContext,
                                            delta: YieldsDelta,
                                            modifier: ResolvedModifier,
                                            cities: Iterable[City]) -> None:
    """Each matching constructible saves a share of every maintenance it pays."""
    if not (modifier.has_argument('Amount') or modifier.has_argument('Percent')):
        raise MissingArgumentError(f"Modifier {modifier.modifier_id} has neither Amount nor Percent")

    yield_filter = modifier.argument('YieldType').as_list() if modifier.has_argument('YieldType') else None

    for city in cities:
        for constructible_type in city_constructibles(context.game.map, city):
            if not is_constructible_target_of_modifier(context, constructible_type, modifier):
                continue
            for maintenance in context.database.constructible_maintenances(constructible_type):
                yield_type = maintenance['YieldType']
                if yield_filter is not None and yield_type not in yield_filter:
                    continue
                cost = maintenance['Amount'] or 0
                reduction = calculate_maintenance_reduction(modifier, 1, cost)
                add_amount_no_multiplier(delta, yield_type, reduction)
