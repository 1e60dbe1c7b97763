"""
City-scoped effects.
"""

from yields_preview.engine.accumulator import add_amount
from yields_preview.engine.context import (
    InvalidArgumentError, MissingArgumentError, add_yields_amount, add_yields_percent_for_city,
    add_yields_times, optional_flag, optional_number, require_argument, require_number
)
from yields_preview.engine.effects.maintenance import add_constructible_maintenance_reduction
from yields_preview.engine.effects.registry import effect
from yields_preview.game.adjacency import get_yields_for_adjacency
from yields_preview.game.city import count_city_constructibles


@effect('EFFECT_CITY_ADJUST_YIELD')
def city_adjust_yield(context, delta, subject, modifier):
    """Flat Amount, or a Percent of the city's own baseline yield."""
    city = context.assert_city_subject(subject)
    percent = optional_number(modifier, 'Percent')
    if percent is not None:
        add_yields_percent_for_city(delta, modifier, city, percent)
        return
    add_yields_amount(delta, modifier, require_number(modifier, 'Amount'))


@effect('EFFECT_CITY_ADJUST_YIELD_PER_ATTRIBUTE')
def city_yield_per_attribute(context, delta, subject, modifier):
    context.assert_city_subject(subject)
    attribute_type = require_argument(modifier, 'AttributeType').value
    points = context.player.spent_attribute_points.get(attribute_type, 0)
    add_yields_times(delta, modifier, points)


@effect('EFFECT_CITY_ADJUST_WORKER_YIELD')
def city_worker_yield(context, delta, subject, modifier):
    city = context.assert_city_subject(subject)
    add_yields_times(delta, modifier, city.specialists)


@effect('EFFECT_CITY_ADJUST_YIELD_PER_POPULATION')
def city_yield_per_population(context, delta, subject, modifier):
    """
    Urban and Rural flags select which population counts; neither counts the
    whole population. An optional Divisor floors the count first.
    """
    city = context.assert_city_subject(subject)
    urban = optional_flag(modifier, 'Urban')
    rural = optional_flag(modifier, 'Rural')
    if not urban and not rural:
        count = city.population
    else:
        count = (city.urban_population if urban else 0) + (city.rural_population if rural else 0)

    divisor = optional_number(modifier, 'Divisor')
    if divisor is not None:
        if divisor <= 0:
            raise InvalidArgumentError(f"Modifier {modifier.modifier_id} has a non-positive Divisor: {divisor}")
        count = count // divisor

    add_yields_times(delta, modifier, count)


@effect('EFFECT_CITY_ADJUST_YIELD_PER_RESOURCE')
def city_yield_per_resource(context, delta, subject, modifier):
    city = context.assert_city_subject(subject)
    add_yields_times(delta, modifier, len(city.resources))


@effect('EFFECT_CITY_ADJUST_YIELD_PER_GREAT_WORK')
def city_yield_per_great_work(context, delta, subject, modifier):
    city = context.assert_city_subject(subject)
    add_yields_times(delta, modifier, city.great_works)


@effect('EFFECT_CITY_ADJUST_CONSTRUCTIBLE_YIELD')
def city_constructible_yield(context, delta, subject, modifier):
    city = context.assert_city_subject(subject)
    if not (modifier.has_argument('ConstructibleType') or modifier.has_argument('Tag')):
        raise MissingArgumentError(f"Modifier {modifier.modifier_id} has neither ConstructibleType nor Tag")
    count = count_city_constructibles(context.game.map, context.cache, city, modifier.arguments)
    add_yields_times(delta, modifier, count)


@effect('EFFECT_CITY_ACTIVATE_CONSTRUCTIBLE_ADJACENCY')
def city_activate_constructible_adjacency(context, delta, subject, modifier):
    """Adjacency yields of every constructible in the city using the activated adjacency."""
    city = context.assert_city_subject(subject)
    adjacency_id = require_argument(modifier, 'ConstructibleAdjacency').value
    adjacency = context.database.adjacency_yield_change(adjacency_id)
    if adjacency is None:
        context.add_missing(f"Adjacency {adjacency_id} not found ({modifier.modifier_id})")
        return

    constructible_types = set(context.database.constructible_types_for_adjacency(adjacency_id))
    total = 0
    for index in city.purchased_plots:
        plot = context.plot_at(index)
        if plot is None:
            continue
        for constructible_type in plot.constructibles:
            if constructible_type in constructible_types:
                total += get_yields_for_adjacency(context.game.map, context.cache, plot, adjacency)

    add_amount(delta, adjacency['YieldType'], total)


@effect('EFFECT_CITY_ADJUST_WAREHOUSE_YIELD')
def city_warehouse_yield(context, delta, subject, modifier):
    """YieldChange for every matching constructible, river or natural wonder in the city."""
    city = context.assert_city_subject(subject)
    change_id = require_argument(modifier, 'WarehouseYieldChange').value
    warehouse = context.database.warehouse_yield_change(change_id)
    if warehouse is None:
        context.add_missing(f"Warehouse yield change {change_id} not found ({modifier.modifier_id})")
        return

    plots = [p for p in (context.plot_at(i) for i in city.purchased_plots) if p is not None]
    if warehouse.get('ConstructibleInCity'):
        count = sum(1 for p in plots for c in p.constructibles if c == warehouse['ConstructibleInCity'])
    elif warehouse.get('MinorRiverInCity'):
        count = sum(1 for p in plots if p.is_river)
    elif warehouse.get('NaturalWonderInCity'):
        count = sum(1 for p in plots if p.is_natural_wonder)
    else:
        context.add_missing(f"Unhandled warehouse yield change {change_id} ({modifier.modifier_id})")
        return

    add_amount(delta, warehouse['YieldType'], (warehouse['YieldChange'] or 0) * count)


@effect('EFFECT_CITY_ADJUST_CONSTRUCTIBLE_MAINTENANCE_EFFICIENCY')
def city_constructible_maintenance_efficiency(context, delta, subject, modifier):
    city = context.assert_city_subject(subject)
    add_constructible_maintenance_reduction(context, delta, modifier, [city])
