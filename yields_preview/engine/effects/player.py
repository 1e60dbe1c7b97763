"""
Player-scoped effects (COLLECTION_OWNER subjects).
"""

from yields_preview.engine.context import (
    MissingArgumentError, PreviewContext, add_yields_amount, add_yields_percent,
    add_yields_times, optional_flag, optional_number, require_number
)
from yields_preview.engine.effects.maintenance import (
    add_constructible_maintenance_reduction, add_unit_maintenance_reduction
)
from yields_preview.engine.effects.registry import effect
from yields_preview.game.city import count_city_constructibles
from yields_preview.game.player import allied_majors, suzerain_city_states
from yields_preview.models.modifier import ResolvedModifier
from yields_preview.models.subject import Subject
from yields_preview.models.yields import YieldsDelta


@effect('EFFECT_PLAYER_ADJUST_YIELD')
def player_adjust_yield(context: PreviewContext, delta: YieldsDelta, subject: Subject, modifier: ResolvedModifier):
    context.assert_player_subject(subject)
    percent = optional_number(modifier, 'Percent')
    if percent is not None:
        add_yields_percent(delta, modifier, percent)
    else:
        add_yields_amount(delta, modifier, require_number(modifier, 'Amount'))


@effect('EFFECT_PLAYER_ADJUST_YIELD_PER_ACTIVE_TRADITION')
def player_yield_per_active_tradition(context, delta, subject, modifier):
    player = context.assert_player_subject(subject)
    add_yields_times(delta, modifier, len(player.active_traditions))


@effect('EFFECT_PLAYER_ADJUST_YIELD_PER_NUM_CITIES')
def player_yield_per_settlement(context, delta, subject, modifier):
    """Cities and Towns flags select which settlements count; neither counts all."""
    player = context.assert_player_subject(subject)
    count_cities = optional_flag(modifier, 'Cities')
    count_towns = optional_flag(modifier, 'Towns')
    if not count_cities and not count_towns:
        count = len(player.cities)
    else:
        count = sum(
            1 for city in player.cities
            if (city.is_town and count_towns) or (not city.is_town and count_cities)
        )
    add_yields_times(delta, modifier, count)


@effect('EFFECT_PLAYER_ADJUST_YIELD_PER_SUZERAIN')
def player_yield_per_suzerain(context, delta, subject, modifier):
    player = context.assert_player_subject(subject)
    add_yields_times(delta, modifier, len(suzerain_city_states(context.game, player)))


@effect('EFFECT_PLAYER_ADJUST_YIELD_PER_ALLIANCE')
def player_yield_per_alliance(context, delta, subject, modifier):
    player = context.assert_player_subject(subject)
    add_yields_times(delta, modifier, len(allied_majors(context.game, player)))


@effect('EFFECT_PLAYER_ADJUST_YIELD_PER_RESOURCE')
def player_yield_per_resource(context, delta, subject, modifier):
    player = context.assert_player_subject(subject)
    add_yields_times(delta, modifier, len(player.resources))


@effect('EFFECT_PLAYER_ADJUST_YIELD_PER_CONSTRUCTIBLE')
def player_yield_per_constructible(context, delta, subject, modifier):
    player = context.assert_player_subject(subject)
    if not (modifier.has_argument('ConstructibleType') or modifier.has_argument('Tag')):
        raise MissingArgumentError(f"Modifier {modifier.modifier_id} has neither ConstructibleType nor Tag")
    count = sum(
        count_city_constructibles(context.game.map, context.cache, city, modifier.arguments)
        for city in player.cities
    )
    add_yields_times(delta, modifier, count)


@effect('EFFECT_PLAYER_ADJUST_YIELD_PER_COMMANDER_LEVEL')
def player_yield_per_commander_level(context, delta, subject, modifier):
    player = context.assert_player_subject(subject)
    levels = sum(unit.level for unit in player.units if unit.is_commander)
    add_yields_times(delta, modifier, levels)


@effect('EFFECT_PLAYER_ADJUST_UNIT_MAINTENANCE_EFFICIENCY')
def player_unit_maintenance_efficiency(context, delta, subject, modifier):
    player = context.assert_player_subject(subject)
    add_unit_maintenance_reduction(context, delta, modifier, player)


@effect('EFFECT_PLAYER_ADJUST_CONSTRUCTIBLE_MAINTENANCE_EFFICIENCY')
def player_constructible_maintenance_efficiency(context, delta, subject, modifier):
    player = context.assert_player_subject(subject)
    add_constructible_maintenance_reduction(context, delta, modifier, player.cities)
