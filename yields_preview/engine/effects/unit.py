"""
Unit-scoped effects.
"""

from yields_preview.engine.accumulator import add_amount_no_multiplier
from yields_preview.engine.context import calculate_maintenance_reduction
from yields_preview.engine.effects.maintenance import UNIT_MAINTENANCE_YIELD
from yields_preview.engine.effects.registry import effect
from yields_preview.game.units import is_unit_type_target_of_modifier, unit_type_info_for


@effect('EFFECT_ADJUST_UNIT_MAINTENANCE_EFFICIENCY')
def unit_maintenance_efficiency(context, delta, subject, modifier):
    unit = context.assert_unit_subject(subject)
    unit_type = unit_type_info_for(context.cache, unit)
    if not is_unit_type_target_of_modifier(unit_type, modifier):
        return
    reduction = calculate_maintenance_reduction(modifier, unit_type.count, unit_type.maintenance_cost)
    yield_types = modifier.argument('YieldType').value if modifier.has_argument('YieldType') else UNIT_MAINTENANCE_YIELD
    add_amount_no_multiplier(delta, yield_types, reduction)
