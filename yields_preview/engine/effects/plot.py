"""
Plot-scoped effects.
"""

from yields_preview.engine.context import add_yields_amount, require_number
from yields_preview.engine.effects.registry import effect


@effect('EFFECT_PLOT_ADJUST_YIELD')
def plot_adjust_yield(context, delta, subject, modifier):
    context.assert_plot_subject(subject)
    add_yields_amount(delta, modifier, require_number(modifier, 'Amount'))
