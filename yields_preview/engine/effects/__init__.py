"""Effect handlers, registered per EffectType on import."""

from yields_preview.engine.effects.registry import EFFECT_HANDLERS, EffectDispatcher, effect
from yields_preview.engine.effects import attach, city, player, plot, unit

__all__ = [
    'EFFECT_HANDLERS',
    'EffectDispatcher',
    'effect',
]
