"""
Effect Dispatcher - routes (subject, modifier) pairs to effect handlers.

Handlers register themselves per EffectType with the @effect decorator and
share one signature: handler(context, delta, subject, modifier).
"""

import logging
from typing import Callable, Dict, Iterable, Optional

from yields_preview.engine.context import PreviewContext, RuleError
from yields_preview.models.modifier import ResolvedModifier
from yields_preview.models.subject import EmptySubject, Subject, describe_subject
from yields_preview.models.yields import YieldsDelta
from yields_preview.utils.supported_effects import IGNORED_EFFECT_TYPES

logger = logging.getLogger(__name__)

EffectHandler = Callable[[PreviewContext, YieldsDelta, Subject, ResolvedModifier], None]

EFFECT_HANDLERS: Dict[str, EffectHandler] = {}


def effect(*effect_types: str):
    """Register the decorated function as the handler of the given effect types."""
    def register(handler: EffectHandler) -> EffectHandler:
        for effect_type in effect_types:
            EFFECT_HANDLERS[effect_type] = handler
        return handler
    return register


class EffectDispatcher:
    """Applies modifier effects to a shared YieldsDelta."""

    def __init__(self, context: PreviewContext, handlers: Optional[Dict[str, EffectHandler]] = None):
        self.context = context
        self.handlers = EFFECT_HANDLERS if handlers is None else handlers

    def apply_all(self, delta: YieldsDelta, subjects: Iterable[Subject], modifier: ResolvedModifier) -> None:
        for subject in subjects:
            self.apply(delta, subject, modifier)

    def apply(self, delta: YieldsDelta, subject: Subject, modifier: ResolvedModifier) -> None:
        """
        Apply one modifier to one subject.

        NewOnly modifiers only fire on their triggering event, so they never
        contribute to a preview. Malformed rules are recorded and skipped
        unless strict_arguments is set.
        """
        if modifier.new_only:
            logger.debug(f"Modifier {modifier.modifier_id} is NewOnly, skipped")
            return
        if isinstance(subject, EmptySubject):
            logger.debug(f"Modifier {modifier.modifier_id}: empty subject ({subject.reason})")
            return

        effect_type = modifier.effect_type
        if effect_type in IGNORED_EFFECT_TYPES:
            self.context.add_ignored(f"Ignored EffectType: {effect_type} ({modifier.modifier_id})")
            return

        handler = self.handlers.get(effect_type)
        if handler is None:
            self.context.add_missing(f"Unhandled EffectType: {effect_type} ({modifier.modifier_id})")
            return

        try:
            handler(self.context, delta, subject, modifier)
        except RuleError as e:
            self.context.add_error(f"{effect_type} on {describe_subject(subject)}: {e}")
            if self.context.settings.strict_arguments:
                raise
