"""
EFFECT_ATTACH_MODIFIERS - applies a nested modifier to the matched subject.
"""

import logging

from yields_preview.engine.context import require_argument
from yields_preview.engine.effects.registry import effect

logger = logging.getLogger(__name__)


@effect('EFFECT_ATTACH_MODIFIERS')
def attach_modifiers(context, delta, subject, modifier):
    """
    Resolve the ModifierId argument and apply it with the matched subject as
    parent, e.g. a city attaching a modifier to its own plots.
    """
    nested_id = require_argument(modifier, 'ModifierId').value
    nested = context.resolver.resolve(nested_id)
    if nested is None:
        context.add_missing(f"Attached modifier {nested_id} not found ({modifier.modifier_id})")
        return

    with context.entering(nested):
        subjects = context.subject_resolver.resolve_subjects(context.player, nested, parent_subject=subject)
        logger.debug(f"Attached {nested_id} from {modifier.modifier_id}: {len(subjects)} subjects")
        context.dispatcher.apply_all(delta, subjects, nested)
