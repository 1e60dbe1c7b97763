"""Utilities and constants."""

from yields_preview.utils.constants import DEFAULT_YIELD_TYPES, REQUIREMENTSET_IS_MET
from yields_preview.utils.supported_effects import IGNORED_EFFECT_TYPES, UNSUPPORTED_COLLECTION_TYPES

__all__ = [
    'DEFAULT_YIELD_TYPES',
    'REQUIREMENTSET_IS_MET',
    'IGNORED_EFFECT_TYPES',
    'UNSUPPORTED_COLLECTION_TYPES',
]
