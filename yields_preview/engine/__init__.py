"""Rule resolution and effect accumulation engine."""

from yields_preview.engine.preview_engine import PreviewEngine
from yields_preview.engine.context import (
    ExecutionContext, PreviewContext, RuleError, MissingArgumentError,
    InvalidArgumentError, SubjectMismatchError, ModifierCycleError
)
from yields_preview.engine.modifier_resolver import ModifierResolver, RequirementSetCycleError
from yields_preview.engine.requirement_evaluator import RequirementEvaluator
from yields_preview.engine.subject_resolver import SubjectResolver
from yields_preview.engine.effects import EffectDispatcher, EFFECT_HANDLERS
from yields_preview.engine.yields_resolver import BaselineYieldsCache, finalize, unwrap_yields_of_type

__all__ = [
    'PreviewEngine',
    'ExecutionContext',
    'PreviewContext',
    'RuleError',
    'MissingArgumentError',
    'InvalidArgumentError',
    'SubjectMismatchError',
    'ModifierCycleError',
    'ModifierResolver',
    'RequirementSetCycleError',
    'RequirementEvaluator',
    'SubjectResolver',
    'EffectDispatcher',
    'EFFECT_HANDLERS',
    'BaselineYieldsCache',
    'finalize',
    'unwrap_yields_of_type',
]
