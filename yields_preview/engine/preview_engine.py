"""
Preview Engine - main orchestrator for yields previews.

Flow per preview call:
1. Gather modifiers (by tradition, or an explicit id list)
2. Resolve each modifier's subjects (owner + subject requirement sets)
3. Dispatch effects into one shared YieldsDelta
4. Finalize the delta against the cached baseline yields
"""

import logging
from typing import Callable, Iterable, List, Optional

from yields_preview.config import Settings
from yields_preview.database.cache import RuleCache
from yields_preview.database.rule_database import RuleDatabase
from yields_preview.engine.context import PreviewContext
from yields_preview.engine.effects import EffectDispatcher
from yields_preview.engine.modifier_resolver import ModifierResolver
from yields_preview.engine.requirement_evaluator import RequirementEvaluator
from yields_preview.engine.subject_resolver import SubjectResolver
from yields_preview.engine.yields_resolver import BaselineYieldsCache, finalize
from yields_preview.game.state import GameState
from yields_preview.models.modifier import ResolvedModifier
from yields_preview.models.yields import PreviewResult, create_empty_delta

logger = logging.getLogger(__name__)


class PreviewEngine:
    """Main orchestrator for yields previews."""

    def __init__(self,
                 database: RuleDatabase,
                 game: GameState,
                 cache: Optional[RuleCache] = None,
                 baseline: Optional[BaselineYieldsCache] = None,
                 settings: Optional[Settings] = None):
        """
        Initialize the PreviewEngine.

        Args:
            database: Rule database
            game: Game state snapshot of the local player's game
            cache: Rule cache, shared across engines over the same database
            baseline: Baseline yields cache; the caller keeps it up to date
            settings: Engine settings, defaults read from the environment
        """
        self.database = database
        self.game = game
        self.cache = cache if cache is not None else RuleCache(database)
        self.baseline = baseline if baseline is not None else BaselineYieldsCache()
        self.settings = settings if settings is not None else Settings()
        self.resolver = ModifierResolver(database, self.cache)

    def preview(self, tradition_type: Optional[str]) -> PreviewResult:
        """
        Preview the yields a tradition (policy) would add.

        Args:
            tradition_type: TraditionType to preview

        Returns:
            PreviewResult; never raises
        """
        if not tradition_type:
            return PreviewResult()

        return self._run(tradition_type, lambda: self.database.tradition_modifier_ids(tradition_type))

    def preview_modifiers(self, modifier_ids: List[str]) -> PreviewResult:
        """
        Preview the yields of an explicit list of modifiers, e.g. the ones a
        tech or civic unlocks.
        """
        return self._run(", ".join(modifier_ids), lambda: modifier_ids)

    def create_context(self) -> PreviewContext:
        """Build a context with its evaluator, subject resolver and dispatcher wired."""
        context = PreviewContext(self.game, self.database, self.cache, self.settings)
        context.resolver = self.resolver
        context.evaluator = RequirementEvaluator(context)
        context.subject_resolver = SubjectResolver(context, context.evaluator)
        context.dispatcher = EffectDispatcher(context)
        return context

    def _run(self, label: str, modifier_ids: Callable[[], Iterable[str]]) -> PreviewResult:
        """
        Resolve, apply and finalize. Modifiers resolved before a failure are
        still returned alongside the empty yields.
        """
        modifiers: List[ResolvedModifier] = []
        context = None
        try:
            context = self.create_context()
            for modifier in self.resolver.iter_modifiers(modifier_ids()):
                modifiers.append(modifier)

            delta = create_empty_delta()
            player = context.player
            for modifier in modifiers:
                with context.entering(modifier):
                    subjects = context.subject_resolver.resolve_subjects(player, modifier)
                    context.dispatcher.apply_all(delta, subjects, modifier)

            yields = finalize(
                delta,
                self.baseline.get(),
                self.database.yield_types(),
                apply_player_percent=self.settings.apply_player_percent_to_amount,
            )
            return PreviewResult(
                yields=yields,
                modifiers=modifiers,
                errors=context.errors,
                missings=context.missings,
                ignored=context.ignored,
            )
        except Exception as e:
            logger.exception(f"Error previewing yields for {label}")
            errors = list(context.errors) if context is not None else []
            missings = list(context.missings) if context is not None else []
            ignored = list(context.ignored) if context is not None else []
            errors.append(f"{type(e).__name__}: {e}")
            return PreviewResult(
                yields={},
                modifiers=modifiers,
                errors=errors,
                missings=missings,
                ignored=ignored,
            )
