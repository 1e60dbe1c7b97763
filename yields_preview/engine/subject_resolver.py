"""
Subject Resolver - expands a modifier's collection into candidate subjects
and filters them through its subject requirement set.
"""

import logging
from typing import Callable, Dict, List, Optional

from yields_preview.engine.context import PreviewContext
from yields_preview.engine.requirement_evaluator import RequirementEvaluator
from yields_preview.game.state import Player
from yields_preview.models.modifier import ResolvedModifier
from yields_preview.models.subject import (
    CitySubject, EmptySubject, PlayerSubject, PlotSubject, Subject, UnitSubject, subject_city
)
from yields_preview.utils.supported_effects import UNSUPPORTED_COLLECTION_TYPES

logger = logging.getLogger(__name__)


class SubjectResolver:
    """Resolves the subjects a modifier applies to."""

    def __init__(self, context: PreviewContext, evaluator: RequirementEvaluator):
        self.context = context
        self.evaluator = evaluator

        self._collections: Dict[str, Callable[[Player, Optional[Subject]], List[Subject]]] = {
            'COLLECTION_PLAYER_CAPITAL_CITY': self._capital,
            'COLLECTION_PLAYER_CITIES': self._cities,
            # Other players' cities never add yields to the local player
            'COLLECTION_ALL_CITIES': self._cities,
            'COLLECTION_PLAYER_PLOT_YIELDS': self._player_plots,
            'COLLECTION_OWNER': lambda player, parent: [PlayerSubject(player)],
            'COLLECTION_CITY_PLOT_YIELDS': self._city_plots,
            'COLLECTION_PLAYER_UNITS': lambda player, parent: [UnitSubject(u) for u in player.units],
        }

    def resolve_subjects(self,
                         player: Player,
                         modifier: ResolvedModifier,
                         parent_subject: Optional[Subject] = None) -> List[Subject]:
        """
        Resolve the subjects of a modifier, in collection order.

        Args:
            player: The player previewing the modifier
            modifier: Resolved modifier
            parent_subject: Subject matched by an attaching modifier, if any

        Returns:
            Candidates satisfying the modifier's subject requirement set
        """
        if self.context.settings.evaluate_owner_requirements and not modifier.owner_requirement_set.is_empty:
            if not self.evaluator.evaluate_set(player, PlayerSubject(player), modifier.owner_requirement_set):
                logger.debug(f"Modifier {modifier.modifier_id}: owner requirements not met")
                return []

        candidates = self.resolve_base_subjects(player, modifier, parent_subject)
        return [
            subject for subject in candidates
            if isinstance(subject, EmptySubject)
            or self.evaluator.evaluate_set(player, subject, modifier.subject_requirement_set)
        ]

    def resolve_base_subjects(self,
                              player: Player,
                              modifier: ResolvedModifier,
                              parent_subject: Optional[Subject] = None) -> List[Subject]:
        collection_type = modifier.collection_type
        if collection_type in self._collections:
            return self._collections[collection_type](player, parent_subject)

        if collection_type in UNSUPPORTED_COLLECTION_TYPES:
            logger.debug(f"Modifier {modifier.modifier_id}: {collection_type} is not supported")
            return []

        self.context.add_missing(f"Unhandled CollectionType: {collection_type} ({modifier.modifier_id})")
        return []

    # ==================== COLLECTIONS ====================

    def _capital(self, player: Player, parent_subject: Optional[Subject]) -> List[Subject]:
        capital = player.capital
        if capital is None:
            return [EmptySubject(reason=f"Player {player.id} has no capital")]
        return [CitySubject(capital)]

    def _cities(self, player: Player, parent_subject: Optional[Subject]) -> List[Subject]:
        return [CitySubject(city) for city in player.cities]

    def _player_plots(self, player: Player, parent_subject: Optional[Subject]) -> List[Subject]:
        subjects = []
        for city in player.cities:
            for index in city.purchased_plots:
                plot = self.context.plot_at(index)
                if plot is not None:
                    subjects.append(PlotSubject(city=city, plot=plot))
        return subjects

    def _city_plots(self, player: Player, parent_subject: Optional[Subject]) -> List[Subject]:
        city = subject_city(parent_subject) if parent_subject is not None else None
        if city is None:
            self.context.add_error("COLLECTION_CITY_PLOT_YIELDS requires a parent City subject")
            return []

        subjects = []
        for index in city.purchased_plots:
            plot = self.context.plot_at(index)
            if plot is not None:
                subjects.append(PlotSubject(city=city, plot=plot))
        return subjects
