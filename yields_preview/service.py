"""
Yields preview service - the entry point the UI layer calls.

Wires settings, the rule database, its caches and the baseline yields into a
PreviewEngine per game snapshot.
"""

import logging
from typing import List, Optional

from yields_preview.config import Settings, settings as default_settings
from yields_preview.database.cache import RuleCache
from yields_preview.database.loader import load_rule_database
from yields_preview.database.rule_database import RuleDatabase
from yields_preview.engine.preview_engine import PreviewEngine
from yields_preview.engine.yields_resolver import BaselineYieldsCache
from yields_preview.game.state import GameState
from yields_preview.models.yields import BaselineYield, PreviewResult

logger = logging.getLogger(__name__)


class YieldsPreviewService:
    """Long-lived facade over the rule database, caches and preview engine."""

    def __init__(self,
                 settings: Optional[Settings] = None,
                 database: Optional[RuleDatabase] = None):
        """
        Initialize the YieldsPreviewService.

        Args:
            settings: Service settings (defaults from the environment)
            database: Preloaded rule database; loaded from settings when omitted
        """
        self.settings = settings if settings is not None else default_settings
        logging.getLogger('yields_preview').setLevel(self.settings.log_level.upper())

        if database is None:
            database = load_rule_database(self.settings.database_uri, self.settings.database_json)
        self.database = database
        self.cache = RuleCache(database)
        self.baseline = BaselineYieldsCache()

    def reload_database(self, database: Optional[RuleDatabase] = None) -> RuleDatabase:
        """
        Reload the rule database (new game, age transition) and drop every
        cached lookup built on the old one.
        """
        if database is None:
            database = load_rule_database(self.settings.database_uri, self.settings.database_json)
        self.database = database
        self.cache.invalidate(database)
        self.baseline.clear()
        logger.info(f"Rule database reloaded: {len(database.table_names())} tables")
        return database

    def update_baseline(self, game: GameState) -> dict:
        """Recompute the local player's baseline yields; call once per screen open."""
        return self.baseline.update(game.local_player)

    def baseline_for(self, yield_type: str) -> BaselineYield:
        return self.baseline.get_for_yield_type(yield_type)

    def engine(self, game: GameState) -> PreviewEngine:
        return PreviewEngine(
            self.database,
            game,
            cache=self.cache,
            baseline=self.baseline,
            settings=self.settings,
        )

    def preview(self, game: GameState, tradition_type: Optional[str]) -> PreviewResult:
        return self.engine(game).preview(tradition_type)

    def preview_modifiers(self, game: GameState, modifier_ids: List[str]) -> PreviewResult:
        return self.engine(game).preview_modifiers(modifier_ids)
