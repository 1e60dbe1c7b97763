"""
Yields Preview - previews the yields a Civilization VII policy (tradition),
tech or civic would add, by resolving and applying its modifiers against a
snapshot of the game.
"""

from yields_preview.config import Settings
from yields_preview.database import RuleDatabase, RuleCache, load_rule_database
from yields_preview.engine import PreviewEngine, BaselineYieldsCache
from yields_preview.game import GameState
from yields_preview.models import PreviewResult
from yields_preview.service import YieldsPreviewService

__version__ = "1.0.0"

__all__ = [
    'Settings',
    'RuleDatabase',
    'RuleCache',
    'load_rule_database',
    'PreviewEngine',
    'BaselineYieldsCache',
    'GameState',
    'PreviewResult',
    'YieldsPreviewService',
]
