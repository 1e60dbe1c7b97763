"""Game state snapshot and read-only queries."""

from yields_preview.game.state import GameState, GameMap, Player, City, Plot, Unit

__all__ = ['GameState', 'GameMap', 'Player', 'City', 'Plot', 'Unit']
