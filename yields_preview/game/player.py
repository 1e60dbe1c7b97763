"""
Player (diplomacy) queries over the game state snapshot.
"""

from typing import List

from yields_preview.game.state import GameState, Player


def suzerain_city_states(game: GameState, player: Player) -> List[Player]:
    """Alive minor players whose suzerain is the given player."""
    return [
        other for other in game.alive_players()
        if not other.is_major and other.suzerain == player.id
    ]


def allied_majors(game: GameState, player: Player) -> List[Player]:
    allies = []
    for player_id in player.allies:
        other = game.get_player(player_id)
        if other is not None and other.is_alive and other.is_major and other.id != player.id:
            allies.append(other)
    return allies


def is_at_peace_with_all_majors(game: GameState, player: Player) -> bool:
    for player_id in player.at_war_with:
        other = game.get_player(player_id)
        if other is not None and other.is_alive and other.is_major:
            return False
    return True
