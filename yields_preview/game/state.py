"""
Game state snapshot - the read-only query surface of the host game.

The host engine owns the real state; these dataclasses are the boundary the
preview engine reads from. A snapshot is built once per preview session
(usually from the host's JSON export via GameState.from_dict) and never
written back.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class Plot:
    """A single map tile."""
    index: int
    x: int
    y: int
    terrain_type: Optional[str] = None
    feature_type: Optional[str] = None
    resource_type: Optional[str] = None
    resource_revealed: bool = True
    is_coastal_land: bool = False
    is_river: bool = False
    is_natural_wonder: bool = False
    district_type: Optional[str] = None
    constructibles: List[str] = field(default_factory=list)


@dataclass
class City:
    """A settlement (city or town)."""
    id: int
    name: str
    owner: int
    original_owner: Optional[int] = None
    location: Optional[int] = None
    is_capital: bool = False
    is_town: bool = False
    is_distant_lands: bool = False
    population: int = 0
    urban_population: int = 0
    rural_population: int = 0
    purchased_plots: List[int] = field(default_factory=list)
    project_type: Optional[str] = None
    majority_religion: Optional[str] = None
    great_works: int = 0
    resources: List[str] = field(default_factory=list)
    yield_traces: Dict[str, Dict[str, Any]] = field(default_factory=dict)

    @property
    def specialists(self) -> int:
        return self.population - self.urban_population - self.rural_population


@dataclass
class Unit:
    """A unit owned by a player."""
    id: int
    unit_type: str
    owner: int
    location: Optional[int] = None
    maintenance: float = 0.0
    is_commander: bool = False
    level: int = 0


@dataclass
class Player:
    """A major or minor (city-state) player."""
    id: int
    is_major: bool = True
    is_alive: bool = True
    leader_type: Optional[str] = None
    civilization_type: Optional[str] = None
    cities: List[City] = field(default_factory=list)
    units: List[Unit] = field(default_factory=list)
    active_traditions: List[str] = field(default_factory=list)
    spent_attribute_points: Dict[str, int] = field(default_factory=dict)
    religion: Optional[str] = None
    resources: List[str] = field(default_factory=list)
    allies: List[int] = field(default_factory=list)
    at_war_with: List[int] = field(default_factory=list)
    suzerain: Optional[int] = None
    yield_traces: Dict[str, Dict[str, Any]] = field(default_factory=dict)

    @property
    def capital(self) -> Optional[City]:
        for city in self.cities:
            if city.is_capital:
                return city
        return None


# Hex neighbour offsets for "odd rows shifted right" maps, as (dx, dy)
_EVEN_ROW_OFFSETS = [(1, 0), (-1, 0), (-1, -1), (0, -1), (-1, 1), (0, 1)]
_ODD_ROW_OFFSETS = [(1, 0), (-1, 0), (0, -1), (1, -1), (0, 1), (1, 1)]


@dataclass
class GameMap:
    """Hex grid of plots, wrapping horizontally."""
    width: int
    height: int
    plots: Dict[int, Plot] = field(default_factory=dict)

    def index_of(self, x: int, y: int) -> int:
        return y * self.width + x

    def get_plot(self, index: Optional[int]) -> Optional[Plot]:
        if index is None:
            return None
        return self.plots.get(index)

    def adjacent_plots(self, index: int) -> List[Plot]:
        """
        The (up to) 6 neighbours of a plot, never including the plot itself.

        Neighbours outside the map vertically, or not present in the
        snapshot, are skipped.
        """
        plot = self.plots.get(index)
        if plot is None:
            return []

        offsets = _ODD_ROW_OFFSETS if plot.y % 2 else _EVEN_ROW_OFFSETS
        neighbours = []
        seen = set()
        for dx, dy in offsets:
            ny = plot.y + dy
            if ny < 0 or ny >= self.height:
                continue
            nx = (plot.x + dx) % self.width
            neighbour_index = self.index_of(nx, ny)
            if neighbour_index == index or neighbour_index in seen:
                continue
            neighbour = self.plots.get(neighbour_index)
            if neighbour is not None:
                seen.add(neighbour_index)
                neighbours.append(neighbour)
        return neighbours


@dataclass
class GameState:
    """Everything the preview engine may query about the running game."""
    local_player_id: int
    players: Dict[int, Player] = field(default_factory=dict)
    map: GameMap = field(default_factory=lambda: GameMap(width=0, height=0))
    age: Optional[str] = None

    @property
    def local_player(self) -> Player:
        return self.players[self.local_player_id]

    def get_player(self, player_id: Optional[int]) -> Optional[Player]:
        if player_id is None:
            return None
        return self.players.get(player_id)

    def alive_players(self) -> List[Player]:
        return [p for p in self.players.values() if p.is_alive]

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'GameState':
        """
        Build a snapshot from plain JSON-like data.

        Expected shape:
            {
                "local_player_id": 0,
                "age": "AGE_ANTIQUITY",
                "map": {"width": 10, "height": 10, "plots": [{...}, ...]},
                "players": [{"id": 0, "cities": [{...}], "units": [{...}], ...}]
            }
        """
        map_data = data.get('map', {})
        game_map = GameMap(
            width=map_data.get('width', 0),
            height=map_data.get('height', 0),
        )
        for plot_data in map_data.get('plots', []):
            plot = Plot(**plot_data)
            game_map.plots[plot.index] = plot

        players = {}
        for player_data in data.get('players', []):
            player_data = dict(player_data)
            cities = [City(**c) for c in player_data.pop('cities', [])]
            units = [Unit(**u) for u in player_data.pop('units', [])]
            player = Player(cities=cities, units=units, **player_data)
            players[player.id] = player

        return cls(
            local_player_id=data['local_player_id'],
            players=players,
            map=game_map,
            age=data.get('age'),
        )
