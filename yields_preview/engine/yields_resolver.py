"""
Yields Resolver - baseline unwrapping and delta finalization.
"""

import logging
import math
from typing import Any, Dict, Iterable, Optional

from yields_preview.game.state import Player
from yields_preview.models.yields import BaselineYield, YieldsDelta

logger = logging.getLogger(__name__)


def unwrap_yields_of_type(trace: Optional[Dict[str, Any]]) -> BaselineYield:
    """
    Read BaseAmount and Percent off a yield computation trace.

    The host game's trace looks like
        {"base": {"steps": [{"base": {"value": 12}, "modifier": {"value": 10}}, ...]}}
    and only the first step matters. A missing trace means no baseline.
    """
    if not trace:
        return BaselineYield()
    try:
        step = trace['base']['steps'][0]
        return BaselineYield(
            base_amount=float(step['base']['value']),
            percent=float(step['modifier']['value']),
        )
    except (KeyError, IndexError, TypeError, ValueError) as e:
        logger.error(f"Malformed yield trace, using zero baseline: {e!r}")
        return BaselineYield()


def unwrap_player_yields(player: Player) -> Dict[str, BaselineYield]:
    return {
        yield_type: unwrap_yields_of_type(trace)
        for yield_type, trace in player.yield_traces.items()
    }


class BaselineYieldsCache:
    """
    The local player's unwrapped yields.

    Stale between update() calls; the caller refreshes it once per
    screen-open event.
    """

    def __init__(self):
        self._yields: Dict[str, BaselineYield] = {}

    def get(self) -> Dict[str, BaselineYield]:
        return self._yields

    def get_for_yield_type(self, yield_type: str) -> BaselineYield:
        return self._yields.get(yield_type, BaselineYield())

    def update(self, player: Player) -> Dict[str, BaselineYield]:
        self._yields = unwrap_player_yields(player)
        logger.debug(f"Baseline yields updated for player {player.id}: {len(self._yields)} types")
        return self._yields

    def clear(self) -> None:
        self._yields = {}


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def finalize(delta: YieldsDelta,
             baseline: Dict[str, BaselineYield],
             yield_types: Iterable[str],
             apply_player_percent: bool = True) -> Dict[str, int]:
    """
    Combine a delta with the baseline into final rounded yields.

    Args:
        delta: Accumulated contributions
        baseline: Unwrapped player yields per yield type
        yield_types: Known yield types, always present in the result
        apply_player_percent: Whether the player's standing percent bonus
            multiplies the flat Amount channel

    Returns:
        {yield_type: rounded amount}
    """
    yields: Dict[str, float] = {}
    all_types = list(yield_types)
    for yield_type in list(delta.amount) + list(delta.percent) + list(delta.amount_no_multiplier):
        if yield_type not in all_types:
            all_types.append(yield_type)

    for yield_type in all_types:
        yields[yield_type] = delta.amount.get(yield_type, 0)
        if apply_player_percent:
            player_percent = baseline.get(yield_type, BaselineYield()).percent
            yields[yield_type] *= 1 + player_percent / 100

    for yield_type, percent in delta.percent.items():
        base_amount = baseline.get(yield_type, BaselineYield()).base_amount
        yields[yield_type] += (base_amount + delta.amount.get(yield_type, 0)) * (percent / 100)

    for yield_type, amount in delta.amount_no_multiplier.items():
        yields[yield_type] += amount

    return {yield_type: round_half_up(value) for yield_type, value in yields.items()}
