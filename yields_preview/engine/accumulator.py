"""
Yields Delta Accumulator - plain per-channel summation.

No clamping or rounding happens here; rounding only happens when the delta is
finalized.
"""

from typing import List

from yields_preview.models.yields import YieldsDelta


def parse_yield_types(yield_types: str) -> List[str]:
    """Split e.g. "YIELD_FOOD, YIELD_PRODUCTION" into its yield types."""
    return [t.strip() for t in (yield_types or '').split(',') if t.strip()]


def _add(channel, yield_types: str, value: float) -> None:
    for yield_type in parse_yield_types(yield_types):
        channel[yield_type] = channel.get(yield_type, 0) + value


def add_amount(delta: YieldsDelta, yield_types: str, amount: float) -> None:
    _add(delta.amount, yield_types, amount)


def add_amount_no_multiplier(delta: YieldsDelta, yield_types: str, amount: float) -> None:
    _add(delta.amount_no_multiplier, yield_types, amount)


def add_percent(delta: YieldsDelta, yield_types: str, percent: float) -> None:
    _add(delta.percent, yield_types, percent)
