"""
Yields delta and preview result dataclasses.
"""

from dataclasses import dataclass, field
from typing import Dict, List

from yields_preview.models.modifier import ResolvedModifier


@dataclass
class YieldsDelta:
    """
    Accumulated yield contributions for one preview.

    Channels are summed independently and only merged at finalization:
    - amount: flat amounts, affected by percent multipliers
    - percent: percentage of the baseline (plus flat) yield
    - amount_no_multiplier: flat amounts that bypass every multiplier
    """
    amount: Dict[str, float] = field(default_factory=dict)
    percent: Dict[str, float] = field(default_factory=dict)
    amount_no_multiplier: Dict[str, float] = field(default_factory=dict)

    def is_empty(self) -> bool:
        return not (self.amount or self.percent or self.amount_no_multiplier)


def create_empty_delta() -> YieldsDelta:
    return YieldsDelta()


@dataclass(frozen=True)
class BaselineYield:
    """A player's (or city's) current net yield and active percent bonus for one type."""
    base_amount: float = 0.0
    percent: float = 0.0


@dataclass
class PreviewResult:
    """Final rounded yields plus the modifiers and diagnostics that produced them."""
    yields: Dict[str, int] = field(default_factory=dict)
    modifiers: List[ResolvedModifier] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)
    missings: List[str] = field(default_factory=list)
    ignored: List[str] = field(default_factory=list)

    def non_zero_yields(self) -> Dict[str, int]:
        return {k: v for k, v in self.yields.items() if v != 0}
