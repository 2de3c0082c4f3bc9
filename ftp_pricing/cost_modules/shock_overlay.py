"""
Shock Overlay
=============
Additive bps perturbation of the base rate and the liquidity cost. No
other component of the waterfall is ever shocked.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ftp_pricing.config import PricingShocks, NO_SHOCKS


@dataclass(frozen=True)
class ShockedRates:
    base_rate: float          # % after the interest-rate shock
    liquidity_cost: float     # % after the liquidity-spread shock

    @property
    def total_ftp(self) -> float:
        return self.base_rate + self.liquidity_cost


def apply_shocks(
    raw_base_rate: float,
    liquidity_cost: float,
    shocks: Optional[PricingShocks] = None,
) -> ShockedRates:
    """Shift the two shockable components by the shock size (bps → %)."""
    shocks = shocks or NO_SHOCKS
    return ShockedRates(
        base_rate=raw_base_rate + shocks.interest_rate / 100.0,
        liquidity_cost=liquidity_cost + shocks.liquidity_spread / 100.0,
    )
