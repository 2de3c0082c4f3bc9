"""
Regulatory Cost
===============
Credit-loss proxy plus the isolated cost of the NSFR floor and the LCR
benefit of operational deposits.
"""

from __future__ import annotations

from dataclasses import dataclass

from ftp_pricing.config import RateTables, DEFAULT_RATE_TABLES
from ftp_pricing.cost_modules.liquidity_cost import LiquidityCostComponents
from ftp_pricing.deal import Transaction


@dataclass(frozen=True)
class RegulatoryCostComponents:
    credit_cost: float
    lcr_cost: float
    nsfr_cost: float

    @property
    def regulatory_cost(self) -> float:
        return self.credit_cost + self.lcr_cost + self.nsfr_cost


class RegulatoryCostCalculator:

    def __init__(self, tables: RateTables = DEFAULT_RATE_TABLES):
        self.tables = tables

    def credit_cost(self, deal: Transaction) -> float:
        """Expected-loss proxy: RW × fixed coefficient."""
        return (deal.risk_weight / 100.0) * self.tables.expected_loss_coefficient

    def nsfr_cost(self, liquidity: LiquidityCostComponents) -> float:
        # Reported for display only; the floor is already inside the premium
        if not liquidity.nsfr_floor_applied:
            return 0.0
        w = self.tables.nsfr_floor_blend_weight
        return w * (liquidity.one_year_premium - liquidity.maturity_baseline)

    def lcr_cost(self, deal: Transaction) -> float:
        return self.tables.operational_deposit_benefit if deal.is_operational_segment else 0.0

    def compute(
        self, deal: Transaction, liquidity: LiquidityCostComponents
    ) -> RegulatoryCostComponents:
        return RegulatoryCostComponents(
            credit_cost=self.credit_cost(deal),
            lcr_cost=self.lcr_cost(deal),
            nsfr_cost=self.nsfr_cost(liquidity),
        )
