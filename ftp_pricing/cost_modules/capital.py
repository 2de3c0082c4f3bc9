"""
Capital & RAROC
===============
Aggregates the cost waterfall into floor / technical price, the client
rate, RAROC and economic profit.

    Floor Price     = FTP + Regulatory + Operational + ESG + Strategic
    Technical Price = Floor Price + Capital Charge
    RAROC           = (Client Rate − Floor Price) / Allocated Capital

The client rate is anchored to the unshocked FTP: shocks never reprice
the client, they only erode the measured profitability.
"""

from __future__ import annotations

from dataclasses import dataclass

from ftp_pricing.config import RateTables, DEFAULT_RATE_TABLES
from ftp_pricing.cost_modules.esg import ESGCharges
from ftp_pricing.cost_modules.liquidity_cost import LiquidityCostComponents
from ftp_pricing.cost_modules.regulatory_cost import RegulatoryCostComponents
from ftp_pricing.cost_modules.shock_overlay import ShockedRates
from ftp_pricing.deal import Transaction


@dataclass(frozen=True)
class CapitalComponents:
    """Output of the capital & RAROC aggregation (all in %)."""
    base_ftp: float               # unshocked base rate + liquidity
    total_ftp: float              # shocked
    operational_cost: float
    floor_price: float
    capital_charge: float
    technical_price: float
    target_price: float
    final_client_rate: float
    net_income_pct: float
    allocated_capital_pct: float
    raroc: float
    economic_profit: float


class CapitalRAROCEngine:
    """Risk-adjusted pricing of a single deal."""

    def __init__(self, tables: RateTables = DEFAULT_RATE_TABLES):
        self.tables = tables

    def raw_base_rate(self, deal: Transaction) -> float:
        """Simplified base-curve proxy: intercept + slope × tenor + currency offset."""
        t = self.tables
        rate = t.base_rate_intercept + deal.duration_months * t.base_rate_slope
        return rate + t.currency_offset(deal.currency)

    @staticmethod
    def capital_charge(deal: Transaction) -> float:
        """Cost of equity on the allocated capital: RW × CR × ROE."""
        return (deal.risk_weight / 100.0) * (deal.capital_ratio / 100.0) * deal.target_roe

    @staticmethod
    def allocated_capital_pct(deal: Transaction) -> float:
        return (deal.risk_weight / 100.0) * deal.capital_ratio

    def compute(
        self,
        deal: Transaction,
        raw_base_rate: float,
        liquidity: LiquidityCostComponents,
        shocked: ShockedRates,
        regulatory: RegulatoryCostComponents,
        esg: ESGCharges,
        strategic_spread: float,
    ) -> CapitalComponents:
        base_ftp = raw_base_rate + liquidity.total_liquidity_cost
        total_ftp = shocked.total_ftp
        operational_cost = deal.operational_cost_bps / 100.0

        floor_price = (total_ftp + regulatory.regulatory_cost + operational_cost +
                       esg.transition_charge + esg.physical_charge + strategic_spread)
        capital_charge = self.capital_charge(deal)
        technical_price = floor_price + capital_charge

        final_client_rate = base_ftp + deal.margin_target

        net_income_pct = final_client_rate - floor_price
        allocated = self.allocated_capital_pct(deal)
        raroc = (net_income_pct / allocated) * 100.0 if allocated > 0 else 0.0

        return CapitalComponents(
            base_ftp=base_ftp,
            total_ftp=total_ftp,
            operational_cost=operational_cost,
            floor_price=floor_price,
            capital_charge=capital_charge,
            technical_price=technical_price,
            target_price=technical_price + self.tables.commercial_buffer,
            final_client_rate=final_client_rate,
            net_income_pct=net_income_pct,
            allocated_capital_pct=allocated,
            raroc=raroc,
            economic_profit=net_income_pct - capital_charge,
        )
