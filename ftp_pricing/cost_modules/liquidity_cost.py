"""
Liquidity Cost (ILAAP pricing)
==============================
Implements:
  - Maturity-based liquidity premium (asset cost / liability benefit)
  - NSFR short-term floor: sub-1Y assets blended with the 1Y term premium
  - Contingent Liquidity Charge (CLC) on LCR outflows, priced at the
    tenor basis spread

References: Basel III LCR (BCBS 238), NSFR (BCBS 295), EBA GL on FTP
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from ftp_pricing.config import RateTables, DEFAULT_RATE_TABLES
from ftp_pricing.cost_modules.curve import LiquidityCurve
from ftp_pricing.deal import Transaction, ASSET, LIABILITY, OFF_BALANCE

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LiquidityCostComponents:
    """Decomposition of the liquidity cost of a deal (all in %)."""
    maturity_baseline: float      # premium before the NSFR floor blend
    one_year_premium: float       # 1Y term premium read from the curve
    nsfr_floor_applied: bool
    liquidity_premium: float
    basis_spread_bps: float
    clc_charge: float

    @property
    def total_liquidity_cost(self) -> float:
        return self.liquidity_premium + self.clc_charge


class LiquidityCostCalculator:
    """
    Prices the funding-liquidity component of FTP.

    Two independent sub-charges:
    - liquidity premium : term funding cost driven by category and tenor
    - CLC charge        : cost of holding the LCR buffer against the
                          deal's stressed 30-day outflow
    """

    def __init__(self, tables: RateTables = DEFAULT_RATE_TABLES):
        self.tables = tables
        self.curve = LiquidityCurve(tables.liquidity_curve)

    # ── Liquidity premium ────────────────────────────────────────────────

    def maturity_baseline(self, deal: Transaction) -> float:
        t = self.tables
        baseline = (t.asset_liquidity_premium if deal.category == ASSET
                    else t.liability_liquidity_premium)
        if deal.duration_months > t.long_tenor_threshold_months:
            baseline += t.long_tenor_add_on
        return baseline

    def one_year_premium(self) -> float:
        return self.curve.premium_pct(self.tables.one_year_tenor_months)

    def nsfr_floor_applies(self, deal: Transaction) -> bool:
        """Short-dated assets must be funded as if they were 1Y (NSFR)."""
        if deal.force_nsfr_floor:
            return True
        return (deal.category == ASSET and
                deal.duration_months < self.tables.nsfr_floor_max_months)

    def compute_liquidity_premium(self, deal: Transaction) -> float:
        baseline = self.maturity_baseline(deal)
        if not self.nsfr_floor_applies(deal):
            return baseline
        w = self.tables.nsfr_floor_blend_weight
        return (1 - w) * baseline + w * self.one_year_premium()

    # ── CLC ──────────────────────────────────────────────────────────────

    def clc_applies(self, deal: Transaction) -> bool:
        return (deal.category in (LIABILITY, OFF_BALANCE) or
                deal.product_type in self.tables.credit_line_products)

    def basis_spread_bps(self, duration_months: float) -> float:
        """Basis spread of the first bucket covering the tenor."""
        for bucket in self.tables.basis_spreads:
            if duration_months <= bucket.max_months:
                return bucket.spread_bps
        return self.tables.fallback_basis_spread_bps

    def compute_clc_charge(self, deal: Transaction) -> float:
        """
        CLC = outflow % × basis spread, halved for operational deposits and
        grossed up when the undrawn commitment exceeds the drawn notional.
        """
        if not self.clc_applies(deal):
            return 0.0
        outflow_pct = deal.lcr_outflow_pct or 0.0
        charge = (outflow_pct / 100.0) * (self.basis_spread_bps(deal.duration_months) / 100.0)

        if deal.is_operational_segment:
            charge *= self.tables.operational_segment_clc_factor

        undrawn = deal.undrawn_amount or 0.0
        if deal.amount > 0 and undrawn > deal.amount:
            charge *= 1 + self.tables.undrawn_scaling_factor * (undrawn / deal.amount)

        return charge

    # ── Aggregate ────────────────────────────────────────────────────────

    def compute(self, deal: Transaction) -> LiquidityCostComponents:
        floor = self.nsfr_floor_applies(deal)
        components = LiquidityCostComponents(
            maturity_baseline=self.maturity_baseline(deal),
            one_year_premium=self.one_year_premium(),
            nsfr_floor_applied=floor,
            liquidity_premium=self.compute_liquidity_premium(deal),
            basis_spread_bps=self.basis_spread_bps(deal.duration_months),
            clc_charge=self.compute_clc_charge(deal),
        )
        logger.debug(
            "Liquidity cost: premium=%.4f clc=%.4f nsfr_floor=%s",
            components.liquidity_premium, components.clc_charge, floor,
        )
        return components
