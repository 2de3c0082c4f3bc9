"""
Shock Scenario Analysis
=======================
Implements:
  - Base vs shocked comparison of a deal (Δ FTP, Δ client rate, Δ RAROC)
  - Named shock scenarios (rates, liquidity, combined)
  - Shock ladder: pricing across a grid of rate × liquidity shocks

Only the base rate and the liquidity cost are shocked; the client rate
stays anchored to the unshocked FTP, so stress shows up as margin
compression and a lower RAROC.
"""

from __future__ import annotations

import numpy as np
import pandas as pd
from dataclasses import dataclass
from typing import List, Optional, Sequence

from ftp_pricing.config import (
    ApprovalMatrixConfig,
    PricingShocks,
    RateTables,
    DEFAULT_RATE_TABLES,
    NO_SHOCKS,
    SHOCK_SCENARIOS,
    ShockScenario,
)
from ftp_pricing.cost_modules.approval import ApprovalLevel
from ftp_pricing.deal import Transaction
from ftp_pricing.engine.pricing import FTPResult, get_engine
from ftp_pricing.utils import dict_list_to_df


@dataclass(frozen=True)
class ShockImpact:
    """Base vs shocked pricing of the same deal."""
    scenario_name: str
    shocks: PricingShocks
    base: FTPResult
    shocked: FTPResult

    @property
    def delta_ftp(self) -> float:
        return self.shocked.total_ftp - self.base.total_ftp

    @property
    def delta_client_rate(self) -> float:
        return self.shocked.final_client_rate - self.base.final_client_rate

    @property
    def delta_raroc(self) -> float:
        return self.shocked.raroc - self.base.raroc

    @property
    def delta_economic_profit(self) -> float:
        return self.shocked.economic_profit - self.base.economic_profit

    @property
    def approval_changed(self) -> bool:
        return self.shocked.approval_level != self.base.approval_level

    def component_table(self) -> List[dict]:
        """Row per waterfall component: base, shocked, delta."""
        rows = []
        for label, attr in (
            ("Base Interest Rate", "base_rate"),
            ("Liquidity Spread", "liquidity_spread"),
            ("Strategic Spread", "strategic_spread"),
            ("Regulatory Cost (EL)", "regulatory_cost"),
            ("Capital Charge", "capital_charge"),
            ("Total FTP", "total_ftp"),
            ("Client Rate", "final_client_rate"),
            ("RAROC", "raroc"),
        ):
            base = getattr(self.base, attr)
            shocked = getattr(self.shocked, attr)
            rows.append({
                "Component": label,
                "Base (%)": round(base, 4),
                "Shocked (%)": round(shocked, 4),
                "Delta (%)": round(shocked - base, 4),
            })
        return rows


# ═══════════════════════════════════════════════════════════════════════════════
#  Shock Engine
# ═══════════════════════════════════════════════════════════════════════════════

class ShockAnalysisEngine:
    """Re-prices a deal under shocks and reports the erosion of profitability."""

    def __init__(
        self,
        matrix: ApprovalMatrixConfig,
        tables: RateTables = DEFAULT_RATE_TABLES,
    ):
        self.matrix = matrix
        self.engine = get_engine(tables)

    def compare(
        self,
        deal: Transaction,
        shocks: PricingShocks,
        scenario_name: str = "Custom",
    ) -> ShockImpact:
        base = self.engine.compute_rates(deal, self.matrix, NO_SHOCKS)
        shocked = self.engine.compute_rates(deal, self.matrix, shocks)
        return ShockImpact(
            scenario_name=scenario_name, shocks=shocks, base=base, shocked=shocked,
        )

    def run_scenarios(
        self,
        deal: Transaction,
        scenarios: Optional[Sequence[ShockScenario]] = None,
    ) -> List[ShockImpact]:
        """Compare the deal across predefined shock scenarios."""
        scenarios = scenarios or SHOCK_SCENARIOS
        return [self.compare(deal, s.shocks, s.name) for s in scenarios]

    def scenario_summary(
        self,
        deal: Transaction,
        scenarios: Optional[Sequence[ShockScenario]] = None,
    ) -> pd.DataFrame:
        rows = []
        for impact in self.run_scenarios(deal, scenarios):
            rows.append({
                "Scenario": impact.scenario_name,
                "Rate Shock (bps)": impact.shocks.interest_rate,
                "Liquidity Shock (bps)": impact.shocks.liquidity_spread,
                "Total FTP (%)": round(impact.shocked.total_ftp, 4),
                "Client Rate (%)": round(impact.shocked.final_client_rate, 4),
                "RAROC (%)": round(impact.shocked.raroc, 4),
                "Δ RAROC (%)": round(impact.delta_raroc, 4),
                "Approval": impact.shocked.approval_level.value,
            })
        return dict_list_to_df(rows)

    def run_shock_ladder(
        self,
        deal: Transaction,
        rate_shocks_bps: Sequence[float] = (-200, -100, 0, 100, 200),
        liquidity_shocks_bps: Sequence[float] = (0, 25, 50, 100),
    ) -> pd.DataFrame:
        """
        Price the deal on every (rate, liquidity) shock pair.

        Returns
        -------
        DataFrame with one row per grid point: shocks, total FTP, RAROC,
        economic profit and approval level.
        """
        rate_grid, liq_grid = np.meshgrid(
            np.asarray(rate_shocks_bps, dtype=np.float64),
            np.asarray(liquidity_shocks_bps, dtype=np.float64),
            indexing="ij",
        )
        rows = []
        for rate_bps, liq_bps in zip(rate_grid.ravel(), liq_grid.ravel()):
            shocks = PricingShocks(interest_rate=float(rate_bps), liquidity_spread=float(liq_bps))
            result = self.engine.compute_rates(deal, self.matrix, shocks)
            rows.append({
                "Rate Shock (bps)": float(rate_bps),
                "Liquidity Shock (bps)": float(liq_bps),
                "Total FTP (%)": result.total_ftp,
                "Floor Price (%)": result.floor_price,
                "Client Rate (%)": result.final_client_rate,
                "RAROC (%)": result.raroc,
                "Economic Profit (%)": result.economic_profit,
                "Approval": result.approval_level.value,
            })
        return dict_list_to_df(rows)

    def breakeven_rate_shock(self, deal: Transaction, threshold: float) -> float:
        """
        Rate shock (bps) at which RAROC falls to ``threshold``.

        RAROC is linear in the rate shock with slope −1 / allocated capital,
        so the breakeven is closed-form. Returns ``inf`` for deals without
        allocated capital (RAROC pinned at 0).
        """
        base = self.engine.compute_rates(deal, self.matrix, NO_SHOCKS)
        allocated = (deal.risk_weight / 100.0) * deal.capital_ratio
        if deal.is_empty or allocated <= 0:
            return float("inf")
        # Δraroc = −(shock/100) / allocated × 100 = −shock / allocated
        return (base.raroc - threshold) * allocated

    def approval_headroom(self, deal: Transaction) -> dict:
        """Rate-shock headroom (bps) before each approval tier is lost."""
        return {
            ApprovalLevel.AUTO.value: self.breakeven_rate_shock(deal, self.matrix.auto_approval_threshold),
            ApprovalLevel.L1_MANAGER.value: self.breakeven_rate_shock(deal, self.matrix.l1_threshold),
            ApprovalLevel.L2_COMMITTEE.value: self.breakeven_rate_shock(deal, self.matrix.l2_threshold),
        }


# ═══════════════════════════════════════════════════════════════════════════════
#  Convenience function
# ═══════════════════════════════════════════════════════════════════════════════

def compare_shocks(
    deal: Transaction,
    matrix: ApprovalMatrixConfig,
    shocks: PricingShocks,
    rate_tables: RateTables = DEFAULT_RATE_TABLES,
) -> ShockImpact:
    """Base vs shocked pricing of a deal."""
    return ShockAnalysisEngine(matrix, rate_tables).compare(deal, shocks)
