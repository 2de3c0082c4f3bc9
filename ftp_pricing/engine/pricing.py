"""
Core Pricing Engine
===================
Single-pass FTP waterfall for one deal:

    Base Rate ─┐
    Liquidity ─┴─ (shock overlay) ─ Total FTP
                  + Regulatory + Operational + ESG + Strategic = Floor Price
                  + Capital Charge                            = Technical Price
    Client Rate (unshocked FTP + margin) → RAROC → Approval Level

The engine is a pure function of (deal, approval matrix, shocks, rate
tables): no state is kept between calls and no input is mutated.
"""

from __future__ import annotations

import dataclasses
import functools
import logging
from dataclasses import dataclass
from typing import Dict, Optional

from ftp_pricing.accounting import (
    AccountingEntry,
    AccountingEntryBuilder,
    EMPTY_ACCOUNTING_ENTRY,
)
from ftp_pricing.config import (
    ApprovalMatrixConfig,
    PricingShocks,
    RateTables,
    DEFAULT_RATE_TABLES,
    NO_SHOCKS,
)
from ftp_pricing.cost_modules.approval import ApprovalLevel, route_approval
from ftp_pricing.cost_modules.capital import CapitalRAROCEngine
from ftp_pricing.cost_modules.esg import ESGAdjustmentResolver
from ftp_pricing.cost_modules.liquidity_cost import LiquidityCostCalculator
from ftp_pricing.cost_modules.regulatory_cost import RegulatoryCostCalculator
from ftp_pricing.cost_modules.shock_overlay import apply_shocks
from ftp_pricing.cost_modules.strategic_spread import StrategicSpreadResolver
from ftp_pricing.deal import Transaction
from ftp_pricing.utils.logging_setup import log_pricing_decision

logger = logging.getLogger(__name__)


MATCHED_MATURITY = "Matched Maturity"
MOVING_AVERAGE = "Moving Average"
STANDARD_MATCH_REASON = "Standard Term Logic"


# ═══════════════════════════════════════════════════════════════════════════════
#  Pricing Result
# ═══════════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class FTPResult:
    """Full cost waterfall of a deal. Rates in %, accounting entry in currency."""
    base_rate: float
    liquidity_spread: float          # shocked premium + CLC
    liquidity_premium: float
    clc_charge: float
    strategic_spread: float
    regulatory_cost: float
    credit_cost: float
    lcr_cost: float
    nsfr_cost: float
    operational_cost: float
    capital_charge: float
    esg_transition_charge: float
    esg_physical_charge: float
    floor_price: float
    technical_price: float
    target_price: float
    total_ftp: float
    final_client_rate: float
    raroc: float
    economic_profit: float
    approval_level: ApprovalLevel
    matched_methodology: str = MATCHED_MATURITY
    match_reason: str = ""
    accounting_entry: AccountingEntry = EMPTY_ACCOUNTING_ENTRY

    @classmethod
    def empty(cls) -> "FTPResult":
        """Canonical all-zero result for a deal with nothing to price."""
        return cls(
            base_rate=0.0, liquidity_spread=0.0, liquidity_premium=0.0,
            clc_charge=0.0, strategic_spread=0.0, regulatory_cost=0.0,
            credit_cost=0.0, lcr_cost=0.0, nsfr_cost=0.0,
            operational_cost=0.0, capital_charge=0.0,
            esg_transition_charge=0.0, esg_physical_charge=0.0,
            floor_price=0.0, technical_price=0.0, target_price=0.0,
            total_ftp=0.0, final_client_rate=0.0, raroc=0.0,
            economic_profit=0.0, approval_level=ApprovalLevel.REJECTED,
            matched_methodology=MATCHED_MATURITY, match_reason="",
            accounting_entry=EMPTY_ACCOUNTING_ENTRY,
        )

    def to_dict(self) -> Dict[str, object]:
        """Collaborator contract: camelCase field names, plain values."""
        return {
            "baseRate": self.base_rate,
            "liquiditySpread": self.liquidity_spread,
            "liquidityPremium": self.liquidity_premium,
            "clcCharge": self.clc_charge,
            "strategicSpread": self.strategic_spread,
            "regulatoryCost": self.regulatory_cost,
            "creditCost": self.credit_cost,
            "lcrCost": self.lcr_cost,
            "nsfrCost": self.nsfr_cost,
            "operationalCost": self.operational_cost,
            "capitalCharge": self.capital_charge,
            "esgTransitionCharge": self.esg_transition_charge,
            "esgPhysicalCharge": self.esg_physical_charge,
            "floorPrice": self.floor_price,
            "technicalPrice": self.technical_price,
            "targetPrice": self.target_price,
            "totalFTP": self.total_ftp,
            "finalClientRate": self.final_client_rate,
            "raroc": self.raroc,
            "economicProfit": self.economic_profit,
            "approvalLevel": self.approval_level.value,
            "matchedMethodology": self.matched_methodology,
            "matchReason": self.match_reason,
            "accountingEntry": self.accounting_entry.to_dict(),
        }

    def get_waterfall(self):
        """Ordered (label, value %) pairs from FTP to technical price."""
        return [
            ("Base Rate", self.base_rate),
            ("Liquidity Premium", self.liquidity_spread - self.clc_charge),
            ("CLC Charge", self.clc_charge),
            ("Regulatory Cost", self.regulatory_cost),
            ("Operational Cost", self.operational_cost),
            ("ESG Transition", self.esg_transition_charge),
            ("ESG Physical", self.esg_physical_charge),
            ("Strategic Spread", self.strategic_spread),
            ("Floor Price", self.floor_price),
            ("Capital Charge", self.capital_charge),
            ("Technical Price", self.technical_price),
        ]


# ═══════════════════════════════════════════════════════════════════════════════
#  Pricing Engine
# ═══════════════════════════════════════════════════════════════════════════════

class PricingEngine:
    """
    Runs the cost modules in sequence for one deal.

    Each stage consumes the prior stage's output:
      1. Liquidity cost (premium + CLC)
      2. Regulatory cost (credit, LCR, NSFR)
      3. ESG charges and strategic spread
      4. Shock overlay on base rate and liquidity
      5. Capital & RAROC aggregation
      6. Approval routing
    """

    def __init__(self, tables: RateTables = DEFAULT_RATE_TABLES):
        self.tables = tables
        self.liquidity = LiquidityCostCalculator(tables)
        self.regulatory = RegulatoryCostCalculator(tables)
        self.esg = ESGAdjustmentResolver(tables)
        self.strategic = StrategicSpreadResolver(tables)
        self.capital = CapitalRAROCEngine(tables)
        self.accounting = AccountingEntryBuilder()

    @staticmethod
    def methodology(deal: Transaction) -> str:
        return MATCHED_MATURITY if deal.repricing_freq == "Fixed" else MOVING_AVERAGE

    def compute_rates(
        self,
        deal: Transaction,
        matrix: ApprovalMatrixConfig,
        shocks: Optional[PricingShocks] = None,
    ) -> FTPResult:
        """Rate and RAROC waterfall, without the accounting preview."""
        if deal.is_empty:
            return FTPResult.empty()

        shocks = shocks or NO_SHOCKS
        raw_base_rate = self.capital.raw_base_rate(deal)
        liquidity = self.liquidity.compute(deal)
        regulatory = self.regulatory.compute(deal, liquidity)
        esg = self.esg.compute(deal)
        strategic_spread = self.strategic.compute(deal)
        shocked = apply_shocks(raw_base_rate, liquidity.total_liquidity_cost, shocks)

        capital = self.capital.compute(
            deal,
            raw_base_rate=raw_base_rate,
            liquidity=liquidity,
            shocked=shocked,
            regulatory=regulatory,
            esg=esg,
            strategic_spread=strategic_spread,
        )
        approval = route_approval(capital.raroc, matrix)

        logger.debug(
            "Priced %s: ftp=%.4f floor=%.4f client=%.4f raroc=%.4f",
            deal.id or deal.product_type, capital.total_ftp,
            capital.floor_price, capital.final_client_rate, capital.raroc,
        )

        return FTPResult(
            base_rate=shocked.base_rate,
            liquidity_spread=shocked.liquidity_cost,
            liquidity_premium=liquidity.liquidity_premium,
            clc_charge=liquidity.clc_charge,
            strategic_spread=strategic_spread,
            regulatory_cost=regulatory.regulatory_cost,
            credit_cost=regulatory.credit_cost,
            lcr_cost=regulatory.lcr_cost,
            nsfr_cost=regulatory.nsfr_cost,
            operational_cost=capital.operational_cost,
            capital_charge=capital.capital_charge,
            esg_transition_charge=esg.transition_charge,
            esg_physical_charge=esg.physical_charge,
            floor_price=capital.floor_price,
            technical_price=capital.technical_price,
            target_price=capital.target_price,
            total_ftp=capital.total_ftp,
            final_client_rate=capital.final_client_rate,
            raroc=capital.raroc,
            economic_profit=capital.economic_profit,
            approval_level=approval,
            matched_methodology=self.methodology(deal),
            match_reason=STANDARD_MATCH_REASON,
        )

    def price(
        self,
        deal: Transaction,
        matrix: ApprovalMatrixConfig,
        shocks: Optional[PricingShocks] = None,
    ) -> FTPResult:
        """Rates, RAROC and approval, plus the GL preview of the transfer."""
        result = self.compute_rates(deal, matrix, shocks)
        if deal.is_empty:
            return result
        result = dataclasses.replace(
            result, accounting_entry=self.accounting.build(deal, result)
        )
        log_pricing_decision(
            deal_id=deal.id,
            product_type=deal.product_type,
            total_ftp=result.total_ftp,
            final_client_rate=result.final_client_rate,
            raroc=result.raroc,
            approval_level=result.approval_level.value,
        )
        return result


@functools.lru_cache(maxsize=16)
def get_engine(tables: RateTables = DEFAULT_RATE_TABLES) -> PricingEngine:
    """Engine instance for a rate-table set (tables are immutable, so shareable)."""
    return PricingEngine(tables)


# ═══════════════════════════════════════════════════════════════════════════════
#  Convenience function
# ═══════════════════════════════════════════════════════════════════════════════

def price(
    deal: Transaction,
    approval_matrix: ApprovalMatrixConfig,
    shocks: Optional[PricingShocks] = None,
    rate_tables: RateTables = DEFAULT_RATE_TABLES,
) -> FTPResult:
    """Price a deal against the governance matrix under optional shocks."""
    return get_engine(rate_tables).price(deal, approval_matrix, shocks)
