"""
Deal data layer: sample blotter and batch pricing.
Prices a list of deals and exposes the results as DataFrames for
downstream reporting.
"""

import pandas as pd
from typing import Dict, List, Optional, Sequence

from ftp_pricing.config import (
    ApprovalMatrixConfig,
    PricingShocks,
    RateTables,
    DEFAULT_APPROVAL_MATRIX,
    DEFAULT_RATE_TABLES,
)
from ftp_pricing.cost_modules.approval import ApprovalLevel
from ftp_pricing.deal import Transaction, ASSET, LIABILITY, OFF_BALANCE
from ftp_pricing.engine.pricing import FTPResult, get_engine
from ftp_pricing.utils import dict_list_to_df


INITIAL_DEAL = Transaction(
    client_id="CL-1001",
    business_unit="BU-001",
    business_line="Corporate Finance",
    product_type="LOAN_COMM",
    category=ASSET,
    currency="USD",
    amount=5_000_000,
    duration_months=24,
    repricing_freq="Fixed",
    margin_target=2.25,
    risk_weight=100,
    capital_ratio=11.5,
    target_roe=15.0,
    operational_cost_bps=45,
    transition_risk="Neutral",
    physical_risk="Low",
)

EMPTY_DEAL = Transaction(product_type="", category=ASSET, currency="USD", amount=0, duration_months=0)

SAMPLE_DEALS = [
    Transaction(id="TRD-88392", client_id="CL-1001", product_type="LOAN_COMM", category=ASSET,
                amount=12_500_000, currency="USD", margin_target=2.25, business_line="Corp Fin",
                business_unit="BU-001", duration_months=36, repricing_freq="Monthly",
                risk_weight=100, capital_ratio=11.5, target_roe=15, operational_cost_bps=45),
    Transaction(id="TRD-88393", client_id="CL-1002", product_type="DEP_TERM", category=LIABILITY,
                amount=5_000_000, currency="EUR", margin_target=1.50, business_line="Retail",
                business_unit="BU-002", duration_months=12, repricing_freq="Fixed",
                risk_weight=0, capital_ratio=11.5, target_roe=15, operational_cost_bps=20,
                lcr_outflow_pct=10),
    Transaction(id="TRD-88394", client_id="CL-2001", product_type="LOAN_MORT", category=ASSET,
                amount=850_000, currency="USD", margin_target=1.85, business_line="Real Estate",
                business_unit="BU-003", duration_months=120, repricing_freq="Fixed",
                risk_weight=35, capital_ratio=11.5, target_roe=12, operational_cost_bps=25,
                behavioural_model_id="PRE-001", transition_risk="Green", physical_risk="Medium"),
    Transaction(id="TRD-88395", client_id="CL-1002", product_type="CRED_LINE", category=ASSET,
                amount=2_000_000, currency="EUR", margin_target=2.10, business_line="Corp Fin",
                business_unit="BU-001", duration_months=24, repricing_freq="Daily",
                risk_weight=75, capital_ratio=11.5, target_roe=14, operational_cost_bps=35,
                lcr_outflow_pct=30, drawn_amount=2_000_000, undrawn_amount=3_000_000,
                is_committed=True),
    Transaction(id="TRD-88396", client_id="CL-4099", product_type="LOAN_AUTO", category=ASSET,
                amount=45_000, currency="GBP", margin_target=3.50, business_line="Retail",
                business_unit="BU-002", duration_months=48, repricing_freq="Fixed",
                risk_weight=75, capital_ratio=11.5, target_roe=18, operational_cost_bps=80,
                behavioural_model_id="PRE-003", transition_risk="Brown"),
    Transaction(id="TRD-88397", client_id="CL-3055", product_type="DEP_TERM", category=LIABILITY,
                amount=50_000_000, currency="JPY", margin_target=0.15, business_line="Institutional",
                business_unit="BU-001", duration_months=3, repricing_freq="Fixed",
                risk_weight=0, capital_ratio=11.5, target_roe=10, operational_cost_bps=5,
                lcr_outflow_pct=100),
    Transaction(id="TRD-88398", client_id="CL-1001", product_type="LOAN_COMM", category=ASSET,
                amount=25_000_000, currency="USD", margin_target=2.00, business_line="Corp Fin",
                business_unit="BU-001", duration_months=60, repricing_freq="Quarterly",
                risk_weight=100, capital_ratio=11.5, target_roe=15, operational_cost_bps=40,
                transition_risk="Amber", physical_risk="Medium"),
    Transaction(id="TRD-88399", client_id="CL-2001", product_type="LOAN_COMM", category=ASSET,
                amount=350_000, currency="EUR", margin_target=2.75, business_line="SME",
                business_unit="BU-003", duration_months=36, repricing_freq="Monthly",
                risk_weight=85, capital_ratio=11.5, target_roe=16, operational_cost_bps=50,
                transition_risk="Brown", physical_risk="High"),
    Transaction(id="TRD-88400", client_id="CL-4099", product_type="LOAN_MORT", category=ASSET,
                amount=650_000, currency="USD", margin_target=1.60, business_line="Retail",
                business_unit="BU-002", duration_months=360, repricing_freq="Fixed",
                risk_weight=35, capital_ratio=11.5, target_roe=12, operational_cost_bps=20,
                transition_risk="Green"),
    Transaction(id="TRD-88401", client_id="CL-1001", product_type="SWAP_IRS", category=OFF_BALANCE,
                amount=10_000_000, currency="USD", margin_target=0.10, business_line="Markets",
                business_unit="BU-001", duration_months=60, repricing_freq="Quarterly",
                risk_weight=20, capital_ratio=11.5, target_roe=20, operational_cost_bps=10,
                lcr_outflow_pct=5),
    Transaction(id="TRD-88402", client_id="CL-4099", product_type="DEP_CASA", category=LIABILITY,
                amount=150_000, currency="GBP", margin_target=2.20, business_line="Wealth",
                business_unit="BU-004", duration_months=1, repricing_freq="Daily",
                risk_weight=0, capital_ratio=11.5, target_roe=25, operational_cost_bps=15,
                behavioural_model_id="NMD-001", lcr_outflow_pct=25, is_operational_segment=True),
    # Demo record: 12M loan booked under the NSFR floor regime
    Transaction(id="TRD-88403", client_id="CL-3055", product_type="LOAN_COMM", category=ASSET,
                amount=75_000_000, currency="USD", margin_target=1.25, business_line="Institutional",
                business_unit="BU-001", duration_months=12, repricing_freq="Monthly",
                risk_weight=50, capital_ratio=11.5, target_roe=12, operational_cost_bps=10,
                transition_risk="Green", force_nsfr_floor=True),
]


BLOTTER_COLUMNS = (
    "Deal", "Product", "Category", "Currency", "Amount", "Tenor (M)",
    "Total FTP (%)", "Floor Price (%)", "Technical Price (%)", "Client Rate (%)",
    "RAROC (%)", "Economic Profit (%)", "Approval", "FTP Transfer",
)


class DealBlotter:
    """Prices a book of deals against one approval matrix."""

    def __init__(
        self,
        deals: Sequence[Transaction],
        matrix: ApprovalMatrixConfig = DEFAULT_APPROVAL_MATRIX,
        tables: RateTables = DEFAULT_RATE_TABLES,
    ):
        self.deals = list(deals)
        self.matrix = matrix
        self.engine = get_engine(tables)

    def price_all(self, shocks: Optional[PricingShocks] = None) -> List[FTPResult]:
        return [self.engine.price(d, self.matrix, shocks) for d in self.deals]

    def to_dataframe(self, shocks: Optional[PricingShocks] = None) -> pd.DataFrame:
        """One row per deal with its key pricing outputs."""
        rows = []
        for deal, r in zip(self.deals, self.price_all(shocks)):
            rows.append({
                "Deal": deal.id,
                "Product": deal.product_type,
                "Category": deal.category,
                "Currency": deal.currency,
                "Amount": deal.amount,
                "Tenor (M)": deal.duration_months,
                "Total FTP (%)": round(r.total_ftp, 4),
                "Floor Price (%)": round(r.floor_price, 4),
                "Technical Price (%)": round(r.technical_price, 4),
                "Client Rate (%)": round(r.final_client_rate, 4),
                "RAROC (%)": round(r.raroc, 4),
                "Economic Profit (%)": round(r.economic_profit, 4),
                "Approval": r.approval_level.value,
                "FTP Transfer": round(r.accounting_entry.amount_debit, 2),
            })
        return dict_list_to_df(rows, BLOTTER_COLUMNS)

    def approval_summary(self, shocks: Optional[PricingShocks] = None) -> Dict[str, int]:
        """Count of deals per approval level (every level present)."""
        counts = {level.value: 0 for level in ApprovalLevel}
        for r in self.price_all(shocks):
            counts[r.approval_level.value] += 1
        return counts

    def total_ftp_transfer(self, shocks: Optional[PricingShocks] = None) -> float:
        """Annual FTP paid to treasury across the book (currency-mixed)."""
        return float(sum(r.accounting_entry.amount_debit for r in self.price_all(shocks)))
