"""
Deal Representation
===================
The transaction a desk asks to be priced. Instances are frozen so the
pricing pipeline can never mutate what the caller handed in, and they
hash, so results can be memoised on (deal, matrix, shocks, tables).
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Dict, Optional


# ── Categories & classifications ─────────────────────────────────────────────
ASSET = "Asset"
LIABILITY = "Liability"
OFF_BALANCE = "Off-Balance"
CATEGORIES = (ASSET, LIABILITY, OFF_BALANCE)

TRANSITION_RISKS = ("Green", "Neutral", "Amber", "Brown")
PHYSICAL_RISKS = ("Low", "Medium", "High")
REPRICING_FREQUENCIES = ("Daily", "Monthly", "Quarterly", "Fixed")


@dataclass(frozen=True)
class Transaction:
    """A single deal as captured by the pricing panel."""
    # Product
    product_type: str
    category: str
    currency: str
    amount: float
    duration_months: float

    # Economics
    margin_target: float = 0.0          # %
    behavioural_model_id: Optional[str] = None

    # Regulatory & capital
    risk_weight: float = 100.0          # %
    capital_ratio: float = 11.5         # %
    target_roe: float = 15.0            # %
    operational_cost_bps: float = 0.0

    # LCR / NSFR data
    lcr_outflow_pct: Optional[float] = None
    is_operational_segment: bool = False
    drawn_amount: Optional[float] = None
    undrawn_amount: float = 0.0
    is_committed: bool = False
    force_nsfr_floor: bool = False

    # ESG
    transition_risk: str = "Neutral"
    physical_risk: str = "Low"

    # Descriptive
    id: Optional[str] = None
    client_id: str = ""
    business_unit: str = ""
    business_line: str = ""
    repricing_freq: str = "Fixed"

    @property
    def is_empty(self) -> bool:
        """Nothing to price: no product selected or a zero notional."""
        return not self.product_type or self.amount == 0

    # ── Contract mapping ─────────────────────────────────────────────────

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Transaction":
        """
        Build a transaction from a collaborator payload.

        Accepts both the camelCase contract keys (``durationMonths``) and
        the snake_case attribute names. Unknown keys are ignored.
        """
        known = {f.name for f in fields(cls)}
        kwargs = {}
        for key, value in data.items():
            name = _CONTRACT_KEYS.get(key, key)
            if name in known:
                kwargs[name] = value
        if kwargs.get("behavioural_model_id") == "":
            kwargs["behavioural_model_id"] = None
        kwargs.setdefault("product_type", "")
        kwargs.setdefault("category", ASSET)
        kwargs.setdefault("currency", "USD")
        kwargs.setdefault("amount", 0.0)
        kwargs.setdefault("duration_months", 0.0)
        return cls(**kwargs)


_CONTRACT_KEYS = {
    "productType": "product_type",
    "durationMonths": "duration_months",
    "marginTarget": "margin_target",
    "behaviouralModelId": "behavioural_model_id",
    "riskWeight": "risk_weight",
    "capitalRatio": "capital_ratio",
    "targetROE": "target_roe",
    "operationalCostBps": "operational_cost_bps",
    "lcrOutflowPct": "lcr_outflow_pct",
    "isOperationalSegment": "is_operational_segment",
    "drawnAmount": "drawn_amount",
    "undrawnAmount": "undrawn_amount",
    "isCommitted": "is_committed",
    "forceNsfrFloor": "force_nsfr_floor",
    "transitionRisk": "transition_risk",
    "physicalRisk": "physical_risk",
    "clientId": "client_id",
    "businessUnit": "business_unit",
    "businessLine": "business_line",
    "repricingFreq": "repricing_freq",
}
