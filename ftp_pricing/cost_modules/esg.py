"""ESG transition and physical risk adjustments from the climate rate cards."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from ftp_pricing.config import RateTables, DEFAULT_RATE_TABLES
from ftp_pricing.deal import Transaction


@dataclass(frozen=True)
class ESGCharges:
    transition_charge: float   # %
    physical_charge: float     # %


class ESGAdjustmentResolver:
    """Classification-keyed bps lookups, returned in percent."""

    def __init__(self, tables: RateTables = DEFAULT_RATE_TABLES):
        self.tables = tables

    def transition_charge(self, classification: str) -> float:
        for card in self.tables.transition_grid:
            if card.classification == classification:
                return card.adjustment_bps / 100.0
        return 0.0

    def physical_charge(self, risk_level: str) -> float:
        for card in self.tables.physical_grid:
            if card.risk_level == risk_level:
                return card.adjustment_bps / 100.0
        return 0.0

    def compute(self, deal: Transaction) -> ESGCharges:
        return ESGCharges(
            transition_charge=self.transition_charge(deal.transition_risk),
            physical_charge=self.physical_charge(deal.physical_risk),
        )

    def grid_summary(self) -> Tuple[list, list]:
        """Both rate cards as lists of dicts for display."""
        transition = [
            {"Classification": c.classification, "Sector": c.sector,
             "Adjustment (bps)": c.adjustment_bps, "Description": c.description}
            for c in self.tables.transition_grid
        ]
        physical = [
            {"Risk Level": c.risk_level, "Location": c.location_type,
             "Adjustment (bps)": c.adjustment_bps, "Description": c.description}
            for c in self.tables.physical_grid
        ]
        return transition, physical
