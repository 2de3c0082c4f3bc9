"""
Strategic Spread
================
Behavioural adjustment to the transfer price:
  - Prepayment (CPR) models charge for the embedded prepayment option
  - NMD replication models reward stable core deposits
"""

from __future__ import annotations

import logging
from typing import Optional

from ftp_pricing.config import (
    RateTables,
    DEFAULT_RATE_TABLES,
    BehaviouralModel,
    PREPAYMENT_MODEL,
    NMD_REPLICATION_MODEL,
)
from ftp_pricing.deal import Transaction

logger = logging.getLogger(__name__)


class StrategicSpreadResolver:

    def __init__(self, tables: RateTables = DEFAULT_RATE_TABLES):
        self.tables = tables

    def spread_for_model(self, model: BehaviouralModel) -> float:
        t = self.tables
        if model.type == PREPAYMENT_MODEL:
            return (model.cpr or 0.0) * t.cpr_spread_per_unit
        if model.type == NMD_REPLICATION_MODEL:
            core = model.core_ratio if model.core_ratio else t.default_nmd_core_ratio
            return -(core / 100.0) * t.nmd_core_spread_factor
        return 0.0

    def compute(self, deal: Transaction) -> float:
        model_id: Optional[str] = deal.behavioural_model_id
        if not model_id:
            return 0.0
        model = self.tables.find_behavioural_model(model_id)
        if model is None:
            logger.warning("Behavioural model %r not in registry; spread set to 0", model_id)
            return 0.0
        return self.spread_for_model(model)
