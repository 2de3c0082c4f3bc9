"""Approval routing: RAROC against the governance matrix."""

from __future__ import annotations

import logging
from enum import Enum

from ftp_pricing.config import ApprovalMatrixConfig

logger = logging.getLogger(__name__)


class ApprovalLevel(str, Enum):
    AUTO = "Auto"
    L1_MANAGER = "L1_Manager"
    L2_COMMITTEE = "L2_Committee"
    REJECTED = "Rejected"


def route_approval(raroc: float, matrix: ApprovalMatrixConfig) -> ApprovalLevel:
    """
    Map a RAROC (%) to the approval tier.

    Thresholds are inclusive and evaluated top-down; a RAROC equal to a
    threshold lands in the higher tier. The matrix is taken as given.
    """
    if not matrix.is_ordered:
        logger.warning(
            "Approval matrix is not ordered auto >= L1 >= L2: %s", matrix
        )
    if raroc >= matrix.auto_approval_threshold:
        return ApprovalLevel.AUTO
    elif raroc >= matrix.l1_threshold:
        return ApprovalLevel.L1_MANAGER
    elif raroc >= matrix.l2_threshold:
        return ApprovalLevel.L2_COMMITTEE
    return ApprovalLevel.REJECTED
