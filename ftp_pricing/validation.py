"""
Opt-in input validation.

The pricing engine itself never raises on malformed numbers; callers that
want a strict gate run these checks before pricing.
"""

from __future__ import annotations

import math
from typing import List, Optional

from ftp_pricing.config import ApprovalMatrixConfig
from ftp_pricing.deal import (
    Transaction,
    CATEGORIES,
    TRANSITION_RISKS,
    PHYSICAL_RISKS,
)
from ftp_pricing.exceptions import InvalidApprovalMatrixError, InvalidTransactionError


_NUMERIC_FIELDS = (
    "amount",
    "duration_months",
    "margin_target",
    "risk_weight",
    "capital_ratio",
    "target_roe",
    "operational_cost_bps",
)

_NON_NEGATIVE_FIELDS = ("amount", "duration_months", "risk_weight", "capital_ratio")


_OPTIONAL_NUMERIC_FIELDS = ("lcr_outflow_pct", "undrawn_amount", "drawn_amount")


def _numeric_issue(name: str, value) -> Optional[str]:
    if not isinstance(value, (int, float)) or isinstance(value, bool):
        return f"{name} must be numeric, got {value!r}"
    if not math.isfinite(value):
        return f"{name} must be finite, got {value!r}"
    return None


def transaction_issues(deal: Transaction) -> List[str]:
    """List every problem found on the deal (empty when valid)."""
    issues = []
    for name in _NUMERIC_FIELDS:
        value = getattr(deal, name)
        problem = _numeric_issue(name, value)
        if problem:
            issues.append(problem)
        elif name in _NON_NEGATIVE_FIELDS and value < 0:
            issues.append(f"{name} must be >= 0, got {value!r}")

    for name in _OPTIONAL_NUMERIC_FIELDS:
        value = getattr(deal, name)
        if value is None:
            continue
        problem = _numeric_issue(name, value)
        if problem:
            issues.append(problem)
        elif name == "lcr_outflow_pct" and not 0 <= value <= 100:
            issues.append(f"lcr_outflow_pct must be within [0, 100], got {value!r}")
        elif value < 0:
            issues.append(f"{name} must be >= 0, got {value!r}")

    if deal.category not in CATEGORIES:
        issues.append(f"category must be one of {CATEGORIES}, got {deal.category!r}")
    if deal.transition_risk not in TRANSITION_RISKS:
        issues.append(f"transition_risk must be one of {TRANSITION_RISKS}, got {deal.transition_risk!r}")
    if deal.physical_risk not in PHYSICAL_RISKS:
        issues.append(f"physical_risk must be one of {PHYSICAL_RISKS}, got {deal.physical_risk!r}")
    return issues


def validate_transaction(deal: Transaction) -> Transaction:
    """Return the deal unchanged, or raise with every issue listed."""
    issues = transaction_issues(deal)
    if issues:
        raise InvalidTransactionError(issues)
    return deal


def validate_approval_matrix(matrix: ApprovalMatrixConfig) -> ApprovalMatrixConfig:
    """Raise when thresholds are not ordered auto >= L1 >= L2."""
    issues = []
    if matrix.auto_approval_threshold < matrix.l1_threshold:
        issues.append(
            f"auto_approval_threshold ({matrix.auto_approval_threshold}) "
            f"< l1_threshold ({matrix.l1_threshold})"
        )
    if matrix.l1_threshold < matrix.l2_threshold:
        issues.append(
            f"l1_threshold ({matrix.l1_threshold}) < l2_threshold ({matrix.l2_threshold})"
        )
    if issues:
        raise InvalidApprovalMatrixError(issues)
    return matrix
