"""Utility helpers for formatting and display."""

import pandas as pd
from typing import Dict, List, Optional, Sequence


def format_pct(value: float, decimals: int = 2) -> str:
    """Format a percent-unit number (2.5 → '2.50%')."""
    return f"{value:.{decimals}f}%"


def format_bps(value_pct: float, decimals: int = 1) -> str:
    """Format a percent-unit number as basis points."""
    return f"{value_pct * 100:+.{decimals}f} bps"


def format_amount(value: float, currency: str = "USD", decimals: int = 2) -> str:
    """Format a currency amount."""
    return f"{currency} {value:,.{decimals}f}"


def dict_list_to_df(data: List[Dict], columns: Optional[Sequence[str]] = None) -> pd.DataFrame:
    """Rows to a DataFrame; ``columns`` keeps the header when ``data`` is empty."""
    return pd.DataFrame(data, columns=list(columns) if columns is not None else None)


def traffic_light(raroc: float, matrix) -> str:
    """Green at or above auto-approval, amber while still routable, red when rejected."""
    if raroc >= matrix.auto_approval_threshold:
        return "🟢"
    elif raroc >= matrix.l2_threshold:
        return "🟡"
    return "🔴"


APPROVAL_BADGES = {
    "Auto": "🟢",
    "L1_Manager": "🟡",
    "L2_Committee": "🟠",
    "Rejected": "🔴",
}


def approval_badge(level) -> str:
    """Badge for an approval level (enum or plain string)."""
    key = getattr(level, "value", level)
    return f"{APPROVAL_BADGES.get(key, '⚪')} {key}"
