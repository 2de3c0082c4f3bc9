"""
Curve Interpolator
==================
Piecewise-linear lookup over a small set of (tenor, value) knots, flat
extrapolation at both ends. Used to read the term liquidity premium at
any tenor, in particular the 1Y point behind the NSFR short-term floor.
"""

from __future__ import annotations

import numpy as np
from typing import Sequence, Tuple, Union

from ftp_pricing.config import CurveKnot
from ftp_pricing.exceptions import CurveDefinitionError


KnotLike = Union[CurveKnot, Tuple[float, float]]


def _as_arrays(knots: Sequence[KnotLike]) -> Tuple[np.ndarray, np.ndarray]:
    """Split knots into (thresholds, values) and check they form a curve."""
    if len(knots) == 0:
        raise CurveDefinitionError("Curve has no knots")
    months = []
    values = []
    for knot in knots:
        if isinstance(knot, CurveKnot):
            months.append(knot.months)
            values.append(knot.value_bps)
        else:
            months.append(knot[0])
            values.append(knot[1])
    xp = np.asarray(months, dtype=np.float64)
    fp = np.asarray(values, dtype=np.float64)
    if np.any(np.diff(xp) < 0):
        raise CurveDefinitionError(
            f"Curve thresholds must be sorted ascending, got {xp.tolist()}"
        )
    return xp, fp


def _lookup(xp: np.ndarray, fp: np.ndarray, months: float) -> float:
    if months <= xp[0]:
        return float(fp[0])
    if months >= xp[-1]:
        return float(fp[-1])
    # first knot with threshold >= months; a repeated threshold acts as a step
    i = int(np.searchsorted(xp, months, side="left"))
    x0, x1 = xp[i - 1], xp[i]
    return float(fp[i - 1] + (fp[i] - fp[i - 1]) * (months - x0) / (x1 - x0))


def interpolate(knots: Sequence[KnotLike], months: float) -> float:
    """
    Linear interpolation of the knot values at ``months``.

    At or below the first threshold the first value is returned; at or
    above the last threshold the last value. In between, the first knot
    whose threshold is >= ``months`` is interpolated against its
    predecessor. Exact at the knots; where a threshold is repeated the
    first of its knots wins at the threshold itself.
    """
    xp, fp = _as_arrays(knots)
    return _lookup(xp, fp, months)


class LiquidityCurve:
    """Term liquidity premium curve in bps, indexed by tenor in months."""

    def __init__(self, knots: Sequence[KnotLike]):
        self.knots = tuple(knots)
        self._months, self._values = _as_arrays(self.knots)

    def premium_bps(self, months: float) -> float:
        return _lookup(self._months, self._values, months)

    def premium_pct(self, months: float) -> float:
        return self.premium_bps(months) / 100.0

    def as_table(self):
        """List of dicts for display (tenor, months, bps)."""
        return [
            {
                "Tenor": getattr(k, "tenor", "") or f"{m:g}M",
                "Months": float(m),
                "Premium (bps)": float(v),
            }
            for k, m, v in zip(self.knots, self._months, self._values)
        ]
