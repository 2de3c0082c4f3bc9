"""
Main entry point: price the sample deal and the sample blotter.
Usage: python -m ftp_pricing
"""

import sys
import os
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from ftp_pricing.config import DEFAULT_APPROVAL_MATRIX, DEFAULT_RATE_TABLES
from ftp_pricing.cost_modules.curve import LiquidityCurve
from ftp_pricing.data import INITIAL_DEAL, SAMPLE_DEALS, DealBlotter
from ftp_pricing.engine.pricing import price
from ftp_pricing.stress_testing import ShockAnalysisEngine
from ftp_pricing.utils import (
    approval_badge,
    format_amount,
    format_bps,
    format_pct,
    traffic_light,
)
from ftp_pricing.utils.logging_setup import setup_logging


def main():
    setup_logging(os.environ.get("FTP_PRICING_LOG_LEVEL", "WARNING"))
    matrix = DEFAULT_APPROVAL_MATRIX
    deal = INITIAL_DEAL

    print("=" * 72)
    print("  FTP PRICING & DECISION ENGINE")
    print("=" * 72)

    # ── Deal ─────────────────────────────────────────────────────────────
    print(f"\n{'─' * 40}")
    print("DEAL")
    print(f"{'─' * 40}")
    print(f"  Product:           {deal.product_type} ({deal.category})")
    print(f"  Notional:          {format_amount(deal.amount, deal.currency)}")
    print(f"  Tenor:             {deal.duration_months:>10.0f} months")
    print(f"  Margin Target:     {format_pct(deal.margin_target):>10}")
    print(f"  Risk Weight:       {format_pct(deal.risk_weight, 0):>10}")

    # ── Pricing receipt ──────────────────────────────────────────────────
    result = price(deal, matrix)
    print(f"\n{'─' * 40}")
    print("PRICING WATERFALL")
    print(f"{'─' * 40}")
    for label, value in result.get_waterfall():
        print(f"  {label:20s}: {format_pct(value, 4):>10}  ({format_bps(value)})")
    print(f"\n  Total FTP:         {format_pct(result.total_ftp, 4):>10}")
    print(f"  Target Price:      {format_pct(result.target_price, 4):>10}")
    print(f"  Client Rate:       {format_pct(result.final_client_rate, 4):>10}")
    print(f"  RAROC:             {format_pct(result.raroc):>10} "
          f"{traffic_light(result.raroc, matrix)}")
    print(f"  Economic Profit:   {format_pct(result.economic_profit, 4):>10}")
    print(f"  Approval:          {approval_badge(result.approval_level)}")
    print(f"  Methodology:       {result.matched_methodology} ({result.match_reason})")

    entry = result.accounting_entry
    print(f"\n  GL Preview: {entry.source} → {entry.dest}")
    print(f"    Debit:  {format_amount(entry.amount_debit, deal.currency)}")
    print(f"    Credit: {format_amount(entry.amount_credit, deal.currency)}")

    # ── Liquidity curve ──────────────────────────────────────────────────
    print(f"\n{'─' * 40}")
    print("LIQUIDITY CURVE")
    print(f"{'─' * 40}")
    for row in LiquidityCurve(DEFAULT_RATE_TABLES.liquidity_curve).as_table():
        print(f"  {row['Tenor']:>4s} ({row['Months']:>4.0f}M): {row['Premium (bps)']:>6.1f} bps")

    # ── Shock scenarios ──────────────────────────────────────────────────
    print(f"\n{'─' * 40}")
    print("SHOCK SCENARIOS")
    print(f"{'─' * 40}")
    shock_engine = ShockAnalysisEngine(matrix)
    for impact in shock_engine.run_scenarios(deal):
        print(f"  {impact.scenario_name:20s}: FTP={impact.shocked.total_ftp:6.3f}% | "
              f"RAROC={impact.shocked.raroc:6.2f}% ({impact.delta_raroc:+6.2f}pp) | "
              f"{approval_badge(impact.shocked.approval_level)}")

    print(f"\n  Rate-shock headroom before losing each tier:")
    for level, bps in shock_engine.approval_headroom(deal).items():
        print(f"    {level:15s}: {bps:+8.1f} bps")

    # ── Blotter ──────────────────────────────────────────────────────────
    print(f"\n{'─' * 40}")
    print("SAMPLE BLOTTER")
    print(f"{'─' * 40}")
    blotter = DealBlotter(SAMPLE_DEALS, matrix)
    df = blotter.to_dataframe()
    for _, row in df.iterrows():
        print(f"  {row['Deal']:10s} {row['Product']:10s} {row['Currency']:4s} "
              f"FTP={row['Total FTP (%)']:6.3f}% | "
              f"Client={row['Client Rate (%)']:6.3f}% | "
              f"RAROC={row['RAROC (%)']:7.2f}% | {row['Approval']}")
    print(f"\n  Approval mix:")
    for level, count in blotter.approval_summary().items():
        print(f"    {approval_badge(level):18s}: {count}")

    print(f"\n{'=' * 72}")


if __name__ == "__main__":
    main()
