"""Tests for shock comparison, scenario presets and the shock ladder."""

import sys
import os
import math
import dataclasses
import pytest

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "..")))

from ftp_pricing.config import (
    ApprovalMatrixConfig,
    PricingShocks,
    SHOCK_SCENARIOS,
    RATES_UP_SCENARIO,
    LIQUIDITY_STRESS_SCENARIO,
)
from ftp_pricing.cost_modules.approval import ApprovalLevel
from ftp_pricing.deal import Transaction, ASSET
from ftp_pricing.engine.pricing import FTPResult
from ftp_pricing.stress_testing import ShockAnalysisEngine, compare_shocks


@pytest.fixture
def matrix():
    return ApprovalMatrixConfig(15, 10, 5)


@pytest.fixture
def deal():
    return Transaction(
        product_type="LOAN_COMM", category=ASSET, currency="USD",
        amount=10_000_000, duration_months=6, margin_target=2.5,
        risk_weight=100, capital_ratio=12, target_roe=15, operational_cost_bps=45,
    )


@pytest.fixture
def engine(matrix):
    return ShockAnalysisEngine(matrix)


class TestShockComparison:
    def test_zero_shock_has_no_impact(self, engine, deal):
        impact = engine.compare(deal, PricingShocks())
        assert impact.base == impact.shocked
        assert impact.delta_ftp == 0.0
        assert not impact.approval_changed

    def test_rates_up(self, engine, deal):
        impact = engine.compare(deal, RATES_UP_SCENARIO.shocks, RATES_UP_SCENARIO.name)
        assert impact.scenario_name == "Rates +100bp"
        assert impact.delta_ftp == pytest.approx(1.0)
        assert impact.delta_client_rate == pytest.approx(0.0)
        assert impact.delta_raroc == pytest.approx(-100 / 12)
        assert impact.delta_economic_profit == pytest.approx(-1.0)
        assert impact.approval_changed
        assert impact.shocked.approval_level == ApprovalLevel.REJECTED

    def test_liquidity_stress(self, engine, deal):
        impact = engine.compare(deal, LIQUIDITY_STRESS_SCENARIO.shocks)
        assert impact.delta_ftp == pytest.approx(0.5)
        assert impact.shocked.liquidity_spread - impact.base.liquidity_spread == pytest.approx(0.5)

    def test_component_table(self, engine, deal):
        rows = engine.compare(deal, PricingShocks(interest_rate=50)).component_table()
        by_name = {r["Component"]: r for r in rows}
        assert by_name["Base Interest Rate"]["Delta (%)"] == pytest.approx(0.5)
        assert by_name["Capital Charge"]["Delta (%)"] == 0.0
        assert by_name["Client Rate"]["Delta (%)"] == 0.0

    def test_empty_deal(self, engine, deal):
        impact = engine.compare(dataclasses.replace(deal, amount=0), PricingShocks(100, 100))
        assert impact.base == FTPResult.empty()
        assert impact.shocked == FTPResult.empty()

    def test_convenience_function(self, matrix, deal):
        impact = compare_shocks(deal, matrix, PricingShocks(interest_rate=100))
        assert impact.delta_ftp == pytest.approx(1.0)


class TestScenarios:
    def test_run_all_presets(self, engine, deal):
        impacts = engine.run_scenarios(deal)
        assert [i.scenario_name for i in impacts] == [s.name for s in SHOCK_SCENARIOS]
        assert impacts[0].delta_ftp == 0.0

    def test_summary_frame(self, engine, deal):
        df = engine.scenario_summary(deal)
        assert len(df) == len(SHOCK_SCENARIOS)
        assert df["Client Rate (%)"].nunique() == 1
        assert "Approval" in df.columns


class TestShockLadder:
    def test_shape(self, engine, deal):
        df = engine.run_shock_ladder(deal)
        assert len(df) == 5 * 4
        assert list(df.columns[:2]) == ["Rate Shock (bps)", "Liquidity Shock (bps)"]

    def test_origin_matches_unshocked(self, engine, deal):
        df = engine.run_shock_ladder(deal)
        origin = df[(df["Rate Shock (bps)"] == 0) & (df["Liquidity Shock (bps)"] == 0)]
        assert len(origin) == 1
        assert origin["Total FTP (%)"].iloc[0] == pytest.approx(3.83)
        assert origin["Approval"].iloc[0] == "L1_Manager"

    def test_client_rate_flat_across_grid(self, engine, deal):
        df = engine.run_shock_ladder(deal)
        assert df["Client Rate (%)"].max() - df["Client Rate (%)"].min() == pytest.approx(0.0)

    def test_raroc_decreases_with_rate_shock(self, engine, deal):
        df = engine.run_shock_ladder(deal, rate_shocks_bps=(-100, 0, 100), liquidity_shocks_bps=(0,))
        assert df["RAROC (%)"].is_monotonic_decreasing


class TestBreakeven:
    def test_breakeven_to_l1(self, engine, deal):
        bps = engine.breakeven_rate_shock(deal, threshold=10)
        assert bps == pytest.approx(10.0)
        shocked = engine.compare(deal, PricingShocks(interest_rate=bps)).shocked
        assert shocked.raroc == pytest.approx(10.0)

    def test_headroom(self, engine, deal):
        headroom = engine.approval_headroom(deal)
        assert headroom["Auto"] == pytest.approx(-50.0)
        assert headroom["L1_Manager"] == pytest.approx(10.0)
        assert headroom["L2_Committee"] == pytest.approx(70.0)

    def test_no_capital_is_unbounded(self, engine, deal):
        assert math.isinf(engine.breakeven_rate_shock(dataclasses.replace(deal, risk_weight=0), 10))
