"""
Test Suite for the FTP Pricing Engine.
Covers the end-to-end waterfall, the empty-deal contract, shock
invariants, approval routing and the collaborator contract mapping.
"""

import sys
import os
import dataclasses
import pytest

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "..")))

from ftp_pricing import price
from ftp_pricing.accounting import TREASURY_DESK, EMPTY_ACCOUNTING_ENTRY, build_accounting_entry
from ftp_pricing.config import (
    ApprovalMatrixConfig,
    CurveKnot,
    PricingShocks,
    RateTables,
    DEFAULT_APPROVAL_MATRIX,
    DEFAULT_RATE_TABLES,
    NO_SHOCKS,
)
from ftp_pricing.cost_modules.approval import ApprovalLevel, route_approval
from ftp_pricing.deal import Transaction, ASSET, LIABILITY
from ftp_pricing.engine.pricing import (
    FTPResult,
    PricingEngine,
    get_engine,
    MATCHED_MATURITY,
    MOVING_AVERAGE,
    STANDARD_MATCH_REASON,
)


@pytest.fixture
def matrix():
    return ApprovalMatrixConfig(auto_approval_threshold=15, l1_threshold=10, l2_threshold=5)


@pytest.fixture
def short_loan():
    """6M USD asset: triggers the NSFR short-term floor."""
    return Transaction(
        product_type="LOAN_COMM",
        category=ASSET,
        currency="USD",
        amount=10_000_000,
        duration_months=6,
        margin_target=2.5,
        risk_weight=100,
        capital_ratio=12,
        target_roe=15,
        operational_cost_bps=45,
    )


# ═══════════════════════════════════════════════════════════════════════════════
#  Worked Scenario
# ═══════════════════════════════════════════════════════════════════════════════

class TestWorkedScenario:
    def test_base_rate(self, short_loan, matrix):
        r = price(short_loan, matrix)
        assert r.base_rate == pytest.approx(3.48)

    def test_liquidity(self, short_loan, matrix):
        r = price(short_loan, matrix)
        assert r.liquidity_premium == pytest.approx(0.35)
        assert r.clc_charge == 0.0
        assert r.liquidity_spread == pytest.approx(0.35)
        assert r.total_ftp == pytest.approx(3.83)

    def test_regulatory(self, short_loan, matrix):
        r = price(short_loan, matrix)
        assert r.credit_cost == pytest.approx(0.85)
        assert r.nsfr_cost == pytest.approx(-0.10)
        assert r.lcr_cost == 0.0
        assert r.regulatory_cost == pytest.approx(0.75)

    def test_prices(self, short_loan, matrix):
        r = price(short_loan, matrix)
        assert r.operational_cost == pytest.approx(0.45)
        assert r.floor_price == pytest.approx(5.03)
        assert r.capital_charge == pytest.approx(1.8)
        assert r.technical_price == pytest.approx(6.83)
        assert r.target_price == pytest.approx(7.33)
        assert r.final_client_rate == pytest.approx(6.33)

    def test_profitability(self, short_loan, matrix):
        r = price(short_loan, matrix)
        assert r.raroc == pytest.approx(130 / 12)
        assert r.economic_profit == pytest.approx(-0.50)
        assert r.approval_level == ApprovalLevel.L1_MANAGER

    def test_esg_and_strategic_are_zero(self, short_loan, matrix):
        r = price(short_loan, matrix)
        assert r.esg_transition_charge == 0.0
        assert r.esg_physical_charge == 0.0
        assert r.strategic_spread == 0.0

    def test_accounting_entry(self, short_loan, matrix):
        r = price(short_loan, matrix)
        entry = r.accounting_entry
        assert entry.amount_debit == pytest.approx(383_000.0)
        assert entry.is_balanced
        assert entry.source == "-"
        assert entry.dest == TREASURY_DESK


# ═══════════════════════════════════════════════════════════════════════════════
#  Waterfall Identities
# ═══════════════════════════════════════════════════════════════════════════════

class TestWaterfallIdentities:
    @pytest.mark.parametrize("kwargs", [
        {},
        {"duration_months": 48, "transition_risk": "Brown", "physical_risk": "High"},
        {"category": LIABILITY, "product_type": "DEP_CASA", "lcr_outflow_pct": 25,
         "is_operational_segment": True, "behavioural_model_id": "NMD-001"},
        {"currency": "EUR", "behavioural_model_id": "PRE-002", "risk_weight": 35},
    ])
    def test_identities_hold(self, short_loan, matrix, kwargs):
        deal = dataclasses.replace(short_loan, **kwargs)
        r = price(deal, matrix, PricingShocks(interest_rate=40, liquidity_spread=15))

        assert r.total_ftp == pytest.approx(r.base_rate + r.liquidity_spread)
        assert r.regulatory_cost == pytest.approx(r.credit_cost + r.lcr_cost + r.nsfr_cost)
        assert r.floor_price == pytest.approx(
            r.total_ftp + r.regulatory_cost + r.operational_cost
            + r.esg_transition_charge + r.esg_physical_charge + r.strategic_spread
        )
        assert r.technical_price == pytest.approx(r.floor_price + r.capital_charge)
        assert r.target_price == pytest.approx(r.technical_price + 0.5)

    def test_economic_profit_relation(self, short_loan, matrix):
        r = price(short_loan, matrix)
        assert r.economic_profit == pytest.approx(
            r.final_client_rate - r.floor_price - r.capital_charge
        )

    def test_long_tenor_add_on(self, short_loan, matrix):
        r = price(dataclasses.replace(short_loan, duration_months=48), matrix)
        assert r.liquidity_premium == pytest.approx(0.65)
        assert r.nsfr_cost == 0.0

    def test_twelve_months_is_not_short_term(self, short_loan, matrix):
        r = price(dataclasses.replace(short_loan, duration_months=12), matrix)
        assert r.liquidity_premium == pytest.approx(0.45)

    def test_forced_nsfr_floor(self, short_loan, matrix):
        deal = dataclasses.replace(short_loan, duration_months=24, force_nsfr_floor=True)
        r = price(deal, matrix)
        assert r.liquidity_premium == pytest.approx(0.35)
        assert r.nsfr_cost == pytest.approx(-0.10)

    def test_currency_offset(self, short_loan, matrix):
        eur = price(dataclasses.replace(short_loan, currency="EUR"), matrix)
        jpy = price(dataclasses.replace(short_loan, currency="JPY"), matrix)
        gbp = price(dataclasses.replace(short_loan, currency="GBP"), matrix)
        assert eur.base_rate == pytest.approx(2.48)
        assert jpy.base_rate == pytest.approx(0.98)
        assert gbp.base_rate == pytest.approx(3.48)

    def test_zero_capital_gives_zero_raroc(self, short_loan, matrix):
        r = price(dataclasses.replace(short_loan, risk_weight=0), matrix)
        assert r.raroc == 0.0
        assert r.capital_charge == 0.0
        assert r.approval_level == ApprovalLevel.REJECTED

    def test_get_waterfall_ends_at_technical_price(self, short_loan, matrix):
        waterfall = price(short_loan, matrix).get_waterfall()
        assert waterfall[0][0] == "Base Rate"
        assert waterfall[-1] == ("Technical Price", pytest.approx(6.83))


# ═══════════════════════════════════════════════════════════════════════════════
#  Empty Deal
# ═══════════════════════════════════════════════════════════════════════════════

class TestEmptyDeal:
    def test_no_product(self, short_loan, matrix):
        r = price(dataclasses.replace(short_loan, product_type=""), matrix)
        assert r == FTPResult.empty()

    def test_zero_amount(self, short_loan, matrix):
        r = price(dataclasses.replace(short_loan, amount=0), matrix)
        assert r == FTPResult.empty()

    def test_shocks_do_not_leak_into_empty_result(self, short_loan, matrix):
        deal = dataclasses.replace(short_loan, amount=0)
        r = price(deal, matrix, PricingShocks(interest_rate=300, liquidity_spread=100))
        assert r.total_ftp == 0.0
        assert r.base_rate == 0.0

    def test_empty_result_shape(self):
        r = FTPResult.empty()
        assert r.approval_level == ApprovalLevel.REJECTED
        assert r.accounting_entry == EMPTY_ACCOUNTING_ENTRY
        assert r.matched_methodology == MATCHED_MATURITY
        assert r.match_reason == ""


# ═══════════════════════════════════════════════════════════════════════════════
#  Shocks
# ═══════════════════════════════════════════════════════════════════════════════

class TestShocks:
    def test_zero_shocks_identical(self, short_loan, matrix):
        assert price(short_loan, matrix, PricingShocks(0, 0)) == price(short_loan, matrix)
        assert price(short_loan, matrix, NO_SHOCKS) == price(short_loan, matrix, None)

    def test_rate_shock_shifts_ftp(self, short_loan, matrix):
        base = price(short_loan, matrix)
        shocked = price(short_loan, matrix, PricingShocks(interest_rate=100))
        assert shocked.base_rate - base.base_rate == pytest.approx(1.0)
        assert shocked.total_ftp - base.total_ftp == pytest.approx(1.0)
        assert shocked.liquidity_spread == pytest.approx(base.liquidity_spread)

    def test_liquidity_shock_shifts_spread(self, short_loan, matrix):
        base = price(short_loan, matrix)
        shocked = price(short_loan, matrix, PricingShocks(liquidity_spread=50))
        assert shocked.liquidity_spread - base.liquidity_spread == pytest.approx(0.5)
        assert shocked.base_rate == pytest.approx(base.base_rate)

    def test_client_rate_is_shock_invariant(self, short_loan, matrix):
        base = price(short_loan, matrix)
        for shocks in (PricingShocks(100, 0), PricingShocks(0, 75), PricingShocks(-200, 30)):
            assert price(short_loan, matrix, shocks).final_client_rate == pytest.approx(
                base.final_client_rate
            )

    def test_unshocked_components_stable(self, short_loan, matrix):
        base = price(short_loan, matrix)
        shocked = price(short_loan, matrix, PricingShocks(200, 75))
        assert shocked.regulatory_cost == base.regulatory_cost
        assert shocked.capital_charge == base.capital_charge
        assert shocked.operational_cost == base.operational_cost
        assert shocked.liquidity_premium == base.liquidity_premium

    def test_rate_shock_erodes_raroc(self, short_loan, matrix):
        shocked = price(short_loan, matrix, PricingShocks(interest_rate=100))
        assert shocked.raroc == pytest.approx(2.5)
        assert shocked.approval_level == ApprovalLevel.REJECTED


# ═══════════════════════════════════════════════════════════════════════════════
#  Approval Routing
# ═══════════════════════════════════════════════════════════════════════════════

class TestApprovalRouting:
    @pytest.mark.parametrize("raroc,expected", [
        (25.0, ApprovalLevel.AUTO),
        (15.0, ApprovalLevel.AUTO),
        (14.99, ApprovalLevel.L1_MANAGER),
        (10.0, ApprovalLevel.L1_MANAGER),
        (9.99, ApprovalLevel.L2_COMMITTEE),
        (5.0, ApprovalLevel.L2_COMMITTEE),
        (4.99, ApprovalLevel.REJECTED),
        (-3.0, ApprovalLevel.REJECTED),
    ])
    def test_thresholds_inclusive(self, matrix, raroc, expected):
        assert route_approval(raroc, matrix) == expected

    def test_unordered_matrix_is_used_as_given(self, caplog):
        bad = ApprovalMatrixConfig(auto_approval_threshold=8, l1_threshold=12, l2_threshold=5)
        with caplog.at_level("WARNING", logger="ftp_pricing.cost_modules.approval"):
            assert route_approval(9.0, bad) == ApprovalLevel.AUTO
        assert "not ordered" in caplog.text

    def test_matrix_from_dict(self):
        m = ApprovalMatrixConfig.from_dict(
            {"autoApprovalThreshold": 18, "l1Threshold": 12, "l2Threshold": 6}
        )
        assert m == ApprovalMatrixConfig(18, 12, 6)
        assert ApprovalMatrixConfig.from_dict({}) == DEFAULT_APPROVAL_MATRIX

    def test_level_values(self):
        assert [lvl.value for lvl in ApprovalLevel] == [
            "Auto", "L1_Manager", "L2_Committee", "Rejected"
        ]


# ═══════════════════════════════════════════════════════════════════════════════
#  Purity & Injection
# ═══════════════════════════════════════════════════════════════════════════════

class TestPurity:
    def test_repeatable(self, short_loan, matrix):
        assert price(short_loan, matrix) == price(short_loan, matrix)

    def test_inputs_hashable(self, short_loan, matrix):
        assert hash(short_loan) == hash(dataclasses.replace(short_loan))
        hash(matrix)
        hash(DEFAULT_RATE_TABLES)
        hash(PricingShocks(10, 5))

    def test_engine_cached_per_table_set(self):
        assert get_engine(DEFAULT_RATE_TABLES) is get_engine(RateTables())

    def test_injected_curve(self, short_loan, matrix):
        tables = dataclasses.replace(
            DEFAULT_RATE_TABLES,
            liquidity_curve=(CurveKnot(0, 50.0), CurveKnot(12, 50.0), CurveKnot(60, 80.0)),
        )
        r = price(short_loan, matrix, rate_tables=tables)
        assert r.liquidity_premium == pytest.approx(0.5 * 0.45 + 0.5 * 0.50)
        # default engine untouched
        assert price(short_loan, matrix).liquidity_premium == pytest.approx(0.35)

    def test_list_tables_are_frozen_to_tuples(self, short_loan, matrix):
        tables = dataclasses.replace(
            DEFAULT_RATE_TABLES,
            liquidity_curve=[CurveKnot(0, 5.0), CurveKnot(12, 25.0), CurveKnot(60, 45.0)],
            credit_line_products=["CRED_LINE", "CRED_REV"],
        )
        assert isinstance(tables.liquidity_curve, tuple)
        assert tables.credit_line_products == ("CRED_LINE", "CRED_REV")
        hash(tables)
        r = price(short_loan, matrix, rate_tables=tables)
        assert r.liquidity_premium == pytest.approx(0.35)
        assert r.approval_level == ApprovalLevel.L1_MANAGER

    def test_single_product_string_kept_whole(self):
        tables = RateTables(credit_line_products="CRED_LINE")
        assert tables.credit_line_products == ("CRED_LINE",)

    def test_injected_coefficients(self, short_loan, matrix):
        tables = dataclasses.replace(DEFAULT_RATE_TABLES, commercial_buffer=1.0,
                                     expected_loss_coefficient=1.0)
        r = PricingEngine(tables).price(short_loan, matrix)
        assert r.credit_cost == pytest.approx(1.0)
        assert r.target_price == pytest.approx(r.technical_price + 1.0)


# ═══════════════════════════════════════════════════════════════════════════════
#  Contract Mapping
# ═══════════════════════════════════════════════════════════════════════════════

class TestContract:
    def test_from_dict(self, short_loan):
        payload = {
            "productType": "LOAN_COMM",
            "category": "Asset",
            "currency": "USD",
            "amount": 10_000_000,
            "durationMonths": 6,
            "marginTarget": 2.5,
            "riskWeight": 100,
            "capitalRatio": 12,
            "targetROE": 15,
            "operationalCostBps": 45,
            "behaviouralModelId": "",
            "someUiOnlyField": "ignored",
        }
        assert Transaction.from_dict(payload) == short_loan

    def test_from_dict_defaults_to_empty(self):
        assert Transaction.from_dict({}).is_empty

    def test_to_dict(self, short_loan, matrix):
        d = price(short_loan, matrix).to_dict()
        assert d["totalFTP"] == pytest.approx(3.83)
        assert d["approvalLevel"] == "L1_Manager"
        assert d["matchedMethodology"] == MATCHED_MATURITY
        assert d["matchReason"] == STANDARD_MATCH_REASON
        assert d["accountingEntry"]["amountDebit"] == pytest.approx(383_000.0)

    def test_methodology_tagging(self, short_loan, matrix):
        r = price(dataclasses.replace(short_loan, repricing_freq="Monthly"), matrix)
        assert r.matched_methodology == MOVING_AVERAGE

    def test_accounting_uses_business_line(self, short_loan, matrix):
        deal = dataclasses.replace(short_loan, business_line="Corp Fin")
        r = price(deal, matrix)
        entry = build_accounting_entry(deal, r)
        assert entry == r.accounting_entry
        assert entry.source == "Corp Fin"

    def test_accounting_empty_deal(self, short_loan):
        deal = dataclasses.replace(short_loan, amount=0)
        assert build_accounting_entry(deal, FTPResult.empty()) == EMPTY_ACCOUNTING_ENTRY
