"""Configuration, rate tables and shock scenario definitions."""

from dataclasses import dataclass, field
from typing import Optional, Tuple


# ── Pricing coefficients ─────────────────────────────────────────────────────
BASE_RATE_INTERCEPT = 3.0          # %, proxy for the short end of the curve
BASE_RATE_SLOPE_PER_MONTH = 0.08   # % per month of tenor
EXPECTED_LOSS_COEFFICIENT = 0.85   # credit cost per unit of risk weight
COMMERCIAL_BUFFER = 0.50           # % added on top of the technical price


# ── Liquidity premium ────────────────────────────────────────────────────────
ASSET_LIQUIDITY_PREMIUM = 0.45       # %, assets consume funding
LIABILITY_LIQUIDITY_PREMIUM = -0.10  # %, liabilities are a funding benefit
LONG_TENOR_ADD_ON = 0.20             # % added beyond the long-tenor threshold
LONG_TENOR_THRESHOLD_MONTHS = 36
NSFR_FLOOR_MAX_MONTHS = 12           # Asset tenors below this hit the 1Y floor
NSFR_FLOOR_BLEND_WEIGHT = 0.50       # weight of the 1Y premium in the blend
ONE_YEAR_TENOR_MONTHS = 12


# ── LCR / CLC ────────────────────────────────────────────────────────────────
OPERATIONAL_DEPOSIT_BENEFIT = -0.10  # %, LCR benefit of operational deposits
OPERATIONAL_SEGMENT_CLC_FACTOR = 0.50
UNDRAWN_SCALING_FACTOR = 0.10
FALLBACK_BASIS_SPREAD_BPS = 15.0


# ── Behavioural model coefficients ───────────────────────────────────────────
CPR_SPREAD_PER_UNIT = 0.05           # % per unit of CPR
NMD_CORE_SPREAD_FACTOR = 0.30        # % at 100 % core ratio
DEFAULT_NMD_CORE_RATIO = 50.0

PREPAYMENT_MODEL = "Prepayment_CPR"
NMD_REPLICATION_MODEL = "NMD_Replication"


# ── Rate cards ───────────────────────────────────────────────────────────────
@dataclass(frozen=True)
class CurveKnot:
    """A single (tenor, value) point of a spread curve."""
    months: float
    value_bps: float
    tenor: str = ""


@dataclass(frozen=True)
class BasisSpreadBucket:
    """Basis spread applicable to tenors up to ``max_months`` (inclusive)."""
    max_months: float
    spread_bps: float
    label: str = ""


@dataclass(frozen=True)
class CurrencyOffset:
    """Offset (%) applied to the base-rate proxy for a currency."""
    currency: str
    offset: float


@dataclass(frozen=True)
class TransitionRateCard:
    """ESG transition-risk adjustment for a classification."""
    classification: str
    adjustment_bps: float
    sector: str = "All"
    description: str = ""


@dataclass(frozen=True)
class PhysicalRateCard:
    """ESG physical-risk adjustment for a risk level."""
    risk_level: str
    adjustment_bps: float
    location_type: str = ""
    description: str = ""


@dataclass(frozen=True)
class BehaviouralModel:
    """Behavioural model driving the strategic spread."""
    id: str
    name: str
    type: str                          # PREPAYMENT_MODEL | NMD_REPLICATION_MODEL
    core_ratio: Optional[float] = None  # NMD: % of balances considered core
    decay_rate: Optional[float] = None
    beta_factor: Optional[float] = None
    cpr: Optional[float] = None         # Prepayment: constant prepayment rate
    penalty_exempt: Optional[float] = None
    description: str = ""


DEFAULT_LIQUIDITY_CURVE = (
    CurveKnot(0, 5.0, "ON"),
    CurveKnot(1, 10.0, "1M"),
    CurveKnot(6, 18.0, "6M"),
    CurveKnot(12, 25.0, "1Y"),
    CurveKnot(60, 45.0, "5Y"),
)

DEFAULT_BASIS_SPREADS = (
    BasisSpreadBucket(1, 12.0, "<= 1M"),
    BasisSpreadBucket(360, 22.0, "> 1M"),
)

DEFAULT_CURRENCY_OFFSETS = (
    CurrencyOffset("EUR", -1.0),
    CurrencyOffset("JPY", -2.5),
)

DEFAULT_TRANSITION_GRID = (
    TransitionRateCard("Green", -15, "All", "EU Taxonomy Aligned (Incentive)"),
    TransitionRateCard("Amber", 5, "Manufacturing", "Transition plan required (Scope 1/2)"),
    TransitionRateCard("Brown", 35, "Energy/Fossil", "Stranded Asset Risk Premium"),
    TransitionRateCard("Neutral", 0, "Services", "Standard Portfolio"),
)

DEFAULT_PHYSICAL_GRID = (
    PhysicalRateCard("High", 20, "Coastal / Flood Zone", "Insurance Premium Equiv. (Acute Risk)"),
    PhysicalRateCard("Medium", 8, "Water Stress Area", "Operational continuity risk"),
    PhysicalRateCard("Low", 0, "Standard Zone", "No significant climate exposure"),
)

DEFAULT_BEHAVIOURAL_MODELS = (
    BehaviouralModel("NMD-001", "Retail Savings - Sticky", NMD_REPLICATION_MODEL,
                     core_ratio=90, decay_rate=15, beta_factor=0.15,
                     description="High stability retail deposits"),
    BehaviouralModel("NMD-002", "Corporate Vista - Volatile", NMD_REPLICATION_MODEL,
                     core_ratio=40, decay_rate=60, beta_factor=0.85,
                     description="Operating accounts for large corp"),
    BehaviouralModel("NMD-CAT-01", "Wealth Mgmt Replication", NMD_REPLICATION_MODEL,
                     description="Replicating portfolio for Wealth"),
    BehaviouralModel("PRE-001", "Mortgage Standard CPR", PREPAYMENT_MODEL,
                     cpr=5.0, penalty_exempt=10,
                     description="Standard residential mortgage prepay"),
    BehaviouralModel("PRE-002", "Corp Loan - Aggressive", PREPAYMENT_MODEL,
                     cpr=12.5, penalty_exempt=0,
                     description="Refi-sensitive corporate borrowers"),
    BehaviouralModel("PRE-003", "Auto Loan Static", PREPAYMENT_MODEL,
                     cpr=8.0, penalty_exempt=100,
                     description="Fixed curve for vehicle finance"),
)

CREDIT_LINE_PRODUCTS = ("CRED_LINE",)

_TABLE_FIELDS = (
    "liquidity_curve",
    "basis_spreads",
    "currency_offsets",
    "transition_grid",
    "physical_grid",
    "behavioural_models",
    "credit_line_products",
)


@dataclass(frozen=True)
class RateTables:
    """
    Every lookup table and coefficient the pricing pipeline reads.

    Tables are tuples of frozen rate cards so the whole object is immutable
    and hashable; pass a modified copy (``dataclasses.replace``) to calibrate
    a deployment.
    """
    liquidity_curve: Tuple[CurveKnot, ...] = DEFAULT_LIQUIDITY_CURVE
    basis_spreads: Tuple[BasisSpreadBucket, ...] = DEFAULT_BASIS_SPREADS
    fallback_basis_spread_bps: float = FALLBACK_BASIS_SPREAD_BPS
    currency_offsets: Tuple[CurrencyOffset, ...] = DEFAULT_CURRENCY_OFFSETS
    transition_grid: Tuple[TransitionRateCard, ...] = DEFAULT_TRANSITION_GRID
    physical_grid: Tuple[PhysicalRateCard, ...] = DEFAULT_PHYSICAL_GRID
    behavioural_models: Tuple[BehaviouralModel, ...] = DEFAULT_BEHAVIOURAL_MODELS
    credit_line_products: Tuple[str, ...] = CREDIT_LINE_PRODUCTS

    base_rate_intercept: float = BASE_RATE_INTERCEPT
    base_rate_slope: float = BASE_RATE_SLOPE_PER_MONTH
    asset_liquidity_premium: float = ASSET_LIQUIDITY_PREMIUM
    liability_liquidity_premium: float = LIABILITY_LIQUIDITY_PREMIUM
    long_tenor_add_on: float = LONG_TENOR_ADD_ON
    long_tenor_threshold_months: float = LONG_TENOR_THRESHOLD_MONTHS
    nsfr_floor_max_months: float = NSFR_FLOOR_MAX_MONTHS
    nsfr_floor_blend_weight: float = NSFR_FLOOR_BLEND_WEIGHT
    one_year_tenor_months: float = ONE_YEAR_TENOR_MONTHS
    expected_loss_coefficient: float = EXPECTED_LOSS_COEFFICIENT
    operational_deposit_benefit: float = OPERATIONAL_DEPOSIT_BENEFIT
    operational_segment_clc_factor: float = OPERATIONAL_SEGMENT_CLC_FACTOR
    undrawn_scaling_factor: float = UNDRAWN_SCALING_FACTOR
    cpr_spread_per_unit: float = CPR_SPREAD_PER_UNIT
    nmd_core_spread_factor: float = NMD_CORE_SPREAD_FACTOR
    default_nmd_core_ratio: float = DEFAULT_NMD_CORE_RATIO
    commercial_buffer: float = COMMERCIAL_BUFFER

    def __post_init__(self):
        # Tables must stay hashable: engines are cached per RateTables
        for name in _TABLE_FIELDS:
            value = getattr(self, name)
            if isinstance(value, str):
                object.__setattr__(self, name, (value,))
            elif not isinstance(value, tuple):
                object.__setattr__(self, name, tuple(value))

    def currency_offset(self, currency: str) -> float:
        for row in self.currency_offsets:
            if row.currency == currency:
                return row.offset
        return 0.0

    def find_behavioural_model(self, model_id: str) -> Optional[BehaviouralModel]:
        for model in self.behavioural_models:
            if model.id == model_id:
                return model
        return None


DEFAULT_RATE_TABLES = RateTables()


# ── Governance ───────────────────────────────────────────────────────────────
@dataclass(frozen=True)
class ApprovalMatrixConfig:
    """RAROC thresholds (%) routing a deal to its approval level."""
    auto_approval_threshold: float = 15.0   # Target ROE
    l1_threshold: float = 10.0
    l2_threshold: float = 5.0

    @property
    def is_ordered(self) -> bool:
        return self.auto_approval_threshold >= self.l1_threshold >= self.l2_threshold

    @classmethod
    def from_dict(cls, data: dict) -> "ApprovalMatrixConfig":
        return cls(
            auto_approval_threshold=float(data.get("autoApprovalThreshold", 15.0)),
            l1_threshold=float(data.get("l1Threshold", 10.0)),
            l2_threshold=float(data.get("l2Threshold", 5.0)),
        )


DEFAULT_APPROVAL_MATRIX = ApprovalMatrixConfig()


# ── Market shocks ────────────────────────────────────────────────────────────
@dataclass(frozen=True)
class PricingShocks:
    """Additive market shocks in basis points."""
    interest_rate: float = 0.0
    liquidity_spread: float = 0.0

    @property
    def is_zero(self) -> bool:
        return self.interest_rate == 0 and self.liquidity_spread == 0


@dataclass(frozen=True)
class ShockScenario:
    """Named shock preset for scenario analysis."""
    name: str
    shocks: PricingShocks = field(default_factory=PricingShocks)
    description: str = ""


NO_SHOCKS = PricingShocks()

BASE_SHOCK_SCENARIO = ShockScenario(
    name="Baseline",
    shocks=NO_SHOCKS,
    description="Current market, no perturbation.",
)

RATES_UP_SCENARIO = ShockScenario(
    name="Rates +100bp",
    shocks=PricingShocks(interest_rate=100),
    description="Parallel shift of the base curve.",
)

LIQUIDITY_STRESS_SCENARIO = ShockScenario(
    name="Liquidity Stress",
    shocks=PricingShocks(liquidity_spread=50),
    description="Widening of the bank's term funding spread.",
)

COMBINED_STRESS_SCENARIO = ShockScenario(
    name="Combined Stress",
    shocks=PricingShocks(interest_rate=200, liquidity_spread=75),
    description="Rate hike with a funding squeeze.",
)

SHOCK_SCENARIOS = [
    BASE_SHOCK_SCENARIO,
    RATES_UP_SCENARIO,
    LIQUIDITY_STRESS_SCENARIO,
    COMBINED_STRESS_SCENARIO,
]
