"""Cost modules sub-package: one component of the FTP waterfall per module."""

from ftp_pricing.cost_modules.curve import LiquidityCurve, interpolate
from ftp_pricing.cost_modules.liquidity_cost import LiquidityCostCalculator
from ftp_pricing.cost_modules.regulatory_cost import RegulatoryCostCalculator
from ftp_pricing.cost_modules.esg import ESGAdjustmentResolver
from ftp_pricing.cost_modules.strategic_spread import StrategicSpreadResolver
from ftp_pricing.cost_modules.shock_overlay import apply_shocks
from ftp_pricing.cost_modules.capital import CapitalRAROCEngine
from ftp_pricing.cost_modules.approval import ApprovalLevel, route_approval

__all__ = [
    "LiquidityCurve",
    "interpolate",
    "LiquidityCostCalculator",
    "RegulatoryCostCalculator",
    "ESGAdjustmentResolver",
    "StrategicSpreadResolver",
    "apply_shocks",
    "CapitalRAROCEngine",
    "ApprovalLevel",
    "route_approval",
]
