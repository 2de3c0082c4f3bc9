"""Engine sub-package: the pricing pipeline and its result record."""

from ftp_pricing.engine.pricing import (
    FTPResult,
    PricingEngine,
    price,
)

__all__ = ["FTPResult", "PricingEngine", "price"]
