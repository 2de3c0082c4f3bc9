"""
Funds Transfer Pricing Engine & Deal Approval Router
====================================================
Quotes the internal transfer price of a banking deal and decides whether
it may be booked.

Modules
-------
- engine         : Pricing pipeline and FTP result record
- cost_modules   : Curve, Liquidity (LCR/NSFR), Regulatory, ESG, Strategic,
                   Capital & RAROC, Approval routing, Shock overlay
- accounting     : GL preview of the funding transfer
- stress_testing : Base-vs-shocked comparison and shock ladders
- data           : Sample deals and blotter pricing
"""

from ftp_pricing.engine.pricing import price

__version__ = "1.0.0"

__all__ = ["price"]
