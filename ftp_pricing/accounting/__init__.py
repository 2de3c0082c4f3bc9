"""
Accounting Entry Builder
========================
General-ledger preview of the internal funding transfer: the business
line pays (or receives) the FTP on the notional to Central Treasury.
Consumes a finished pricing result; never touches the rate computation.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Dict

from ftp_pricing.deal import Transaction

if TYPE_CHECKING:
    from ftp_pricing.engine.pricing import FTPResult


TREASURY_DESK = "Central Treasury"


@dataclass(frozen=True)
class AccountingEntry:
    """Debit / credit legs of the FTP transfer (currency units)."""
    source: str
    dest: str
    amount_debit: float
    amount_credit: float

    @property
    def is_balanced(self) -> bool:
        return self.amount_debit == self.amount_credit

    def to_dict(self) -> Dict[str, object]:
        return {
            "source": self.source,
            "dest": self.dest,
            "amountDebit": self.amount_debit,
            "amountCredit": self.amount_credit,
        }


EMPTY_ACCOUNTING_ENTRY = AccountingEntry(source="-", dest="-", amount_debit=0.0, amount_credit=0.0)


class AccountingEntryBuilder:

    def __init__(self, treasury_desk: str = TREASURY_DESK):
        self.treasury_desk = treasury_desk

    def build(self, deal: Transaction, result: "FTPResult") -> AccountingEntry:
        """Annual FTP amount = notional × total FTP, booked on both legs."""
        if deal.is_empty:
            return EMPTY_ACCOUNTING_ENTRY
        transfer = deal.amount * (result.total_ftp / 100.0)
        return AccountingEntry(
            source=deal.business_line or "-",
            dest=self.treasury_desk,
            amount_debit=transfer,
            amount_credit=transfer,
        )


def build_accounting_entry(deal: Transaction, result: "FTPResult") -> AccountingEntry:
    return AccountingEntryBuilder().build(deal, result)
