"""
Domain: Sale records.

Contract excerpts relevant here:
- Exactly one sale record is derived from every successfully saved invoice.
- The sale copies the invoice total at creation time and is dated with its own
  creation timestamp, independent of the invoice issue date.
- Sale records are append-only; nothing updates or deletes them.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from .time import require_utc_timestamp


@dataclass(frozen=True, slots=True)
class SaleRecord:
    """
    Immutable revenue record for one saved invoice.

    All timestamps must be passed explicitly.
    """

    sale_id: str
    invoice_id: str
    total_amount: Decimal
    date: datetime

    def __post_init__(self) -> None:
        require_utc_timestamp("date", self.date)
        if self.total_amount < 0:
            raise ValueError("total_amount must be >= 0")
