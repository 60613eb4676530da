"""Display formatting for a student's bill history.

Rows may come from older data with missing dates or corrupted amounts, so
entries are validated one by one and the bad ones are dropped.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Iterable, Mapping, Optional

from ..common.datetime_utils import month_year, to_utc_datetime
from ..core.constants import DEFAULT_CURRENCY_SYMBOL


@dataclass(frozen=True)
class DisplayEntry:
    month_label: str
    billing_cycle: str
    generated_on: str
    present_days: int
    amount: float
    student_share: str
    total_expense: str
    rate_per_day: str
    is_paid: bool = False

    def as_dict(self) -> dict:
        return {
            "month_label": self.month_label,
            "billing_cycle": self.billing_cycle,
            "generated_on": self.generated_on,
            "present_days": self.present_days,
            "amount": self.amount,
            "student_share": self.student_share,
            "total_expense": self.total_expense,
            "rate_per_day": self.rate_per_day,
            "is_paid": self.is_paid,
        }


def _field(entry: Any, name: str) -> Any:
    if isinstance(entry, Mapping):
        return entry.get(name)
    return getattr(entry, name, None)


def _as_datetime(value: Any) -> Optional[datetime]:
    if value is None:
        return None
    try:
        return to_utc_datetime(value)
    except (TypeError, ValueError):
        return None


def _as_amount(value: Any) -> Optional[float]:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    number = float(value)
    if not math.isfinite(number) or number < 0:
        return None
    return number


def _as_count(value: Any) -> int:
    number = _as_amount(value)
    return int(number) if number is not None else 0


def _as_optional_amount(value: Any) -> float:
    number = _as_amount(value)
    return number if number is not None else 0.0


def format_currency(amount: float, symbol: str = DEFAULT_CURRENCY_SYMBOL, *, decimals: int = 2) -> str:
    return f"{symbol}{amount:,.{decimals}f}"


def format_history(
    entries: Iterable[Any],
    *,
    currency_symbol: str = DEFAULT_CURRENCY_SYMBOL,
    paid_cycles: Optional[Iterable[str]] = None,
) -> Optional[list[DisplayEntry]]:
    """Newest-first display rows, or None when no entry is usable."""
    paid = set(paid_cycles or ())

    valid: list[tuple[datetime, Any, float]] = []
    for entry in entries or ():
        when = _as_datetime(_field(entry, "date"))
        share = _as_amount(_field(entry, "student_share"))
        if when is None or share is None:
            continue
        valid.append((when, entry, share))

    if not valid:
        return None

    valid.sort(key=lambda item: item[0], reverse=True)

    out: list[DisplayEntry] = []
    for when, entry, share in valid:
        cycle = _field(entry, "month_year") or month_year(when)
        out.append(
            DisplayEntry(
                month_label=when.strftime("%B %Y"),
                billing_cycle=cycle,
                generated_on=when.strftime("%d %b %Y"),
                present_days=_as_count(_field(entry, "present_days")),
                amount=share,
                student_share=format_currency(share, currency_symbol, decimals=0),
                total_expense=format_currency(_as_optional_amount(_field(entry, "total_expense")), currency_symbol),
                rate_per_day=format_currency(_as_optional_amount(_field(entry, "rate_per_day")), currency_symbol),
                is_paid=cycle in paid,
            )
        )
    return out
