from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Mapping

from .base import BillSplit, BillSplitCalculator


def round_share(amount: float) -> float:
    """Round to a whole unit, halves away from zero (not banker's rounding)."""
    return float(Decimal(repr(amount)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


class FairSplitCalculator(BillSplitCalculator):
    """Rent + salary split equally; kitchen expense split by present days."""

    def split(
        self,
        *,
        kitchen_rent: float,
        kitchen_expense: float,
        staff_salary: float,
        present_days: Mapping[str, int],
    ) -> BillSplit:
        if not present_days:
            return BillSplit(fixed_share_per_student=0.0, rate_per_day=0.0, total_present_days=0, shares={})

        fixed_share = (kitchen_rent + staff_salary) / len(present_days)
        total_present = sum(int(d) for d in present_days.values())
        rate = kitchen_expense / total_present if total_present > 0 else 0.0

        shares = {
            hostel_id: round_share(fixed_share + int(days) * rate)
            for hostel_id, days in present_days.items()
        }
        return BillSplit(
            fixed_share_per_student=fixed_share,
            rate_per_day=rate,
            total_present_days=total_present,
            shares=shares,
        )
