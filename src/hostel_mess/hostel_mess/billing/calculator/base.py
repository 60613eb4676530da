from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Mapping


@dataclass(frozen=True)
class BillSplit:
    fixed_share_per_student: float
    rate_per_day: float
    total_present_days: int
    shares: dict[str, float]


class BillSplitCalculator(ABC):
    """Calculator interface (Strategy Pattern for splitting the mess bill)."""

    @abstractmethod
    def split(
        self,
        *,
        kitchen_rent: float,
        kitchen_expense: float,
        staff_salary: float,
        present_days: Mapping[str, int],
    ) -> BillSplit:
        raise NotImplementedError
