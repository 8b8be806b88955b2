from __future__ import annotations

from ...core.constants import DAYS_PER_MONTH
from ...deductions.model import DeductionRule
from .base import PayrollCalculator, as_decimal, floor_currency


class DailyPayrollCalculator(PayrollCalculator):
    """Single-day rule: a monthly FIXED deduction is amortised over 30 days."""

    def fixed_contribution(self, rule: DeductionRule) -> int:
        return floor_currency(as_decimal(rule.amount) / DAYS_PER_MONTH)
