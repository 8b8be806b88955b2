from __future__ import annotations

from ...deductions.model import DeductionRule
from .base import PayrollCalculator, as_decimal, floor_currency


class MonthlyPayrollCalculator(PayrollCalculator):
    """Monthly rule: a FIXED deduction is charged in full once per period."""

    def fixed_contribution(self, rule: DeductionRule) -> int:
        return floor_currency(as_decimal(rule.amount))
