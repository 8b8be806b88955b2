"""Entry points shared by every pay view: hours for one entry, pay for a set."""

from __future__ import annotations

from typing import Any, Iterable, Sequence

from ..core.enums import NetPayPolicy
from ..deductions.model import DeductionRule
from .calculator.monthly_calculator import MonthlyPayrollCalculator
from .hours import compute_hours
from .model import PayrollResult

__all__ = ["compute_hours", "compute_payroll"]


def compute_payroll(
    entries: Iterable[Any],
    hourly_wage: int,
    rules: Sequence[DeductionRule],
    *,
    net_pay_policy: NetPayPolicy = NetPayPolicy.PRESERVE,
) -> PayrollResult:
    return MonthlyPayrollCalculator(net_pay_policy=net_pay_policy).compute(entries, hourly_wage, rules)
