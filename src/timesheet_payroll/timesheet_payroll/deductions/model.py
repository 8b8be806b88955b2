from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional

from ..core.enums import DeductionKind


@dataclass(frozen=True)
class DeductionRule:
    """Recurring payroll deduction configured per employee.

    `amount` is a currency amount for FIXED rules and a percentage of gross
    pay (0..100) for PERCENTAGE rules.
    """

    deduction_id: int
    user_id: int
    name: str
    amount: Decimal
    kind: DeductionKind
    is_active: bool = True
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class DeductionPreset:
    name: str
    kind: DeductionKind
    amount: Decimal


PRESET_DEDUCTIONS: tuple[DeductionPreset, ...] = (
    DeductionPreset("National pension", DeductionKind.PERCENTAGE, Decimal("4.5")),
    DeductionPreset("Health insurance", DeductionKind.PERCENTAGE, Decimal("3.545")),
    DeductionPreset("Long-term care insurance", DeductionKind.PERCENTAGE, Decimal("0.4091")),
    DeductionPreset("Employment insurance", DeductionKind.PERCENTAGE, Decimal("0.9")),
    DeductionPreset("Meals", DeductionKind.FIXED, Decimal("100000")),
    DeductionPreset("Transport", DeductionKind.FIXED, Decimal("50000")),
)
