# src/payroll/services/payslip.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Callable, Dict, Mapping, Optional, Sequence, Tuple

from pydantic.alias_generators import to_camel, to_snake

from src.payroll.config import settings as default_settings, Settings
from src.payroll.schemas.employee import Employee, round_rupees
from src.payroll.schemas.payslip import DEDUCTION_FIELDS, EARNING_FIELDS, Payslip, PayslipTotals
from src.payroll.utils.timezone import Clock, format_day_month_year, month_year, now_local

logger = logging.getLogger(__name__)

PF_RATE = Decimal("0.12")
ESI_RATE = Decimal("0.0075")
ESI_CEILING = 21000        # ESI applies up to and including this subtotal
TDS_RATE = Decimal("0.05")
TDS_THRESHOLD = 40000      # TDS applies strictly above this subtotal

NUMERIC_FIELDS = ("worked_days", "lop_days") + EARNING_FIELDS + DEDUCTION_FIELDS


@dataclass(frozen=True)
class SalaryDefaults:
    basic_pay: int
    hra: int
    others: int
    incentive: int


def _designation_has(*words: str) -> Callable[[str], bool]:
    def predicate(designation: str) -> bool:
        d = designation.lower()
        return any(w in d for w in words)
    return predicate


# Ordered: first matching predicate wins.
DESIGNATION_TIERS: Sequence[Tuple[Callable[[str], bool], SalaryDefaults]] = (
    (_designation_has("intern"), SalaryDefaults(15000, 6000, 1500, 1000)),
    (_designation_has("senior", "lead"), SalaryDefaults(50000, 20000, 5000, 5000)),
    (_designation_has("manager"), SalaryDefaults(80000, 32000, 8000, 8000)),
)
FALLBACK_TIER = SalaryDefaults(30000, 12000, 3000, 2000)


def salary_defaults_for(designation: Optional[str]) -> SalaryDefaults:
    for matches, defaults in DESIGNATION_TIERS:
        if matches(designation or ""):
            return defaults
    return FALLBACK_TIER


# -------------------------
# Amount in words (Indian numbering)
# -------------------------
_ONES = ("", "One", "Two", "Three", "Four", "Five", "Six", "Seven", "Eight", "Nine")
_TEENS = (
    "Ten", "Eleven", "Twelve", "Thirteen", "Fourteen",
    "Fifteen", "Sixteen", "Seventeen", "Eighteen", "Nineteen",
)
_TENS = ("", "", "Twenty", "Thirty", "Forty", "Fifty", "Sixty", "Seventy", "Eighty", "Ninety")

# (divisor, unit word) from the largest group down; crore may exceed 999
_INDIAN_GROUPS = ((10_000_000, "Crore"), (100_000, "Lakh"), (1_000, "Thousand"))


def _hundreds_words(num: int) -> list:
    words = []
    if num >= 100:
        words += [_ONES[num // 100], "Hundred"]
        num %= 100
    if num >= 20:
        words.append(_TENS[num // 10])
        num %= 10
    elif num >= 10:
        words.append(_TEENS[num - 10])
        return words
    if num > 0:
        words.append(_ONES[num])
    return words


def _group_words(num: int) -> list:
    # only the crore group can exceed 999 (amounts >= 100 crore)
    if num >= 1000:
        return _indian_words(num)
    return _hundreds_words(num)


def _indian_words(amount: int) -> list:
    words = []
    for divisor, unit in _INDIAN_GROUPS:
        if amount >= divisor:
            words += _group_words(amount // divisor) + [unit]
            amount %= divisor
    if amount > 0:
        words += _hundreds_words(amount)
    return words


def amount_in_words(amount: int) -> str:
    """
    Render a whole rupee amount in words using crore / lakh / thousand grouping.

    >>> amount_in_words(1234567)
    'Twelve Lakh Thirty Four Thousand Five Hundred Sixty Seven only'
    """
    if isinstance(amount, bool) or not isinstance(amount, int):
        raise ValueError(f"amount must be a whole number of rupees, got {amount!r}")
    if amount < 0:
        raise ValueError(f"amount must not be negative, got {amount}")
    if amount == 0:
        return "Zero only"
    return " ".join(_indian_words(amount)) + " only"


# -------------------------
# Totals
# -------------------------
def _field(fields: Any, name: str) -> Any:
    if isinstance(fields, Mapping):
        if name in fields:
            return fields[name]
        return fields.get(to_camel(name))
    return getattr(fields, name, None)


def _amount(fields: Any, name: str) -> int:
    v = _field(fields, name)
    return v if v else 0


def recompute_totals(fields: Any) -> PayslipTotals:
    """
    Sum earnings and deductions and derive net pay.

    `fields` may be a Payslip, any object with the field attributes, or a
    mapping keyed by snake_case or camelCase names. Missing values count as 0.
    Pure: nothing is written back to `fields`.
    """
    total_earnings = sum(_amount(fields, f) for f in EARNING_FIELDS)
    total_deductions = sum(_amount(fields, f) for f in DEDUCTION_FIELDS)
    return PayslipTotals(
        total_earnings=total_earnings,
        total_deductions=total_deductions,
        net_pay=total_earnings - total_deductions,
    )


def net_pay_in_words(net_pay: int) -> str:
    if net_pay < 0:
        return "Minus " + amount_in_words(-net_pay)
    return amount_in_words(net_pay)


# -------------------------
# Service
# -------------------------
class PayslipService:
    """
    Derives payslips from employee records.

    The clock is injected so month/year defaulting is reproducible in tests.
    """

    def __init__(self, clock: Clock = now_local, settings: Optional[Settings] = None):
        self.clock = clock
        self.settings = settings or default_settings

    def default_template(self) -> Payslip:
        na = self.settings.NOT_AVAILABLE
        month, year = month_year(self.clock())
        return Payslip(
            month=month,
            year=year,
            employee_name=na,
            work_location=na,
            employee_id=na,
            wwt_id=na,
            designation=na,
            department=na,
            bank_account=na,
            joining_date=na,
            uan=na,
            esi_number=na,
            pan=na,
            additional_field=na,
            amount_in_words="Zero only",
            payment_mode=self.settings.DEFAULT_PAYMENT_MODE,
        )

    def from_employee(self, employee: Employee) -> Payslip:
        na = self.settings.NOT_AVAILABLE
        month, year = month_year(self.clock())

        tier = salary_defaults_for(employee.designation)
        earnings = {
            name: getattr(employee, name) if getattr(employee, name) is not None else getattr(tier, name)
            for name in EARNING_FIELDS
        }
        subtotal = sum(earnings.values())

        computed = {
            "pf": round_rupees(PF_RATE * earnings["basic_pay"]),
            "esi": round_rupees(ESI_RATE * subtotal) if subtotal <= ESI_CEILING else 0,
            "tds": round_rupees(TDS_RATE * subtotal) if subtotal > TDS_THRESHOLD else 0,
            "staff_advance": 0,
        }
        deductions = {
            name: getattr(employee, name) if getattr(employee, name) is not None else computed[name]
            for name in DEDUCTION_FIELDS
        }

        fields: Dict[str, Any] = dict(
            month=month,
            year=year,
            employee_name=employee.name,
            work_location=employee.work_location,
            employee_id=employee.id,
            wwt_id=employee.wwt_id or employee.id,
            designation=employee.designation,
            department=employee.department,
            bank_account=employee.bank_account or na,
            joining_date=format_day_month_year(employee.join_date) if employee.join_date else na,
            uan=employee.uan or na,
            esi_number=employee.esi_number or na,
            pan=employee.pan or na,
            additional_field=employee.additional_field or na,
            payment_mode=self.settings.DEFAULT_PAYMENT_MODE,
            worked_days=self.settings.DEFAULT_WORKED_DAYS,
            lop_days=0,
            **earnings,
            **deductions,
        )
        payslip = self._with_totals(fields)
        logger.info(
            "Payslip derived for employee %s (%s) | earnings=%d deductions=%d net=%d",
            employee.id, employee.designation or "-", payslip.total_earnings,
            payslip.total_deductions, payslip.net_pay,
        )
        return payslip

    def recompute_totals(self, fields: Any) -> PayslipTotals:
        return recompute_totals(fields)

    def amount_in_words(self, amount: int) -> str:
        return amount_in_words(amount)

    def apply_edits(self, payslip: Payslip, changes: Optional[Mapping[str, Any]] = None) -> Payslip:
        """
        Return a new payslip with `changes` applied and totals + words rebuilt.

        A numeric field cleared to None or "" is stored as 0; clearing never
        falls back to the designation defaults. Derived fields in `changes`
        are ignored.
        """
        fields = payslip.model_dump()
        for key, value in (changes or {}).items():
            name = to_snake(key)
            if name not in fields or name in PayslipTotals.model_fields or name == "amount_in_words":
                logger.debug("apply_edits: ignoring field %r", key)
                continue
            if name in NUMERIC_FIELDS:
                value = 0 if value is None or value == "" else round_rupees(value)
            fields[name] = value
        return self._with_totals(fields)

    def _with_totals(self, fields: Dict[str, Any]) -> Payslip:
        totals = recompute_totals(fields)
        fields.update(totals.model_dump())
        fields["amount_in_words"] = net_pay_in_words(totals.net_pay)
        return Payslip(**fields)
