# src/payroll/schemas/payslip.py
from __future__ import annotations

from typing import Any, Dict, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

EARNING_FIELDS = ("basic_pay", "hra", "others", "incentive")
DEDUCTION_FIELDS = ("pf", "esi", "tds", "staff_advance")


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PayslipTotals(_CamelModel):
    total_earnings: int = 0
    total_deductions: int = 0
    net_pay: int = 0


class Payslip(_CamelModel):
    """
    One pay period for one employee, ready for the export layer.
    Every field is a plain str or int; nothing is left as None.
    """

    month: str
    year: str

    employee_name: str
    work_location: str
    employee_id: str
    wwt_id: str
    designation: str
    department: str
    bank_account: str
    joining_date: str
    uan: str
    esi_number: str
    pan: str
    additional_field: str

    worked_days: int = 0
    lop_days: int = 0

    basic_pay: int = 0
    hra: int = 0
    others: int = 0
    incentive: int = 0

    pf: int = 0
    esi: int = 0
    tds: int = 0
    staff_advance: int = 0

    total_earnings: int = 0
    total_deductions: int = 0
    net_pay: int = 0

    amount_in_words: str = Field(
        default="Zero only",
        validation_alias=AliasChoices("amountWords", "amountInWords", "amount_in_words"),
        serialization_alias="amountWords",
    )
    payment_mode: str = "Bank Transfer"


class PayslipEdit(BaseModel):
    """Body of a recompute request: the current payslip plus the edited fields."""

    payslip: Payslip
    changes: Dict[str, Any] = Field(default_factory=dict)

    @field_validator("changes", mode="before")
    @classmethod
    def _none_as_empty(cls, v: Optional[Dict[str, Any]]) -> Dict[str, Any]:
        return v or {}
