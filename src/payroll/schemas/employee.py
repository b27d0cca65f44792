# src/payroll/schemas/employee.py
from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from enum import Enum
from typing import Any, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

PAYROLL_OVERRIDE_FIELDS = (
    "basic_pay",
    "hra",
    "others",
    "incentive",
    "pf",
    "esi",
    "tds",
    "staff_advance",
)


class Role(str, Enum):
    ADMIN = "admin"
    EMPLOYEE = "employee"


def round_rupees(value: Any) -> int:
    """
    Round a rupee amount to a whole rupee, halves away from zero.
    Works on the decimal representation so 0.5 steps never drift.
    """
    try:
        return int(Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))
    except InvalidOperation:
        raise ValueError(f"not a rupee amount: {value!r}")


class Employee(BaseModel):
    """
    One employee record as served by the attendance service.

    Frozen: the filter and payslip services copy what they need and never
    write back. Payroll overrides are Optional[int] so that an absent value
    (None, triggers defaulting) stays distinct from an explicit 0.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    id: str = Field(alias="_id")
    name: str = Field(default="", alias="employeeName")
    email: str = Field(default="", alias="employeeEmail")
    role: Role = Role.EMPLOYEE

    department: str = ""
    designation: str = ""
    work_location: str = Field(default="", alias="workLocation")
    resource_type: str = Field(default="", alias="resourceType")

    bank_account: Optional[str] = Field(default=None, alias="bankAccount")
    uan: Optional[str] = Field(default=None, alias="uanNumber")
    esi_number: Optional[str] = Field(default=None, alias="esiNumber")
    pan: Optional[str] = Field(default=None, alias="panNumber")

    join_date: Optional[date] = Field(default=None, alias="joinDate")
    status: bool = True

    wwt_id: Optional[str] = Field(default=None, alias="wwtId")
    additional_field: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("additionalFiled", "additionalField", "additional_field"),
        serialization_alias="additionalField",
    )

    basic_pay: Optional[int] = Field(default=None, alias="basicPay")
    hra: Optional[int] = None
    others: Optional[int] = None
    incentive: Optional[int] = None
    pf: Optional[int] = None
    esi: Optional[int] = None
    tds: Optional[int] = None
    staff_advance: Optional[int] = Field(default=None, alias="staffAdvance")

    @field_validator("id", mode="before")
    @classmethod
    def _id_as_str(cls, v: Any) -> str:
        return "" if v is None else str(v).strip()

    @field_validator(
        "name", "email", "department", "designation", "work_location", "resource_type",
        mode="before",
    )
    @classmethod
    def _none_as_blank(cls, v: Any) -> str:
        return "" if v is None else v

    @field_validator("role", mode="before")
    @classmethod
    def _normalize_role(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip().lower() or Role.EMPLOYEE.value
        return v if v is not None else Role.EMPLOYEE.value

    @field_validator("status", mode="before")
    @classmethod
    def _normalize_status(cls, v: Any) -> bool:
        if v is None:
            return True
        if isinstance(v, str):
            return v.strip().lower() in ("true", "1", "active", "yes")
        return bool(v)

    @field_validator("join_date", mode="before")
    @classmethod
    def _parse_join_date(cls, v: Any) -> Optional[date]:
        if v is None or isinstance(v, date):
            return v.date() if isinstance(v, datetime) else v
        s = str(v).strip()
        if not s:
            return None
        # "2023-05-01" or "2023-05-01T00:00:00.000Z"; the date part is enough
        try:
            return date.fromisoformat(s[:10])
        except ValueError:
            return None

    @field_validator(*PAYROLL_OVERRIDE_FIELDS, mode="before")
    @classmethod
    def _whole_rupees(cls, v: Any) -> Optional[int]:
        if v is None or v == "":
            return None
        if isinstance(v, bool):
            raise ValueError("payroll amounts must be numbers")
        return round_rupees(v)


class EmployeeStats(BaseModel):
    total: int = 0
    active: int = 0
    inactive: int = 0
