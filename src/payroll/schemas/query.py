# src/payroll/schemas/query.py
from __future__ import annotations

from enum import Enum

from pydantic import BaseModel


class StatusFilter(str, Enum):
    ALL = "all"
    ACTIVE = "active"
    INACTIVE = "inactive"


class SortField(str, Enum):
    NAME = "name"
    EMAIL = "email"
    DEPARTMENT = "department"
    JOIN_DATE = "joinDate"


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"


class QueryCriteria(BaseModel):
    # defaults double as the "no filters" state restored by clear()
    search_text: str = ""
    department: str = ""
    status: StatusFilter = StatusFilter.ALL
    sort_field: SortField = SortField.NAME
    sort_order: SortOrder = SortOrder.ASC
