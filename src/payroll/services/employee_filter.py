# src/payroll/services/employee_filter.py
from __future__ import annotations

import logging
import unicodedata
from typing import Iterable, List, Optional, Tuple, Union

from src.payroll.schemas.employee import Employee, EmployeeStats
from src.payroll.schemas.query import QueryCriteria, SortField, SortOrder, StatusFilter

logger = logging.getLogger(__name__)


# -------------------------
# helpers
# -------------------------
def _s(v: Optional[str]) -> str:
    """None -> "" so every text field can be searched and compared."""
    return v if v is not None else ""


def _collation_key(value: str) -> Tuple[str, str]:
    """
    Locale-aware ordering independent of the process locale:
    - primary: accents stripped, case folded ("Émile" sorts with "emile")
    - tie-break: lowercase before uppercase ("abc" < "Abc")
    """
    decomposed = unicodedata.normalize("NFKD", value)
    base = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return base.casefold(), value.swapcase()


def _sort_value(employee: Employee, field: SortField) -> str:
    if field is SortField.EMAIL:
        return _s(employee.email)
    if field is SortField.DEPARTMENT:
        return _s(employee.department)
    if field is SortField.JOIN_DATE:
        return employee.join_date.isoformat() if employee.join_date else ""
    return _s(employee.name)


def _search_haystack(employee: Employee) -> Tuple[str, ...]:
    return (
        _s(employee.name).lower(),
        _s(employee.email).lower(),
        _s(employee.department).lower(),
        _s(employee.designation).lower(),
        _s(employee.work_location).lower(),
    )


def _coerce(enum_cls, value, fallback):
    try:
        return enum_cls(value)
    except ValueError:
        logger.warning("Unknown %s %r; using %r", enum_cls.__name__, value, fallback.value)
        return fallback


# -------------------------
# Service
# -------------------------
class EmployeeFilterService:
    """
    Filters, searches and sorts an in-memory employee list against one live
    set of criteria.

    The criteria belong to a single consumer (one UI screen, one request);
    mutators take effect on the next filter_and_sort() call. Not thread-safe.
    """

    def __init__(self, criteria: Optional[QueryCriteria] = None):
        self._criteria = criteria.model_copy() if criteria is not None else QueryCriteria()

    @property
    def criteria(self) -> QueryCriteria:
        return self._criteria.model_copy()

    # -------------------------
    # Listing / Search
    # -------------------------
    def filter_and_sort(self, employees: Optional[Iterable[Employee]]) -> List[Employee]:
        if not employees:
            return []

        filtered = list(employees)
        c = self._criteria

        query = c.search_text.strip().lower()
        if query:
            filtered = [e for e in filtered if any(query in v for v in _search_haystack(e))]

        if c.department:
            department = c.department.lower()
            filtered = [e for e in filtered if _s(e.department).lower() == department]

        if c.status is not StatusFilter.ALL:
            is_active = c.status is StatusFilter.ACTIVE
            filtered = [e for e in filtered if e.status is is_active]

        filtered.sort(
            key=lambda e: _collation_key(_sort_value(e, c.sort_field)),
            reverse=c.sort_order is SortOrder.DESC,
        )
        logger.debug(
            "filter_and_sort: %d match(es) | q=%r department=%r status=%s sort=%s/%s",
            len(filtered), c.search_text, c.department, c.status.value,
            c.sort_field.value, c.sort_order.value,
        )
        return filtered

    def unique_departments(self, employees: Optional[Iterable[Employee]]) -> List[str]:
        if not employees:
            return []
        departments = {e.department for e in employees if e.department and e.department.strip()}
        return sorted(departments)

    def summarize(self, employees: Optional[Iterable[Employee]]) -> EmployeeStats:
        rows = list(employees or [])
        active = sum(1 for e in rows if e.status)
        return EmployeeStats(total=len(rows), active=active, inactive=len(rows) - active)

    # -------------------------
    # Criteria mutators
    # -------------------------
    def set_search(self, query: Optional[str]) -> None:
        self._criteria.search_text = query or ""

    def set_department(self, department: Optional[str]) -> None:
        self._criteria.department = department or ""

    def set_status(self, status: Union[StatusFilter, str]) -> None:
        self._criteria.status = _coerce(StatusFilter, status, StatusFilter.ALL)

    def set_sort(self, field: Union[SortField, str], order: Union[SortOrder, str] = SortOrder.ASC) -> None:
        self._criteria.sort_field = _coerce(SortField, field, SortField.NAME)
        self._criteria.sort_order = _coerce(SortOrder, order, SortOrder.ASC)

    def toggle_sort_order(self) -> None:
        c = self._criteria
        c.sort_order = SortOrder.DESC if c.sort_order is SortOrder.ASC else SortOrder.ASC

    def clear(self) -> None:
        self._criteria = QueryCriteria()

    def has_active_filters(self) -> bool:
        c = self._criteria
        return c.search_text != "" or c.department != "" or c.status is not StatusFilter.ALL
