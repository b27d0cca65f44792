# src/payroll/routes/employees_api.py
from __future__ import annotations

import math
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from src.payroll.dependencies import get_employee_client
from src.payroll.schemas.employee import Employee
from src.payroll.schemas.query import SortField, SortOrder, StatusFilter
from src.payroll.services.employee_client import EmployeeClient
from src.payroll.services.employee_filter import EmployeeFilterService

router = APIRouter(prefix="/api/employees", tags=["Employees"])


# ----------------------------------------------------------
# LIST
# ----------------------------------------------------------
@router.get("")
def api_list_employees(
    q: Optional[str] = Query(None),
    department: Optional[str] = Query(None),
    status: StatusFilter = Query(StatusFilter.ALL),
    sort_by: SortField = Query(SortField.NAME),
    sort_order: SortOrder = Query(SortOrder.ASC),
    page: int = Query(1, ge=1),
    size: int = Query(20, ge=1, le=100),
    client: EmployeeClient = Depends(get_employee_client),
) -> Dict[str, Any]:
    employees = client.fetch_all()

    # criteria live for this request only
    filters = EmployeeFilterService()
    filters.set_search(q)
    filters.set_department(department)
    filters.set_status(status)
    filters.set_sort(sort_by, sort_order)

    rows = filters.filter_and_sort(employees)
    total = len(rows)
    pages = max(1, math.ceil(total / size))
    offset = (page - 1) * size

    return {
        "rows": [e.model_dump(mode="json", by_alias=True) for e in rows[offset:offset + size]],
        "total": total,
        "page": page,
        "size": size,
        "pages": pages,
        "departments": filters.unique_departments(employees),
        "stats": filters.summarize(employees).model_dump(),
        "filters": filters.criteria.model_dump(mode="json"),
        "has_active_filters": filters.has_active_filters(),
    }


# ----------------------------------------------------------
# SINGLE
# ----------------------------------------------------------
@router.get("/{employee_id}")
def api_get_employee(
    employee_id: str,
    client: EmployeeClient = Depends(get_employee_client),
) -> Dict[str, Any]:
    emp: Optional[Employee] = client.fetch_by_id(employee_id)
    if not emp:
        raise HTTPException(status_code=404, detail="Employee not found")
    return emp.model_dump(mode="json", by_alias=True)
