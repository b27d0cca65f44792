# src/payroll/routes/payslip_api.py
from __future__ import annotations

from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException, Query

from src.payroll.dependencies import get_employee_client, get_payslip_service
from src.payroll.schemas.payslip import Payslip, PayslipEdit
from src.payroll.services.employee_client import EmployeeClient
from src.payroll.services.payslip import PayslipService

router = APIRouter(prefix="/api/payslips", tags=["Payslips"])


@router.get("/template", response_model=Payslip)
def api_payslip_template(service: PayslipService = Depends(get_payslip_service)) -> Payslip:
    return service.default_template()


@router.get("/employee/{employee_id}", response_model=Payslip)
def api_payslip_for_employee(
    employee_id: str,
    client: EmployeeClient = Depends(get_employee_client),
    service: PayslipService = Depends(get_payslip_service),
) -> Payslip:
    emp = client.fetch_by_id(employee_id)
    if not emp:
        raise HTTPException(status_code=404, detail="Employee not found")
    return service.from_employee(emp)


@router.post("/recompute", response_model=Payslip)
def api_recompute_payslip(
    payload: PayslipEdit,
    service: PayslipService = Depends(get_payslip_service),
) -> Payslip:
    try:
        return service.apply_edits(payload.payslip, payload.changes)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))


@router.get("/amount-in-words")
def api_amount_in_words(
    amount: int = Query(..., ge=0),
    service: PayslipService = Depends(get_payslip_service),
) -> Dict[str, Any]:
    return {"amount": amount, "words": service.amount_in_words(amount)}
