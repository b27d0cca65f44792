# src/payroll/dependencies.py
from functools import lru_cache

from src.payroll.services.employee_client import EmployeeClient
from src.payroll.services.payslip import PayslipService


def get_employee_client() -> EmployeeClient:
    # fresh client per request: requests.Session is not shared across threads
    return EmployeeClient()


@lru_cache
def get_payslip_service() -> PayslipService:
    return PayslipService()
