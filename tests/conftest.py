from datetime import datetime
from typing import List, Optional

import pytest
import pytz
from fastapi.testclient import TestClient

from src.payroll.app import create_app
from src.payroll.dependencies import get_employee_client, get_payslip_service
from src.payroll.schemas.employee import Employee
from src.payroll.services.employee_client import EmployeeServiceUnavailable
from src.payroll.services.payslip import PayslipService

FROZEN_NOW = pytz.timezone("Asia/Kolkata").localize(datetime(2025, 3, 14, 10, 30))


def make_employee(**kw) -> Employee:
    data = {
        "_id": "e1",
        "employeeName": "Asha Rao",
        "employeeEmail": "asha@example.com",
        "role": "employee",
        "department": "Engineering",
        "designation": "Software Engineer",
        "workLocation": "Bengaluru",
        "joinDate": "2022-04-01",
        "status": True,
    }
    data.update(kw)
    return Employee.model_validate(data)


@pytest.fixture
def employees() -> List[Employee]:
    return [
        make_employee(_id="1", employeeName="Charlie", employeeEmail="charlie@x.com",
                      department="Sales", designation="Lead", workLocation="Pune",
                      joinDate="2021-01-10", status=True),
        make_employee(_id="2", employeeName="alice", employeeEmail="alice@x.com",
                      department="Engineering", designation="Intern", workLocation="Chennai",
                      joinDate="2023-06-01", status=False),
        make_employee(_id="3", employeeName="Bob", employeeEmail="bob@x.com",
                      department="engineering", designation="Manager", workLocation="Delhi",
                      joinDate="2020-11-20", status=True),
        make_employee(_id="4", employeeName="Dana", employeeEmail="dana@x.com",
                      department="", designation="Analyst", workLocation="Mumbai",
                      joinDate=None, status=True),
        make_employee(_id="5", employeeName="Eve", employeeEmail="eve@x.com",
                      department="   ", designation="Senior Analyst", workLocation="Pune",
                      joinDate="2019-02-02", status=False),
    ]


@pytest.fixture
def frozen_clock():
    return lambda: FROZEN_NOW


@pytest.fixture
def payslip_service(frozen_clock) -> PayslipService:
    return PayslipService(clock=frozen_clock)


class FakeEmployeeClient:
    def __init__(self, employees: List[Employee], down: bool = False):
        self.employees = employees
        self.down = down

    def fetch_all(self) -> List[Employee]:
        if self.down:
            raise EmployeeServiceUnavailable("connection refused")
        return list(self.employees)

    def fetch_by_id(self, employee_id: str) -> Optional[Employee]:
        if self.down:
            raise EmployeeServiceUnavailable("connection refused")
        return next((e for e in self.employees if e.id == employee_id), None)


@pytest.fixture
def fake_client(employees) -> FakeEmployeeClient:
    return FakeEmployeeClient(employees)


@pytest.fixture
def api(fake_client, payslip_service):
    app = create_app()
    app.dependency_overrides[get_employee_client] = lambda: fake_client
    app.dependency_overrides[get_payslip_service] = lambda: payslip_service
    with TestClient(app) as c:
        yield c
