# src/payroll/services/employee_client.py
from __future__ import annotations

import logging
from typing import Any, List, Optional

import requests
from pydantic import ValidationError

from src.payroll.config import settings as default_settings, Settings
from src.payroll.schemas.employee import Employee, Role

logger = logging.getLogger(__name__)


class EmployeeServiceError(Exception):
    """Base error for the employee data source."""


class EmployeeServiceUnavailable(EmployeeServiceError):
    """Transport failure, 5xx/4xx answer, or a body we cannot read."""


def _records(body: Any) -> Optional[list]:
    # the service answers either {"data": [...]} or a bare list
    if isinstance(body, dict) and isinstance(body.get("data"), list):
        return body["data"]
    if isinstance(body, list):
        return body
    return None


class EmployeeClient:
    def __init__(self, base_url: Optional[str] = None, timeout: Optional[int] = None,
                 session: Optional[requests.Session] = None, settings: Optional[Settings] = None):
        settings = settings or default_settings
        self.base_url = (base_url or settings.EMPLOYEE_API_BASE).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.EMPLOYEE_API_TIMEOUT
        self.session = session or requests.Session()

    def _get(self, path: str) -> requests.Response:
        url = f"{self.base_url}{path}"
        try:
            return self.session.get(url, timeout=self.timeout)
        except requests.RequestException as exc:
            logger.error("GET %s failed: %s", url, exc)
            raise EmployeeServiceUnavailable(f"Employee service unreachable: {exc}") from exc

    @staticmethod
    def _json(res: requests.Response) -> Any:
        try:
            return res.json()
        except ValueError as exc:
            raise EmployeeServiceUnavailable("Employee service returned invalid JSON") from exc

    def fetch_all(self) -> List[Employee]:
        """
        All non-admin employees. Records that fail validation are skipped.
        """
        res = self._get("/allemp")
        if res.status_code >= 400:
            logger.error("GET /allemp -> %s", res.status_code)
            raise EmployeeServiceUnavailable(f"Employee service answered {res.status_code}")

        records = _records(self._json(res))
        if records is None:
            raise EmployeeServiceUnavailable("Invalid response format")

        employees: List[Employee] = []
        for raw in records:
            try:
                emp = Employee.model_validate(raw)
            except ValidationError as exc:
                logger.warning("Skipping unreadable employee record %r: %s",
                               (raw or {}).get("_id") if isinstance(raw, dict) else raw, exc)
                continue
            if emp.role is Role.EMPLOYEE:
                employees.append(emp)

        logger.info("Loaded %d employee(s) from %s", len(employees), self.base_url)
        return employees

    def fetch_by_id(self, employee_id: str) -> Optional[Employee]:
        """One employee, or None when the service does not know the id."""
        employee_id = (employee_id or "").strip()
        if not employee_id:
            return None

        res = self._get(f"/view/{requests.utils.quote(employee_id, safe='')}")
        if res.status_code == 404:
            logger.info("Employee %s not found", employee_id)
            return None
        if res.status_code >= 400:
            logger.error("GET /view/%s -> %s", employee_id, res.status_code)
            raise EmployeeServiceUnavailable(f"Employee service answered {res.status_code}")

        body = self._json(res)
        if isinstance(body, dict) and isinstance(body.get("data"), dict):
            body = body["data"]
        if not body:
            return None
        try:
            return Employee.model_validate(body)
        except ValidationError as exc:
            raise EmployeeServiceUnavailable(f"Unreadable employee record for {employee_id}") from exc
