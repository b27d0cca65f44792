from conftest import FakeEmployeeClient
from src.payroll.dependencies import get_employee_client


def test_list_employees_defaults(api):
    res = api.get("/api/employees")
    assert res.status_code == 200
    body = res.json()
    assert [r["_id"] for r in body["rows"]] == ["2", "3", "1", "4", "5"]
    assert body["total"] == 5
    assert body["departments"] == ["Engineering", "Sales", "engineering"]
    assert body["stats"] == {"total": 5, "active": 3, "inactive": 2}
    assert body["has_active_filters"] is False
    assert body["rows"][0]["employeeName"] == "alice"


def test_list_employees_with_filters(api):
    res = api.get("/api/employees", params={
        "department": "engineering", "status": "active", "sort_by": "joinDate", "sort_order": "desc",
    })
    body = res.json()
    assert [r["_id"] for r in body["rows"]] == ["3"]
    assert body["has_active_filters"] is True
    assert body["filters"]["sort_field"] == "joinDate"
    # departments and stats describe the whole collection
    assert body["stats"]["total"] == 5


def test_list_employees_pages_the_sorted_rows(api):
    first = api.get("/api/employees", params={"page": 1, "size": 2}).json()
    assert [r["_id"] for r in first["rows"]] == ["2", "3"]
    assert (first["total"], first["page"], first["size"], first["pages"]) == (5, 1, 2, 3)

    last = api.get("/api/employees", params={"page": 3, "size": 2}).json()
    assert [r["_id"] for r in last["rows"]] == ["5"]
    assert last["pages"] == 3

    past_end = api.get("/api/employees", params={"page": 4, "size": 2}).json()
    assert past_end["rows"] == []
    assert past_end["total"] == 5
    assert past_end["stats"]["total"] == 5


def test_list_employees_default_page_size(api):
    body = api.get("/api/employees").json()
    assert (body["page"], body["size"], body["pages"]) == (1, 20, 1)


def test_list_employees_rejects_bad_paging(api):
    assert api.get("/api/employees", params={"page": 0}).status_code == 422
    assert api.get("/api/employees", params={"size": 0}).status_code == 422


def test_list_employees_rejects_unknown_status(api):
    res = api.get("/api/employees", params={"status": "retired"})
    assert res.status_code == 422
    assert res.json()["error_type"] == "RequestValidationError"


def test_get_employee_and_not_found(api):
    assert api.get("/api/employees/3").json()["employeeName"] == "Bob"

    res = api.get("/api/employees/nope")
    assert res.status_code == 404
    assert res.json()["message"] == "The requested resource was not found."


def test_service_unavailable_maps_to_503(api, employees):
    api.app.dependency_overrides[get_employee_client] = lambda: FakeEmployeeClient(employees, down=True)
    res = api.get("/api/employees")
    assert res.status_code == 503
    assert res.json()["error_type"] == "EmployeeServiceUnavailable"


def test_payslip_template(api):
    body = api.get("/api/payslips/template").json()
    assert body["month"] == "March"
    assert body["year"] == "2025"
    assert body["employeeName"] == "N/A"
    assert body["amountWords"] == "Zero only"


def test_payslip_for_employee(api):
    body = api.get("/api/payslips/employee/3").json()
    # Manager tier
    assert body["basicPay"] == 80000
    assert body["totalEarnings"] == 128000
    assert body["netPay"] == body["totalEarnings"] - body["totalDeductions"]
    assert body["joiningDate"] == "20/11/2020"


def test_payslip_for_missing_employee(api):
    assert api.get("/api/payslips/employee/nope").status_code == 404


def test_recompute(api):
    slip = api.get("/api/payslips/employee/2").json()
    res = api.post("/api/payslips/recompute", json={"payslip": slip, "changes": {"lopDays": 2, "hra": 0}})
    body = res.json()
    assert res.status_code == 200
    assert body["lopDays"] == 2
    assert body["hra"] == 0
    assert body["totalEarnings"] == slip["totalEarnings"] - slip["hra"]
    assert body["netPay"] == body["totalEarnings"] - body["totalDeductions"]


def test_recompute_bad_amount_is_400(api):
    slip = api.get("/api/payslips/template").json()
    res = api.post("/api/payslips/recompute", json={"payslip": slip, "changes": {"pf": "abc"}})
    assert res.status_code == 400


def test_amount_in_words_endpoint(api):
    body = api.get("/api/payslips/amount-in-words", params={"amount": 1234567}).json()
    assert body["words"] == "Twelve Lakh Thirty Four Thousand Five Hundred Sixty Seven only"
    assert api.get("/api/payslips/amount-in-words", params={"amount": -5}).status_code == 422
