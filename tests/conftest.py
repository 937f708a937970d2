"""Shared test fixtures — in-memory fake backend, API client, session helpers.

The fake backend is a small FastAPI app speaking the real envelope format
(``{success, message, data, timestamp}``). ``ApiClient`` talks to it through
``httpx.ASGITransport``, so requests go through the full HTTP stack without
a network. Every request is recorded in ``FakeBackend.requests``.
"""

from __future__ import annotations

import uuid
from datetime import date, datetime, timezone
from typing import AsyncGenerator, Optional

import httpx
import pytest
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from hr_client.api import ApiClient
from hr_client.auth.session import SessionContext
from hr_client.common.constants import EmployeeStatus, LeaveStatus, LeaveType, UserRole

API_PREFIX = "/api/v1"
BASE_URL = f"http://test{API_PREFIX}"
REVIEWERS = {UserRole.manager.value, UserRole.hr.value}


# ── Envelope helpers ────────────────────────────────────────────────

def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def ok(data=None, message: str = "OK", status_code: int = 200) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": True, "message": message, "data": data, "timestamp": _now()},
    )


def fail(message: str, status_code: int = 400) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "message": message, "data": None, "timestamp": _now()},
    )


# ── In-memory backend state ─────────────────────────────────────────

class FakeBackend:
    """Backend state plus request log, shared between the app and the tests."""

    def __init__(self) -> None:
        self.employees: dict[str, dict] = {}
        self.leaves: dict[str, dict] = {}
        self.balances: dict[str, dict] = {}
        self.departments: dict[str, dict] = {}
        self.positions: dict[str, dict] = {}
        self.tokens: dict[str, tuple[str, str]] = {}
        self.requests: list[tuple[str, str, list[tuple[str, str]]]] = []
        # (method, path) pairs that answer 500
        self.broken: set[tuple[str, str]] = set()
        # (method, path) pairs that answer 200 with success=false
        self.soft_failures: dict[tuple[str, str], str] = {}

    # -- factories ----------------------------------------------------

    def add_employee(
        self,
        *,
        first_name: str = "Test",
        last_name: str = "User",
        role: UserRole = UserRole.employee,
        department_id: str = "dept-eng",
        department_name: str = "Engineering",
    ) -> dict:
        emp_id = str(uuid.uuid4())
        emp = {
            "id": emp_id,
            "firstName": first_name,
            "lastName": last_name,
            "fullName": f"{first_name} {last_name}",
            "email": f"{first_name.lower()}.{last_name.lower()}@example.com",
            "phone": "+90 555 000 0000",
            "hireDate": "2024-01-15",
            "birthDate": "1990-05-20",
            "address": "",
            "departmentId": department_id,
            "departmentName": department_name,
            "positionId": "pos-dev",
            "positionTitle": "Developer",
            "managerFullName": None,
            "role": role.value,
            "status": EmployeeStatus.active.value,
            "createdAt": _now(),
            "updatedAt": _now(),
        }
        self.employees[emp_id] = emp
        self.balances[emp_id] = {
            "employeeId": emp_id,
            "vacationBalance": 14,
            "maternityBalance": 0,
        }
        return emp

    def add_department(self, name: str, description: Optional[str] = None) -> dict:
        return self._add_catalog_entry(self.departments, "name", name, description)

    def add_position(self, title: str, description: Optional[str] = None) -> dict:
        return self._add_catalog_entry(self.positions, "title", title, description)

    @staticmethod
    def _add_catalog_entry(store: dict, label: str, value: str, description: Optional[str]) -> dict:
        entry_id = str(uuid.uuid4())
        store[entry_id] = {
            "id": entry_id,
            label: value,
            "description": description,
            "createdAt": _now(),
            "updatedAt": _now(),
        }
        return store[entry_id]

    def session_for(self, employee: dict) -> SessionContext:
        token = uuid.uuid4().hex
        self.tokens[token] = (employee["id"], employee["role"])
        return SessionContext(
            token=token,
            employee_id=employee["id"],
            email=employee["email"],
            role=UserRole(employee["role"]),
        )

    def add_leave(
        self,
        employee: dict,
        start: date,
        end: date,
        *,
        status: LeaveStatus = LeaveStatus.approved,
        leave_type: LeaveType = LeaveType.vacation,
        reason: str = "Family trip",
    ) -> dict:
        leave_id = str(uuid.uuid4())
        leave = {
            "id": leave_id,
            "employeeId": employee["id"],
            "employeeFullName": employee["fullName"],
            "email": employee["email"],
            "departmentName": employee["departmentName"],
            "positionName": employee["positionTitle"],
            "leaveType": leave_type.value,
            "startDate": start.isoformat(),
            "endDate": end.isoformat(),
            "totalDays": (end - start).days + 1,
            "reason": reason,
            "status": status.value,
            "approverName": None,
            "approvedAt": None,
            "createdAt": _now(),
        }
        self.leaves[leave_id] = leave
        return leave

    # -- helpers used by the routes ----------------------------------

    def requests_to(self, method: str, path: str) -> list[list[tuple[str, str]]]:
        return [params for m, p, params in self.requests if m == method and p == API_PREFIX + path]

    def conflicts(self, employee_id: str, start: str, end: str, exclude: Optional[str] = None) -> bool:
        return any(
            lv["employeeId"] == employee_id
            and lv["status"] == LeaveStatus.approved.value
            and lv["id"] != exclude
            and start <= lv["endDate"]
            and end >= lv["startDate"]
            for lv in self.leaves.values()
        )


def _paginate(rows: list[dict], request: Request) -> dict:
    qp = request.query_params
    page = int(qp.get("page", 0))
    size = int(qp.get("size", 10))
    sort_by = qp.get("sortBy", "createdAt")
    reverse = qp.get("sortDirection", "asc") == "desc"
    rows = sorted(rows, key=lambda r: str(r.get(sort_by) or ""), reverse=reverse)
    total = len(rows)
    total_pages = (total + size - 1) // size if total else 0
    return {
        "data": rows[page * size:(page + 1) * size],
        "total": total,
        "page": page,
        "size": size,
        "totalPages": total_pages,
        "hasNext": page + 1 < total_pages,
        "hasPrevious": page > 0,
    }


def _filter_leaves(rows: list[dict], request: Request) -> list[dict]:
    qp = request.query_params
    search = qp.get("filterRequest.searchTerm", "").lower()
    if search:
        rows = [
            r for r in rows
            if search in r["employeeFullName"].lower() or search in (r["reason"] or "").lower()
        ]
    if "filterRequest.status" in qp:
        rows = [r for r in rows if r["status"] == qp["filterRequest.status"]]
    if "filterRequest.leaveType" in qp:
        rows = [r for r in rows if r["leaveType"] == qp["filterRequest.leaveType"]]
    if "filterRequest.startDateAfter" in qp:
        rows = [r for r in rows if r["startDate"] >= qp["filterRequest.startDateAfter"]]
    if "filterRequest.startDateBefore" in qp:
        rows = [r for r in rows if r["startDate"] <= qp["filterRequest.startDateBefore"]]
    return rows


def _list_item(leave: dict) -> dict:
    keys = (
        "id", "employeeId", "employeeFullName", "leaveType",
        "startDate", "endDate", "totalDays", "status",
    )
    return {k: leave[k] for k in keys}


def create_backend_app(backend: FakeBackend) -> FastAPI:
    """Build the fake HR backend around *backend*."""
    app = FastAPI()

    @app.middleware("http")
    async def record_and_authenticate(request: Request, call_next):
        key = (request.method, request.url.path)
        backend.requests.append((request.method, request.url.path, request.query_params.multi_items()))
        if key in backend.broken:
            return fail("Internal server error", status_code=500)
        if key in backend.soft_failures:
            return fail(backend.soft_failures[key], status_code=200)

        auth = request.headers.get("Authorization", "")
        token = auth[7:] if auth.startswith("Bearer ") else ""
        if token not in backend.tokens:
            return fail("Authentication required", status_code=401)
        request.state.employee_id, request.state.role = backend.tokens[token]
        return await call_next(request)

    def _require_search_term(request: Request) -> Optional[JSONResponse]:
        if "filterRequest.searchTerm" not in request.query_params:
            return fail("filterRequest must not be null")
        return None

    # ── Leaves ──────────────────────────────────────────────────────

    @app.get(f"{API_PREFIX}/leaves")
    async def list_leaves(request: Request):
        if request.state.role not in REVIEWERS:
            return fail("Access denied", status_code=403)
        if (resp := _require_search_term(request)) is not None:
            return resp
        rows = _filter_leaves([_list_item(lv) for lv in backend.leaves.values()], request)
        return ok(_paginate(rows, request))

    @app.get(f"{API_PREFIX}/leaves/my-requests")
    async def my_leaves(request: Request):
        if (resp := _require_search_term(request)) is not None:
            return resp
        rows = [
            _list_item(lv) for lv in backend.leaves.values()
            if lv["employeeId"] == request.state.employee_id
        ]
        return ok(_paginate(_filter_leaves(rows, request), request))

    @app.get(f"{API_PREFIX}/leaves/my-balance")
    async def my_balance(request: Request):
        return ok(backend.balances[request.state.employee_id])

    @app.get(f"{API_PREFIX}/leaves/{{employee_id}}/balance")
    async def employee_balance(employee_id: str, request: Request):
        if request.state.role not in REVIEWERS and employee_id != request.state.employee_id:
            return fail("Access denied", status_code=403)
        if employee_id not in backend.balances:
            return fail("Employee not found", status_code=404)
        return ok(backend.balances[employee_id])

    @app.get(f"{API_PREFIX}/leaves/{{leave_id}}")
    async def get_leave(leave_id: str, request: Request):
        leave = backend.leaves.get(leave_id)
        if leave is None:
            return fail("Leave request not found", status_code=404)
        return ok(leave)

    @app.post(f"{API_PREFIX}/leaves")
    async def create_leave(request: Request):
        body = await request.json()
        emp = backend.employees[request.state.employee_id]
        if backend.conflicts(emp["id"], body["startDate"], body["endDate"]):
            return fail("You already have approved leave in this date range.", status_code=409)
        leave = backend.add_leave(
            emp,
            date.fromisoformat(body["startDate"]),
            date.fromisoformat(body["endDate"]),
            status=LeaveStatus.pending,
            leave_type=LeaveType(body["leaveType"]),
            reason=body.get("reason"),
        )
        return ok(leave, message="Leave request created", status_code=201)

    @app.patch(f"{API_PREFIX}/leaves/{{leave_id}}")
    async def edit_leave(leave_id: str, request: Request):
        leave = backend.leaves.get(leave_id)
        if leave is None:
            return fail("Leave request not found", status_code=404)
        if leave["employeeId"] != request.state.employee_id or leave["status"] != "PENDING":
            return fail("Only your own pending requests can be edited.")
        body = await request.json()
        start = body.get("startDate", leave["startDate"])
        end = body.get("endDate", leave["endDate"])
        if backend.conflicts(leave["employeeId"], start, end, exclude=leave_id):
            return fail("You already have approved leave in this date range.", status_code=409)
        leave.update(body)
        leave["totalDays"] = (date.fromisoformat(end) - date.fromisoformat(start)).days + 1
        return ok(leave, message="Leave request updated")

    @app.delete(f"{API_PREFIX}/leaves/{{leave_id}}")
    async def cancel_leave(leave_id: str, request: Request):
        leave = backend.leaves.get(leave_id)
        if leave is None:
            return fail("Leave request not found", status_code=404)
        if leave["status"] != "PENDING":
            return fail("Only pending requests can be cancelled.")
        leave["status"] = LeaveStatus.cancelled.value
        return ok(None, message="Leave request cancelled")

    async def _decide(leave_id: str, request: Request, status: LeaveStatus) -> JSONResponse:
        if request.state.role not in REVIEWERS:
            return fail("Access denied", status_code=403)
        leave = backend.leaves.get(leave_id)
        if leave is None:
            return fail("Leave request not found", status_code=404)
        if leave["status"] != "PENDING":
            return fail("Leave request has already been processed.")
        leave["status"] = status.value
        leave["approverName"] = backend.employees[request.state.employee_id]["fullName"]
        leave["approvedAt"] = _now()
        return ok(leave)

    @app.patch(f"{API_PREFIX}/leaves/{{leave_id}}/approve")
    async def approve_leave(leave_id: str, request: Request):
        return await _decide(leave_id, request, LeaveStatus.approved)

    @app.patch(f"{API_PREFIX}/leaves/{{leave_id}}/reject")
    async def reject_leave(leave_id: str, request: Request):
        return await _decide(leave_id, request, LeaveStatus.rejected)

    # ── Employees ───────────────────────────────────────────────────

    def _filter_employees(rows: list[dict], request: Request) -> list[dict]:
        qp = request.query_params
        search = qp.get("filterRequest.searchTerm", "").lower()
        if search:
            rows = [r for r in rows if search in r["fullName"].lower() or search in r["email"]]
        for field in ("firstName", "lastName", "departmentId", "status", "role"):
            if f"filterRequest.{field}" in qp:
                rows = [r for r in rows if r[field] == qp[f"filterRequest.{field}"]]
        return rows

    @app.get(f"{API_PREFIX}/employees")
    async def list_employees(request: Request):
        if (resp := _require_search_term(request)) is not None:
            return resp
        rows = _filter_employees(list(backend.employees.values()), request)
        return ok(_paginate(rows, request))

    @app.get(f"{API_PREFIX}/employees/me")
    async def my_profile(request: Request):
        return ok(backend.employees[request.state.employee_id])

    @app.get(f"{API_PREFIX}/employees/department/{{department_id}}")
    async def department_employees(department_id: str, request: Request):
        rows = [e for e in backend.employees.values() if e["departmentId"] == department_id]
        return ok(_paginate(_filter_employees(rows, request), request))

    @app.get(f"{API_PREFIX}/employees/{{employee_id}}")
    async def get_employee(employee_id: str, request: Request):
        emp = backend.employees.get(employee_id)
        if emp is None:
            return fail("Employee not found", status_code=404)
        return ok(emp)

    @app.put(f"{API_PREFIX}/employees/{{employee_id}}")
    async def update_employee(employee_id: str, request: Request):
        emp = backend.employees.get(employee_id)
        if emp is None:
            return fail("Employee not found", status_code=404)
        body = await request.json()
        emp.update(body)
        emp["fullName"] = f"{emp['firstName']} {emp['lastName']}"
        return ok(emp, message="Employee updated")

    @app.post(f"{API_PREFIX}/auth/register")
    async def register(request: Request):
        body = await request.json()
        if any(e["email"] == body["email"] for e in backend.employees.values()):
            return fail("Email is already registered.", status_code=409)
        emp = backend.add_employee(first_name=body["firstName"], last_name=body["lastName"])
        emp["email"] = body["email"]
        return ok({"id": emp["id"]}, message="Employee registered", status_code=201)

    # ── Departments / positions ─────────────────────────────────────

    _register_catalog(app, backend, "departments", backend.departments, "name", "departmentId", "Department")
    _register_catalog(app, backend, "positions", backend.positions, "title", "positionId", "Position")

    return app


def _register_catalog(
    app: FastAPI,
    backend: FakeBackend,
    resource: str,
    store: dict[str, dict],
    label: str,
    employee_key: str,
    noun: str,
) -> None:
    """CRUD routes for a flat id + label + description resource."""
    path = f"{API_PREFIX}/{resource}"

    def _require_reviewer(request: Request) -> Optional[JSONResponse]:
        if request.state.role not in REVIEWERS:
            return fail("Access denied", status_code=403)
        return None

    @app.get(path)
    async def list_entries(request: Request):
        qp = request.query_params
        if "filterRequest.searchTerm" not in qp:
            return fail("filterRequest must not be null")
        rows = list(store.values())
        search = qp["filterRequest.searchTerm"].lower()
        if search:
            rows = [r for r in rows if search in r[label].lower()]
        if f"filterRequest.{label}" in qp:
            rows = [r for r in rows if r[label] == qp[f"filterRequest.{label}"]]
        items = [{"id": r["id"], label: r[label]} for r in rows]
        return ok(_paginate(items, request))

    @app.get(path + "/{entry_id}")
    async def get_entry(entry_id: str, request: Request):
        if entry_id not in store:
            return fail(f"{noun} not found", status_code=404)
        return ok(store[entry_id])

    @app.post(path)
    async def create_entry(request: Request):
        if (resp := _require_reviewer(request)) is not None:
            return resp
        body = await request.json()
        if any(r[label] == body[label] for r in store.values()):
            return fail(f"{noun} already exists.", status_code=409)
        entry = backend._add_catalog_entry(store, label, body[label], body.get("description"))
        return ok(entry, message=f"{noun} created", status_code=201)

    @app.put(path + "/{entry_id}")
    async def update_entry(entry_id: str, request: Request):
        if (resp := _require_reviewer(request)) is not None:
            return resp
        if entry_id not in store:
            return fail(f"{noun} not found", status_code=404)
        body = await request.json()
        store[entry_id].update(body, updatedAt=_now())
        return ok(store[entry_id], message=f"{noun} updated")

    @app.delete(path + "/{entry_id}")
    async def delete_entry(entry_id: str, request: Request):
        if (resp := _require_reviewer(request)) is not None:
            return resp
        if entry_id not in store:
            return fail(f"{noun} not found", status_code=404)
        if any(e[employee_key] == entry_id for e in backend.employees.values()):
            return fail(f"{noun} still has employees assigned.", status_code=409)
        del store[entry_id]
        return ok(None, message=f"{noun} deleted")


# ── Fixtures ────────────────────────────────────────────────────────

@pytest.fixture
def backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
def backend_app(backend: FakeBackend) -> FastAPI:
    return create_backend_app(backend)


@pytest.fixture
async def client(backend_app: FastAPI) -> AsyncGenerator[ApiClient, None]:
    """API client wired to the fake backend."""
    api = ApiClient(BASE_URL, transport=httpx.ASGITransport(app=backend_app))
    yield api
    await api.aclose()


def _refuse_connection(request: httpx.Request) -> httpx.Response:
    raise httpx.ConnectError("connection refused", request=request)


@pytest.fixture
async def offline_client() -> AsyncGenerator[ApiClient, None]:
    """API client whose every request fails at the transport level."""
    api = ApiClient(BASE_URL, transport=httpx.MockTransport(_refuse_connection))
    yield api
    await api.aclose()


@pytest.fixture
def employee(backend: FakeBackend) -> dict:
    return backend.add_employee(first_name="Ayse", last_name="Yilmaz")


@pytest.fixture
def other_employee(backend: FakeBackend) -> dict:
    return backend.add_employee(first_name="Mehmet", last_name="Demir")


@pytest.fixture
def manager(backend: FakeBackend) -> dict:
    return backend.add_employee(first_name="Zeynep", last_name="Kaya", role=UserRole.manager)


@pytest.fixture
def employee_session(backend: FakeBackend, employee: dict) -> SessionContext:
    return backend.session_for(employee)


@pytest.fixture
def manager_session(backend: FakeBackend, manager: dict) -> SessionContext:
    return backend.session_for(manager)
