"""Employee directory services — employees, departments and positions.

All methods are static async, following the project convention.
"""

from __future__ import annotations

import logging
from typing import Optional

from hr_client.api import ApiClient
from hr_client.auth.session import SessionContext, require_reviewer
from hr_client.common.constants import SortDirection
from hr_client.common.envelope import ApiResponse
from hr_client.common.exceptions import envelope_errors
from hr_client.common.pagination import ListQuery, PaginatedResponse
from hr_client.core_hr.schemas import (
    DepartmentDetail,
    DepartmentListItem,
    DepartmentWrite,
    EmployeeCreate,
    EmployeeDetail,
    EmployeeListItem,
    EmployeeUpdate,
    PositionDetail,
    PositionListItem,
    PositionWrite,
)

logger = logging.getLogger(__name__)

EMPLOYEES_PATH = "/employees"
REGISTER_PATH = "/auth/register"
DEPARTMENTS_PATH = "/departments"
POSITIONS_PATH = "/positions"

# Dropdowns load everything in one page
OPTIONS_PAGE_SIZE = 100


def default_employee_query() -> ListQuery:
    """First page, alphabetical by first name."""
    return ListQuery(page=0, sort_by="firstName", sort_direction=SortDirection.asc)


class EmployeeService:
    """Async employee directory operations."""

    @staticmethod
    @envelope_errors
    async def list_employees(
        client: ApiClient,
        session: SessionContext,
        query: Optional[ListQuery] = None,
    ) -> ApiResponse[PaginatedResponse[EmployeeListItem]]:
        query = query or default_employee_query()
        body = await client.get(EMPLOYEES_PATH, session, params=query.to_params())
        return ApiResponse[PaginatedResponse[EmployeeListItem]].model_validate(body)

    @staticmethod
    @envelope_errors
    async def list_department_employees(
        client: ApiClient,
        session: SessionContext,
        department_id: str,
        query: Optional[ListQuery] = None,
    ) -> ApiResponse[PaginatedResponse[EmployeeListItem]]:
        query = query or default_employee_query()
        body = await client.get(
            f"{EMPLOYEES_PATH}/department/{department_id}", session, params=query.to_params(),
        )
        return ApiResponse[PaginatedResponse[EmployeeListItem]].model_validate(body)

    @staticmethod
    @envelope_errors
    async def get_employee(
        client: ApiClient,
        session: SessionContext,
        employee_id: str,
    ) -> ApiResponse[EmployeeDetail]:
        body = await client.get(f"{EMPLOYEES_PATH}/{employee_id}", session)
        return ApiResponse[EmployeeDetail].model_validate(body)

    @staticmethod
    @envelope_errors
    async def get_my_profile(
        client: ApiClient,
        session: SessionContext,
    ) -> ApiResponse[EmployeeDetail]:
        body = await client.get(f"{EMPLOYEES_PATH}/me", session)
        return ApiResponse[EmployeeDetail].model_validate(body)

    @staticmethod
    @envelope_errors
    async def create_employee(
        client: ApiClient,
        session: SessionContext,
        data: EmployeeCreate,
    ) -> ApiResponse:
        """Register a new employee account. Reviewer scope."""
        require_reviewer(session, "create employees")
        body = await client.post(REGISTER_PATH, session, json=data.to_wire())
        logger.info("Employee %s registered by %s", data.email, session.employee_id)
        return ApiResponse.model_validate(body)

    @staticmethod
    @envelope_errors
    async def update_employee(
        client: ApiClient,
        session: SessionContext,
        employee_id: str,
        data: EmployeeUpdate,
    ) -> ApiResponse[EmployeeDetail]:
        require_reviewer(session, "update employees")
        body = await client.put(f"{EMPLOYEES_PATH}/{employee_id}", session, json=data.to_wire())
        return ApiResponse[EmployeeDetail].model_validate(body)


def _options_query(sort_by: str) -> ListQuery:
    return ListQuery(
        page=0, size=OPTIONS_PAGE_SIZE, sort_by=sort_by, sort_direction=SortDirection.asc,
    )


# ═════════════════════════════════════════════════════════════════════
# DepartmentService
# ═════════════════════════════════════════════════════════════════════


class DepartmentService:
    """Async department operations. Reads are open to every session; writes are reviewer-only."""

    @staticmethod
    @envelope_errors
    async def list_departments(
        client: ApiClient,
        session: SessionContext,
        query: Optional[ListQuery] = None,
    ) -> ApiResponse[PaginatedResponse[DepartmentListItem]]:
        query = query or ListQuery(sort_by="name", sort_direction=SortDirection.asc)
        body = await client.get(DEPARTMENTS_PATH, session, params=query.to_params())
        return ApiResponse[PaginatedResponse[DepartmentListItem]].model_validate(body)

    @staticmethod
    async def list_department_options(
        client: ApiClient,
        session: SessionContext,
    ) -> ApiResponse[PaginatedResponse[DepartmentListItem]]:
        """First 100 departments by name, for pickers and filter dropdowns."""
        return await DepartmentService.list_departments(client, session, _options_query("name"))

    @staticmethod
    @envelope_errors
    async def get_department(
        client: ApiClient,
        session: SessionContext,
        department_id: str,
    ) -> ApiResponse[DepartmentDetail]:
        body = await client.get(f"{DEPARTMENTS_PATH}/{department_id}", session)
        return ApiResponse[DepartmentDetail].model_validate(body)

    @staticmethod
    @envelope_errors
    async def create_department(
        client: ApiClient,
        session: SessionContext,
        data: DepartmentWrite,
    ) -> ApiResponse[DepartmentDetail]:
        require_reviewer(session, "create departments")
        body = await client.post(DEPARTMENTS_PATH, session, json=data.to_wire())
        logger.info("Department %r created by %s", data.name, session.employee_id)
        return ApiResponse[DepartmentDetail].model_validate(body)

    @staticmethod
    @envelope_errors
    async def update_department(
        client: ApiClient,
        session: SessionContext,
        department_id: str,
        data: DepartmentWrite,
    ) -> ApiResponse[DepartmentDetail]:
        require_reviewer(session, "update departments")
        body = await client.put(f"{DEPARTMENTS_PATH}/{department_id}", session, json=data.to_wire())
        return ApiResponse[DepartmentDetail].model_validate(body)

    @staticmethod
    @envelope_errors
    async def delete_department(
        client: ApiClient,
        session: SessionContext,
        department_id: str,
    ) -> ApiResponse:
        require_reviewer(session, "delete departments")
        body = await client.delete(f"{DEPARTMENTS_PATH}/{department_id}", session)
        logger.info("Department %s deleted by %s", department_id, session.employee_id)
        return ApiResponse.model_validate(body)


# ═════════════════════════════════════════════════════════════════════
# PositionService
# ═════════════════════════════════════════════════════════════════════


class PositionService:
    """Async position (job title) operations, same access rules as departments."""

    @staticmethod
    @envelope_errors
    async def list_positions(
        client: ApiClient,
        session: SessionContext,
        query: Optional[ListQuery] = None,
    ) -> ApiResponse[PaginatedResponse[PositionListItem]]:
        query = query or ListQuery(sort_by="title", sort_direction=SortDirection.asc)
        body = await client.get(POSITIONS_PATH, session, params=query.to_params())
        return ApiResponse[PaginatedResponse[PositionListItem]].model_validate(body)

    @staticmethod
    async def list_position_options(
        client: ApiClient,
        session: SessionContext,
    ) -> ApiResponse[PaginatedResponse[PositionListItem]]:
        return await PositionService.list_positions(client, session, _options_query("title"))

    @staticmethod
    @envelope_errors
    async def get_position(
        client: ApiClient,
        session: SessionContext,
        position_id: str,
    ) -> ApiResponse[PositionDetail]:
        body = await client.get(f"{POSITIONS_PATH}/{position_id}", session)
        return ApiResponse[PositionDetail].model_validate(body)

    @staticmethod
    @envelope_errors
    async def create_position(
        client: ApiClient,
        session: SessionContext,
        data: PositionWrite,
    ) -> ApiResponse[PositionDetail]:
        require_reviewer(session, "create positions")
        body = await client.post(POSITIONS_PATH, session, json=data.to_wire())
        logger.info("Position %r created by %s", data.title, session.employee_id)
        return ApiResponse[PositionDetail].model_validate(body)

    @staticmethod
    @envelope_errors
    async def update_position(
        client: ApiClient,
        session: SessionContext,
        position_id: str,
        data: PositionWrite,
    ) -> ApiResponse[PositionDetail]:
        require_reviewer(session, "update positions")
        body = await client.put(f"{POSITIONS_PATH}/{position_id}", session, json=data.to_wire())
        return ApiResponse[PositionDetail].model_validate(body)

    @staticmethod
    @envelope_errors
    async def delete_position(
        client: ApiClient,
        session: SessionContext,
        position_id: str,
    ) -> ApiResponse:
        require_reviewer(session, "delete positions")
        body = await client.delete(f"{POSITIONS_PATH}/{position_id}", session)
        logger.info("Position %s deleted by %s", position_id, session.employee_id)
        return ApiResponse.model_validate(body)
