#!/usr/bin/env python3
"""HR client command line — query the HR backend from a terminal.

Usage:
    hr-client leaves --status PENDING               # all requests (manager / HR)
    hr-client my-leaves --search "trip"             # own requests
    hr-client balance                               # own balance
    hr-client balance --employee <id>               # someone else's (manager / HR)
    hr-client check-conflict 2025-03-14 2025-03-20  # advisory date conflict check
    hr-client employees --search ali
    hr-client dashboard

Credentials come from the environment (or a .env file):
    HR_API_TOKEN, HR_EMPLOYEE_ID, HR_ROLE (EMPLOYEE | MANAGER | HR), HR_API_BASE_URL

Exit codes:
    0 = operation succeeded
    1 = operation failed (message printed to stderr)
    2 = bad usage / missing credentials
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import os
import sys
from datetime import date
from typing import Any, Optional

from dotenv import load_dotenv

from hr_client.api import ApiClient
from hr_client.auth.session import SessionContext
from hr_client.common.constants import (
    MAX_PAGE_SIZE,
    LeaveStatus,
    LeaveType,
    SortDirection,
    UserRole,
)
from hr_client.common.envelope import ApiResponse
from hr_client.common.pagination import ListQuery
from hr_client.config import settings
from hr_client.core_hr.schemas import EmployeeFilter
from hr_client.core_hr.service import EmployeeService
from hr_client.dashboard.service import DashboardService
from hr_client.leave.schemas import LeaveRequestFilter
from hr_client.leave.service import LeaveService
from hr_client.logging_config import setup_logging

logger = logging.getLogger("hr_client.cli")


# ── Argument parsing ────────────────────────────────────────────────

def _iso_date(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid date '{value}' (expected YYYY-MM-DD)")


def _bounded_int(low: int, high: Optional[int] = None):
    def parse(value: str) -> int:
        try:
            number = int(value)
        except ValueError:
            raise argparse.ArgumentTypeError(f"invalid integer '{value}'")
        if number < low:
            raise argparse.ArgumentTypeError(f"{number} is below the minimum of {low}")
        if high is not None and number > high:
            raise argparse.ArgumentTypeError(f"{number} is above the maximum of {high}")
        return number
    return parse


def _add_list_args(parser: argparse.ArgumentParser, default_sort: str) -> None:
    parser.add_argument("--page", type=_bounded_int(0), default=0, help="Page index (0-based)")
    parser.add_argument("--size", type=_bounded_int(1, MAX_PAGE_SIZE), default=10, help="Page size (max 100)")
    parser.add_argument("--sort-by", default=default_sort)
    parser.add_argument(
        "--sort-direction", choices=[d.value for d in SortDirection], default="desc",
    )
    parser.add_argument("--search", default="", help="Free-text search term")


def _add_leave_filter_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--type", dest="leave_type", choices=[t.value for t in LeaveType])
    parser.add_argument("--status", choices=[s.value for s in LeaveStatus])
    parser.add_argument("--from", dest="start_after", type=_iso_date, help="Start date on/after")
    parser.add_argument("--to", dest="start_before", type=_iso_date, help="Start date on/before")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="hr-client", description="HR backend client")
    parser.add_argument("--url", default=None, help="Backend base URL (default: HR_API_BASE_URL)")
    parser.add_argument("--log-level", default=None, help="Logging level (default: LOG_LEVEL)")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("leaves", help="List all leave requests (manager / HR)")
    _add_list_args(p, "createdAt")
    _add_leave_filter_args(p)

    p = sub.add_parser("my-leaves", help="List your own leave requests")
    _add_list_args(p, "createdAt")
    _add_leave_filter_args(p)

    p = sub.add_parser("balance", help="Show a leave balance")
    p.add_argument("--employee", default=None, help="Employee id (manager / HR)")

    p = sub.add_parser("check-conflict", help="Check a date range against approved leave")
    p.add_argument("start", type=_iso_date)
    p.add_argument("end", type=_iso_date)
    p.add_argument("--exclude", default=None, help="Leave request id being edited")

    p = sub.add_parser("employees", help="List employees")
    _add_list_args(p, "firstName")

    sub.add_parser("dashboard", help="Show the dashboard summary for your role")
    return parser


def session_from_env() -> Optional[SessionContext]:
    token = os.getenv("HR_API_TOKEN", "")
    employee_id = os.getenv("HR_EMPLOYEE_ID", "")
    if not token or not employee_id:
        return None
    role = os.getenv("HR_ROLE", UserRole.employee.value).upper()
    try:
        role_enum = UserRole(role)
    except ValueError:
        logger.warning("Unknown HR_ROLE %r, falling back to EMPLOYEE", role)
        role_enum = UserRole.employee
    return SessionContext(
        token=token,
        employee_id=employee_id,
        email=os.getenv("HR_EMAIL", ""),
        role=role_enum,
    )


def _list_query(args: argparse.Namespace, filter_request: Any) -> ListQuery:
    return ListQuery(
        page=args.page,
        size=args.size,
        sort_by=args.sort_by,
        sort_direction=SortDirection(args.sort_direction),
        filter_request=filter_request,
    )


def _leave_filter(args: argparse.Namespace) -> LeaveRequestFilter:
    return LeaveRequestFilter(
        search_term=args.search,
        leave_type=args.leave_type,
        status=args.status,
        start_date_after=args.start_after,
        start_date_before=args.start_before,
    )


# ── Dispatch ────────────────────────────────────────────────────────

async def run(args: argparse.Namespace, session: SessionContext, client: ApiClient) -> ApiResponse:
    if args.command == "leaves":
        return await LeaveService.list_leave_requests(
            client, session, _list_query(args, _leave_filter(args)),
        )
    if args.command == "my-leaves":
        return await LeaveService.list_my_leave_requests(
            client, session, _list_query(args, _leave_filter(args)),
        )
    if args.command == "balance":
        if args.employee:
            return await LeaveService.get_employee_leave_balance(client, session, args.employee)
        return await LeaveService.get_my_leave_balance(client, session)
    if args.command == "check-conflict":
        return await LeaveService.check_date_conflict(
            client, session, args.start, args.end, exclude_id=args.exclude,
        )
    if args.command == "employees":
        return await EmployeeService.list_employees(
            client, session, _list_query(args, EmployeeFilter(search_term=args.search)),
        )
    if args.command == "dashboard":
        return await DashboardService.get_summary(client, session)
    raise ValueError(f"unknown command {args.command!r}")


async def _main_async(args: argparse.Namespace, session: SessionContext) -> int:
    base_url = None
    if args.url:
        base_url = args.url.rstrip("/") + "/" + settings.HR_API_PREFIX.strip("/")
    async with ApiClient(base_url) as client:
        result = await run(args, session, client)
    print(json.dumps(result.model_dump(mode="json", by_alias=True), indent=2, default=str))
    if not result.success:
        print(f"error: {result.message}", file=sys.stderr)
        return 1
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    load_dotenv()
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level)

    session = session_from_env()
    if session is None:
        print("error: HR_API_TOKEN and HR_EMPLOYEE_ID must be set", file=sys.stderr)
        return 2
    return asyncio.run(_main_async(args, session))


if __name__ == "__main__":
    sys.exit(main())
