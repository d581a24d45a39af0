from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Callable, Optional, Sequence

from ..common.datetime_utils import now_local
from ..core.constants import LEAVE_DAYS_PER_YEAR
from ..core.enums import LeaveStage, Role
from ..core.exceptions import (
    AuthorizationError,
    InsufficientBalanceError,
    NotFoundError,
    ValidationError,
    WrongStageError,
)
from ..employees.model import Employee
from ..employees.repository import EmployeeRepository
from .accrual import compute_balance
from .model import LeaveBalance, LeaveRequest
from .policy import submit_request
from .repository import LeaveRepository
from .workflow import APPROVER_CHAIN, advance_approval, awaiting_stage

logger = logging.getLogger(__name__)


class LeaveService:
    """Use cases: leave balance, submission and the approval chain."""

    def __init__(
        self,
        leaves: LeaveRepository,
        employees: EmployeeRepository,
        *,
        days_per_year: int = LEAVE_DAYS_PER_YEAR,
        clock: Callable[[], datetime] = now_local,
    ):
        self._leaves = leaves
        self._employees = employees
        self._days_per_year = days_per_year
        self._clock = clock

    def _get_employee(self, employee_id: int) -> Employee:
        employee = self._employees.get_by_id(int(employee_id))
        if not employee:
            raise NotFoundError("Employee not found")
        return employee

    def _get_request(self, request_id: int) -> LeaveRequest:
        req = self._leaves.get(int(request_id))
        if not req:
            raise NotFoundError("Leave request not found")
        return req

    @staticmethod
    def _require_view_access(*, current_user_id: int, current_role: Role, employee_id: int) -> None:
        if int(employee_id) == int(current_user_id):
            return
        if current_role == Role.ADMIN or current_role in APPROVER_CHAIN:
            return
        raise AuthorizationError("You may only view your own leave")

    def get_balance(
        self,
        *,
        current_user_id: int,
        current_role: Role,
        employee_id: int,
        year: Optional[int] = None,
    ) -> LeaveBalance:
        self._require_view_access(current_user_id=current_user_id, current_role=current_role, employee_id=employee_id)
        employee = self._get_employee(employee_id)
        year = year if year is not None else self._clock().year
        requests = self._leaves.list_for_employee(
            employee.employee_id, year=year, include_rejected=False, limit=None
        )
        return compute_balance(employee, requests, year, days_per_year=self._days_per_year)

    def submit(
        self,
        *,
        current_user_id: int,
        current_role: Role,
        start_date: date,
        end_date: date,
        reason: str = "",
        employee_id: Optional[int] = None,
    ) -> LeaveRequest:
        employee_id = int(employee_id) if employee_id is not None else int(current_user_id)
        if employee_id != int(current_user_id) and current_role != Role.ADMIN:
            raise AuthorizationError("You may only request leave for yourself")

        employee = self._get_employee(employee_id)
        if not employee.is_active:
            raise ValidationError("Employee is not active")

        now = self._clock()
        existing = self._leaves.list_for_employee(employee.employee_id, include_rejected=False, limit=None)
        request = submit_request(
            employee,
            start_date,
            end_date,
            existing,
            as_of_year=now.year,
            reason=(reason or "").strip(),
            now=now,
            days_per_year=self._days_per_year,
        )
        saved = self._leaves.create(request)
        logger.info(
            "Leave request #%s submitted for employee %s (%s - %s, %d days)",
            saved.request_id,
            employee.employee_id,
            start_date.isoformat(),
            end_date.isoformat(),
            saved.business_days,
        )
        return saved

    def approve(self, *, current_user_id: int, current_role: Role, request_id: int, note: str = "") -> LeaveRequest:
        return self._decide(
            current_user_id=current_user_id,
            current_role=current_role,
            request_id=request_id,
            note=note,
            reject=False,
        )

    def reject(self, *, current_user_id: int, current_role: Role, request_id: int, note: str = "") -> LeaveRequest:
        return self._decide(
            current_user_id=current_user_id,
            current_role=current_role,
            request_id=request_id,
            note=note,
            reject=True,
        )

    def _decide(
        self,
        *,
        current_user_id: int,
        current_role: Role,
        request_id: int,
        note: str,
        reject: bool,
    ) -> LeaveRequest:
        req = self._get_request(request_id)
        if req.employee_id == int(current_user_id):
            raise AuthorizationError("You cannot decide on your own leave request")

        updated = advance_approval(
            req,
            current_role,
            approver_id=int(current_user_id),
            now=self._clock(),
            reject=reject,
            note=(note or "").strip() or None,
        )

        if updated.stage == LeaveStage.APPROVED:
            self._check_final_balance(req)

        if not self._leaves.update_stage(updated, expected_stage=req.stage):
            raise WrongStageError("Request was decided by someone else in the meantime")

        logger.info(
            "Leave request #%s %s -> %s by %s (%s)",
            req.request_id,
            req.stage.value,
            updated.stage.value,
            current_user_id,
            current_role.value,
        )
        return updated

    def _check_final_balance(self, req: LeaveRequest) -> None:
        employee = self._get_employee(req.employee_id)
        year = self._clock().year
        others = [
            r
            for r in self._leaves.list_for_employee(
                employee.employee_id, year=year, include_rejected=False, limit=None
            )
            if r.request_id != req.request_id
        ]
        balance = compute_balance(employee, others, year, days_per_year=self._days_per_year)
        if req.business_days > balance.remaining_days:
            raise InsufficientBalanceError(
                f"Approving would exceed the {year} entitlement ({max(balance.remaining_days, 0)} days left)"
            )

    def list_for_employee(
        self,
        *,
        current_user_id: int,
        current_role: Role,
        employee_id: int,
        year: Optional[int] = None,
    ) -> Sequence[LeaveRequest]:
        self._require_view_access(current_user_id=current_user_id, current_role=current_role, employee_id=employee_id)
        self._get_employee(employee_id)
        return self._leaves.list_for_employee(int(employee_id), year=year)

    def list_awaiting(self, *, current_user_id: int, current_role: Role) -> Sequence[LeaveRequest]:
        """Requests waiting on the caller's approval step, oldest first."""
        stage = awaiting_stage(current_role)
        if stage is None:
            raise AuthorizationError("Only approvers have an approval queue")
        return [r for r in self._leaves.list_by_stage(stage) if r.employee_id != int(current_user_id)]
