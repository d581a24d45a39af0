from __future__ import annotations

from datetime import date, timedelta

import pytest

from conftest import APPROVERS, make_employee

from hr_system.core.enums import EmployeeStatus, LeaveStage, Role
from hr_system.core.exceptions import (
    AuthorizationError,
    InsufficientBalanceError,
    NotFoundError,
    OverlapError,
    UnauthorizedRoleError,
    ValidationError,
    WrongStageError,
)
from hr_system.leaves.model import LeaveRequest
from hr_system.leaves.service import LeaveService


@pytest.fixture
def service(leaves_repo, employees, fixed_now) -> LeaveService:
    return LeaveService(leaves_repo, employees, clock=lambda: fixed_now)


def _submit(service, start, end, *, user_id=1, role=Role.EMPLOYEE, **kwargs):
    return service.submit(
        current_user_id=user_id,
        current_role=role,
        start_date=start,
        end_date=end,
        reason="Holiday",
        **kwargs,
    )


def _approve_all(service, request_id):
    for role, user_id in APPROVERS.items():
        service.approve(current_user_id=user_id, current_role=role, request_id=request_id)


def test_submit_persists_request(service, leaves_repo, fixed_now):
    saved = _submit(service, date(2024, 4, 1), date(2024, 4, 5))

    assert saved.request_id == 1
    assert saved.stage == LeaveStage.SUBMITTED
    assert saved.business_days == 5
    assert saved.created_at == fixed_now
    assert leaves_repo.get(1) == saved


def test_second_overlapping_submission_fails(service):
    _submit(service, date(2024, 1, 1), date(2024, 1, 10))
    with pytest.raises(OverlapError):
        _submit(service, date(2024, 1, 5), date(2024, 1, 15))


def test_employee_cannot_submit_for_someone_else(service):
    with pytest.raises(AuthorizationError):
        _submit(service, date(2024, 4, 1), date(2024, 4, 5), employee_id=2)


def test_admin_can_submit_on_behalf(service):
    saved = _submit(service, date(2024, 4, 1), date(2024, 4, 5), user_id=9, role=Role.ADMIN, employee_id=1)
    assert saved.employee_id == 1


def test_inactive_employee_cannot_submit(service, employees):
    employees.add(make_employee(5, status=EmployeeStatus.INACTIVE))
    with pytest.raises(ValidationError):
        _submit(service, date(2024, 4, 1), date(2024, 4, 5), user_id=5)


def test_unknown_employee(service):
    with pytest.raises(NotFoundError):
        _submit(service, date(2024, 4, 1), date(2024, 4, 5), user_id=42)


def test_full_approval_chain_updates_balance(service):
    saved = _submit(service, date(2024, 4, 1), date(2024, 4, 5))
    _approve_all(service, saved.request_id)

    balance = service.get_balance(current_user_id=1, current_role=Role.EMPLOYEE, employee_id=1)
    assert balance.year == 2024
    assert balance.entitled_days == 56
    assert balance.approved_days == 5
    assert balance.pending_days == 0
    assert balance.remaining_days == 51


def test_manager_approving_twice_is_wrong_stage(service):
    saved = _submit(service, date(2024, 4, 1), date(2024, 4, 5))
    service.approve(current_user_id=2, current_role=Role.MANAGER, request_id=saved.request_id)
    with pytest.raises(WrongStageError):
        service.approve(current_user_id=2, current_role=Role.MANAGER, request_id=saved.request_id)


def test_director_cannot_skip_manager(service):
    saved = _submit(service, date(2024, 4, 1), date(2024, 4, 5))
    with pytest.raises(UnauthorizedRoleError):
        service.approve(current_user_id=3, current_role=Role.DIRECTOR, request_id=saved.request_id)


def test_approver_cannot_decide_own_request(service):
    saved = _submit(service, date(2024, 4, 1), date(2024, 4, 5), user_id=2, role=Role.MANAGER)
    with pytest.raises(AuthorizationError):
        service.approve(current_user_id=2, current_role=Role.MANAGER, request_id=saved.request_id)


def test_rejection_frees_the_range(service):
    saved = _submit(service, date(2024, 4, 1), date(2024, 4, 5))
    rejected = service.reject(
        current_user_id=2, current_role=Role.MANAGER, request_id=saved.request_id, note="Busy sprint"
    )
    assert rejected.stage == LeaveStage.REJECTED
    assert rejected.decision_note == "Busy sprint"

    again = _submit(service, date(2024, 4, 1), date(2024, 4, 5))
    assert again.request_id == 2


def test_final_approval_rechecks_balance(service, employees, leaves_repo):
    employees.add(make_employee(6, start_year=2023))  # 14 days in 2024
    first = _submit(service, date(2024, 4, 1), date(2024, 4, 12), user_id=6)  # 10 days
    _approve_all(service, first.request_id)

    second = _submit(service, date(2024, 5, 6), date(2024, 5, 9), user_id=6)  # 4 days, fits
    # Entitlement shrinks underneath the pending request (e.g. hire year corrected).
    employees.add(make_employee(6, start_year=2024))
    for role in (Role.MANAGER, Role.DIRECTOR):
        service.approve(current_user_id=APPROVERS[role], current_role=role, request_id=second.request_id)

    with pytest.raises(InsufficientBalanceError):
        service.approve(current_user_id=4, current_role=Role.GENERAL_MANAGER, request_id=second.request_id)
    assert leaves_repo.get(second.request_id).stage == LeaveStage.DIRECTOR_APPROVED


def test_next_year_request_is_checked_against_this_year(service, employees):
    employees.add(make_employee(6, start_year=2023))  # 14 days in 2024
    first = _submit(service, date(2024, 1, 8), date(2024, 1, 19), user_id=6)  # 10 days
    _approve_all(service, first.request_id)

    with pytest.raises(InsufficientBalanceError):
        _submit(service, date(2025, 1, 6), date(2025, 1, 17), user_id=6)  # 10 days


def test_lost_race_is_wrong_stage(service, leaves_repo, monkeypatch):
    saved = _submit(service, date(2024, 4, 1), date(2024, 4, 5))
    monkeypatch.setattr(leaves_repo, "update_stage", lambda request, *, expected_stage: False)
    with pytest.raises(WrongStageError):
        service.approve(current_user_id=2, current_role=Role.MANAGER, request_id=saved.request_id)


def test_awaiting_queue_follows_stage(service):
    first = _submit(service, date(2024, 4, 1), date(2024, 4, 5))
    _submit(service, date(2024, 5, 6), date(2024, 5, 7))
    service.approve(current_user_id=2, current_role=Role.MANAGER, request_id=first.request_id)

    manager_queue = service.list_awaiting(current_user_id=2, current_role=Role.MANAGER)
    director_queue = service.list_awaiting(current_user_id=3, current_role=Role.DIRECTOR)

    assert [r.request_id for r in manager_queue] == [2]
    assert [r.request_id for r in director_queue] == [1]


def test_employee_has_no_queue(service):
    with pytest.raises(AuthorizationError):
        service.list_awaiting(current_user_id=1, current_role=Role.EMPLOYEE)


def test_employee_cannot_view_colleague_leaves(service):
    with pytest.raises(AuthorizationError):
        service.list_for_employee(current_user_id=1, current_role=Role.EMPLOYEE, employee_id=2)


def test_balance_counts_every_request_of_the_year(service, employees, leaves_repo, fixed_now):
    employees.add(make_employee(7, start_year=2000))
    day = date(2024, 1, 1)
    created = 0
    while created < 210:
        if day.weekday() < 5:
            leaves_repo.create(
                LeaveRequest(
                    request_id=None,
                    employee_id=7,
                    start_date=day,
                    end_date=day,
                    business_days=1,
                    stage=LeaveStage.APPROVED,
                    created_at=fixed_now,
                )
            )
            created += 1
        day += timedelta(days=1)

    balance = service.get_balance(current_user_id=7, current_role=Role.EMPLOYEE, employee_id=7, year=2024)
    assert balance.approved_days == 210
    assert balance.remaining_days == 336 - 210
