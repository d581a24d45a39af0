from __future__ import annotations

from flask import Flask

from ..common.datetime_utils import parse_iso_date
from ..common.validators import require_int
from ..common.web import current_user, json_body, login_required, ok, optional_json_body, optional_year_arg, require_field
from ..container import Container


def register(app: Flask, container: Container) -> None:
    service = container.leave_service

    @app.route("/api/employees/<int:employee_id>/leave-balance", methods=["GET"], endpoint="leave_balance")
    @login_required
    def leave_balance(employee_id: int):
        user = current_user()
        balance = service.get_balance(
            current_user_id=user.user_id,
            current_role=user.role,
            employee_id=employee_id,
            year=optional_year_arg(),
        )
        return ok(balance.to_dict())

    @app.route("/api/employees/<int:employee_id>/leaves", methods=["GET"], endpoint="employee_leaves")
    @login_required
    def employee_leaves(employee_id: int):
        user = current_user()
        items = service.list_for_employee(
            current_user_id=user.user_id,
            current_role=user.role,
            employee_id=employee_id,
            year=optional_year_arg(),
        )
        return ok([r.to_dict() for r in items])

    @app.route("/api/leaves", methods=["POST"], endpoint="submit_leave")
    @login_required
    def submit_leave():
        user = current_user()
        data = json_body()
        employee_id = data.get("employee_id")
        saved = service.submit(
            current_user_id=user.user_id,
            current_role=user.role,
            employee_id=require_int(employee_id, "employee_id") if employee_id is not None else None,
            start_date=parse_iso_date(str(require_field(data, "start_date"))),
            end_date=parse_iso_date(str(require_field(data, "end_date"))),
            reason=str(data.get("reason") or ""),
        )
        return ok(saved.to_dict(), 201)

    @app.route("/api/leaves/awaiting", methods=["GET"], endpoint="awaiting_leaves")
    @login_required
    def awaiting_leaves():
        user = current_user()
        items = service.list_awaiting(current_user_id=user.user_id, current_role=user.role)
        return ok([r.to_dict() for r in items])

    @app.route("/api/leaves/<int:request_id>/approve", methods=["POST"], endpoint="approve_leave")
    @login_required
    def approve_leave(request_id: int):
        user = current_user()
        data = optional_json_body()
        updated = service.approve(
            current_user_id=user.user_id,
            current_role=user.role,
            request_id=request_id,
            note=str(data.get("note") or ""),
        )
        return ok(updated.to_dict())

    @app.route("/api/leaves/<int:request_id>/reject", methods=["POST"], endpoint="reject_leave")
    @login_required
    def reject_leave(request_id: int):
        user = current_user()
        data = optional_json_body()
        updated = service.reject(
            current_user_id=user.user_id,
            current_role=user.role,
            request_id=request_id,
            note=str(data.get("note") or ""),
        )
        return ok(updated.to_dict())
