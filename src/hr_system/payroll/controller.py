from __future__ import annotations

from flask import Flask

from ..common.validators import require_decimal, require_int
from ..common.web import current_user, json_body, login_required, ok, optional_year_arg, require_field
from ..container import Container


def register(app: Flask, container: Container) -> None:
    service = container.payroll_service

    @app.route("/api/payroll/preview", methods=["POST"], endpoint="payroll_preview")
    @login_required
    def payroll_preview():
        data = json_body()
        pay = service.preview(gross_salary=require_decimal(require_field(data, "gross_salary"), "gross_salary"))
        return ok(pay.to_dict())

    @app.route("/api/payroll", methods=["POST"], endpoint="create_payroll")
    @login_required
    def create_payroll():
        user = current_user()
        data = json_body()
        record = service.create_record(
            current_role=user.role,
            employee_id=require_int(require_field(data, "employee_id"), "employee_id"),
            year=require_int(require_field(data, "year"), "year"),
            month=require_int(require_field(data, "month"), "month"),
            gross_salary=require_decimal(require_field(data, "gross_salary"), "gross_salary"),
        )
        return ok(record.to_dict(), 201)

    @app.route("/api/payroll/<int:record_id>", methods=["GET"], endpoint="get_payroll")
    @login_required
    def get_payroll(record_id: int):
        record = service.get_record(current_role=current_user().role, record_id=record_id)
        return ok(record.to_dict())

    @app.route("/api/payroll/<int:record_id>", methods=["PUT"], endpoint="replace_payroll")
    @login_required
    def replace_payroll(record_id: int):
        data = json_body()
        record = service.replace_record(
            current_role=current_user().role,
            record_id=record_id,
            gross_salary=require_decimal(require_field(data, "gross_salary"), "gross_salary"),
        )
        return ok(record.to_dict())

    @app.route("/api/employees/<int:employee_id>/payroll", methods=["GET"], endpoint="employee_payroll")
    @login_required
    def employee_payroll(employee_id: int):
        user = current_user()
        items = service.list_for_employee(
            current_user_id=user.user_id,
            current_role=user.role,
            employee_id=employee_id,
            year=optional_year_arg(),
        )
        return ok([r.to_dict() for r in items])
