from __future__ import annotations

from typing import Optional

from ..core.enums import EmployeeStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone, to_decimal
from .model import Employee, Position
from .repository import EmployeeRepository


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT e.employee_id, e.full_name, e.start_year, e.status,
                       p.position_id, p.position_name, p.min_salary, p.max_salary
                FROM employees e
                JOIN positions p ON p.position_id = e.position_id
                WHERE e.employee_id=%s
                """,
                (int(employee_id),),
            )
            r = fetchone(cur)
            if not r:
                return None
            return Employee(
                employee_id=int(r["employee_id"]),
                full_name=r["full_name"],
                start_year=int(r["start_year"]),
                position=Position(
                    position_id=int(r["position_id"]),
                    position_name=r["position_name"],
                    min_salary=to_decimal(r["min_salary"]),
                    max_salary=to_decimal(r["max_salary"]),
                ),
                status=EmployeeStatus(r["status"]),
            )
