from __future__ import annotations

import logging
from dataclasses import replace as dc_replace
from typing import Optional, Sequence

from mysql.connector.errors import IntegrityError

from ..core.constants import DEFAULT_LIST_LIMIT
from ..core.exceptions import DuplicatePeriodError, NotFoundError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, is_duplicate_key, to_decimal
from .model import PayrollRecord
from .repository import PayrollRepository

logger = logging.getLogger(__name__)

_COLUMNS = "record_id, employee_id, year, month, gross_salary, sgk, tax, net_salary, created_at"

_INSERT = """
    INSERT INTO payroll_records(employee_id, year, month, gross_salary, sgk, tax, net_salary, created_at)
    VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
"""


def _row_to_record(r: dict) -> PayrollRecord:
    return PayrollRecord(
        record_id=int(r["record_id"]),
        employee_id=int(r["employee_id"]),
        year=int(r["year"]),
        month=int(r["month"]),
        gross_salary=to_decimal(r["gross_salary"]),
        sgk=to_decimal(r["sgk"]),
        tax=to_decimal(r["tax"]),
        net_salary=to_decimal(r["net_salary"]),
        created_at=r["created_at"],
    )


def _insert_params(record: PayrollRecord) -> tuple:
    return (
        int(record.employee_id),
        int(record.year),
        int(record.month),
        record.gross_salary,
        record.sgk,
        record.tax,
        record.net_salary,
        record.created_at.replace(tzinfo=None),
    )


class MySQLPayrollRepository(PayrollRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _duplicate(self, record: PayrollRecord, exc: IntegrityError) -> DuplicatePeriodError:
        logger.warning(
            "Duplicate payroll period for employee %s %s-%02d: %s",
            record.employee_id,
            record.year,
            record.month,
            exc,
        )
        return DuplicatePeriodError(
            f"Payroll for employee {record.employee_id} in {record.year}-{record.month:02d} already exists"
        )

    def create(self, record: PayrollRecord) -> PayrollRecord:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(_INSERT, _insert_params(record))
                return dc_replace(record, record_id=int(cur.lastrowid))
        except IntegrityError as exc:
            if is_duplicate_key(exc):
                raise self._duplicate(record, exc) from exc
            raise

    def get(self, record_id: int) -> Optional[PayrollRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM payroll_records WHERE record_id=%s", (int(record_id),))
            r = fetchone(cur)
            return _row_to_record(r) if r else None

    def list_for_period(self, *, employee_id: int, year: int, month: int) -> Sequence[PayrollRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM payroll_records
                WHERE employee_id=%s AND year=%s AND month=%s
                """,
                (int(employee_id), int(year), int(month)),
            )
            return [_row_to_record(r) for r in fetchall(cur)]

    def list_for_employee(
        self,
        employee_id: int,
        *,
        year: Optional[int] = None,
        limit: int = DEFAULT_LIST_LIMIT,
    ) -> Sequence[PayrollRecord]:
        clauses = ["employee_id=%s"]
        params: list[object] = [int(employee_id)]
        if year is not None:
            clauses.append("year=%s")
            params.append(int(year))

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM payroll_records
                WHERE {where}
                ORDER BY year DESC, month DESC
                LIMIT %s
                """,
                tuple(params + [int(limit)]),
            )
            return [_row_to_record(r) for r in fetchall(cur)]

    def replace(self, old_record_id: int, record: PayrollRecord) -> PayrollRecord:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute("DELETE FROM payroll_records WHERE record_id=%s", (int(old_record_id),))
                if cur.rowcount == 0:
                    raise NotFoundError("Payroll record not found")
                cur.execute(_INSERT, _insert_params(record))
                return dc_replace(record, record_id=int(cur.lastrowid))
        except IntegrityError as exc:
            if is_duplicate_key(exc):
                raise self._duplicate(record, exc) from exc
            raise
