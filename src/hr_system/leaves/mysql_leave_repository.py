from __future__ import annotations

import logging
from dataclasses import replace
from typing import Optional, Sequence

from mysql.connector.errors import IntegrityError

from ..core.constants import DEFAULT_LIST_LIMIT
from ..core.enums import LeaveStage
from ..core.exceptions import NotFoundError, OverlapError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, is_duplicate_key
from .model import LeaveRequest
from .repository import LeaveRepository

logger = logging.getLogger(__name__)

_COLUMNS = """
    request_id, employee_id, start_date, end_date, business_days, stage,
    reason, created_at, decided_by, decided_at, decision_note
"""


def _row_to_request(r: dict) -> LeaveRequest:
    return LeaveRequest(
        request_id=int(r["request_id"]),
        employee_id=int(r["employee_id"]),
        start_date=r["start_date"],
        end_date=r["end_date"],
        business_days=int(r["business_days"]),
        stage=LeaveStage(r["stage"]),
        created_at=r["created_at"],
        reason=r.get("reason") or "",
        decided_by=r.get("decided_by"),
        decided_at=r.get("decided_at"),
        decision_note=r.get("decision_note"),
    )


class MySQLLeaveRepository(LeaveRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(self, request: LeaveRequest) -> LeaveRequest:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                # Serializes submissions per employee so the overlap re-check below cannot race.
                cur.execute(
                    "SELECT employee_id FROM employees WHERE employee_id=%s FOR UPDATE",
                    (int(request.employee_id),),
                )
                if not fetchone(cur):
                    raise NotFoundError("Employee not found")

                cur.execute(
                    """
                    SELECT request_id FROM leave_requests
                    WHERE employee_id=%s AND stage<>%s AND start_date<=%s AND end_date>=%s
                    LIMIT 1
                    """,
                    (
                        int(request.employee_id),
                        LeaveStage.REJECTED.value,
                        request.end_date,
                        request.start_date,
                    ),
                )
                clash = fetchone(cur)
                if clash:
                    raise OverlapError(f"Overlaps request #{clash['request_id']}")

                cur.execute(
                    """
                    INSERT INTO leave_requests(employee_id, start_date, end_date, business_days, stage, reason, created_at)
                    VALUES(%s,%s,%s,%s,%s,%s,%s)
                    """,
                    (
                        int(request.employee_id),
                        request.start_date,
                        request.end_date,
                        int(request.business_days),
                        request.stage.value,
                        request.reason,
                        request.created_at.replace(tzinfo=None),
                    ),
                )
                return replace(request, request_id=int(cur.lastrowid))
        except IntegrityError as exc:
            if is_duplicate_key(exc):
                logger.warning("Duplicate leave start for employee %s: %s", request.employee_id, exc)
                raise OverlapError("Another request already starts on this date") from exc
            raise

    def get(self, request_id: int) -> Optional[LeaveRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM leave_requests WHERE request_id=%s", (int(request_id),))
            r = fetchone(cur)
            return _row_to_request(r) if r else None

    def list_for_employee(
        self,
        employee_id: int,
        *,
        year: Optional[int] = None,
        include_rejected: bool = True,
        limit: Optional[int] = DEFAULT_LIST_LIMIT,
    ) -> Sequence[LeaveRequest]:
        clauses = ["employee_id=%s"]
        params: list[object] = [int(employee_id)]

        if year is not None:
            clauses.append("YEAR(start_date)=%s")
            params.append(int(year))
        if not include_rejected:
            clauses.append("stage<>%s")
            params.append(LeaveStage.REJECTED.value)

        where = " AND ".join(clauses)
        limit_sql = ""
        if limit is not None:
            limit_sql = "LIMIT %s"
            params.append(int(limit))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM leave_requests
                WHERE {where}
                ORDER BY start_date DESC
                {limit_sql}
                """,
                tuple(params),
            )
            return [_row_to_request(r) for r in fetchall(cur)]

    def list_by_stage(self, stage: LeaveStage, *, limit: int = DEFAULT_LIST_LIMIT) -> Sequence[LeaveRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM leave_requests
                WHERE stage=%s
                ORDER BY created_at ASC
                LIMIT %s
                """,
                (stage.value, int(limit)),
            )
            return [_row_to_request(r) for r in fetchall(cur)]

    def update_stage(self, request: LeaveRequest, *, expected_stage: LeaveStage) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE leave_requests
                SET stage=%s, decided_by=%s, decided_at=%s, decision_note=%s
                WHERE request_id=%s AND stage=%s
                """,
                (
                    request.stage.value,
                    request.decided_by,
                    request.decided_at.replace(tzinfo=None) if request.decided_at else None,
                    request.decision_note,
                    int(request.request_id),
                    expected_stage.value,
                ),
            )
            return cur.rowcount > 0
