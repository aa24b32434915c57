from __future__ import annotations

from typing import Mapping, Optional, Sequence

from ..core.enums import DayOfWeek
from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_bool, db_cursor, fetchall, fetchone, normalize_mysql_time
from .model import PatientActivity, PatientActivityDetails
from .repository import EnrollmentRepository

_UPDATABLE = ("patient_id", "activity_id", "transport_needed", "active")


class MySQLEnrollmentRepository(EnrollmentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_with_details(self, *, patient_id: Optional[int] = None) -> Sequence[PatientActivityDetails]:
        clauses = ["pa.active = 1"]
        params: list[object] = []
        if patient_id is not None:
            clauses.append("pa.patient_id=%s")
            params.append(int(patient_id))

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT
                    pa.patient_activity_id, pa.transport_needed, pa.active,
                    p.patient_id, p.name AS patient_name,
                    a.activity_id, a.name AS activity_name, a.day_of_week, a.start_time, a.end_time,
                    t.therapist_id, t.name AS therapist_name
                FROM patient_activities pa
                JOIN patients p ON p.patient_id = pa.patient_id
                JOIN activities a ON a.activity_id = pa.activity_id
                JOIN therapists t ON t.therapist_id = a.therapist_id
                WHERE {where}
                ORDER BY p.name, FIELD(a.day_of_week, 'Seg', 'Ter', 'Qua', 'Qui', 'Sex'), a.start_time
                """,
                tuple(params),
            )
            return [
                PatientActivityDetails(
                    patient_activity_id=int(r["patient_activity_id"]),
                    patient_id=int(r["patient_id"]),
                    patient_name=r["patient_name"],
                    activity_id=int(r["activity_id"]),
                    activity_name=r["activity_name"],
                    day_of_week=DayOfWeek(r["day_of_week"]),
                    start_time=normalize_mysql_time(r["start_time"]),
                    end_time=normalize_mysql_time(r["end_time"]),
                    therapist_id=int(r["therapist_id"]),
                    therapist_name=r["therapist_name"],
                    transport_needed=as_bool(r["transport_needed"]),
                    active=as_bool(r["active"]),
                )
                for r in fetchall(cur)
            ]

    def get_by_id(self, patient_activity_id: int) -> Optional[PatientActivity]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT patient_activity_id, patient_id, activity_id, transport_needed, active
                FROM patient_activities
                WHERE patient_activity_id=%s
                """,
                (int(patient_activity_id),),
            )
            r = fetchone(cur)
            if not r:
                return None
            return PatientActivity(
                patient_activity_id=int(r["patient_activity_id"]),
                patient_id=int(r["patient_id"]),
                activity_id=int(r["activity_id"]),
                transport_needed=as_bool(r["transport_needed"]),
                active=as_bool(r["active"]),
            )

    def create(self, *, patient_id: int, activity_id: int, transport_needed: bool, active: bool = True) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO patient_activities(patient_id, activity_id, transport_needed, active)
                VALUES(%s,%s,%s,%s)
                """,
                (int(patient_id), int(activity_id), int(transport_needed), int(active)),
            )
            return int(cur.lastrowid)

    def update(self, patient_activity_id: int, *, changes: Mapping[str, object]) -> bool:
        cols = [c for c in _UPDATABLE if c in changes]
        if not cols:
            return False

        assignments = ", ".join(f"{c}=%s" for c in cols)
        params = [int(changes[c]) for c in cols]
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"UPDATE patient_activities SET {assignments} WHERE patient_activity_id=%s",
                (*params, int(patient_activity_id)),
            )
            return cur.rowcount > 0

    def set_active(self, patient_activity_id: int, *, active: bool) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE patient_activities SET active=%s WHERE patient_activity_id=%s",
                (int(active), int(patient_activity_id)),
            )
            return cur.rowcount > 0
