from __future__ import annotations

from datetime import time
from typing import Mapping, Optional, Sequence

from ..core.enums import DayOfWeek
from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_bool, db_cursor, fetchall, fetchone, normalize_mysql_time
from .model import Activity, ActivityWithNames, EnrolledPatient
from .repository import ActivityRepository

_UPDATABLE = ("name", "therapist_id", "day_of_week", "start_time", "end_time", "notes", "active")


def _sql_value(col: str, value: object) -> object:
    if col == "active":
        return int(bool(value))
    if isinstance(value, DayOfWeek):
        return value.value
    return value


class MySQLActivityRepository(ActivityRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_with_names(self, *, day_of_week: Optional[DayOfWeek] = None) -> Sequence[ActivityWithNames]:
        clauses = ["a.active = 1"]
        params: list[object] = []
        if day_of_week is not None:
            clauses.append("a.day_of_week=%s")
            params.append(day_of_week.value)

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT
                    a.activity_id, a.name, a.therapist_id, t.name AS therapist_name,
                    a.day_of_week, a.start_time, a.end_time, a.notes, a.active
                FROM activities a
                JOIN therapists t ON t.therapist_id = a.therapist_id
                WHERE {where}
                ORDER BY FIELD(a.day_of_week, 'Seg', 'Ter', 'Qua', 'Qui', 'Sex'), a.start_time, a.activity_id
                """,
                tuple(params),
            )
            return [
                ActivityWithNames(
                    activity_id=int(r["activity_id"]),
                    name=r["name"],
                    therapist_id=int(r["therapist_id"]),
                    therapist_name=r["therapist_name"],
                    day_of_week=DayOfWeek(r["day_of_week"]),
                    start_time=normalize_mysql_time(r["start_time"]),
                    end_time=normalize_mysql_time(r["end_time"]),
                    notes=r.get("notes"),
                    active=as_bool(r.get("active", 1)),
                )
                for r in fetchall(cur)
            ]

    def get_by_id(self, activity_id: int) -> Optional[Activity]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT activity_id, name, therapist_id, day_of_week, start_time, end_time, notes, active
                FROM activities
                WHERE activity_id=%s
                """,
                (int(activity_id),),
            )
            r = fetchone(cur)
            if not r:
                return None
            return Activity(
                activity_id=int(r["activity_id"]),
                name=r["name"],
                therapist_id=int(r["therapist_id"]),
                day_of_week=DayOfWeek(r["day_of_week"]),
                start_time=normalize_mysql_time(r["start_time"]),
                end_time=normalize_mysql_time(r["end_time"]),
                notes=r.get("notes"),
                active=as_bool(r.get("active", 1)),
            )

    def create(
        self,
        *,
        name: str,
        therapist_id: int,
        day_of_week: DayOfWeek,
        start_time: time,
        end_time: time,
        notes: Optional[str],
        active: bool = True,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO activities(name, therapist_id, day_of_week, start_time, end_time, notes, active)
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                (name, int(therapist_id), day_of_week.value, start_time, end_time, notes, int(active)),
            )
            return int(cur.lastrowid)

    def update(self, activity_id: int, *, changes: Mapping[str, object]) -> bool:
        cols = [c for c in _UPDATABLE if c in changes]
        if not cols:
            return False

        assignments = ", ".join(f"{c}=%s" for c in cols)
        params = [_sql_value(c, changes[c]) for c in cols]
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"UPDATE activities SET {assignments} WHERE activity_id=%s", (*params, int(activity_id)))
            return cur.rowcount > 0

    def set_active(self, activity_id: int, *, active: bool) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE activities SET active=%s WHERE activity_id=%s", (int(active), int(activity_id)))
            return cur.rowcount > 0

    def list_patients(self, activity_id: int) -> Sequence[EnrolledPatient]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT pa.patient_activity_id, p.patient_id, p.name AS patient_name, pa.transport_needed
                FROM patient_activities pa
                JOIN patients p ON p.patient_id = pa.patient_id
                WHERE pa.activity_id=%s AND pa.active = 1
                ORDER BY p.name, pa.patient_activity_id
                """,
                (int(activity_id),),
            )
            return [
                EnrolledPatient(
                    patient_activity_id=int(r["patient_activity_id"]),
                    patient_id=int(r["patient_id"]),
                    patient_name=r["patient_name"],
                    transport_needed=as_bool(r["transport_needed"]),
                )
                for r in fetchall(cur)
            ]
