from __future__ import annotations

from typing import Sequence

from ..core.enums import DayOfWeek
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, normalize_mysql_time
from .model import ScheduledEnrollment
from .repository import TransportRepository


class MySQLTransportRepository(TransportRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_scheduled_enrollments(self, day_of_week: DayOfWeek) -> Sequence[ScheduledEnrollment]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT
                    pa.patient_activity_id,
                    p.patient_id, p.name AS patient_name,
                    a.activity_id, a.name AS activity_name, a.start_time, a.end_time,
                    t.therapist_id, t.name AS therapist_name
                FROM patient_activities pa
                JOIN patients p ON p.patient_id = pa.patient_id
                JOIN activities a ON a.activity_id = pa.activity_id
                JOIN therapists t ON t.therapist_id = a.therapist_id
                WHERE pa.active = 1
                  AND pa.transport_needed = 1
                  AND a.active = 1
                  AND a.day_of_week = %s
                ORDER BY a.start_time, pa.patient_activity_id
                """,
                (DayOfWeek(day_of_week).value,),
            )
            return [
                ScheduledEnrollment(
                    patient_activity_id=int(r["patient_activity_id"]),
                    patient_id=int(r["patient_id"]),
                    patient_name=r["patient_name"],
                    activity_id=int(r["activity_id"]),
                    activity_name=r["activity_name"],
                    therapist_id=int(r["therapist_id"]),
                    therapist_name=r["therapist_name"],
                    start_time=normalize_mysql_time(r["start_time"]),
                    end_time=normalize_mysql_time(r["end_time"]),
                )
                for r in fetchall(cur)
            ]
