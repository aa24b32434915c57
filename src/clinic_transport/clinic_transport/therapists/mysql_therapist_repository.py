from __future__ import annotations

from typing import Mapping, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_bool, db_cursor, fetchall, fetchone
from .model import Therapist
from .repository import TherapistRepository

_COLUMNS = "therapist_id, name, specialty, email, phone, work_days, active"
_UPDATABLE = ("name", "specialty", "email", "phone", "work_days", "active")


def _row_to_therapist(r: dict) -> Therapist:
    return Therapist(
        therapist_id=int(r["therapist_id"]),
        name=r["name"],
        specialty=r["specialty"],
        email=r.get("email"),
        phone=r.get("phone"),
        work_days=r.get("work_days"),
        active=as_bool(r.get("active", 1)),
    )


class MySQLTherapistRepository(TherapistRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[Therapist]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM therapists ORDER BY name")
            return [_row_to_therapist(r) for r in fetchall(cur)]

    def get_by_id(self, therapist_id: int) -> Optional[Therapist]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM therapists WHERE therapist_id=%s", (int(therapist_id),))
            r = fetchone(cur)
            return _row_to_therapist(r) if r else None

    def create(
        self,
        *,
        name: str,
        specialty: str,
        email: Optional[str],
        phone: Optional[str],
        work_days: Optional[str],
        active: bool = True,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO therapists(name, specialty, email, phone, work_days, active)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (name, specialty, email, phone, work_days, int(active)),
            )
            return int(cur.lastrowid)

    def update(self, therapist_id: int, *, changes: Mapping[str, object]) -> bool:
        cols = [c for c in _UPDATABLE if c in changes]
        if not cols:
            return False

        assignments = ", ".join(f"{c}=%s" for c in cols)
        params = [int(changes[c]) if c == "active" else changes[c] for c in cols]
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"UPDATE therapists SET {assignments} WHERE therapist_id=%s", (*params, int(therapist_id)))
            return cur.rowcount > 0
