from __future__ import annotations

from datetime import date
from typing import Any, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import PatientAbsence, TherapistAbsence
from .repository import PatientAbsenceRepository, TherapistAbsenceRepository


class _MySQLAbsenceTable:
    """Shared SQL for the two absence tables (same shape, different owner column)."""

    table: str
    owner_column: str

    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _to_model(self, r: dict) -> Any:
        raise NotImplementedError

    def _select(self, where: str, params: tuple) -> list[dict]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT absence_id, {self.owner_column}, absence_date, reason
                FROM {self.table}
                WHERE {where}
                ORDER BY absence_date DESC, absence_id ASC
                """,
                params,
            )
            return fetchall(cur)

    def _list(self, *, on: Optional[date], owner_id: Optional[int]) -> list:
        clauses = ["1=1"]
        params: list[object] = []
        if on is not None:
            clauses.append("absence_date=%s")
            params.append(on)
        if owner_id is not None:
            clauses.append(f"{self.owner_column}=%s")
            params.append(int(owner_id))
        return [self._to_model(r) for r in self._select(" AND ".join(clauses), tuple(params))]

    def get_by_id(self, absence_id: int):
        rows = self._select("absence_id=%s", (int(absence_id),))
        return self._to_model(rows[0]) if rows else None

    def _get_for(self, *, owner_id: int, on: date):
        rows = self._select(f"{self.owner_column}=%s AND absence_date=%s", (int(owner_id), on))
        return self._to_model(rows[0]) if rows else None

    def _create(self, *, owner_id: int, absence_date: date, reason: Optional[str]) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"INSERT INTO {self.table}({self.owner_column}, absence_date, reason) VALUES(%s,%s,%s)",
                (int(owner_id), absence_date, reason),
            )
            if cur.lastrowid:
                return int(cur.lastrowid)

            cur.execute(
                f"SELECT absence_id FROM {self.table} WHERE {self.owner_column}=%s AND absence_date=%s",
                (int(owner_id), absence_date),
            )
            r = fetchone(cur)
            return int(r["absence_id"]) if r else 0

    def delete(self, absence_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"DELETE FROM {self.table} WHERE absence_id=%s", (int(absence_id),))
            return cur.rowcount > 0


class MySQLPatientAbsenceRepository(_MySQLAbsenceTable, PatientAbsenceRepository):
    table = "patient_absences"
    owner_column = "patient_id"

    def _to_model(self, r: dict) -> PatientAbsence:
        return PatientAbsence(
            absence_id=int(r["absence_id"]),
            patient_id=int(r["patient_id"]),
            absence_date=r["absence_date"],
            reason=r.get("reason"),
        )

    def list(self, *, on: Optional[date] = None, patient_id: Optional[int] = None) -> Sequence[PatientAbsence]:
        return self._list(on=on, owner_id=patient_id)

    def get_for(self, *, patient_id: int, on: date) -> Optional[PatientAbsence]:
        return self._get_for(owner_id=patient_id, on=on)

    def create(self, *, patient_id: int, absence_date: date, reason: Optional[str] = None) -> int:
        return self._create(owner_id=patient_id, absence_date=absence_date, reason=reason)


class MySQLTherapistAbsenceRepository(_MySQLAbsenceTable, TherapistAbsenceRepository):
    table = "therapist_absences"
    owner_column = "therapist_id"

    def _to_model(self, r: dict) -> TherapistAbsence:
        return TherapistAbsence(
            absence_id=int(r["absence_id"]),
            therapist_id=int(r["therapist_id"]),
            absence_date=r["absence_date"],
            reason=r.get("reason"),
        )

    def list(self, *, on: Optional[date] = None, therapist_id: Optional[int] = None) -> Sequence[TherapistAbsence]:
        return self._list(on=on, owner_id=therapist_id)

    def get_for(self, *, therapist_id: int, on: date) -> Optional[TherapistAbsence]:
        return self._get_for(owner_id=therapist_id, on=on)

    def create(self, *, therapist_id: int, absence_date: date, reason: Optional[str] = None) -> int:
        return self._create(owner_id=therapist_id, absence_date=absence_date, reason=reason)
