from __future__ import annotations

from typing import Mapping, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_bool, db_cursor, fetchall, fetchone
from .model import Patient
from .repository import PatientRepository

_UPDATABLE = ("name", "phone", "address", "active")


def _row_to_patient(r: dict) -> Patient:
    return Patient(
        patient_id=int(r["patient_id"]),
        name=r["name"],
        phone=r.get("phone"),
        address=r.get("address"),
        active=as_bool(r.get("active", 1)),
    )


class MySQLPatientRepository(PatientRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[Patient]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT patient_id, name, phone, address, active FROM patients ORDER BY name")
            return [_row_to_patient(r) for r in fetchall(cur)]

    def get_by_id(self, patient_id: int) -> Optional[Patient]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT patient_id, name, phone, address, active FROM patients WHERE patient_id=%s",
                (int(patient_id),),
            )
            r = fetchone(cur)
            return _row_to_patient(r) if r else None

    def create(self, *, name: str, phone: Optional[str], address: Optional[str], active: bool = True) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO patients(name, phone, address, active) VALUES(%s,%s,%s,%s)",
                (name, phone, address, int(active)),
            )
            return int(cur.lastrowid)

    def update(self, patient_id: int, *, changes: Mapping[str, object]) -> bool:
        cols = [c for c in _UPDATABLE if c in changes]
        if not cols:
            return False

        assignments = ", ".join(f"{c}=%s" for c in cols)
        params = [int(changes[c]) if c == "active" else changes[c] for c in cols]
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"UPDATE patients SET {assignments} WHERE patient_id=%s", (*params, int(patient_id)))
            return cur.rowcount > 0
