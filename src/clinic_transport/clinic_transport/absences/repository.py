from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import PatientAbsence, TherapistAbsence


class PatientAbsenceRepository(Protocol):
    def list(self, *, on: Optional[date] = None, patient_id: Optional[int] = None) -> Sequence[PatientAbsence]:
        raise NotImplementedError

    def get_by_id(self, absence_id: int) -> Optional[PatientAbsence]:
        raise NotImplementedError

    def get_for(self, *, patient_id: int, on: date) -> Optional[PatientAbsence]:
        raise NotImplementedError

    def create(self, *, patient_id: int, absence_date: date, reason: Optional[str] = None) -> int:
        raise NotImplementedError

    def delete(self, absence_id: int) -> bool:
        raise NotImplementedError


class TherapistAbsenceRepository(Protocol):
    def list(self, *, on: Optional[date] = None, therapist_id: Optional[int] = None) -> Sequence[TherapistAbsence]:
        raise NotImplementedError

    def get_by_id(self, absence_id: int) -> Optional[TherapistAbsence]:
        raise NotImplementedError

    def get_for(self, *, therapist_id: int, on: date) -> Optional[TherapistAbsence]:
        raise NotImplementedError

    def create(self, *, therapist_id: int, absence_date: date, reason: Optional[str] = None) -> int:
        raise NotImplementedError

    def delete(self, absence_id: int) -> bool:
        raise NotImplementedError
