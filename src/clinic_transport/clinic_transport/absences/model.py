from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional


@dataclass(frozen=True)
class PatientAbsence:
    """Ausência pontual do paciente em uma data (não recorrente)."""

    absence_id: int
    patient_id: int
    absence_date: date
    reason: Optional[str] = None


@dataclass(frozen=True)
class TherapistAbsence:
    """Ausência pontual do terapeuta em uma data (não recorrente)."""

    absence_id: int
    therapist_id: int
    absence_date: date
    reason: Optional[str] = None


@dataclass(frozen=True)
class AbsenceToggleResult:
    absent: bool
    absence: Optional[PatientAbsence] = None
