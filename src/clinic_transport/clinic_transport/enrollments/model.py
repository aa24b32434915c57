from __future__ import annotations

from dataclasses import dataclass
from datetime import time

from ..core.enums import DayOfWeek


@dataclass(frozen=True)
class PatientActivity:
    """Matrícula recorrente de um paciente em uma atividade semanal."""

    patient_activity_id: int
    patient_id: int
    activity_id: int
    transport_needed: bool = True
    active: bool = True


@dataclass(frozen=True)
class PatientActivityDetails:
    """Read-model: enrollment joined with patient, activity and therapist."""

    patient_activity_id: int
    patient_id: int
    patient_name: str
    activity_id: int
    activity_name: str
    day_of_week: DayOfWeek
    start_time: time
    end_time: time
    therapist_id: int
    therapist_name: str
    transport_needed: bool
    active: bool = True
