from __future__ import annotations

from dataclasses import dataclass
from datetime import time
from typing import Optional

from ..core.enums import DayOfWeek


@dataclass(frozen=True)
class Activity:
    """Atividade semanal recorrente conduzida por um terapeuta."""

    activity_id: int
    name: str
    therapist_id: int
    day_of_week: DayOfWeek
    start_time: time
    end_time: time
    notes: Optional[str] = None
    active: bool = True


@dataclass(frozen=True)
class ActivityWithNames:
    """Read-model for listings (joined with the therapist)."""

    activity_id: int
    name: str
    therapist_id: int
    therapist_name: str
    day_of_week: DayOfWeek
    start_time: time
    end_time: time
    notes: Optional[str] = None
    active: bool = True


@dataclass(frozen=True)
class EnrolledPatient:
    patient_activity_id: int
    patient_id: int
    patient_name: str
    transport_needed: bool
