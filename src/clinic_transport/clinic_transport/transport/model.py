from __future__ import annotations

from dataclasses import dataclass
from datetime import time
from typing import List


@dataclass(frozen=True)
class ScheduledEnrollment:
    """Active enrollment with transport, pre-joined with its activity and therapist."""

    patient_activity_id: int
    patient_id: int
    patient_name: str
    activity_id: int
    activity_name: str
    therapist_id: int
    therapist_name: str
    start_time: time
    end_time: time


@dataclass(frozen=True)
class TransportActivity:
    activity_id: int
    activity_name: str
    therapist_id: int
    therapist_name: str
    start_time: time
    end_time: time
    therapist_absent: bool = False


@dataclass(frozen=True)
class TransportListItem:
    patient_id: int
    patient_name: str
    activities: List[TransportActivity]
    is_absent: bool


@dataclass(frozen=True)
class TransportStats:
    total: int
    confirmed: int
    absent: int
