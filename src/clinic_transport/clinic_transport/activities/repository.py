from __future__ import annotations

from datetime import time
from typing import Mapping, Optional, Protocol, Sequence

from ..core.enums import DayOfWeek
from .model import Activity, ActivityWithNames, EnrolledPatient


class ActivityRepository(Protocol):
    def list_with_names(self, *, day_of_week: Optional[DayOfWeek] = None) -> Sequence[ActivityWithNames]:
        """Active activities only, ordered by weekday then start time."""

        raise NotImplementedError

    def get_by_id(self, activity_id: int) -> Optional[Activity]:
        """Returns inactive activities too, so they can be reactivated."""

        raise NotImplementedError

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
        raise NotImplementedError

    def update(self, activity_id: int, *, changes: Mapping[str, object]) -> bool:
        raise NotImplementedError

    def set_active(self, activity_id: int, *, active: bool) -> bool:
        raise NotImplementedError

    def list_patients(self, activity_id: int) -> Sequence[EnrolledPatient]:
        """Patients with an active enrollment in the activity."""

        raise NotImplementedError
