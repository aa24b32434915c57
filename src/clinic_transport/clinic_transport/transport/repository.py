from __future__ import annotations

from typing import Protocol, Sequence

from ..core.enums import DayOfWeek
from .model import ScheduledEnrollment


class TransportRepository(Protocol):
    def list_scheduled_enrollments(self, day_of_week: DayOfWeek) -> Sequence[ScheduledEnrollment]:
        """Enrollments with active=1 and transport_needed=1 whose activity is active on `day_of_week`.

        Ordered by activity start time, then enrollment id.
        """

        raise NotImplementedError
