from __future__ import annotations

import logging
import unicodedata
from concurrent.futures import ThreadPoolExecutor
from datetime import date, timedelta
from typing import Dict, List, Sequence, Set, Union

from ..absences.repository import PatientAbsenceRepository, TherapistAbsenceRepository
from ..common.datetime_utils import coerce_date, monday_of, weekday_code
from ..core.constants import DEFAULT_WEEKLY_WORKERS
from ..core.enums import DayOfWeek
from .model import ScheduledEnrollment, TransportActivity, TransportListItem, TransportStats
from .repository import TransportRepository

logger = logging.getLogger(__name__)


def name_sort_key(name: str) -> str:
    """Accent and case insensitive key, so 'Ângela' sorts next to 'Ana'."""
    decomposed = unicodedata.normalize("NFKD", name or "")
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch)).casefold()


class TransportService:
    """Derive who needs transport on a given day.

    Read-only: every call recomputes from the current rows, nothing is cached.
    """

    def __init__(
        self,
        transport: TransportRepository,
        patient_absences: PatientAbsenceRepository,
        therapist_absences: TherapistAbsenceRepository,
        *,
        weekly_workers: int = DEFAULT_WEEKLY_WORKERS,
    ):
        self._transport = transport
        self._patient_absences = patient_absences
        self._therapist_absences = therapist_absences
        self._weekly_workers = max(1, int(weekly_workers))

    @staticmethod
    def _is_absent(patient_id: int, activities: Sequence[TransportActivity], absent_patients: Set[int]) -> bool:
        # Nobody there to treat them: no transport even without their own absence record.
        if patient_id in absent_patients:
            return True
        return all(a.therapist_absent for a in activities)

    def resolve_transport_list(self, day: Union[date, str]) -> List[TransportListItem]:
        day = coerce_date(day)
        code = weekday_code(day)
        if code is None:
            logger.debug("Transport list for %s: weekend, nothing scheduled", day)
            return []

        enrollments = self._transport.list_scheduled_enrollments(code)
        absent_patients = {a.patient_id for a in self._patient_absences.list(on=day)}
        absent_therapists = {a.therapist_id for a in self._therapist_absences.list(on=day)}

        grouped: Dict[int, List[ScheduledEnrollment]] = {}
        for enrollment in enrollments:
            grouped.setdefault(enrollment.patient_id, []).append(enrollment)

        items: List[TransportListItem] = []
        for patient_id, rows in grouped.items():
            activities = [
                TransportActivity(
                    activity_id=r.activity_id,
                    activity_name=r.activity_name,
                    therapist_id=r.therapist_id,
                    therapist_name=r.therapist_name,
                    start_time=r.start_time,
                    end_time=r.end_time,
                    therapist_absent=r.therapist_id in absent_therapists,
                )
                for r in rows
            ]
            items.append(
                TransportListItem(
                    patient_id=patient_id,
                    patient_name=rows[0].patient_name,
                    activities=activities,
                    is_absent=self._is_absent(patient_id, activities, absent_patients),
                )
            )

        items = sorted(items, key=lambda item: name_sort_key(item.patient_name))
        logger.debug(
            "Transport list for %s (%s): %d patients, %d absent",
            day,
            code.value,
            len(items),
            sum(1 for i in items if i.is_absent),
        )
        return items

    def resolve_weekly_schedule(self, start: Union[date, str]) -> Dict[str, List[TransportListItem]]:
        """Lists for Monday..Friday of the week containing `start`.

        Each day is resolved independently. With more than one worker the five
        days run on a thread pool; every day finishes before the dict is built.
        """
        monday = monday_of(coerce_date(start))
        days = [monday + timedelta(days=day.index) for day in DayOfWeek]

        if self._weekly_workers > 1:
            with ThreadPoolExecutor(max_workers=min(self._weekly_workers, len(days))) as pool:
                results = list(pool.map(self.resolve_transport_list, days))
        else:
            results = [self.resolve_transport_list(d) for d in days]

        return {day.value: items for day, items in zip(DayOfWeek, results)}

    def compute_stats(self, day: Union[date, str]) -> TransportStats:
        items = self.resolve_transport_list(day)
        absent = sum(1 for i in items if i.is_absent)
        return TransportStats(total=len(items), confirmed=len(items) - absent, absent=absent)
