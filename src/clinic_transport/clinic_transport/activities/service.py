from __future__ import annotations

import logging
from datetime import time
from typing import Any, Mapping, Optional, Sequence

from ..common.datetime_utils import parse_clock_time, parse_day_of_week
from ..common.validators import optional_text, require_bool, require_non_empty, require_positive_id
from ..core.exceptions import NotFoundError, ValidationError
from ..therapists.repository import TherapistRepository
from .model import Activity, ActivityWithNames, EnrolledPatient
from .repository import ActivityRepository

logger = logging.getLogger(__name__)

_FIELDS = {"name", "therapist_id", "day_of_week", "start_time", "end_time", "notes", "active"}


def _require_time_order(start_time: time, end_time: time) -> None:
    if end_time <= start_time:
        raise ValidationError("Horário final deve ser depois do horário inicial")


class ActivityService:
    """Use case: manage the weekly activity grid.

    Activities are never hard-deleted; `delete_activity` flips `active` off so
    existing enrollments keep their history.
    """

    def __init__(self, activities: ActivityRepository, therapists: TherapistRepository):
        self._activities = activities
        self._therapists = therapists

    def list_activities(self, *, day_of_week: Optional[str] = None) -> Sequence[ActivityWithNames]:
        day = parse_day_of_week(day_of_week) if day_of_week else None
        return self._activities.list_with_names(day_of_week=day)

    def get_activity(self, activity_id: int) -> Activity:
        activity = self._activities.get_by_id(int(activity_id))
        if not activity:
            raise NotFoundError("Atividade não encontrada")
        return activity

    def _require_therapist(self, therapist_id: Any) -> int:
        therapist_id = require_positive_id(therapist_id, "Terapeuta")
        if not self._therapists.get_by_id(therapist_id):
            raise NotFoundError("Terapeuta não encontrado")
        return therapist_id

    def create_activity(
        self,
        *,
        name: str = "",
        therapist_id: Any = None,
        day_of_week: Any = None,
        start_time: Any = None,
        end_time: Any = None,
        notes: Optional[str] = None,
        active: bool = True,
    ) -> Activity:
        name = require_non_empty(name, "Nome da atividade")
        day = parse_day_of_week(day_of_week)
        start = parse_clock_time(start_time)
        end = parse_clock_time(end_time)
        _require_time_order(start, end)
        therapist_id = self._require_therapist(therapist_id)

        activity_id = self._activities.create(
            name=name,
            therapist_id=therapist_id,
            day_of_week=day,
            start_time=start,
            end_time=end,
            notes=optional_text(notes),
            active=require_bool(active, "Ativo"),
        )
        logger.info("Activity %s created (%s %s-%s)", activity_id, day.value, start, end)
        return self.get_activity(activity_id)

    def update_activity(self, activity_id: int, *, changes: Mapping[str, Any]) -> Activity:
        unknown = set(changes) - _FIELDS
        if unknown:
            raise ValidationError(f"Campos desconhecidos: {', '.join(sorted(unknown))}")

        current = self.get_activity(activity_id)

        clean: dict[str, Any] = {}
        if "name" in changes:
            clean["name"] = require_non_empty(changes["name"], "Nome da atividade")
        if "therapist_id" in changes:
            clean["therapist_id"] = self._require_therapist(changes["therapist_id"])
        if "day_of_week" in changes:
            clean["day_of_week"] = parse_day_of_week(changes["day_of_week"])
        if "start_time" in changes:
            clean["start_time"] = parse_clock_time(changes["start_time"])
        if "end_time" in changes:
            clean["end_time"] = parse_clock_time(changes["end_time"])
        if "notes" in changes:
            clean["notes"] = optional_text(changes["notes"])
        if "active" in changes:
            clean["active"] = require_bool(changes["active"], "Ativo")

        _require_time_order(
            clean.get("start_time", current.start_time),
            clean.get("end_time", current.end_time),
        )

        if clean:
            self._activities.update(current.activity_id, changes=clean)
            logger.info("Activity %s updated (%s)", activity_id, ", ".join(sorted(clean)))
        return self.get_activity(activity_id)

    def delete_activity(self, activity_id: int) -> None:
        activity = self.get_activity(activity_id)
        if not activity.active:
            raise NotFoundError("Atividade não encontrada")
        self._activities.set_active(activity.activity_id, active=False)
        logger.info("Activity %s deactivated", activity_id)

    def list_activity_patients(self, activity_id: int) -> Sequence[EnrolledPatient]:
        self.get_activity(activity_id)
        return self._activities.list_patients(int(activity_id))

