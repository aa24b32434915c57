from __future__ import annotations

import logging
from typing import Any, Mapping, Sequence

from ..activities.repository import ActivityRepository
from ..common.validators import require_bool, require_positive_id
from ..core.exceptions import NotFoundError, ValidationError
from ..patients.repository import PatientRepository
from .model import PatientActivity, PatientActivityDetails
from .repository import EnrollmentRepository

logger = logging.getLogger(__name__)

_FIELDS = {"patient_id", "activity_id", "transport_needed", "active"}


class EnrollmentService:
    """Use case: enroll patients in weekly activities."""

    def __init__(
        self,
        enrollments: EnrollmentRepository,
        patients: PatientRepository,
        activities: ActivityRepository,
    ):
        self._enrollments = enrollments
        self._patients = patients
        self._activities = activities

    def list_enrollments(self) -> Sequence[PatientActivityDetails]:
        return self._enrollments.list_with_details()

    def get_enrollment(self, patient_activity_id: int) -> PatientActivity:
        enrollment = self._enrollments.get_by_id(int(patient_activity_id))
        if not enrollment:
            raise NotFoundError("Atividade do paciente não encontrada")
        return enrollment

    def _require_patient(self, patient_id: Any) -> int:
        patient_id = require_positive_id(patient_id, "Paciente")
        if not self._patients.get_by_id(patient_id):
            raise NotFoundError("Paciente não encontrado")
        return patient_id

    def _require_active_activity(self, activity_id: Any) -> int:
        activity_id = require_positive_id(activity_id, "Atividade")
        activity = self._activities.get_by_id(activity_id)
        if not activity:
            raise NotFoundError("Atividade não encontrada")
        if not activity.active:
            raise ValidationError("Atividade inativa")
        return activity_id

    def enroll(
        self,
        *,
        patient_id: Any = None,
        activity_id: Any = None,
        transport_needed: bool = True,
        active: bool = True,
    ) -> PatientActivity:
        patient_id = self._require_patient(patient_id)
        activity_id = self._require_active_activity(activity_id)

        enrollment_id = self._enrollments.create(
            patient_id=patient_id,
            activity_id=activity_id,
            transport_needed=require_bool(transport_needed, "Necessita transporte"),
            active=require_bool(active, "Ativo"),
        )
        logger.info("Patient %s enrolled in activity %s (enrollment %s)", patient_id, activity_id, enrollment_id)
        return self.get_enrollment(enrollment_id)

    def update_enrollment(self, patient_activity_id: int, *, changes: Mapping[str, Any]) -> PatientActivity:
        unknown = set(changes) - _FIELDS
        if unknown:
            raise ValidationError(f"Campos desconhecidos: {', '.join(sorted(unknown))}")

        current = self.get_enrollment(patient_activity_id)

        clean: dict[str, Any] = {}
        if "patient_id" in changes:
            clean["patient_id"] = self._require_patient(changes["patient_id"])
        if "activity_id" in changes:
            clean["activity_id"] = self._require_active_activity(changes["activity_id"])
        if "transport_needed" in changes:
            clean["transport_needed"] = require_bool(changes["transport_needed"], "Necessita transporte")
        if "active" in changes:
            clean["active"] = require_bool(changes["active"], "Ativo")

        if clean:
            self._enrollments.update(current.patient_activity_id, changes=clean)
            logger.info("Enrollment %s updated (%s)", patient_activity_id, ", ".join(sorted(clean)))
        return self.get_enrollment(patient_activity_id)

    def delete_enrollment(self, patient_activity_id: int) -> None:
        enrollment = self.get_enrollment(patient_activity_id)
        if not enrollment.active:
            raise NotFoundError("Atividade do paciente não encontrada")
        self._enrollments.set_active(enrollment.patient_activity_id, active=False)
        logger.info("Enrollment %s deactivated", patient_activity_id)
