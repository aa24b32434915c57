from __future__ import annotations

import logging
from typing import Any, Mapping, Optional, Sequence

from ..common.validators import optional_text, require_bool, require_min_length
from ..core.constants import MIN_NAME_LENGTH
from ..core.exceptions import NotFoundError, ValidationError
from ..enrollments.model import PatientActivityDetails
from ..enrollments.repository import EnrollmentRepository
from .model import Patient
from .repository import PatientRepository

logger = logging.getLogger(__name__)

_FIELDS = {"name", "phone", "address", "active"}


class PatientService:
    """Use case: manage the patient registry."""

    def __init__(self, patients: PatientRepository, enrollments: Optional[EnrollmentRepository] = None):
        self._patients = patients
        self._enrollments = enrollments

    def list_patients(self) -> Sequence[Patient]:
        return self._patients.list_all()

    def get_patient(self, patient_id: int) -> Patient:
        patient = self._patients.get_by_id(int(patient_id))
        if not patient:
            raise NotFoundError("Paciente não encontrado")
        return patient

    def create_patient(
        self,
        *,
        name: str = "",
        phone: Optional[str] = None,
        address: Optional[str] = None,
        active: bool = True,
    ) -> Patient:
        name = require_min_length(name, "Nome", MIN_NAME_LENGTH)
        patient_id = self._patients.create(
            name=name,
            phone=optional_text(phone),
            address=optional_text(address),
            active=require_bool(active, "Ativo"),
        )
        logger.info("Patient %s created", patient_id)
        return self.get_patient(patient_id)

    def update_patient(self, patient_id: int, *, changes: Mapping[str, Any]) -> Patient:
        unknown = set(changes) - _FIELDS
        if unknown:
            raise ValidationError(f"Campos desconhecidos: {', '.join(sorted(unknown))}")

        self.get_patient(patient_id)

        clean: dict[str, Any] = {}
        if "name" in changes:
            clean["name"] = require_min_length(changes["name"], "Nome", MIN_NAME_LENGTH)
        for key in ("phone", "address"):
            if key in changes:
                clean[key] = optional_text(changes[key])
        if "active" in changes:
            clean["active"] = require_bool(changes["active"], "Ativo")

        if clean:
            self._patients.update(int(patient_id), changes=clean)
            logger.info("Patient %s updated (%s)", patient_id, ", ".join(sorted(clean)))
        return self.get_patient(patient_id)

    def list_patient_activities(self, patient_id: int) -> Sequence[PatientActivityDetails]:
        if self._enrollments is None:
            return []
        return self._enrollments.list_with_details(patient_id=int(patient_id))
