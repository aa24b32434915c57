from __future__ import annotations

import logging
from datetime import date
from typing import Any, Optional, Sequence, Union

from ..common.datetime_utils import coerce_date
from ..common.validators import optional_text, require_positive_id
from ..core.exceptions import NotFoundError, ValidationError
from ..patients.repository import PatientRepository
from ..therapists.repository import TherapistRepository
from .model import AbsenceToggleResult, PatientAbsence, TherapistAbsence
from .repository import PatientAbsenceRepository, TherapistAbsenceRepository

logger = logging.getLogger(__name__)


class AbsenceService:
    """Use case: register and undo dated absences.

    An absence is just the presence of a row for (person, date); undoing it
    deletes the row. There is no status to transition.
    """

    def __init__(
        self,
        patient_absences: PatientAbsenceRepository,
        therapist_absences: TherapistAbsenceRepository,
        patients: PatientRepository,
        therapists: TherapistRepository,
    ):
        self._patient_absences = patient_absences
        self._therapist_absences = therapist_absences
        self._patients = patients
        self._therapists = therapists

    # ----- patients -----

    def list_patient_absences(
        self,
        *,
        on: Optional[Union[date, str]] = None,
        patient_id: Optional[int] = None,
    ) -> Sequence[PatientAbsence]:
        return self._patient_absences.list(
            on=coerce_date(on) if on else None,
            patient_id=int(patient_id) if patient_id else None,
        )

    def _require_patient(self, patient_id: Any) -> int:
        patient_id = require_positive_id(patient_id, "Paciente")
        if not self._patients.get_by_id(patient_id):
            raise NotFoundError("Paciente não encontrado")
        return patient_id

    def register_patient_absence(
        self,
        *,
        patient_id: Any = None,
        absence_date: Any = None,
        reason: Optional[str] = None,
    ) -> PatientAbsence:
        patient_id = self._require_patient(patient_id)
        day = coerce_date(absence_date)

        if self._patient_absences.get_for(patient_id=patient_id, on=day):
            raise ValidationError("Ausência já registrada para esta data")

        absence_id = self._patient_absences.create(patient_id=patient_id, absence_date=day, reason=optional_text(reason))
        logger.info("Patient %s marked absent on %s", patient_id, day)
        return PatientAbsence(absence_id=absence_id, patient_id=patient_id, absence_date=day, reason=optional_text(reason))

    def remove_patient_absence(self, absence_id: int) -> None:
        if not self._patient_absences.delete(int(absence_id)):
            raise NotFoundError("Ausência de paciente não encontrada")
        logger.info("Patient absence %s removed", absence_id)

    def toggle_patient_absence(
        self,
        *,
        patient_id: Any = None,
        absence_date: Any = None,
        reason: Optional[str] = None,
    ) -> AbsenceToggleResult:
        """Mark absent, or undo when an absence already exists for that date.

        Two concurrent toggles of the same (patient, date) race; the last
        write wins.
        """
        patient_id = self._require_patient(patient_id)
        day = coerce_date(absence_date)

        existing = self._patient_absences.get_for(patient_id=patient_id, on=day)
        if existing:
            self._patient_absences.delete(existing.absence_id)
            logger.info("Patient %s absence on %s undone", patient_id, day)
            return AbsenceToggleResult(absent=False)

        absence = self.register_patient_absence(patient_id=patient_id, absence_date=day, reason=reason)
        return AbsenceToggleResult(absent=True, absence=absence)

    # ----- therapists -----

    def list_therapist_absences(
        self,
        *,
        on: Optional[Union[date, str]] = None,
        therapist_id: Optional[int] = None,
    ) -> Sequence[TherapistAbsence]:
        return self._therapist_absences.list(
            on=coerce_date(on) if on else None,
            therapist_id=int(therapist_id) if therapist_id else None,
        )

    def register_therapist_absence(
        self,
        *,
        therapist_id: Any = None,
        absence_date: Any = None,
        reason: Optional[str] = None,
    ) -> TherapistAbsence:
        therapist_id = require_positive_id(therapist_id, "Terapeuta")
        if not self._therapists.get_by_id(therapist_id):
            raise NotFoundError("Terapeuta não encontrado")
        day = coerce_date(absence_date)

        if self._therapist_absences.get_for(therapist_id=therapist_id, on=day):
            raise ValidationError("Ausência já registrada para esta data")

        absence_id = self._therapist_absences.create(
            therapist_id=therapist_id, absence_date=day, reason=optional_text(reason)
        )
        logger.info("Therapist %s marked absent on %s", therapist_id, day)
        return TherapistAbsence(
            absence_id=absence_id, therapist_id=therapist_id, absence_date=day, reason=optional_text(reason)
        )

    def remove_therapist_absence(self, absence_id: int) -> None:
        if not self._therapist_absences.delete(int(absence_id)):
            raise NotFoundError("Ausência de terapeuta não encontrada")
        logger.info("Therapist absence %s removed", absence_id)
