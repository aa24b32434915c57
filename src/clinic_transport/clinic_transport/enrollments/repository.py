from __future__ import annotations

from typing import Mapping, Optional, Protocol, Sequence

from .model import PatientActivity, PatientActivityDetails


class EnrollmentRepository(Protocol):
    def list_with_details(self, *, patient_id: Optional[int] = None) -> Sequence[PatientActivityDetails]:
        """Active enrollments only, optionally for a single patient."""

        raise NotImplementedError

    def get_by_id(self, patient_activity_id: int) -> Optional[PatientActivity]:
        raise NotImplementedError

    def create(self, *, patient_id: int, activity_id: int, transport_needed: bool, active: bool = True) -> int:
        raise NotImplementedError

    def update(self, patient_activity_id: int, *, changes: Mapping[str, object]) -> bool:
        raise NotImplementedError

    def set_active(self, patient_activity_id: int, *, active: bool) -> bool:
        raise NotImplementedError
