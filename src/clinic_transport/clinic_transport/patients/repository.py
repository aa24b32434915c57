from __future__ import annotations

from typing import Mapping, Optional, Protocol, Sequence

from .model import Patient


class PatientRepository(Protocol):
    """Repository interface for patients.

    Services depend on this Protocol, never on a concrete database.
    """

    def list_all(self) -> Sequence[Patient]:
        raise NotImplementedError

    def get_by_id(self, patient_id: int) -> Optional[Patient]:
        raise NotImplementedError

    def create(self, *, name: str, phone: Optional[str], address: Optional[str], active: bool = True) -> int:
        raise NotImplementedError

    def update(self, patient_id: int, *, changes: Mapping[str, object]) -> bool:
        raise NotImplementedError
