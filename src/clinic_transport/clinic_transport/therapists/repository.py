from __future__ import annotations

from typing import Mapping, Optional, Protocol, Sequence

from .model import Therapist


class TherapistRepository(Protocol):
    def list_all(self) -> Sequence[Therapist]:
        raise NotImplementedError

    def get_by_id(self, therapist_id: int) -> Optional[Therapist]:
        raise NotImplementedError

    def create(
        self,
        *,
        name: str,
        specialty: str,
        email: Optional[str],
        phone: Optional[str],
        work_days: Optional[str],
        active: bool = True,
    ) -> int:
        raise NotImplementedError

    def update(self, therapist_id: int, *, changes: Mapping[str, object]) -> bool:
        raise NotImplementedError
