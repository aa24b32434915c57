from __future__ import annotations

import logging
from typing import Any, Mapping, Optional, Sequence

from ..common.validators import optional_email, optional_text, require_bool, require_min_length
from ..core.constants import MIN_NAME_LENGTH
from ..core.enums import DayOfWeek
from ..core.exceptions import NotFoundError, ValidationError
from .model import Therapist
from .repository import TherapistRepository

logger = logging.getLogger(__name__)

_FIELDS = {"name", "specialty", "email", "phone", "work_days", "active"}


def normalize_work_days(value: Optional[str]) -> Optional[str]:
    """'seg, Qua ,SEX' -> 'Seg,Qua,Sex' (week order, no duplicates)."""
    value = optional_text(value)
    if value is None:
        return None

    by_lower = {d.value.lower(): d for d in DayOfWeek}
    days: set[DayOfWeek] = set()
    for part in value.split(","):
        code = part.strip().lower()
        if not code:
            continue
        if code not in by_lower:
            raise ValidationError(f"Dia de trabalho inválido: {part.strip()}")
        days.add(by_lower[code])

    if not days:
        return None
    return ",".join(d.value for d in sorted(days, key=lambda d: d.index))


class TherapistService:
    def __init__(self, therapists: TherapistRepository):
        self._therapists = therapists

    def list_therapists(self) -> Sequence[Therapist]:
        return self._therapists.list_all()

    def get_therapist(self, therapist_id: int) -> Therapist:
        therapist = self._therapists.get_by_id(int(therapist_id))
        if not therapist:
            raise NotFoundError("Terapeuta não encontrado")
        return therapist

    def create_therapist(
        self,
        *,
        name: str = "",
        specialty: str = "",
        email: Optional[str] = None,
        phone: Optional[str] = None,
        work_days: Optional[str] = None,
        active: bool = True,
    ) -> Therapist:
        therapist_id = self._therapists.create(
            name=require_min_length(name, "Nome", MIN_NAME_LENGTH),
            specialty=require_min_length(specialty, "Especialidade", MIN_NAME_LENGTH),
            email=optional_email(email),
            phone=optional_text(phone),
            work_days=normalize_work_days(work_days),
            active=require_bool(active, "Ativo"),
        )
        logger.info("Therapist %s created", therapist_id)
        return self.get_therapist(therapist_id)

    def update_therapist(self, therapist_id: int, *, changes: Mapping[str, Any]) -> Therapist:
        unknown = set(changes) - _FIELDS
        if unknown:
            raise ValidationError(f"Campos desconhecidos: {', '.join(sorted(unknown))}")

        self.get_therapist(therapist_id)

        clean: dict[str, Any] = {}
        if "name" in changes:
            clean["name"] = require_min_length(changes["name"], "Nome", MIN_NAME_LENGTH)
        if "specialty" in changes:
            clean["specialty"] = require_min_length(changes["specialty"], "Especialidade", MIN_NAME_LENGTH)
        if "email" in changes:
            clean["email"] = optional_email(changes["email"])
        if "phone" in changes:
            clean["phone"] = optional_text(changes["phone"])
        if "work_days" in changes:
            clean["work_days"] = normalize_work_days(changes["work_days"])
        if "active" in changes:
            clean["active"] = require_bool(changes["active"], "Ativo")

        if clean:
            self._therapists.update(int(therapist_id), changes=clean)
            logger.info("Therapist %s updated (%s)", therapist_id, ", ".join(sorted(clean)))
        return self.get_therapist(therapist_id)
