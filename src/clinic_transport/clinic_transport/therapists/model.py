from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Therapist:
    therapist_id: int
    name: str
    specialty: str
    email: Optional[str] = None
    phone: Optional[str] = None
    work_days: Optional[str] = None  # "Seg,Qua,Sex"
    active: bool = True

    @property
    def work_day_codes(self) -> list[str]:
        if not self.work_days:
            return []
        return [d.strip() for d in self.work_days.split(",") if d.strip()]
