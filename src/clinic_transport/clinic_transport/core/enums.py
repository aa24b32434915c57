from __future__ import annotations

from enum import Enum
from typing import Optional

from .constants import WEEKDAY_CODES, WEEKDAY_LABELS


class DayOfWeek(str, Enum):
    """Dias úteis em que a clínica agenda atividades (códigos curtos)."""

    SEG = "Seg"
    TER = "Ter"
    QUA = "Qua"
    QUI = "Qui"
    SEX = "Sex"

    @classmethod
    def from_index(cls, index: int) -> Optional["DayOfWeek"]:
        """Map a date.weekday() index to a code; weekend indexes yield None."""
        if 0 <= index < len(WEEKDAY_CODES):
            return cls(WEEKDAY_CODES[index])
        return None

    @property
    def index(self) -> int:
        return WEEKDAY_CODES.index(self.value)

    @property
    def label(self) -> str:
        return WEEKDAY_LABELS[self.value]
