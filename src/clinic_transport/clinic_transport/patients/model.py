from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Patient:
    """Paciente atendido pelo transporte da clínica.

    Não há exclusão física: pacientes são desativados com `active=False`.
    """

    patient_id: int
    name: str
    phone: Optional[str] = None
    address: Optional[str] = None
    active: bool = True
