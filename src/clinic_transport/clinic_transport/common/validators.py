from __future__ import annotations

import re
from typing import Any, Optional

from ..core.exceptions import ValidationError

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not str(value).strip():
        raise ValidationError(f"{field_name} é obrigatório")
    return str(value).strip()


def require_min_length(value: str, field_name: str, min_len: int) -> str:
    value = require_non_empty(value, field_name)
    if len(value) < min_len:
        raise ValidationError(f"{field_name} deve ter no mínimo {min_len} caracteres")
    return value


def optional_text(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def optional_email(value: Optional[str]) -> Optional[str]:
    value = optional_text(value)
    if value is not None and not _EMAIL_RE.match(value):
        raise ValidationError("Email inválido")
    return value


def require_positive_id(value: Any, field_name: str) -> int:
    try:
        parsed = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} inválido")
    if parsed <= 0:
        raise ValidationError(f"{field_name} inválido")
    return parsed


def require_bool(value: Any, field_name: str) -> bool:
    if isinstance(value, bool):
        return value
    raise ValidationError(f"{field_name} deve ser verdadeiro ou falso")
