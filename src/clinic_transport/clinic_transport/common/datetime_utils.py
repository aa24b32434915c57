from __future__ import annotations

from datetime import date, datetime, time, timedelta
from typing import Optional, Union

from ..core.enums import DayOfWeek
from ..core.exceptions import ValidationError


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date.

    Raises ValidationError instead of defaulting, so a bad query string never
    turns into "today" by accident.
    """
    v = (value or "").strip()
    if not v:
        raise ValidationError("Data não informada (AAAA-MM-DD)")
    try:
        return datetime.strptime(v, "%Y-%m-%d").date()
    except ValueError:
        raise ValidationError(f"Data inválida: {value!r} (AAAA-MM-DD)")


def coerce_date(value: Union[date, str]) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        return parse_iso_date(value)
    raise ValidationError(f"Data inválida: {value!r}")


def parse_clock_time(value: Union[str, time]) -> time:
    """Parse HH:MM or HH:MM:SS."""
    if isinstance(value, time):
        return value
    v = (value or "").strip()
    for fmt in ("%H:%M", "%H:%M:%S"):
        try:
            return datetime.strptime(v, fmt).time()
        except ValueError:
            continue
    raise ValidationError(f"Horário inválido: {value!r} (HH:MM)")


def weekday_code(day: date) -> Optional[DayOfWeek]:
    return DayOfWeek.from_index(day.weekday())


def monday_of(day: date) -> date:
    """Monday of the week containing `day` (Sunday belongs to the week before)."""
    return day - timedelta(days=day.weekday())


def today_local() -> date:
    """Current local date.

    Note: Wrapped so tests can patch it.
    """
    return date.today()


def parse_day_of_week(value: Union[str, DayOfWeek]) -> DayOfWeek:
    """'seg' / 'Seg' / DayOfWeek.SEG -> DayOfWeek.SEG."""
    if isinstance(value, DayOfWeek):
        return value
    v = (value or "").strip().lower()
    for day in DayOfWeek:
        if day.value.lower() == v:
            return day
    raise ValidationError(f"Dia da semana inválido: {value!r}")
