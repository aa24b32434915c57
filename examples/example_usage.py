"""Example: use the service layer directly (no Flask).

Prints this week's transport schedule, one line per patient and day.
"""

import importlib

from config import get_settings_module

from src.clinic_transport.clinic_transport.common.datetime_utils import today_local
from src.clinic_transport.clinic_transport.container import build_container
from src.clinic_transport.clinic_transport.core.enums import DayOfWeek
from src.clinic_transport.clinic_transport.core.logging import setup_logging


def main():
    settings = importlib.import_module(get_settings_module())
    setup_logging(level=getattr(settings, "LOG_LEVEL", "INFO"))
    container = build_container(db_config=settings.DB_CONFIG, weekly_workers=settings.WEEKLY_WORKERS)

    week = container.transport_service.resolve_weekly_schedule(today_local())
    for code, items in week.items():
        print(DayOfWeek(code).label)
        for item in items:
            status = "ausente" if item.is_absent else "confirmado"
            names = ", ".join(a.activity_name for a in item.activities)
            print(f"  {item.patient_name:<25} {status:<11} {names}")

    print(container.transport_service.compute_stats(today_local()))


if __name__ == "__main__":
    main()
