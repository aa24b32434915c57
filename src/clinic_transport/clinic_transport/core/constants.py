"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

# Index follows date.weekday(): Monday=0 .. Friday=4.
WEEKDAY_CODES = ("Seg", "Ter", "Qua", "Qui", "Sex")

WEEKDAY_LABELS = {
    "Seg": "Segunda",
    "Ter": "Terça",
    "Qua": "Quarta",
    "Qui": "Quinta",
    "Sex": "Sexta",
}

MIN_NAME_LENGTH = 2
DEFAULT_WEEKLY_WORKERS = 5
DEFAULT_CSV_ENCODING = "utf-8-sig"
