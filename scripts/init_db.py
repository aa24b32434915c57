from __future__ import annotations

import sys
from pathlib import Path

import importlib

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.clinic_transport.clinic_transport.database.bootstrap import apply_schema, list_tables
from src.clinic_transport.clinic_transport.database.connection import DBConfig, DatabaseConnection


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    db_config = DBConfig.from_dict(dict(settings.DB_CONFIG))
    conn_factory = DatabaseConnection(db_config)

    schema_path = REPO_ROOT / "database" / "schema.sql"
    apply_schema(conn_factory, schema_path=schema_path)
    tables = list_tables(conn_factory)
    print(
        "OK: Applied schema.sql -> "
        f"{db_config.user}@{db_config.host}:{db_config.port}/{db_config.database} "
        f"(tables={len(tables)})"
    )


if __name__ == "__main__":
    main()
