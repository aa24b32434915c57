from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.clinic_transport.clinic_transport.database.bootstrap import apply_seed_sql
from src.clinic_transport.clinic_transport.database.connection import DBConfig, DatabaseConnection


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    db_config = DBConfig.from_dict(dict(settings.DB_CONFIG))

    seed_path = REPO_ROOT / "database" / "seed.sql"
    apply_seed_sql(DatabaseConnection(db_config), seed_path=seed_path)

    print(
        "OK: Seeded database -> "
        f"{db_config.user}@{db_config.host}:{db_config.port}/{db_config.database}"
    )


if __name__ == "__main__":
    main()
