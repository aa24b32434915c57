from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .absences.controller import register as register_absences
from .activities.controller import register as register_activities
from .container import Container, build_container
from .core.constants import DEFAULT_CSV_ENCODING, DEFAULT_WEEKLY_WORKERS
from .core.logging import setup_logging
from .database.bootstrap import apply_schema, apply_seed_sql, list_tables
from .database.connection import DBConfig, DatabaseConnection
from .enrollments.controller import register as register_enrollments
from .patients.controller import register as register_patients
from .therapists.controller import register as register_therapists
from .transport.controller import register as register_transport

logger = logging.getLogger(__name__)

DATABASE_DIR = Path(__file__).resolve().parents[3] / "database"


def create_app(container: Optional[Container] = None) -> Flask:
    """Application factory.

    Pass `container` to run against prebuilt services (tests); the database
    bootstrap steps are skipped in that case.
    """
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    db_config = getattr(settings, "DB_CONFIG")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["CSV_ENCODING"] = getattr(settings, "CSV_ENCODING", DEFAULT_CSV_ENCODING)
    app.json.ensure_ascii = False
    app.json.sort_keys = False

    setup_logging(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        fmt=getattr(settings, "LOG_FORMAT", "text"),
    )
    logger.info(
        "settings=%s db=%s@%s:%s/%s",
        settings_module,
        db_config.get("user"),
        db_config.get("host"),
        db_config.get("port", 3306),
        db_config.get("database"),
    )

    if container is None:
        conn_factory = DatabaseConnection(DBConfig.from_dict(db_config))
        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(conn_factory, schema_path=DATABASE_DIR / "schema.sql")
            logger.info("Schema ready (tables=%d)", len(list_tables(conn_factory)))
        if bool(getattr(settings, "AUTO_SEED_DB", False)):
            apply_seed_sql(conn_factory, seed_path=DATABASE_DIR / "seed.sql")
            logger.info("Demo seed ready")

        container = build_container(
            db_config=db_config,
            weekly_workers=int(getattr(settings, "WEEKLY_WORKERS", DEFAULT_WEEKLY_WORKERS)),
        )

    register_patients(app, container)
    register_therapists(app, container)
    register_activities(app, container)
    register_enrollments(app, container)
    register_absences(app, container)
    register_transport(app, container)

    return app
