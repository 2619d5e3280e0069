from __future__ import annotations

import importlib
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .access.controller import register as register_access
from .accounting.controller import register as register_accounting
from .common.logging_utils import configure_logging, get_logger
from .container import Container, build_container
from .database.bootstrap import apply_schema, apply_seed_sql, ensure_admin_user, list_tables
from .database.connection import DBConfig, describe
from .ebd.controller import register as register_ebd
from .finance.controller import register as register_finance
from .orders.controller import register as register_orders
from .users.controller import register as register_users

logger = get_logger(__name__)

DATABASE_DIR = Path(__file__).resolve().parents[3] / "database"


def _bootstrap_database(settings, db_config: dict) -> None:
    if bool(getattr(settings, "AUTO_INIT_DB", False)):
        apply_schema(db_config, schema_path=DATABASE_DIR / "schema.sql")
        logger.info("schema ready (tables=%s)", len(list_tables(db_config)))
    if bool(getattr(settings, "AUTO_SEED_DB", False)):
        apply_seed_sql(db_config, seed_path=DATABASE_DIR / "seed.sql")
        admin_email = getattr(settings, "ADMIN_EMAIL", None)
        admin_password = getattr(settings, "ADMIN_PASSWORD", None)
        if admin_email and admin_password:
            ensure_admin_user(db_config, email=admin_email, password=admin_password)
        logger.info("seed ready")


def create_app(container: Optional[Container] = None) -> Flask:
    """Application factory.

    Tests pass a prebuilt `container` (in-memory repositories); in that case
    the database bootstrap is skipped.
    """
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    db_config = dict(getattr(settings, "DB_CONFIG"))
    logger.info("settings=%s db=%s", settings_module, describe(DBConfig.from_dict(db_config)))

    if container is None:
        _bootstrap_database(settings, db_config)
        container = build_container(db_config=db_config)

    register_users(app, container)
    register_access(app, container)
    register_accounting(app, container)
    register_finance(app, container)
    register_ebd(app, container)
    register_orders(app, container)

    return app
