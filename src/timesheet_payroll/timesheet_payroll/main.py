from __future__ import annotations

import importlib
import logging
from datetime import timedelta
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .database.bootstrap import apply_schema, ensure_demo_users, list_tables

from .common.http import register_error_handlers
from .container import Container, build_container
from .announcements.controller import register as register_announcements
from .deductions.controller import register as register_deductions
from .diary.controller import register as register_diary
from .payroll.controller import register as register_payroll
from .users.controller import register as register_users
from .worklogs.controller import register as register_worklogs

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).resolve().parents[3] / "database" / "schema.sql"


def create_app(container: Optional[Container] = None, *, settings_module: Optional[str] = None) -> Flask:
    """Application factory.

    Pass a prebuilt `container` (e.g. in-memory repositories in tests) to skip
    database bootstrap entirely.
    """

    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.permanent_session_lifetime = timedelta(days=int(getattr(settings, "SESSION_LIFETIME_DAYS", 7)))

    logging.basicConfig(
        level=logging.DEBUG if app.config["DEBUG"] else logging.INFO,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        logger.debug(
            "settings=%s db=%s@%s:%s/%s",
            settings_module,
            db_config.get("user"),
            db_config.get("host"),
            db_config.get("port", 3306),
            db_config.get("database"),
        )

        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config, schema_path=SCHEMA_PATH)
            logger.info("Schema ready (tables=%d)", len(list_tables(db_config)))
        if bool(getattr(settings, "AUTO_SEED_DB", False)):
            ensure_demo_users(db_config)

        container = build_container(
            db_config=db_config,
            default_hourly_wage=int(getattr(settings, "DEFAULT_HOURLY_WAGE")),
            net_pay_policy=getattr(settings, "NET_PAY_POLICY"),
        )

    register_error_handlers(app)
    register_users(app, container)
    register_worklogs(app, container)
    register_payroll(app, container)
    register_deductions(app, container)
    register_announcements(app, container)
    register_diary(app, container)

    return app
