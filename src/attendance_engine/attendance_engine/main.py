from __future__ import annotations

import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .container import Container, build_container
from .core import constants
from .core.error_handlers import register_error_handlers
from .database.bootstrap import apply_schema

logger = logging.getLogger(__name__)


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))

    logging.basicConfig(
        level=getattr(logging, str(getattr(settings, "LOG_LEVEL", "INFO")).upper(), logging.INFO),
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
    )

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        container = build_container(
            db_config=db_config,
            office_hours=getattr(settings, "OFFICE_HOURS", None),
            retention_days=int(getattr(settings, "RETENTION_DAYS", constants.DEFAULT_RETENTION_DAYS)),
            window_days=int(getattr(settings, "COMPLIANCE_WINDOW_DAYS", constants.DEFAULT_COMPLIANCE_WINDOW_DAYS)),
            threshold=int(getattr(settings, "COMPLIANCE_THRESHOLD", constants.DEFAULT_COMPLIANCE_THRESHOLD)),
        )
        logger.info(
            "settings=%s db=%s@%s:%s/%s",
            settings_module,
            db_config.get("user"),
            db_config.get("host"),
            db_config.get("port", 3306),
            db_config.get("database"),
        )
        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(container.conn)

    register_error_handlers(app)
    register_attendance(app, container)

    return app
