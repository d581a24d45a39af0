from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask
from werkzeug.exceptions import HTTPException

from config import get_settings_module

from .common.datetime_utils import set_local_timezone
from .common.logging_config import configure_logging
from .common.web import error, ok
from .container import Container, build_container
from .core.constants import DEFAULT_TIMEZONE
from .core.exceptions import DomainError
from .database.bootstrap import apply_schema, list_tables
from .leaves.controller import register as register_leaves
from .payroll.controller import register as register_payroll

logger = logging.getLogger(__name__)


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(e: DomainError):
        return error(e.code, str(e), e.http_status)

    @app.errorhandler(HTTPException)
    def handle_http_error(e: HTTPException):
        return error(e.name.upper().replace(" ", "_"), e.description or e.name, e.code or 500)

    @app.errorhandler(Exception)
    def handle_unexpected(e: Exception):
        logger.exception("Unhandled error")
        return error("INTERNAL", "Internal server error", 500)


def create_app(container: Optional[Container] = None, *, settings_module: Optional[str] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    db_config = getattr(settings, "DB_CONFIG")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    configure_logging(
        getattr(settings, "LOG_LEVEL", "DEBUG" if app.config["DEBUG"] else "INFO"),
        json_logs=bool(getattr(settings, "JSON_LOGS", False)),
    )
    set_local_timezone(getattr(settings, "TIMEZONE", DEFAULT_TIMEZONE))

    logger.info(
        "settings=%s db=%s@%s:%s/%s",
        settings_module,
        db_config.get("user"),
        db_config.get("host"),
        db_config.get("port", 3306),
        db_config.get("database"),
    )

    if container is None:
        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            schema_path = Path(__file__).resolve().parents[2] / "database" / "schema.sql"
            apply_schema(db_config, schema_path=schema_path)
            logger.info("schema ready (tables=%d)", len(list_tables(db_config)))
        container = build_container(db_config=db_config, settings=settings)

    app.extensions["hr_container"] = container
    register_error_handlers(app)

    @app.route("/api/health", methods=["GET"], endpoint="health")
    def health():
        return ok({"status": "ok"})

    register_leaves(app, container)
    register_payroll(app, container)

    return app
