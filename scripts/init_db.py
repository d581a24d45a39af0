from __future__ import annotations

import importlib
import logging
from pathlib import Path

from dotenv import load_dotenv

from config import get_settings_module

from hr_system.common.logging_config import configure_logging
from hr_system.database.bootstrap import apply_schema, list_tables

logger = logging.getLogger("hr_system.scripts.init_db")


def main() -> None:
    load_dotenv(override=False)
    configure_logging("INFO")
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    schema_path = Path(__file__).resolve().parents[1] / "database" / "schema.sql"
    apply_schema(db_config, schema_path=schema_path)
    tables = list_tables(db_config)
    logger.info(
        "Applied schema.sql -> %s@%s:%s/%s (tables=%d)",
        db_config.get("user"),
        db_config.get("host"),
        db_config.get("port", 3306),
        db_config.get("database"),
        len(tables),
    )


if __name__ == "__main__":
    main()
