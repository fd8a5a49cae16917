from __future__ import annotations

import importlib
import logging
from pathlib import Path

from dotenv import load_dotenv

from shift_payroll.config import get_settings_module
from shift_payroll.database.bootstrap import apply_schema, list_tables
from shift_payroll.database.connection import DBConfig, DatabaseConnection

logger = logging.getLogger("shift_payroll.scripts.init_db")


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    config = DBConfig.from_mapping(dict(settings.DB_CONFIG))
    conn = DatabaseConnection.get_instance(config)

    schema_path = Path(__file__).resolve().parents[1] / "database" / "schema.sql"
    apply_schema(conn, schema_path=schema_path)
    tables = list_tables(conn)
    logger.info(
        "Applied schema.sql -> %s@%s:%s/%s (tables=%d)",
        config.user,
        config.host,
        config.port,
        config.database,
        len(tables),
    )


if __name__ == "__main__":
    main()
