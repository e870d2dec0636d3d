import json
import os

import pandas as pd
from sqlalchemy import inspect
from sqlalchemy.engine import Engine

from config import get_logger, exports_folder
from webextract.connectors.db.sql import Base, engine as default_engine
from webextract.schemas.extractions.schema import ExtractionRecord
from webextract.schemas.operation_logs.schema import OperationLog

logger = get_logger(__name__)

TABLES = {
    ExtractionRecord.__tablename__: ExtractionRecord.__table__,
    OperationLog.__tablename__: OperationLog.__table__,
}


def create_all_tables(delete_existing: bool = False, engine: Engine | None = None):
    """
    Creates the extraction tables in the database when they do not exist yet.
    Optionally deletes existing tables before creation.

    Args:
        delete_existing (bool, optional): If True, existing tables will be dropped before creation. Defaults to False.
        engine (Engine, optional): Engine to use. Defaults to the engine built from DATABASE_URL.
    """
    engine = engine or default_engine
    if delete_existing:
        logger.info(f"Dropping tables: {', '.join(TABLES)}")
        Base.metadata.drop_all(bind=engine, tables=list(TABLES.values()))

    existing = set(inspect(engine).get_table_names())
    missing = [name for name in TABLES if name not in existing]
    if missing:
        Base.metadata.create_all(bind=engine, tables=[TABLES[name] for name in missing])
        logger.info(f"Created tables: {', '.join(missing)}")
    else:
        logger.debug("All tables already exist")


def export_table(
    table_name: str, output_path: str | None = None, engine: Engine | None = None
) -> str:
    """
    Exports a table to a CSV or Parquet file, depending on the output extension.

    Args:
        table_name (str): Name of the table to export (extraction_records or operation_logs).
        output_path (str, optional): Destination file. Defaults to <exports_folder>/<table_name>.csv.
        engine (Engine, optional): Engine to use. Defaults to the engine built from DATABASE_URL.

    Returns:
        str: The path of the written file.

    Raises:
        ValueError: If the table name or the output extension is not supported.
    """
    if table_name not in TABLES:
        raise ValueError(
            f"Unknown table '{table_name}'. Available tables: {', '.join(TABLES)}"
        )
    engine = engine or default_engine
    output_path = output_path or os.path.join(exports_folder, f"{table_name}.csv")
    extension = os.path.splitext(output_path)[1].lower()
    if extension not in (".csv", ".parquet"):
        raise ValueError(f"Unsupported export format: {extension or output_path}")

    with engine.connect() as connection:
        df = pd.read_sql_table(table_name, connection)

    if "data" in df.columns:
        # JSON payloads are kept as text so both formats store them the same way
        df["data"] = df["data"].map(
            lambda value: json.dumps(value) if isinstance(value, (dict, list)) else value
        )

    os.makedirs(os.path.dirname(os.path.abspath(output_path)), exist_ok=True)
    if extension == ".parquet":
        df.to_parquet(output_path, index=False)
    else:
        df.to_csv(output_path, index=False)
    logger.info(f"Exported {len(df)} rows from {table_name} to {output_path}")
    return output_path
