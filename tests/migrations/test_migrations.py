from sqlalchemy import create_engine, inspect

from migrations.utils import downgrade_db, is_migration_needed, upgrade_db


def test_upgrade_and_downgrade(tmp_path):
    db_url = f"sqlite:///{tmp_path / 'migrations.db'}"
    assert is_migration_needed(db_url) is True

    upgrade_db(db_url)

    engine = create_engine(db_url)
    tables = set(inspect(engine).get_table_names())
    assert {"extraction_records", "operation_logs"} <= tables
    assert is_migration_needed(db_url) is False

    downgrade_db(db_url)
    tables = set(inspect(engine).get_table_names())
    assert "extraction_records" not in tables
    assert "operation_logs" not in tables
    engine.dispose()
