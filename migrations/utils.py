from alembic import command
from alembic.config import Config
from alembic.script import ScriptDirectory
from alembic.runtime.migration import MigrationContext
import logging
from pathlib import Path
import os
from sqlalchemy import create_engine

logger = logging.getLogger(__name__)
logger.setLevel(logging.DEBUG)

MIGRATIONS_PATH = Path(__file__).parent
DEFAULT_PATH = MIGRATIONS_PATH.parent / "alembic.ini"


def get_alembic_config(db_url: str | None = None, path: Path = DEFAULT_PATH) -> Config:
    """
    Load the Alembic configuration and override the database URL when given.
    """
    if not path.exists():
        raise FileNotFoundError(f"Alembic config file not found at {path}")
    alembic_cfg = Config(str(path))

    alembic_cfg.set_main_option("script_location", str(MIGRATIONS_PATH))

    # Set sqlalchemy.url explicitly so configparser never interpolates it
    db_url = db_url or os.getenv("DATABASE_URL")
    alembic_cfg.set_main_option("sqlalchemy.url", db_url or "")

    return alembic_cfg


def is_migration_needed(db_url: str, revision: str = "head") -> bool:
    """
    Quickly check whether the database is behind the head revision.
    """
    try:
        cfg = get_alembic_config(db_url)
        engine = create_engine(db_url)

        with engine.connect() as connection:
            context = MigrationContext.configure(connection)
            current_rev = context.get_current_revision()

            script = ScriptDirectory.from_config(cfg)
            head_rev = script.get_current_head()

            logger.debug(f"Current revision: {current_rev}, Head revision: {head_rev}")

            if current_rev is None:
                logger.debug("Database not initialized, migration needed")
                return True

            needs_migration = current_rev != head_rev
            logger.debug(f"Migration needed: {needs_migration}")
            return needs_migration

    except Exception as e:
        logger.debug(f"Error while checking revisions, assuming migration needed: {e}")
        return True


def upgrade_db(db_url: str | None = None, revision: str = "head"):
    """
    Apply migrations up to the given revision ('head' by default).
    Checks first whether a migration is needed.
    """
    if not db_url:
        from config import DATABASE_URL

        db_url = DATABASE_URL

    if not is_migration_needed(db_url, revision):
        logger.info("✅ Database already up to date, no migration needed")
        return

    logger.info("🔄 Migration needed, starting...")
    cfg = get_alembic_config(db_url)
    logger.debug(f"Using Alembic config file at {cfg.config_file_name}")
    logger.debug(f"Upgrading database to revision {revision}")
    command.upgrade(cfg, revision)
    logger.info(f"✅ Database migrated to {revision}")


def downgrade_db(db_url: str | None = None, revision: str = "base"):
    """
    Roll back to the given revision ('base' by default).
    """
    cfg = get_alembic_config(db_url)
    command.downgrade(cfg, revision)
    logger.info(f"🔻 Database downgraded to {revision}")
