import os
import tempfile

# Module level tables and the CLI use the DATABASE_URL read at import time.
_TMP_DIR = tempfile.mkdtemp(prefix="webextract-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_TMP_DIR, 'webextract.db')}"
os.environ["LOG_FOLDER"] = os.path.join(_TMP_DIR, "logs")
os.environ["EXPORTS_FOLDER"] = os.path.join(_TMP_DIR, "exports")
os.environ["CLEANUP_DELAY_SECONDS"] = "0"

import pytest  # noqa: E402

from database import create_all_tables  # noqa: E402
from webextract.connectors.db.sql import make_engine, make_session_factory  # noqa: E402
from webextract.schemas.extractions.table import ExtractionTable  # noqa: E402
from webextract.schemas.operation_logs.table import OperationLogTable  # noqa: E402
from webextract.state import ExtractionStateRegistry  # noqa: E402


@pytest.fixture
def engine(tmp_path):
    engine = make_engine(f"sqlite:///{tmp_path / 'test.db'}", echo=False)
    create_all_tables(engine=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return make_session_factory(engine)


@pytest.fixture
def extractions(session_factory):
    return ExtractionTable(db_session=session_factory)


@pytest.fixture
def operation_logs(session_factory):
    return OperationLogTable(db_session=session_factory)


@pytest.fixture
def states():
    return ExtractionStateRegistry()
