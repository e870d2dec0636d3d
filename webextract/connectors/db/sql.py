from contextlib import contextmanager
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, declarative_base

from config import DATABASE_URL, SQL_ECHO


Base = declarative_base()


def make_engine(database_url: str, echo: bool = SQL_ECHO) -> Engine:
    return create_engine(
        database_url,
        echo=echo,
        pool_pre_ping=True,
    )


def make_session_factory(bind: Engine):
    """
    Build a session context manager bound to the given engine.
    Usage:
        get_session = make_session_factory(engine)
        with get_session() as db:
            db.query(...)
    """
    session_local = sessionmaker(
        autocommit=False, autoflush=False, bind=bind, expire_on_commit=False
    )

    @contextmanager
    def get_session():
        db = session_local()
        try:
            yield db
            db.commit()
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    return get_session


engine = make_engine(DATABASE_URL)

get_db = make_session_factory(engine)
