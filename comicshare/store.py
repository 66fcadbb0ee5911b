import logging
from contextlib import contextmanager

from sqlalchemy import event, inspect, text
from sqlalchemy.engine import Engine

from comicshare import db

logger = logging.getLogger(__name__)


@contextmanager
def transaction():
    """Run the enclosed statements as one unit of work.

    Commits when the block exits normally and rolls back every statement issued
    inside it when anything raises. The connection itself goes back to the pool
    when Flask-SQLAlchemy removes the session at app-context teardown.
    """
    session = db.session
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise


def register_sqlite_pragmas(engine: Engine) -> None:
    if engine.dialect.name != "sqlite":
        return

    @event.listens_for(engine, "connect")
    def _enable_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys = ON")
        cursor.close()


def ensure_schema() -> None:
    import comicshare.models  # noqa: F401

    db.create_all()
    ensure_comic_hash_column()


def ensure_comic_hash_column() -> None:
    cols = {c["name"] for c in inspect(db.engine).get_columns("comics")}
    if "hash" not in cols:
        logger.info("Adding missing comics.hash column")
        with db.engine.begin() as conn:
            conn.execute(text("ALTER TABLE comics ADD COLUMN hash VARCHAR(64)"))


def ping() -> None:
    db.session.execute(text("SELECT 1"))
