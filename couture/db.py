import logging
from pathlib import Path

from alembic.config import Config
from sqlalchemy import Connection, create_engine
from sqlalchemy.engine import Engine, make_url

from alembic import command
from couture.settings import settings

logger = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).resolve().parent.parent

_engine: Engine | None = None
_connection: Connection | None = None


def _ensure_sqlite_dir(db_url: str) -> None:
    """Create the parent directory of a file-backed SQLite database."""
    url = make_url(db_url)
    if not url.drivername.startswith("sqlite"):
        return
    if not url.database or url.database == ":memory:":
        return
    Path(url.database).expanduser().resolve().parent.mkdir(parents=True, exist_ok=True)


def get_engine() -> Engine:
    global _engine
    if _engine is None:
        _ensure_sqlite_dir(settings.db_url)
        _engine = create_engine(settings.db_url, pool_pre_ping=True)
        logger.info("Database engine created: %s", _engine.url.render_as_string(hide_password=True))
    return _engine


def get_connection() -> Connection:
    """Return the process-wide connection used by the console."""
    global _connection
    if _connection is None:
        _connection = get_engine().connect()
        logger.debug("Singleton DB connection created")
    return _connection


def close_connection() -> None:
    global _connection
    if _connection is not None:
        _connection.close()
        _connection = None
        logger.debug("Singleton DB connection closed")


def _get_alembic_config() -> Config:
    """Alembic config from alembic.ini, with script_location pinned to the checkout."""
    ini_path = PROJECT_ROOT / "alembic.ini"
    if not ini_path.exists():
        ini_path = Path.cwd() / "alembic.ini"
    cfg = Config(str(ini_path))
    cfg.set_main_option("script_location", str(PROJECT_ROOT / "alembic"))
    return cfg


def initialize_db() -> None:
    """Bring the bills schema up to the latest migration."""
    _ensure_sqlite_dir(settings.db_url)
    logger.info("Running Alembic migrations")
    command.upgrade(_get_alembic_config(), "head")
    logger.info("Migrations complete")
