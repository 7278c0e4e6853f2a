from collections.abc import Callable

from sqlalchemy import create_engine
from sqlalchemy.engine import URL, Connection, Engine
from sqlalchemy.pool import NullPool

from scraper_logger.credentials import MySqlCredentials
from scraper_logger.db_models import Base


ConnectionFactory = Callable[[MySqlCredentials, str], Connection]


def build_engine(database_url: str | URL) -> Engine:
    connect_args: dict[str, object] = {}
    if str(database_url).startswith("sqlite"):
        connect_args["check_same_thread"] = False

    # NullPool: closing a connection closes the underlying DBAPI connection.
    return create_engine(database_url, future=True, poolclass=NullPool, connect_args=connect_args)


def mysql_connector() -> ConnectionFactory:
    def connect(credentials: MySqlCredentials, database: str) -> Connection:
        return build_engine(credentials.url(database)).connect()

    return connect


def url_connector(database_url: str) -> ConnectionFactory:
    engine = build_engine(database_url)

    def connect(credentials: MySqlCredentials, database: str) -> Connection:
        return engine.connect()

    return connect


def create_log_tables(engine: Engine) -> None:
    Base.metadata.create_all(engine)
