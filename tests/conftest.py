from collections.abc import Callable, Mapping
from pathlib import Path

import pytest
from sqlalchemy.engine import Engine

from scraper_logger.credentials import MySqlCredentials
from scraper_logger.database import ConnectionFactory, build_engine, create_log_tables, url_connector
from scraper_logger.schemas import InvocationContext, static_parameters


class FakeConnection:
    def __init__(self, error: Exception | None = None) -> None:
        self.error = error
        self.executed: list[tuple[str, dict[str, object]]] = []
        self.commits = 0
        self.closes = 0

    def execute(self, statement, params):
        if self.error is not None:
            raise self.error
        self.executed.append((str(statement), dict(params)))

    def commit(self) -> None:
        self.commits += 1

    def close(self) -> None:
        self.closes += 1


class FakeConnector:
    """Connection factory that fails the insert on the given 1-based calls."""

    def __init__(self, fail_on: Mapping[int, Exception] | None = None) -> None:
        self.fail_on = dict(fail_on or {})
        self.connections: list[FakeConnection] = []
        self.databases: list[str] = []

    def __call__(self, credentials: MySqlCredentials, database: str) -> FakeConnection:
        self.databases.append(database)
        connection = FakeConnection(self.fail_on.get(len(self.connections) + 1))
        self.connections.append(connection)
        return connection


@pytest.fixture()
def log_db_url(tmp_path: Path) -> str:
    return f"sqlite:///{tmp_path / 'logs.db'}"


@pytest.fixture()
def log_engine(log_db_url: str) -> Engine:
    engine = build_engine(log_db_url)
    create_log_tables(engine)
    return engine


@pytest.fixture()
def sqlite_connect(log_engine: Engine, log_db_url: str) -> ConnectionFactory:
    return url_connector(log_db_url)


@pytest.fixture()
def make_context() -> Callable[..., InvocationContext]:
    def build(
        parameters: Mapping[str, object] | None = None,
        *,
        credentials: Mapping[str, object] | None = None,
        mode: str = "trigger",
        workflow_name: str | None = None,
    ) -> InvocationContext:
        values = {"database": "main", "scriptId": 3001}
        values.update(parameters or {})
        creds = {"host": "localhost", "port": 3306, "user": "logger", "password": "secret"}
        if credentials is not None:
            creds = dict(credentials)
        return InvocationContext(
            get_parameter=static_parameters(values),
            get_credentials=lambda: creds,
            mode=mode,
            workflow_name=workflow_name,
        )

    return build


@pytest.fixture()
def fake_connector() -> type[FakeConnector]:
    return FakeConnector
