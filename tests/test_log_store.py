import pytest
from sqlalchemy import select

from scraper_logger.credentials import CredentialError
from scraper_logger.db_models import ScraperExecutionLog
from scraper_logger.log_store import build_insert_statement, insert_log_row
from scraper_logger.row_logic import build_log_row, parse_item
from scraper_logger.schemas import BASE_COLUMNS, EXTENDED_COLUMNS


def _row(version: int = 1):
    item = {"summary": {"total_input": 3, "event_summary": {"click": 1}}}
    return build_log_row(parse_item(item), script_id=3001, configured_mode="auto", version=version)


def test_insert_statement_binds_every_column() -> None:
    base = build_insert_statement("backoffice", "scraper_execution_logs", 1)
    extended = build_insert_statement("backoffice", "scraper_execution_logs_v2", 2)

    assert str(base).startswith("INSERT INTO backoffice.scraper_execution_logs (script_id, execution_mode, status,")
    assert set(base.compile().params) == set(BASE_COLUMNS)
    assert set(extended.compile().params) == set(EXTENDED_COLUMNS)
    assert len(EXTENDED_COLUMNS) == 11


def test_insert_commits_and_closes(make_context, fake_connector) -> None:
    connector = fake_connector()

    insert_log_row(make_context(), connector, database="backoffice", table="logs", row=_row(), version=1)

    (connection,) = connector.connections
    assert connector.databases == ["backoffice"]
    assert len(connection.executed) == 1
    assert connection.executed[0][1]["items_processed"] == 3
    assert connection.commits == 1
    assert connection.closes == 1


def test_failed_insert_still_releases_connection(make_context, fake_connector) -> None:
    connector = fake_connector(fail_on={1: RuntimeError("duplicate entry")})

    with pytest.raises(RuntimeError, match="duplicate entry"):
        insert_log_row(make_context(), connector, database="backoffice", table="logs", row=_row(), version=1)

    (connection,) = connector.connections
    assert connection.commits == 0
    assert connection.closes == 1


def test_credential_error_happens_before_connecting(make_context, fake_connector) -> None:
    connector = fake_connector()
    context = make_context(credentials={"host": "localhost"})

    with pytest.raises(CredentialError):
        insert_log_row(context, connector, database="backoffice", table="logs", row=_row(), version=1)

    assert connector.connections == []


def test_insert_into_sqlite(make_context, sqlite_connect, log_engine) -> None:
    insert_log_row(
        make_context(),
        sqlite_connect,
        database="main",
        table="scraper_execution_logs",
        row=_row(),
        version=1,
    )

    with log_engine.connect() as conn:
        stored = conn.execute(select(ScraperExecutionLog.__table__)).one()

    assert stored.script_id == 3001
    assert stored.status == "success"
    assert stored.items_processed == 3
    assert stored.event_summary == '{"click":1}'
    assert stored.created_at is not None
