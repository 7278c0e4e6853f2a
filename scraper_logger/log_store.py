from sqlalchemy import text
from sqlalchemy.sql.expression import TextClause

from scraper_logger.credentials import resolve_credentials
from scraper_logger.database import ConnectionFactory
from scraper_logger.schemas import InvocationContext, LogRow, columns_for_version


def build_insert_statement(database: str, table: str, version: int) -> TextClause:
    columns = columns_for_version(version)
    # Only the operator-configured identifiers are interpolated; values are bound.
    return text(
        f"INSERT INTO {database}.{table} ({', '.join(columns)}) "
        f"VALUES ({', '.join(f':{column}' for column in columns)})"
    )


def insert_log_row(
    context: InvocationContext,
    connect: ConnectionFactory,
    *,
    database: str,
    table: str,
    row: LogRow,
    version: int,
) -> None:
    credentials = resolve_credentials(context.get_credentials())
    connection = connect(credentials, database)
    try:
        connection.execute(build_insert_statement(database, table, version), row.as_params(version))
        connection.commit()
    finally:
        connection.close()
