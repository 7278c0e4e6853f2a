import argparse
import json
import logging
from pathlib import Path
import sys

from scraper_logger.config import Settings, get_settings
from scraper_logger.credentials import CredentialError, resolve_credentials
from scraper_logger.database import build_engine, create_log_tables, mysql_connector, url_connector
from scraper_logger.descriptor import EXECUTION_MODES, ParameterError
from scraper_logger.node import LogInsertError, ScraperLoggerNode
from scraper_logger.row_logic import read_batch
from scraper_logger.schemas import InvocationContext, static_parameters


logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Log scraper execution metrics to MySQL")
    subparsers = parser.add_subparsers(dest="command", required=True)

    run_parser = subparsers.add_parser("run", help="log one batch of scraper results")
    run_parser.add_argument("--input", required=True, help="JSONL file, one scraper result per line")
    run_parser.add_argument("--script-id", required=False, help="Scraper script ID (defaults to SCRIPT_ID)")
    run_parser.add_argument("--database", required=False, help="Target database (defaults to LOG_DATABASE)")
    run_parser.add_argument("--table", required=False, help="Target table (defaults to LOG_TABLE or the version default)")
    run_parser.add_argument("--execution-mode", choices=EXECUTION_MODES, required=False)
    run_parser.add_argument("--fail-on-error", action="store_true", help="abort the batch on the first failed insert")
    run_parser.add_argument("--verbose", action="store_true", help="log each row before it is inserted")
    run_parser.add_argument(
        "--trigger-source",
        default="manual",
        choices=["manual", "scheduled"],
        help="Recorded as execution_type on version 2 rows",
    )
    run_parser.add_argument("--workflow-name", required=False, help="Recorded as workflow_name on version 2 rows")
    run_parser.add_argument("--node-version", type=int, choices=[1, 2], required=False)

    init_parser = subparsers.add_parser("init-db", help="create the log tables in the target database")
    init_parser.add_argument("--database", required=False, help="Target database (defaults to LOG_DATABASE)")

    return parser.parse_args(argv)


def _database_url(settings: Settings, database: str):
    if settings.database_url:
        return settings.database_url
    return resolve_credentials(settings.credentials()).url(database)


def _run(args: argparse.Namespace, settings: Settings) -> int:
    version = args.node_version or settings.node_version
    parameters = {
        "database": args.database or settings.log_database,
        "table": args.table or settings.log_table,
        "scriptId": args.script_id or settings.script_id,
        "executionMode": args.execution_mode or settings.execution_mode,
        "options": {
            "failOnError": args.fail_on_error or settings.fail_on_error,
            "verboseLogging": args.verbose or settings.verbose_logging,
        },
    }
    context = InvocationContext(
        get_parameter=static_parameters(parameters),
        get_credentials=settings.credentials,
        mode="manual" if args.trigger_source == "manual" else "trigger",
        workflow_name=args.workflow_name,
    )
    connect = url_connector(settings.database_url) if settings.database_url else mysql_connector()
    node = ScraperLoggerNode(version=version, connect=connect)

    items = read_batch(Path(args.input))
    try:
        results = node.execute(items, context)
    except (LogInsertError, ParameterError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    for record in results:
        print(json.dumps({"json": record.json, "paired_item": record.paired_item}, sort_keys=True))

    failed = sum(1 for record in results if not record.json["success"])
    logger.info("batch logged", extra={"total": len(results), "failed": failed, "version": version})
    return 0


def _init_db(args: argparse.Namespace, settings: Settings) -> int:
    database = args.database or settings.log_database
    try:
        engine = build_engine(_database_url(settings, database))
    except CredentialError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    create_log_tables(engine)
    logger.info("log tables created", extra={"database": database})
    return 0


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    settings = get_settings()

    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )

    if args.command == "init-db":
        code = _init_db(args, settings)
    else:
        code = _run(args, settings)

    if code:
        raise SystemExit(code)


if __name__ == "__main__":
    main()
