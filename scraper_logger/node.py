from collections.abc import Sequence
from datetime import UTC, datetime
import json
import logging

from scraper_logger.database import ConnectionFactory, mysql_connector
from scraper_logger.descriptor import resolve_batch_config
from scraper_logger.log_store import insert_log_row
from scraper_logger.row_logic import build_log_row, parse_item
from scraper_logger.schemas import (
    BatchConfig,
    FailedItem,
    InvocationContext,
    LoggedItem,
    ResultRecord,
)


logger = logging.getLogger(__name__)


class LogInsertError(RuntimeError):
    def __init__(self, message: str, *, item_index: int) -> None:
        super().__init__(message)
        self.item_index = item_index


class ScraperLoggerNode:
    def __init__(self, *, version: int = 2, connect: ConnectionFactory | None = None) -> None:
        self.version = version
        self.connect = connect or mysql_connector()

    def execute(self, items: Sequence[object], context: InvocationContext) -> list[ResultRecord]:
        """Log every item of the batch and return one result per item, in order.

        With ``failOnError`` set the first failing item aborts the batch with
        ``LogInsertError`` and nothing is returned; otherwise failures are
        recorded in their own output slot and the loop moves on.
        """
        config = resolve_batch_config(context.get_parameter, self.version)
        results: list[ResultRecord] = []

        for index, item in enumerate(items):
            outcome = self._log_item(index, item, config, context)
            if isinstance(outcome, LoggedItem):
                results.append(
                    ResultRecord(
                        json={
                            "success": True,
                            "logged_at": outcome.logged_at,
                            "script_id": config.script_id,
                            "log_data": outcome.row.as_params(self.version),
                        },
                        paired_item=index,
                    )
                )
                continue

            if config.options.fail_on_error:
                raise LogInsertError(
                    f"Failed to log execution for item {index}: {outcome.error}",
                    item_index=index,
                ) from outcome.error

            logger.error(
                "scraper log insert failed",
                exc_info=outcome.error,
                extra={"item_index": index, "script_id": config.script_id, "table": config.table},
            )
            results.append(
                ResultRecord(
                    json={"success": False, "error": str(outcome.error), "script_id": config.script_id},
                    paired_item=index,
                )
            )

        return results

    def _log_item(
        self,
        index: int,
        item: object,
        config: BatchConfig,
        context: InvocationContext,
    ) -> LoggedItem | FailedItem:
        try:
            row = build_log_row(
                parse_item(item),
                script_id=config.script_id,
                configured_mode=config.execution_mode,
                version=self.version,
                host_mode=context.mode,
                workflow_name=context.workflow_name,
            )

            if config.options.verbose_logging:
                log_data = row.as_params(self.version)
                logger.info(
                    "scraper log row prepared: %s",
                    json.dumps(log_data),
                    extra={"item_index": index, "log_data": log_data},
                )

            insert_log_row(
                context,
                self.connect,
                database=config.database,
                table=config.table,
                row=row,
                version=self.version,
            )
        except Exception as exc:
            return FailedItem(item_index=index, error=exc)

        return LoggedItem(item_index=index, logged_at=datetime.now(UTC).isoformat(), row=row)
