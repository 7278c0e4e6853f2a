import json
import math
from collections.abc import Mapping
from dataclasses import replace
from pathlib import Path

from scraper_logger.schemas import ExecutionInfo, LogRow, ParsedItem, Summary


def read_batch(input_path: Path) -> list[object]:
    if not input_path.exists():
        raise FileNotFoundError(f"input file not found: {input_path}")

    items: list[object] = []
    with input_path.open("r", encoding="utf-8") as infile:
        for line in infile:
            line = line.strip()
            if not line:
                continue
            items.append(json.loads(line))
    return items


def _as_number(value: object) -> int | float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0
    if isinstance(value, float) and not math.isfinite(value):
        return 0
    return value


def _as_mapping(value: object) -> Mapping[str, object]:
    return value if isinstance(value, Mapping) else {}


def _as_mode(value: object) -> str | None:
    if isinstance(value, bool) or not isinstance(value, (str, int, float)) or not value:
        return None
    return str(value)


def parse_item(item: object) -> ParsedItem:
    """Pull the typed summary and execution sections out of one raw item.

    Anything missing or of the wrong type falls back to zero or empty; this
    never raises.
    """
    raw = _as_mapping(item)
    summary = _as_mapping(raw.get("summary"))
    execution = _as_mapping(raw.get("execution"))

    return ParsedItem(
        summary=Summary(
            total_input=int(_as_number(summary.get("total_input"))),
            new_items=int(_as_number(summary.get("new_items"))),
            exact_duplicates=int(_as_number(summary.get("exact_duplicates"))),
            updated_items=int(_as_number(summary.get("updated_items"))),
            pixel_failed=_as_number(summary.get("pixel_failed")),
            event_summary=dict(_as_mapping(summary.get("event_summary"))),
        ),
        execution=ExecutionInfo(mode=_as_mode(execution.get("mode"))),
        raw=item,
    )


def resolve_mode(configured_mode: str, execution: ExecutionInfo) -> str:
    if configured_mode != "auto":
        return configured_mode
    return execution.mode or "regular"


def resolve_execution_type(host_mode: str) -> str:
    return "manual" if host_mode == "manual" else "scheduled"


def derive_status(summary: Summary) -> str:
    return "failed" if summary.pixel_failed > 0 else "success"


def serialize_event_summary(event_summary: Mapping[str, object]) -> str:
    return json.dumps(dict(event_summary), separators=(",", ":"))


def parse_event_summary(serialized: str) -> dict[str, object]:
    parsed = json.loads(serialized)
    return parsed if isinstance(parsed, dict) else {}


def serialize_details(item: object) -> str:
    # Unbounded: the whole raw item is stored as-is.
    return json.dumps(item, separators=(",", ":"), default=str)


def build_log_row(
    parsed: ParsedItem,
    *,
    script_id: int,
    configured_mode: str,
    version: int,
    host_mode: str = "trigger",
    workflow_name: str | None = None,
) -> LogRow:
    summary = parsed.summary
    row = LogRow(
        script_id=script_id,
        execution_mode=resolve_mode(configured_mode, parsed.execution),
        status=derive_status(summary),
        items_processed=summary.total_input,
        pixel_new=summary.new_items,
        pixel_duplicates=summary.exact_duplicates,
        pixel_updated=summary.updated_items,
        event_summary=serialize_event_summary(summary.event_summary),
    )
    if version == 1:
        return row

    return replace(
        row,
        execution_type=resolve_execution_type(host_mode),
        workflow_name=workflow_name or "Unknown",
        full_details=serialize_details(parsed.raw),
    )
