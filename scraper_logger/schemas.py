from collections.abc import Callable, Mapping
from dataclasses import dataclass, field


BASE_COLUMNS = (
    "script_id",
    "execution_mode",
    "status",
    "items_processed",
    "pixel_new",
    "pixel_duplicates",
    "pixel_updated",
    "event_summary",
)

EXTENDED_COLUMNS = (
    "script_id",
    "execution_mode",
    "execution_type",
    "workflow_name",
    "status",
    "items_processed",
    "pixel_new",
    "pixel_duplicates",
    "pixel_updated",
    "event_summary",
    "full_details",
)


def columns_for_version(version: int) -> tuple[str, ...]:
    if version == 1:
        return BASE_COLUMNS
    if version == 2:
        return EXTENDED_COLUMNS
    raise ValueError(f"unsupported node version: {version}")


@dataclass(frozen=True)
class Summary:
    total_input: int = 0
    new_items: int = 0
    exact_duplicates: int = 0
    updated_items: int = 0
    pixel_failed: int | float = 0
    event_summary: dict[str, object] = field(default_factory=dict)


@dataclass(frozen=True)
class ExecutionInfo:
    mode: str | None = None


@dataclass(frozen=True)
class ParsedItem:
    summary: Summary
    execution: ExecutionInfo
    raw: object


@dataclass(frozen=True)
class LogRow:
    script_id: int
    execution_mode: str
    status: str
    items_processed: int
    pixel_new: int
    pixel_duplicates: int
    pixel_updated: int
    event_summary: str
    execution_type: str | None = None
    workflow_name: str | None = None
    full_details: str | None = None

    def as_params(self, version: int) -> dict[str, object]:
        return {column: getattr(self, column) for column in columns_for_version(version)}


@dataclass(frozen=True)
class NodeOptions:
    fail_on_error: bool = False
    verbose_logging: bool = False


@dataclass(frozen=True)
class BatchConfig:
    script_id: int
    database: str
    table: str
    execution_mode: str
    options: NodeOptions


@dataclass(frozen=True)
class InvocationContext:
    """Read-only capabilities the host hands to one node invocation.

    ``get_parameter`` mirrors a host that could evaluate parameters per item;
    the node only ever asks for item 0.
    """

    get_parameter: Callable[[str, int], object]
    get_credentials: Callable[[], Mapping[str, object]]
    mode: str = "trigger"
    workflow_name: str | None = None


def static_parameters(values: Mapping[str, object]) -> Callable[[str, int], object]:
    def get_parameter(name: str, item_index: int) -> object:
        return values.get(name)

    return get_parameter


@dataclass(frozen=True)
class LoggedItem:
    item_index: int
    logged_at: str
    row: LogRow


@dataclass(frozen=True)
class FailedItem:
    item_index: int
    error: Exception


@dataclass(frozen=True)
class ResultRecord:
    json: dict[str, object]
    paired_item: int
