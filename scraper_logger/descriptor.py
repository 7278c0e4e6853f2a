from collections.abc import Callable, Mapping
from dataclasses import dataclass

from scraper_logger.schemas import BatchConfig, NodeOptions


EXECUTION_MODES = ("auto", "regular", "monthly")
DEFAULT_TABLES = {
    1: "scraper_execution_logs",
    2: "scraper_execution_logs_v2",
}


class ParameterError(ValueError):
    pass


@dataclass(frozen=True)
class NodeParameter:
    name: str
    display_name: str
    type: str
    default: object
    required: bool = False
    options: tuple[str, ...] = ()
    description: str = ""


@dataclass(frozen=True)
class NodeDescription:
    name: str
    display_name: str
    description: str
    versions: tuple[int, ...]
    credential: str
    parameters: tuple[NodeParameter, ...]

    def parameter(self, name: str) -> NodeParameter:
        for parameter in self.parameters:
            if parameter.name == name:
                return parameter
        raise KeyError(name)


SCRAPER_LOGGER_NODE = NodeDescription(
    name="scraperLogger",
    display_name="Scraper Logger",
    description="Log scraper execution metrics to MySQL",
    versions=(1, 2),
    credential="mySql",
    parameters=(
        NodeParameter("database", "Database", "string", "backoffice", required=True, description="MySQL database name"),
        NodeParameter(
            "table",
            "Table",
            "string",
            None,
            required=True,
            description="Table name for storing execution logs; defaults per node version",
        ),
        NodeParameter("scriptId", "Script ID", "number", None, required=True, description="Scraper script ID"),
        NodeParameter(
            "executionMode",
            "Execution Mode",
            "options",
            "auto",
            options=EXECUTION_MODES,
            description="Auto-detect from input or specify manually",
        ),
        NodeParameter("options", "Options", "collection", {}),
    ),
)


def _read(get_parameter: Callable[[str, int], object], name: str) -> object:
    # Parameters are batch constants: always evaluated against the first item.
    value = get_parameter(name, 0)
    if value is None or value == "":
        return SCRAPER_LOGGER_NODE.parameter(name).default
    return value


def _as_flag(value: object) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "on"}
    return bool(value)


def resolve_batch_config(get_parameter: Callable[[str, int], object], version: int) -> BatchConfig:
    if version not in SCRAPER_LOGGER_NODE.versions:
        raise ParameterError(f"unsupported node version: {version}")

    script_id_raw = _read(get_parameter, "scriptId")
    if script_id_raw is None or isinstance(script_id_raw, bool):
        raise ParameterError("parameter 'scriptId' is required")
    try:
        script_id = int(script_id_raw)
    except (TypeError, ValueError, OverflowError) as exc:
        raise ParameterError(f"parameter 'scriptId' must be a number: {script_id_raw!r}") from exc
    if isinstance(script_id_raw, float) and script_id_raw != script_id:
        raise ParameterError(f"parameter 'scriptId' must be a whole number: {script_id_raw!r}")

    database = str(_read(get_parameter, "database")).strip()
    table_raw = _read(get_parameter, "table")
    table = str(table_raw).strip() if table_raw is not None else DEFAULT_TABLES[version]
    if not database or not table:
        raise ParameterError("parameters 'database' and 'table' must not be empty")

    execution_mode = str(_read(get_parameter, "executionMode"))
    if execution_mode not in EXECUTION_MODES:
        raise ParameterError(f"parameter 'executionMode' must be one of {', '.join(EXECUTION_MODES)}")

    options = _read(get_parameter, "options")
    if not isinstance(options, Mapping):
        options = {}

    return BatchConfig(
        script_id=script_id,
        database=database,
        table=table,
        execution_mode=execution_mode,
        options=NodeOptions(
            fail_on_error=_as_flag(options.get("failOnError", False)),
            verbose_logging=_as_flag(options.get("verboseLogging", False)),
        ),
    )
