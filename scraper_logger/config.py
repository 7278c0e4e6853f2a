from dataclasses import dataclass
import os

from dotenv import load_dotenv


load_dotenv()


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Settings:
    app_name: str
    log_level: str
    database_url: str | None
    mysql_host: str
    mysql_port: str
    mysql_user: str
    mysql_password: str
    log_database: str
    log_table: str | None
    script_id: str | None
    execution_mode: str
    fail_on_error: bool
    verbose_logging: bool
    node_version: int

    def credentials(self) -> dict[str, object]:
        return {
            "host": self.mysql_host,
            "port": self.mysql_port,
            "user": self.mysql_user,
            "password": self.mysql_password,
        }


def get_settings() -> Settings:
    return Settings(
        app_name=os.getenv("APP_NAME", "scraper-logger"),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        database_url=os.getenv("DATABASE_URL") or None,
        mysql_host=os.getenv("MYSQL_HOST", "localhost"),
        mysql_port=os.getenv("MYSQL_PORT", "3306"),
        mysql_user=os.getenv("MYSQL_USER", ""),
        mysql_password=os.getenv("MYSQL_PASSWORD", ""),
        log_database=os.getenv("LOG_DATABASE", "backoffice"),
        log_table=os.getenv("LOG_TABLE") or None,
        script_id=os.getenv("SCRIPT_ID") or None,
        execution_mode=os.getenv("EXECUTION_MODE", "auto"),
        fail_on_error=_env_flag("FAIL_ON_ERROR"),
        verbose_logging=_env_flag("VERBOSE_LOGGING"),
        node_version=int(os.getenv("NODE_VERSION", "2")),
    )
