from collections.abc import Mapping
from dataclasses import dataclass

from sqlalchemy.engine import URL


class CredentialError(ValueError):
    pass


@dataclass(frozen=True)
class CredentialField:
    name: str
    display_name: str
    type: str
    default: object
    required: bool = False
    password: bool = False


@dataclass(frozen=True)
class CredentialType:
    name: str
    display_name: str
    documentation_url: str
    fields: tuple[CredentialField, ...]


MYSQL_CREDENTIAL = CredentialType(
    name="mySql",
    display_name="MySQL",
    documentation_url="https://dev.mysql.com/doc/",
    fields=(
        CredentialField("host", "Host", "string", "localhost", required=True),
        CredentialField("port", "Port", "number", 3306, required=True),
        CredentialField("user", "User", "string", "", required=True),
        CredentialField("password", "Password", "string", "", password=True),
    ),
)


@dataclass(frozen=True)
class MySqlCredentials:
    host: str
    port: int
    user: str
    password: str = ""

    def url(self, database: str) -> URL:
        return URL.create(
            "mysql+mysqlconnector",
            username=self.user,
            password=self.password or None,
            host=self.host,
            port=self.port,
            database=database,
        )

    def __repr__(self) -> str:
        return f"MySqlCredentials(host={self.host!r}, port={self.port}, user={self.user!r}, password='***')"


def resolve_credentials(raw: Mapping[str, object]) -> MySqlCredentials:
    values: dict[str, object] = {}
    for field in MYSQL_CREDENTIAL.fields:
        value = raw.get(field.name)
        if value is None or value == "":
            value = field.default
        if field.required and (value is None or value == ""):
            raise CredentialError(f"credential field '{field.name}' is required")
        values[field.name] = value

    try:
        port = int(values["port"])
    except (TypeError, ValueError) as exc:
        raise CredentialError(f"credential field 'port' must be an integer: {values['port']!r}") from exc

    return MySqlCredentials(
        host=str(values["host"]),
        port=port,
        user=str(values["user"]),
        password=str(values["password"]),
    )
