import pytest

from scraper_logger.credentials import MYSQL_CREDENTIAL, CredentialError, resolve_credentials


def test_declared_fields_and_defaults() -> None:
    fields = {field.name: field for field in MYSQL_CREDENTIAL.fields}

    assert MYSQL_CREDENTIAL.name == "mySql"
    assert list(fields) == ["host", "port", "user", "password"]
    assert fields["host"].default == "localhost" and fields["host"].required
    assert fields["port"].default == 3306 and fields["port"].required
    assert fields["user"].required
    assert fields["password"].password and not fields["password"].required


def test_resolve_applies_defaults() -> None:
    credentials = resolve_credentials({"user": "logger"})

    assert credentials.host == "localhost"
    assert credentials.port == 3306
    assert credentials.password == ""


def test_missing_user_is_rejected() -> None:
    with pytest.raises(CredentialError, match="user"):
        resolve_credentials({"host": "db.internal", "port": 3306})


def test_port_is_coerced_to_int() -> None:
    assert resolve_credentials({"user": "logger", "port": "3307"}).port == 3307

    with pytest.raises(CredentialError, match="port"):
        resolve_credentials({"user": "logger", "port": "not-a-port"})


def test_url_targets_database_and_repr_masks_password() -> None:
    credentials = resolve_credentials({"host": "db.internal", "user": "logger", "password": "hunter2"})
    url = credentials.url("backoffice")

    assert url.drivername == "mysql+mysqlconnector"
    assert url.host == "db.internal"
    assert url.port == 3306
    assert url.database == "backoffice"
    assert "hunter2" not in repr(credentials)
