import pytest

from config.settings import Settings, parse_bool
from constants import StorageBackend
from exceptions import ConfigurationError


def test_defaults_from_empty_environment():
    settings = Settings.from_env({})

    assert settings.env == "dev"
    assert settings.db_type == "sqlite3"
    assert settings.dsn_test == ":memory:"
    assert settings.debug is False
    assert settings.auto_migrate_db is False
    assert settings.local_storage_path == "/tmp"
    assert settings.fragment_binary == "mp4fragment"
    assert settings.storage_backend is StorageBackend.LOCAL
    assert settings.log_level == "INFO"


def test_reads_environment():
    settings = Settings.from_env({
        "ENV": "test",
        "DB_TYPE": "postgres",
        "DSN": "host=db dbname=encoder",
        "DB_TYPE_TEST": "sqlite3",
        "DSN_TEST": "test.db",
        "DEBUG": "true",
        "AUTO_MIGRATE_DB": "1",
        "LOCAL_STORAGE_PATH": "/var/encoder",
        "INPUT_BUCKET_NAME": "uploads",
        "STORAGE_BACKEND": "FTP",
        "FTP_PORT": "2121",
        "LOG_LEVEL": "debug",
    })

    assert settings.is_test
    assert settings.db_type_for_env == "sqlite3"
    assert settings.dsn_for_env == "test.db"
    assert settings.debug is True
    assert settings.auto_migrate_db is True
    assert str(settings.local_storage_dir) == "/var/encoder"
    assert settings.input_bucket_name == "uploads"
    assert settings.storage_backend is StorageBackend.FTP
    assert settings.ftp_port == 2121
    assert settings.log_level == "DEBUG"


def test_non_test_env_uses_primary_pair():
    settings = Settings.from_env({"ENV": "production", "DB_TYPE": "postgres", "DSN": "host=db"})

    assert not settings.is_test
    assert settings.db_type_for_env == "postgres"
    assert settings.dsn_for_env == "host=db"


def test_invalid_ftp_port():
    with pytest.raises(ConfigurationError) as exc_info:
        Settings.from_env({"FTP_PORT": "twenty-one"})
    assert exc_info.value.details["missing_keys"] == ["FTP_PORT"]


def test_invalid_storage_backend():
    with pytest.raises(ConfigurationError):
        Settings.from_env({"STORAGE_BACKEND": "s3"})


@pytest.mark.parametrize("value,expected", [
    ("true", True), ("TRUE", True), ("1", True), ("yes", True),
    ("false", False), ("0", False), ("", False), (None, False),
])
def test_parse_bool(value, expected):
    assert parse_bool(value) is expected
