"""
Runtime Configuration

Settings are read from environment variables once at startup and injected
into the database, storage and service layers.

Variables:
- ENV: 'test' selects the *_TEST database pair
- DB_TYPE / DSN, DB_TYPE_TEST / DSN_TEST: dialect name and connection string
- DEBUG: verbose SQL logging
- AUTO_MIGRATE_DB: create/upgrade tables on connect
- LOCAL_STORAGE_PATH: working directory for downloads and fragments
- INPUT_BUCKET_NAME: default bucket to download source videos from
- FRAGMENT_BINARY: external fragmenter executable
- STORAGE_BACKEND: 'local' or 'ftp'
- STORAGE_ROOT: root directory of buckets for the local backend
- FTP_HOST / FTP_PORT / FTP_USERNAME / FTP_PASSWORD: FTP backend credentials
- LOG_DIR / LOG_LEVEL: logging destination and threshold
"""
import os
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from constants import DatabaseDefaults, FTPDefaults, StorageBackend, StorageDefaults
from exceptions import ConfigurationError

logger = logging.getLogger(__name__)


def parse_bool(value: Optional[str], default: bool = False) -> bool:
    """
    Parse an environment flag.

    Returns:
        True if value is 'true', '1' or 'yes' (case-insensitive)
    """
    if value is None:
        return default
    return value.strip().lower() in ('true', '1', 'yes')


@dataclass(frozen=True)
class Settings:
    env: str = 'dev'
    db_type: str = DatabaseDefaults.DB_TYPE
    dsn: str = DatabaseDefaults.DSN
    db_type_test: str = DatabaseDefaults.DB_TYPE_TEST
    dsn_test: str = DatabaseDefaults.DSN_TEST
    debug: bool = False
    auto_migrate_db: bool = False
    local_storage_path: str = StorageDefaults.LOCAL_STORAGE_PATH
    input_bucket_name: str = ''
    fragment_binary: str = StorageDefaults.FRAGMENT_BINARY
    storage_backend: StorageBackend = StorageBackend.LOCAL
    storage_root: str = '.'
    ftp_host: str = FTPDefaults.HOST
    ftp_port: int = FTPDefaults.PORT
    ftp_username: str = FTPDefaults.USERNAME
    ftp_password: str = FTPDefaults.PASSWORD
    log_dir: Optional[str] = None
    log_level: str = 'INFO'

    @property
    def is_test(self) -> bool:
        return self.env == 'test'

    @property
    def db_type_for_env(self) -> str:
        """Dialect name for the current environment."""
        return self.db_type_test if self.is_test else self.db_type

    @property
    def dsn_for_env(self) -> str:
        """Connection string for the current environment."""
        return self.dsn_test if self.is_test else self.dsn

    @property
    def local_storage_dir(self) -> Path:
        return Path(self.local_storage_path)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> 'Settings':
        """
        Build settings from environment variables.

        Args:
            environ: Mapping to read from (defaults to os.environ)

        Raises:
            ConfigurationError: If a value cannot be parsed
        """
        environ = os.environ if environ is None else environ

        try:
            ftp_port = int(environ.get('FTP_PORT', FTPDefaults.PORT))
        except ValueError:
            raise ConfigurationError(
                f"FTP_PORT must be an integer, got {environ.get('FTP_PORT')!r}",
                missing_keys=['FTP_PORT'],
            )

        try:
            storage_backend = StorageBackend(environ.get('STORAGE_BACKEND', StorageBackend.LOCAL.value).lower())
        except ValueError:
            raise ConfigurationError(
                f"Unsupported STORAGE_BACKEND: {environ.get('STORAGE_BACKEND')!r}",
                missing_keys=['STORAGE_BACKEND'],
            )

        settings = cls(
            env=environ.get('ENV', 'dev'),
            db_type=environ.get('DB_TYPE', DatabaseDefaults.DB_TYPE),
            dsn=environ.get('DSN', DatabaseDefaults.DSN),
            db_type_test=environ.get('DB_TYPE_TEST', DatabaseDefaults.DB_TYPE_TEST),
            dsn_test=environ.get('DSN_TEST', DatabaseDefaults.DSN_TEST),
            debug=parse_bool(environ.get('DEBUG')),
            auto_migrate_db=parse_bool(environ.get('AUTO_MIGRATE_DB')),
            local_storage_path=environ.get('LOCAL_STORAGE_PATH', StorageDefaults.LOCAL_STORAGE_PATH),
            input_bucket_name=environ.get('INPUT_BUCKET_NAME', ''),
            fragment_binary=environ.get('FRAGMENT_BINARY', StorageDefaults.FRAGMENT_BINARY),
            storage_backend=storage_backend,
            storage_root=environ.get('STORAGE_ROOT', '.'),
            ftp_host=environ.get('FTP_HOST', FTPDefaults.HOST),
            ftp_port=ftp_port,
            ftp_username=environ.get('FTP_USERNAME', FTPDefaults.USERNAME),
            ftp_password=environ.get('FTP_PASSWORD', FTPDefaults.PASSWORD),
            log_dir=environ.get('LOG_DIR'),
            log_level=environ.get('LOG_LEVEL', 'INFO').upper(),
        )

        logger.debug(
            f"Loaded settings: env={settings.env}, db_type={settings.db_type_for_env}, "
            f"storage={settings.storage_backend.value}"
        )
        return settings
