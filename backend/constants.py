"""
Application-wide constants and configuration keys.

This module centralizes all magic strings and numbers used throughout the application
to improve maintainability and reduce duplication.
"""
from enum import Enum


class Dialect(str, Enum):
    """
    Relational backends supported by the persistence layer.

    The configured dialect string is mapped to one of these values exactly once,
    when the Database is built from settings.
    """

    POSTGRES = 'postgres'
    SQLITE = 'sqlite3'

    @classmethod
    def from_string(cls, value: str) -> 'Dialect':
        """
        Resolve a configured dialect name.

        Accepts the canonical values plus the common aliases 'postgresql' and 'sqlite'.

        Raises:
            ValueError: If the name does not match a supported backend
        """
        aliases = {
            'postgresql': cls.POSTGRES,
            'sqlite': cls.SQLITE,
        }
        normalized = (value or '').strip().lower()
        if normalized in aliases:
            return aliases[normalized]
        return cls(normalized)


class StorageBackend(str, Enum):
    """Where source videos are fetched from"""

    LOCAL = 'local'
    FTP = 'ftp'


class StorageDefaults:
    """Default values for local working storage"""

    LOCAL_STORAGE_PATH = "/tmp"
    SOURCE_SUFFIX = ".mp4"
    FRAGMENT_SUFFIX = ".frag"
    FRAGMENT_BINARY = "mp4fragment"


class DatabaseDefaults:
    """Default values for the database connection"""

    DB_TYPE = Dialect.SQLITE.value
    DSN = "encoder.db"
    DB_TYPE_TEST = Dialect.SQLITE.value
    DSN_TEST = ":memory:"


class FTPDefaults:
    """Default values for FTP configuration"""

    HOST = "localhost"
    PORT = 21
    USERNAME = "anonymous"
    PASSWORD = ""


class FTPConfig:
    """FTP operation configuration constants"""

    SOCKET_TIMEOUT_SECONDS = 30  # Timeout for socket operations
    PATH_TIMEOUT_SECONDS = 30  # Timeout for path operations
    TRANSFER_CHUNK_SIZE = 8192  # Bytes per transfer chunk


class ServerConfig:
    """API server bind defaults"""

    HOST = "0.0.0.0"
    PORT = 8080


class HTTPStatus:
    """HTTP status codes used throughout the application"""

    # Success
    CREATED = 201

    # Client Errors
    BAD_REQUEST = 400
    NOT_FOUND = 404

    # Server Errors
    INTERNAL_SERVER_ERROR = 500
