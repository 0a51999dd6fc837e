"""
Custom exception classes for the application.

This module defines domain-specific exceptions that provide better error handling
and clearer error messages throughout the application.
"""


class ApplicationError(Exception):
    """Base exception for all application errors"""

    def __init__(self, message: str, details: dict | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class ConfigurationError(ApplicationError):
    """Raised when there's a configuration issue"""

    def __init__(self, message: str, missing_keys: list[str] | None = None):
        details = {"missing_keys": missing_keys} if missing_keys else {}
        super().__init__(message, details)


class ValidationError(ApplicationError):
    """Raised when validation fails"""

    def __init__(self, message: str, invalid_fields: dict | None = None):
        details = {"invalid_fields": invalid_fields} if invalid_fields else {}
        super().__init__(message, details)


class PersistenceError(ApplicationError):
    """Raised when the database rejects a read or write"""

    def __init__(self, operation: str, message: str):
        details = {"operation": operation}
        super().__init__(message, details)


class NotFoundError(ApplicationError):
    """Raised when a lookup by ID matches no row"""

    def __init__(self, entity: str, entity_id: str):
        self.entity = entity
        self.entity_id = entity_id
        details = {"entity": entity, "id": entity_id}
        super().__init__(f"{entity} {entity_id} not found", details)


class DownloadError(ApplicationError):
    """Raised when a source video cannot be fetched from remote storage"""

    def __init__(self, video_id: str | None, message: str):
        details = {"video_id": video_id}
        super().__init__(message, details)


class FragmentationError(ApplicationError):
    """Raised when a downloaded video cannot be fragmented"""

    def __init__(self, video_id: str | None, message: str):
        details = {"video_id": video_id}
        super().__init__(message, details)
