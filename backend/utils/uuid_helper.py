"""
UUID helpers for entity identifiers.

Videos and jobs are keyed by UUID4 strings.
"""
import uuid


def generate_uuid() -> str:
    """
    Generate a new UUID string.

    Returns:
        str: A new UUID4 string
    """
    return str(uuid.uuid4())


def is_valid_uuid(value: str) -> bool:
    """Check whether a string parses as a UUID."""
    try:
        uuid.UUID(str(value))
    except ValueError:
        return False
    return True
