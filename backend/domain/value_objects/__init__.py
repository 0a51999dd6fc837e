"""
Domain Value Objects

Value objects are immutable types that represent descriptive aspects of the domain.
They have no conceptual identity and are compared by their values, not by ID.

Examples:
- JobStatus: Represents the lifecycle state of a job (immutable enum-like value)
"""

from .job_status import JobStatus

__all__ = ["JobStatus"]
