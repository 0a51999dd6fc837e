"""
JobStatus Value Object

Immutable representation of a transcoding job's lifecycle state.
"""

from enum import Enum

from exceptions import ValidationError


class JobStatus(str, Enum):
    """
    Documented set of job states.

    Values are case-sensitive strings and are stored as-is in jobs.status.
    The repository layer accepts any string; this enum only names the states
    the processing flow itself produces.
    """

    PENDING = "Pending"
    DOWNLOADING = "Downloading"
    FRAGMENTING = "Fragmenting"
    COMPLETED = "Completed"
    FAILED = "Failed"

    def is_terminal(self) -> bool:
        """Check if this state is terminal (no further processing)."""
        return self in {JobStatus.COMPLETED, JobStatus.FAILED}

    def is_active(self) -> bool:
        """Check if this state represents active work."""
        return self in {JobStatus.DOWNLOADING, JobStatus.FRAGMENTING}

    def can_transition_to(self, new_state: "JobStatus") -> bool:
        """
        Check if a transition follows the processing flow.

        Pending may jump straight to Completed for jobs finished outside
        the download/fragment flow.

        Args:
            new_state: Target state

        Returns:
            True if transition is part of the documented flow
        """
        valid_transitions = {
            JobStatus.PENDING: {JobStatus.DOWNLOADING, JobStatus.COMPLETED, JobStatus.FAILED},
            JobStatus.DOWNLOADING: {JobStatus.FRAGMENTING, JobStatus.FAILED},
            JobStatus.FRAGMENTING: {JobStatus.COMPLETED, JobStatus.FAILED},
            JobStatus.FAILED: {JobStatus.PENDING},  # Can retry
            JobStatus.COMPLETED: set(),
        }

        return new_state in valid_transitions.get(self, set())

    @classmethod
    def values(cls) -> list[str]:
        return [status.value for status in cls]

    @classmethod
    def from_string(cls, value: str) -> "JobStatus":
        """
        Create JobStatus from string value.

        Args:
            value: String representation (case-sensitive)

        Returns:
            JobStatus instance

        Raises:
            ValidationError: If value is not a documented state
        """
        try:
            return cls(value)
        except ValueError:
            raise ValidationError(
                f"Invalid job status: {value!r}",
                invalid_fields={"status": value},
            )
