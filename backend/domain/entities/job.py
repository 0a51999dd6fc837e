"""
Job Entity

A unit of transcoding work bound to exactly one Video.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from domain.entities.video import Video
from domain.value_objects.job_status import JobStatus
from exceptions import ValidationError
from utils.uuid_helper import generate_uuid


def _utcnow() -> datetime:
    return datetime.utcnow()


@dataclass
class Job:
    """
    Transcoding job.

    Only status (plus error and updated_at) changes over a job's lifetime;
    the bound video is fixed at creation.

    Attributes:
        id: UUID string assigned by new_job()
        output_path: Destination of the produced artifact
        status: Current lifecycle state (see JobStatus)
        video: The video this job processes
        error: Last failure message, if any
        created_at: Creation timestamp
        updated_at: Timestamp of the last persisted change
    """

    id: str
    output_path: str
    status: str
    video: Video
    error: Optional[str] = None
    created_at: datetime = field(default_factory=_utcnow)
    updated_at: datetime = field(default_factory=_utcnow)

    @property
    def video_id(self) -> str:
        return self.video.id

    @property
    def is_terminal(self) -> bool:
        try:
            return JobStatus(self.status).is_terminal()
        except ValueError:
            return False


def new_job(output_path: str, status: str, video: Optional[Video]) -> Job:
    """
    Build a new job for a video.

    Args:
        output_path: Destination of the produced artifact
        status: Initial status, one of the JobStatus values
        video: Video to process; must carry an ID

    Returns:
        Job with a freshly assigned ID

    Raises:
        ValidationError: If any argument is missing or the status is unknown
    """
    invalid = {}
    if not output_path:
        invalid["output_path"] = "required"
    if not status:
        invalid["status"] = "required"
    elif status not in JobStatus.values():
        invalid["status"] = f"must be one of {', '.join(JobStatus.values())}"
    if video is None or not video.id:
        invalid["video"] = "required"

    if invalid:
        raise ValidationError(
            f"Invalid job: {', '.join(sorted(invalid))}",
            invalid_fields=invalid,
        )

    now = _utcnow()
    return Job(
        id=generate_uuid(),
        output_path=output_path,
        status=status,
        video=video,
        created_at=now,
        updated_at=now,
    )
