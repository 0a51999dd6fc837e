"""
Video Entity

A registered source video and the storage location of its file.
"""

from dataclasses import dataclass, field
from datetime import datetime

from exceptions import ValidationError
from utils.uuid_helper import generate_uuid, is_valid_uuid


def _utcnow() -> datetime:
    return datetime.utcnow()


@dataclass
class Video:
    """
    Source video resource.

    Videos are append-only: the ID is assigned by the caller before insertion
    and nothing about a stored video changes afterwards.

    Attributes:
        id: UUID string, globally unique
        file_path: Location of the source file, relative to its bucket
        resource_id: External resource (upload batch, tenant) the video belongs to
        created_at: Creation timestamp
    """

    id: str
    file_path: str
    resource_id: str
    created_at: datetime = field(default_factory=_utcnow)

    @classmethod
    def new(cls, file_path: str, resource_id: str, video_id: str | None = None) -> "Video":
        """Create a video with a fresh ID unless one is supplied."""
        return cls(
            id=video_id or generate_uuid(),
            file_path=file_path,
            resource_id=resource_id,
        )

    def validate(self) -> None:
        """
        Check required fields.

        Raises:
            ValidationError: If the ID is not a UUID or a path/resource is empty
        """
        invalid = {}
        if not self.id:
            invalid["id"] = "required"
        elif not is_valid_uuid(self.id):
            invalid["id"] = "must be a UUID"
        if not self.file_path:
            invalid["file_path"] = "required"
        if not self.resource_id:
            invalid["resource_id"] = "required"

        if invalid:
            raise ValidationError(
                f"Invalid video: {', '.join(sorted(invalid))}",
                invalid_fields=invalid,
            )
