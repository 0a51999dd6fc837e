"""
Video repository for video-specific data access operations.
"""

from typing import List

from sqlalchemy.orm import Session

from domain.entities import Video
from exceptions import NotFoundError
from models import VideoRecord
from .base_repository import BaseRepository


class VideoRepository(BaseRepository[VideoRecord]):
    """Repository for Video persistence. Videos are append-only."""

    def __init__(self, db: Session):
        super().__init__(db, VideoRecord)

    def insert(self, video: Video) -> Video:
        """
        Persist a new video.

        Args:
            video: Video with its ID already assigned

        Returns:
            The same video

        Raises:
            ValidationError: If required fields are missing
            PersistenceError: If the ID already exists or the write is rejected
        """
        video.validate()
        self._add(VideoRecord.from_entity(video))
        return video

    def find(self, video_id: str) -> Video:
        """
        Get a video by ID.

        Args:
            video_id: Video UUID

        Returns:
            Video as last written

        Raises:
            NotFoundError: If no video has this ID
        """
        record = self._get_record(video_id)
        if record is None:
            raise NotFoundError("Video", video_id)
        return record.to_entity()

    def find_by_resource(self, resource_id: str) -> List[Video]:
        """
        Get all videos of one external resource, oldest first.

        Args:
            resource_id: External resource identifier

        Returns:
            List of videos (possibly empty)
        """
        records = self.db.query(self.model).filter(
            self.model.resource_id == resource_id
        ).order_by(self.model.created_at).all()
        return [record.to_entity() for record in records]
