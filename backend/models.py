from sqlalchemy import Column, String, Text, DateTime, ForeignKey, CheckConstraint, Index
from sqlalchemy.orm import relationship
from datetime import datetime
from database import Base
from domain.entities import Video, Job


class VideoRecord(Base):
    """
    Row mapping for the videos table.

    Videos are written once and never updated.
    """
    __tablename__ = 'videos'

    id = Column(String(36), primary_key=True)
    file_path = Column(String, nullable=False)
    resource_id = Column(String, nullable=False)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    jobs = relationship("JobRecord", back_populates="video")

    __table_args__ = (
        CheckConstraint("id != ''", name='ck_videos_id_not_empty'),
        Index('idx_videos_resource', 'resource_id'),
    )

    @classmethod
    def from_entity(cls, video: Video) -> 'VideoRecord':
        return cls(
            id=video.id,
            file_path=video.file_path,
            resource_id=video.resource_id,
            created_at=video.created_at,
        )

    def to_entity(self) -> Video:
        return Video(
            id=self.id,
            file_path=self.file_path,
            resource_id=self.resource_id,
            created_at=self.created_at,
        )


class JobRecord(Base):
    """
    Row mapping for the jobs table.

    status is free-form text; the documented values live in
    domain.value_objects.JobStatus.
    """
    __tablename__ = 'jobs'

    id = Column(String(36), primary_key=True)
    output_path = Column(String, nullable=False)
    status = Column(String, nullable=False)
    video_id = Column(String(36), ForeignKey('videos.id'), nullable=False)
    error = Column(Text)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow)

    video = relationship("VideoRecord", back_populates="jobs")

    __table_args__ = (
        CheckConstraint("output_path != ''", name='ck_jobs_output_path_not_empty'),
        CheckConstraint("status != ''", name='ck_jobs_status_not_empty'),
        Index('idx_jobs_status', 'status'),
        Index('idx_jobs_video', 'video_id'),
    )

    @classmethod
    def from_entity(cls, job: Job) -> 'JobRecord':
        return cls(
            id=job.id,
            output_path=job.output_path,
            status=job.status,
            video_id=job.video.id,
            error=job.error,
            created_at=job.created_at,
            updated_at=job.updated_at,
        )

    def to_entity(self) -> Job:
        return Job(
            id=self.id,
            output_path=self.output_path,
            status=self.status,
            video=self.video.to_entity(),
            error=self.error,
            created_at=self.created_at,
            updated_at=self.updated_at or self.created_at,
        )
