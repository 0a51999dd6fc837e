"""
Job repository for job-specific data access operations.
"""

from datetime import datetime
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload

from domain.entities import Job
from exceptions import NotFoundError, PersistenceError
from models import JobRecord
from .base_repository import BaseRepository


class JobRepository(BaseRepository[JobRecord]):
    """Repository for Job persistence."""

    def __init__(self, db: Session):
        super().__init__(db, JobRecord)

    def insert(self, job: Job) -> Job:
        """
        Persist a new job bound to its video.

        The video row must already exist; the job stores only its ID.

        Args:
            job: Job built by new_job()

        Returns:
            The same job

        Raises:
            PersistenceError: On duplicate ID, unknown video or backend failure
        """
        self._add(JobRecord.from_entity(job))
        return job

    def update(self, job: Job) -> Job:
        """
        Write the job's mutable fields to its existing row.

        Only output_path, status, error and updated_at are written; the ID and
        the bound video never change. Any status string is accepted.

        Args:
            job: Job with modified fields

        Returns:
            The job, with updated_at refreshed

        Raises:
            NotFoundError: If no job has this ID
            PersistenceError: On backend failure
        """
        record = self._get_record(job.id)
        if record is None:
            raise NotFoundError("Job", job.id)

        updated_at = datetime.utcnow()
        record.output_path = job.output_path
        record.status = job.status
        record.error = job.error
        record.updated_at = updated_at
        self._commit('update')

        job.updated_at = updated_at
        return job

    def find(self, job_id: str) -> Job:
        """
        Get a job with its video eagerly loaded.

        Args:
            job_id: Job UUID

        Returns:
            Job with nested Video

        Raises:
            NotFoundError: If no job has this ID
            PersistenceError: If the query fails
        """
        record = self._get_with_video(job_id)
        if record is None:
            raise NotFoundError("Job", job_id)
        return record.to_entity()

    def find_by_status(self, status: str, limit: Optional[int] = None) -> List[Job]:
        """
        Get jobs in a given status, newest first.

        Args:
            status: Exact (case-sensitive) status value
            limit: Maximum number of jobs to return

        Returns:
            List of jobs with nested videos
        """
        query = self.db.query(self.model).options(
            joinedload(self.model.video)
        ).filter(
            self.model.status == status
        ).order_by(self.model.created_at.desc())
        if limit:
            query = query.limit(limit)
        return [record.to_entity() for record in query.all()]

    def find_by_video(self, video_id: str) -> List[Job]:
        """
        Get all jobs bound to a video, newest first.

        Args:
            video_id: Video UUID

        Returns:
            List of jobs (possibly empty)
        """
        records = self.db.query(self.model).options(
            joinedload(self.model.video)
        ).filter(
            self.model.video_id == video_id
        ).order_by(self.model.created_at.desc()).all()
        return [record.to_entity() for record in records]

    def _get_with_video(self, job_id: str) -> Optional[JobRecord]:
        try:
            return self.db.query(self.model).options(
                joinedload(self.model.video)
            ).filter(self.model.id == job_id).first()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise PersistenceError('find', f"Failed to read job {job_id}: {e}") from e
