"""
Job Service

Handles business logic for job operations: creating jobs for stored videos,
changing their status, and running the download/fragment steps with the job
status kept in sync.
"""

from pathlib import Path
from typing import Optional

from sqlalchemy.orm import Session

from domain.entities import Job, Video, new_job
from domain.value_objects import JobStatus
from exceptions import DownloadError, FragmentationError, ValidationError
from repositories.job_repository import JobRepository
from repositories.video_repository import VideoRepository
from services.interfaces import IJobService
from services.video_service import VideoService
from utils.logging_utils import StructuredLogger, clear_logging_context, set_logging_context

logger = StructuredLogger(__name__)


class JobService(IJobService):
    """Service for job-related business logic."""

    def __init__(self, db: Session):
        """
        Initialize JobService.

        Args:
            db: Database session
        """
        self.db = db
        self.job_repo = JobRepository(db)
        self.video_repo = VideoRepository(db)

    def create_job(self, video: Video, output_path: str) -> Job:
        """
        Create a Pending job for a stored video.

        Args:
            video: Video already inserted through VideoRepository
            output_path: Destination of the produced artifact

        Returns:
            Persisted job

        Raises:
            ValidationError: If output_path or video is missing
            PersistenceError: If the job cannot be stored (e.g. unknown video)
        """
        job = new_job(output_path, JobStatus.PENDING.value, video)
        self.job_repo.insert(job)
        logger.info(f"Created job {job.id} for video {video.id}", extra={"job_id": job.id, "video_id": video.id})
        return job

    def get_job(self, job_id: str) -> Job:
        """
        Get a job with its video.

        Raises:
            NotFoundError: If no job has this ID
        """
        return self.job_repo.find(job_id)

    def update_status(self, job: Job, status: str, error: Optional[str] = None) -> Job:
        """
        Set a job's status (and optional error) and persist it.

        Transitions outside the documented flow are logged but not rejected.

        Args:
            job: Job to update
            status: New status, any non-empty string
            error: Failure message to store, or None to clear it

        Returns:
            Updated job

        Raises:
            ValidationError: If status is empty
            NotFoundError: If the job row no longer exists
        """
        if not status:
            raise ValidationError("Status is required", invalid_fields={"status": "required"})

        previous = job.status
        if previous in JobStatus.values() and status in JobStatus.values():
            if previous != status and not JobStatus(previous).can_transition_to(JobStatus(status)):
                logger.warning(
                    f"Job {job.id} moving outside the processing flow: {previous} -> {status}",
                    extra={"job_id": job.id},
                )

        job.status = status
        job.error = error
        self.job_repo.update(job)

        logger.info(f"Job {job.id}: {previous} -> {status}", extra={"job_id": job.id})
        return job

    def mark_failed(self, job: Job, error: str) -> Job:
        """
        Record a failure on the job.

        Args:
            job: Job that failed
            error: Failure message

        Returns:
            Updated job
        """
        return self.update_status(job, JobStatus.FAILED.value, error=error)

    def process(self, job: Job, video_service: VideoService, bucket_name: str) -> Path:
        """
        Download and fragment the job's video, persisting each status.

        Status goes Downloading -> Fragmenting -> Completed. A download or
        fragmentation failure is recorded as Failed with the error message and
        then re-raised. No step is retried.

        Args:
            job: Pending job to run
            video_service: Service used for the processing steps; it is bound
                to the job's video
            bucket_name: Bucket to download the source from

        Returns:
            Path of the fragmented file

        Raises:
            DownloadError: If the download fails
            FragmentationError: If fragmentation fails
        """
        set_logging_context(job_id=job.id, video_id=job.video.id)
        try:
            video_service.video = job.video

            self.update_status(job, JobStatus.DOWNLOADING.value)
            video_service.download(bucket_name)

            self.update_status(job, JobStatus.FRAGMENTING.value)
            fragment_path = video_service.fragment()

            self.update_status(job, JobStatus.COMPLETED.value)
            return fragment_path
        except (DownloadError, FragmentationError) as e:
            logger.error(f"Job {job.id} failed: {e.message}", extra={"error_type": type(e).__name__})
            self.mark_failed(job, e.message)
            raise
        finally:
            clear_logging_context()
