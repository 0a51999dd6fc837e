"""
Job Worker

Runs the download and fragment steps for one stored job, keeping its
status in the database current. One job at a time, synchronously.

Usage:
    python -m workers.job_worker <job_id> [--bucket NAME] [--cleanup]
"""
import argparse
import logging
import sys
from typing import Optional

from config.settings import Settings
from database import Database
from domain.entities import Job
from exceptions import ApplicationError, ConfigurationError
from repositories.video_repository import VideoRepository
from services.job_service import JobService
from services.storage_client import get_storage_client
from services.video_service import VideoService
from utils.logging_utils import configure_logging

logger = logging.getLogger(__name__)


class JobWorker:
    """Processes jobs against one Database using the configured storage."""

    def __init__(self, database: Database, settings: Settings, storage_client=None):
        self.database = database
        self.settings = settings
        self.storage_client = storage_client or get_storage_client(settings)

    def run(self, job_id: str, bucket_name: Optional[str] = None, cleanup: bool = False) -> Job:
        """
        Process one job.

        Args:
            job_id: Job to run
            bucket_name: Source bucket (defaults to INPUT_BUCKET_NAME)
            cleanup: Remove local working files afterwards

        Returns:
            The job in its final persisted state

        Raises:
            ConfigurationError: If no bucket is given or configured
            NotFoundError: If the job does not exist
            DownloadError / FragmentationError: If a step fails (job is marked Failed)
        """
        bucket_name = bucket_name or self.settings.input_bucket_name
        if not bucket_name:
            raise ConfigurationError("No source bucket configured", missing_keys=['INPUT_BUCKET_NAME'])

        with self.database.session_scope() as db:
            job_service = JobService(db)
            job = job_service.get_job(job_id)

            video_service = VideoService(
                video_repository=VideoRepository(db),
                storage_client=self.storage_client,
                local_storage_path=self.settings.local_storage_dir,
                video=job.video,
                fragment_binary=self.settings.fragment_binary,
            )

            try:
                fragment_path = job_service.process(job, video_service, bucket_name)
                logger.info(f"Job {job.id} completed: {fragment_path}")
            finally:
                if cleanup:
                    video_service.finish()

            return job


def main(argv=None) -> int:
    ap = argparse.ArgumentParser(description="Download and fragment the video of a stored job")
    ap.add_argument("job_id", help="ID of the job to process")
    ap.add_argument("--bucket", default=None, help="Source bucket (default: INPUT_BUCKET_NAME)")
    ap.add_argument("--cleanup", action="store_true", help="Remove local working files when done")
    args = ap.parse_args(argv)

    settings = Settings.from_env()
    configure_logging(settings.log_dir, settings.log_level)

    database = Database.from_settings(settings)
    database.connect()
    try:
        job = JobWorker(database, settings).run(args.job_id, bucket_name=args.bucket, cleanup=args.cleanup)
    except ApplicationError as e:
        logger.error(f"Job {args.job_id} failed: {e.message}")
        return 1
    finally:
        database.close()

    print(f"{job.id}: {job.status}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
