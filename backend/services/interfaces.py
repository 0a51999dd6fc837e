"""
Service Interfaces

Abstract base classes for service layer following Dependency Inversion Principle.
This allows for dependency injection and easier testing/mocking.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional


class IStorageClient(ABC):
    """
    Interface for the remote storage that holds source videos.

    A bucket is the top-level container (object-storage bucket, FTP root
    directory); object_path is the video's file_path inside it.
    """

    @abstractmethod
    def download(self, bucket_name: str, object_path: str, destination: Path) -> Path:
        """
        Fetch one object into a local file.

        Args:
            bucket_name: Bucket / root the object lives in
            object_path: Path of the object inside the bucket
            destination: Local file to write

        Returns:
            The destination path

        Raises:
            DownloadError: If the object cannot be fetched or written
        """
        pass


class IVideoService(ABC):
    """
    Interface for the per-video processing steps.
    """

    @abstractmethod
    def download(self, bucket_name: str) -> Path:
        """
        Fetch the bound video into local storage.

        Raises:
            DownloadError: If no video is bound or the fetch fails
        """
        pass

    @abstractmethod
    def fragment(self) -> Path:
        """
        Fragment the downloaded video.

        Raises:
            FragmentationError: If nothing was downloaded or the tool fails
        """
        pass

    @abstractmethod
    def finish(self) -> None:
        """Remove local working files of the bound video."""
        pass


class IJobService(ABC):
    """
    Abstract interface for job management services.
    """

    @abstractmethod
    def create_job(self, video, output_path: str) -> object:
        """
        Create and persist a Pending job for a stored video.

        Raises:
            ValidationError: If arguments are missing
            PersistenceError: If the job cannot be stored
        """
        pass

    @abstractmethod
    def get_job(self, job_id: str) -> object:
        """
        Raises:
            NotFoundError: If no job has this ID
        """
        pass

    @abstractmethod
    def update_status(self, job, status: str, error: Optional[str] = None) -> object:
        """
        Set a job's status and persist it.

        Raises:
            ValidationError: If status is empty
            NotFoundError: If the job row is missing
        """
        pass

    @abstractmethod
    def mark_failed(self, job, error: str) -> object:
        """Set a job to Failed with an error message and persist it."""
        pass
