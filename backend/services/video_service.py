"""
Video Service

Downloads a source video into local working storage and fragments it so
the encoder can consume it.

Working files for a video with ID <id> under LOCAL_STORAGE_PATH:
- <id>.mp4   downloaded source
- <id>.frag  fragmented MP4
- <id>/      per-video output directory
"""

import shutil
import subprocess
from pathlib import Path
from typing import Optional

from constants import StorageDefaults
from domain.entities import Video
from exceptions import DownloadError, FragmentationError
from repositories.video_repository import VideoRepository
from services.interfaces import IStorageClient, IVideoService
from utils import fragment_helper
from utils.logging_utils import StructuredLogger, log_operation

logger = StructuredLogger(__name__)


class VideoService(IVideoService):
    """
    Processing steps for a single bound video.

    Not safe for concurrent use against the same video; callers serialize
    download/fragment/finish themselves.
    """

    def __init__(
        self,
        video_repository: VideoRepository,
        storage_client: IStorageClient,
        local_storage_path: Path | str = StorageDefaults.LOCAL_STORAGE_PATH,
        video: Optional[Video] = None,
        fragment_binary: str = StorageDefaults.FRAGMENT_BINARY,
    ):
        """
        Initialize VideoService.

        Args:
            video_repository: Repository the bound video is stored in
            storage_client: Remote storage to download from
            local_storage_path: Working directory for downloads and fragments
            video: Video to process (can be bound later)
            fragment_binary: Fragmenter executable
        """
        self.video_repository = video_repository
        self.storage_client = storage_client
        self.local_storage_path = Path(local_storage_path)
        self.fragment_binary = fragment_binary
        self.video = video
        self._downloaded_video_id: Optional[str] = None

    def bind(self, video_id: str) -> Video:
        """
        Load a stored video and make it the one this service works on.

        Raises:
            NotFoundError: If the video is not stored
        """
        self.video = self.video_repository.find(video_id)
        self._downloaded_video_id = None
        return self.video

    @property
    def source_path(self) -> Path:
        return self.local_storage_path / f"{self._require_video_id()}{StorageDefaults.SOURCE_SUFFIX}"

    @property
    def fragment_path(self) -> Path:
        return self.local_storage_path / f"{self._require_video_id()}{StorageDefaults.FRAGMENT_SUFFIX}"

    @property
    def output_dir(self) -> Path:
        return self.local_storage_path / self._require_video_id()

    def _require_video_id(self) -> str:
        if self.video is None or not self.video.id:
            raise ValueError("No video bound to the service")
        return self.video.id

    @log_operation("download")
    def download(self, bucket_name: str) -> Path:
        """
        Fetch the bound video's file from remote storage.

        Args:
            bucket_name: Bucket (or storage root) holding video.file_path

        Returns:
            Local path of the downloaded source

        Raises:
            DownloadError: If no video is bound or the storage client fails
        """
        if self.video is None or not self.video.id:
            raise DownloadError(None, "Cannot download: no video bound to the service")

        video_id = self.video.id
        destination = self.source_path
        try:
            self.local_storage_path.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise DownloadError(video_id, f"Cannot create {self.local_storage_path}: {e}") from e

        try:
            self.storage_client.download(bucket_name, self.video.file_path, destination)
        except DownloadError as e:
            raise DownloadError(video_id, e.message) from e

        self._downloaded_video_id = video_id
        logger.info(
            f"Video {video_id} has been stored at {destination}",
            extra={"video_id": video_id, "bucket": bucket_name},
        )
        return destination

    @log_operation("fragment")
    def fragment(self) -> Path:
        """
        Fragment the downloaded source into <id>.frag.

        Returns:
            Path of the fragmented file

        Raises:
            FragmentationError: If no download happened for the bound video
                or the fragmenter fails
        """
        if self.video is None or not self.video.id:
            raise FragmentationError(None, "Cannot fragment: no video bound to the service")

        video_id = self.video.id
        source = self.source_path
        if self._downloaded_video_id != video_id or not source.is_file():
            raise FragmentationError(video_id, f"Video {video_id} has not been downloaded")

        destination = self.fragment_path
        try:
            self.output_dir.mkdir(parents=True, exist_ok=True)
            result = fragment_helper.run_fragment(self.fragment_binary, source, destination)
        except FileNotFoundError as e:
            raise FragmentationError(video_id, str(e)) from e
        except subprocess.CalledProcessError as e:
            stderr = (e.stderr or '').strip()
            raise FragmentationError(
                video_id,
                f"{self.fragment_binary} exited with code {e.returncode}: {stderr}",
            ) from e
        except subprocess.TimeoutExpired as e:
            raise FragmentationError(video_id, f"{self.fragment_binary} timed out after {e.timeout}s") from e
        except OSError as e:
            raise FragmentationError(video_id, f"Fragmentation failed: {e}") from e

        if result.stdout:
            logger.info(f"Output: {result.stdout.strip()}", extra={"video_id": video_id})

        return destination

    def finish(self) -> None:
        """Remove the source, fragment and output directory of the bound video."""
        video_id = self._require_video_id()

        for path in (self.source_path, self.fragment_path):
            path.unlink(missing_ok=True)
        shutil.rmtree(self.output_dir, ignore_errors=True)

        self._downloaded_video_id = None
        logger.info(f"Cleaned up files for video {video_id}", extra={"video_id": video_id})
