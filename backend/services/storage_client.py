"""
Storage clients for fetching source videos.

LocalStorageClient treats each bucket as a directory under a root path,
which is how development and test environments are set up. The FTP-backed
client lives in workers/ftp_client.py.
"""
import shutil
import logging
from pathlib import Path, PurePosixPath

from constants import StorageBackend
from exceptions import ConfigurationError, DownloadError
from services.interfaces import IStorageClient

logger = logging.getLogger(__name__)


def _safe_relative(object_path: str) -> PurePosixPath:
    """Strip leading slashes and reject parent-directory segments."""
    relative = PurePosixPath(object_path.lstrip('/'))
    if not relative.parts or '..' in relative.parts:
        raise DownloadError(None, f"Invalid object path: {object_path!r}")
    return relative


class LocalStorageClient(IStorageClient):
    """Buckets are directories below root."""

    def __init__(self, root: Path):
        self.root = Path(root)

    def download(self, bucket_name: str, object_path: str, destination: Path) -> Path:
        if not bucket_name:
            raise DownloadError(None, "Bucket name is required")

        source = self.root / bucket_name / Path(*_safe_relative(object_path).parts)
        if not source.is_file():
            raise DownloadError(None, f"Object not found: {bucket_name}/{object_path}")

        destination = Path(destination)
        try:
            destination.parent.mkdir(parents=True, exist_ok=True)
            shutil.copyfile(source, destination)
        except OSError as e:
            raise DownloadError(None, f"Failed to copy {source} to {destination}: {e}") from e

        logger.debug(f"Copied {source} -> {destination}")
        return destination


def get_storage_client(settings) -> IStorageClient:
    """
    Factory for the configured storage backend.

    Raises:
        ConfigurationError: If the backend is unknown
    """
    if settings.storage_backend == StorageBackend.LOCAL:
        return LocalStorageClient(Path(settings.storage_root))
    if settings.storage_backend == StorageBackend.FTP:
        from workers.ftp_client import FTPStorageClient
        return FTPStorageClient(
            host=settings.ftp_host,
            port=settings.ftp_port,
            username=settings.ftp_username,
            password=settings.ftp_password,
        )
    raise ConfigurationError(f"Unsupported storage backend: {settings.storage_backend}")
