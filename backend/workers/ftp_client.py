"""
FTP storage backend.

Each bucket is a top-level directory on the server and a video's file_path
is resolved inside it. Source files are streamed to a .part file next to the
destination and moved into place only once the size matches the server's.
"""
import aioftp
import asyncio
from pathlib import Path, PurePosixPath
import logging

from constants import FTPConfig
from exceptions import DownloadError
from services.interfaces import IStorageClient

logger = logging.getLogger(__name__)


class FTPClient:
    """Thin async session over aioftp.Client"""

    def __init__(self, host: str, port: int, username: str, password: str):
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.client = None

    async def connect(self):
        self.client = aioftp.Client(
            socket_timeout=FTPConfig.SOCKET_TIMEOUT_SECONDS,
            path_timeout=FTPConfig.PATH_TIMEOUT_SECONDS,
        )
        await self.client.connect(self.host, self.port)
        await self.client.login(self.username, self.password)
        logger.info(f"Connected to FTP server: {self.host}:{self.port}")

    async def disconnect(self):
        if self.client is None:
            return
        try:
            await self.client.quit()
        except (OSError, aioftp.StatusCodeError) as e:
            # Server may already have dropped the control connection
            logger.debug(f"Error during FTP disconnect: {e}")
        finally:
            self.client = None

    @property
    def is_connected(self) -> bool:
        """Check if FTP client exists (does not verify the connection is alive)."""
        return self.client is not None

    async def size(self, remote_path: str) -> int:
        info = await self.client.stat(remote_path)
        return int(info['size'])

    async def fetch(self, remote_path: str, local_path: Path) -> int:
        """
        Stream one remote file to local_path.

        Returns:
            Number of bytes written

        Raises:
            IOError: If the written size differs from the server's size
        """
        expected_size = await self.size(remote_path)
        part_path = local_path.with_name(local_path.name + '.part')
        local_path.parent.mkdir(parents=True, exist_ok=True)

        written = 0
        try:
            async with self.client.download_stream(remote_path) as stream:
                with open(part_path, 'wb') as f:
                    async for block in stream.iter_by_block(FTPConfig.TRANSFER_CHUNK_SIZE):
                        f.write(block)
                        written += len(block)

            if written != expected_size:
                raise IOError(f"Size mismatch: expected {expected_size}, got {written}")

            part_path.replace(local_path)
        finally:
            part_path.unlink(missing_ok=True)

        logger.info(f"Fetched {remote_path} -> {local_path.name} ({written} bytes)")
        return written


class FTPStorageClient(IStorageClient):
    """
    Storage client backed by an FTP server.

    Calls are blocking: every download opens its own connection inside a
    fresh event loop.
    """

    def __init__(self, host: str, port: int, username: str, password: str):
        self.host = host
        self.port = port
        self.username = username
        self.password = password

    def remote_path(self, bucket_name: str, object_path: str) -> str:
        relative = PurePosixPath(object_path.lstrip('/'))
        if not relative.parts or '..' in relative.parts:
            raise DownloadError(None, f"Invalid object path: {object_path!r}")
        return str(PurePosixPath('/') / bucket_name / relative)

    async def _download(self, remote_path: str, destination: Path) -> None:
        ftp = FTPClient(self.host, self.port, self.username, self.password)
        await ftp.connect()
        try:
            await ftp.fetch(remote_path, destination)
        finally:
            await ftp.disconnect()

    def download(self, bucket_name: str, object_path: str, destination: Path) -> Path:
        if not bucket_name:
            raise DownloadError(None, "Bucket name is required")

        remote_path = self.remote_path(bucket_name, object_path)
        destination = Path(destination)
        try:
            asyncio.run(self._download(remote_path, destination))
        except (OSError, asyncio.TimeoutError, aioftp.AIOFTPException) as e:
            raise DownloadError(
                None,
                f"Failed to download ftp://{self.host}:{self.port}{remote_path}: {e}"
            ) from e
        return destination
