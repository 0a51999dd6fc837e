"""
Fragmenter Binary Helper

Locates and runs the external MP4 fragmenter (Bento4 mp4fragment by default).
"""
import os
import shutil
import subprocess
import logging
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

FRAGMENT_TIMEOUT_SECONDS = 600


def get_fragment_binary_path(binary: str) -> str:
    """
    Resolve the fragmenter executable.

    Args:
        binary: Executable name looked up on PATH, or an explicit path

    Returns:
        Absolute path to the binary

    Raises:
        FileNotFoundError: If the binary cannot be found
    """
    if os.sep in binary:
        if not Path(binary).is_file():
            raise FileNotFoundError(f"Fragmenter not found at {binary}")
        return binary

    resolved = shutil.which(binary)
    if resolved is None:
        raise FileNotFoundError(
            f"{binary} not found on PATH. Install Bento4 or set FRAGMENT_BINARY."
        )
    logger.debug(f"Using fragmenter: {resolved}")
    return resolved


def run_fragment(
    binary: str,
    source: Path,
    destination: Path,
    timeout: Optional[int] = FRAGMENT_TIMEOUT_SECONDS,
) -> subprocess.CompletedProcess:
    """
    Run the fragmenter on one file.

    Args:
        binary: Executable name or path
        source: Input MP4
        destination: Fragmented output file
        timeout: Seconds before the process is killed

    Returns:
        Completed process with captured output

    Raises:
        FileNotFoundError: If the binary is missing
        subprocess.CalledProcessError: If the tool exits non-zero
        subprocess.TimeoutExpired: If the tool runs past the timeout
    """
    cmd = [get_fragment_binary_path(binary), str(source), str(destination)]
    logger.debug(f"Running: {' '.join(cmd)}")
    return subprocess.run(
        cmd,
        capture_output=True,
        text=True,
        check=True,
        timeout=timeout,
    )
