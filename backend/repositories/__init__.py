"""
Repository layer for data access abstraction.

This package contains repository classes that encapsulate database queries
and provide a clean interface for data access operations.
"""

from .base_repository import BaseRepository
from .video_repository import VideoRepository
from .job_repository import JobRepository

__all__ = [
    "BaseRepository",
    "VideoRepository",
    "JobRepository",
]
