"""
Domain Entities

Entities are business objects with identity and lifecycle.
They are mutable and have a unique identifier that persists through their lifetime.

- Video: A registered source video (append-only once stored)
- Job: A transcoding job bound to one Video
"""

from .video import Video
from .job import Job, new_job

__all__ = ["Video", "Job", "new_job"]
