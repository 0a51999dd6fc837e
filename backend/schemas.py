from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime


# Video Schemas
class VideoBase(BaseModel):
    file_path: str = Field(..., min_length=1)
    resource_id: str = Field(..., min_length=1)


class VideoCreate(VideoBase):
    """Register a source video. id is generated when omitted."""
    id: Optional[str] = None


class Video(VideoBase):
    id: str
    created_at: datetime

    class Config:
        from_attributes = True


# Job Schemas
class JobCreate(BaseModel):
    """Create a Pending job for a registered video"""
    video_id: str = Field(..., min_length=1)
    output_path: str = Field(..., min_length=1)


class JobStatusUpdate(BaseModel):
    """Set a job's status. Any non-empty value is stored as-is."""
    status: str = Field(..., min_length=1)
    error: Optional[str] = None


class Job(BaseModel):
    id: str
    output_path: str
    status: str
    error: Optional[str] = None
    video: Video
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class JobList(BaseModel):
    count: int
    jobs: List[Job]
