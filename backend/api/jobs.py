"""
Jobs API endpoints
"""
from fastapi import APIRouter, Depends

from constants import HTTPStatus
from dependencies import get_job_repository, get_job_service, get_video_repository
from repositories.job_repository import JobRepository
from repositories.video_repository import VideoRepository
from schemas import Job as JobSchema, JobCreate, JobList, JobStatusUpdate
from services.interfaces import IJobService
from utils.error_handlers import handle_api_errors
import logging

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/jobs", response_model=JobSchema, status_code=HTTPStatus.CREATED)
@handle_api_errors("Job creation")
def create_job(
    request: JobCreate,
    job_service: IJobService = Depends(get_job_service),
    video_repo: VideoRepository = Depends(get_video_repository)
):
    """
    Create a Pending job for a registered video.

    Raises:
        HTTPException: 404 if the video is unknown
    """
    video = video_repo.find(request.video_id)
    return job_service.create_job(video, request.output_path)


@router.get("/jobs", response_model=JobList)
@handle_api_errors("Job listing")
def list_jobs(
    status: str,
    limit: int = 100,
    job_repo: JobRepository = Depends(get_job_repository)
):
    """
    List jobs in a status, newest first

    Args:
        status: Exact status value (case-sensitive)
        limit: Maximum number of jobs to return (default 100)
    """
    jobs = job_repo.find_by_status(status, limit=limit)
    return {"count": len(jobs), "jobs": jobs}


@router.get("/jobs/{job_id}", response_model=JobSchema)
@handle_api_errors("Job lookup")
def get_job(job_id: str, job_service: IJobService = Depends(get_job_service)):
    """Get a job's current status with its video"""
    return job_service.get_job(job_id)


@router.patch("/jobs/{job_id}", response_model=JobSchema)
@handle_api_errors("Job status update")
def update_job_status(
    job_id: str,
    request: JobStatusUpdate,
    job_service: IJobService = Depends(get_job_service)
):
    """
    Set a job's status.

    Used by workers to record progress and failures.
    """
    job = job_service.get_job(job_id)
    return job_service.update_status(job, request.status, error=request.error)
