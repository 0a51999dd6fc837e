"""
Video API endpoints

Register source videos and read them back. Videos cannot be modified.
"""
from fastapi import APIRouter, Depends

from constants import HTTPStatus
from dependencies import get_video_repository
from domain.entities import Video
from repositories.video_repository import VideoRepository
from schemas import Video as VideoSchema, VideoCreate
from utils.error_handlers import handle_api_errors

router = APIRouter()


@router.post("/videos", response_model=VideoSchema, status_code=HTTPStatus.CREATED)
@handle_api_errors("Video registration")
def create_video(
    request: VideoCreate,
    video_repo: VideoRepository = Depends(get_video_repository)
):
    """
    Register a source video.

    Returns:
        The stored video
    """
    video = Video.new(
        file_path=request.file_path,
        resource_id=request.resource_id,
        video_id=request.id,
    )
    return video_repo.insert(video)


@router.get("/videos/{video_id}", response_model=VideoSchema)
@handle_api_errors("Video lookup")
def get_video(video_id: str, video_repo: VideoRepository = Depends(get_video_repository)):
    """Get a video by ID"""
    return video_repo.find(video_id)
