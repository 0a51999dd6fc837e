from datetime import datetime, timedelta

import pytest

from domain.entities import Video
from exceptions import NotFoundError, PersistenceError, ValidationError
from repositories import VideoRepository


def test_insert_then_find_round_trips_every_field(database, video_repo, make_video):
    video = make_video()
    video_repo.insert(video)

    # Read through a fresh session so nothing comes from the identity map
    with database.session_scope() as other:
        found = VideoRepository(other).find(video.id)

    assert found == video
    assert found.file_path == "/path/to/video.mp4"
    assert found.resource_id == "video"
    assert found.created_at == video.created_at


def test_find_missing_video_raises_not_found(video_repo):
    with pytest.raises(NotFoundError) as exc_info:
        video_repo.find("00000000-0000-0000-0000-000000000000")

    assert exc_info.value.entity == "Video"


def test_duplicate_id_raises_persistence_error(database, video_repo, make_video):
    video = video_repo.insert(make_video())
    duplicate = Video(id=video.id, file_path="/other.mp4", resource_id="other")

    with database.session_scope() as other:
        with pytest.raises(PersistenceError) as exc_info:
            VideoRepository(other).insert(duplicate)

    assert exc_info.value.details["operation"] == "insert"
    # The original row is untouched
    assert video_repo.find(video.id).file_path == video.file_path


def test_repository_usable_after_failed_insert(database, make_video):
    with database.session_scope() as db:
        repo = VideoRepository(db)
        video = repo.insert(make_video())
        with pytest.raises(PersistenceError):
            repo.insert(Video(id=video.id, file_path="/x.mp4", resource_id="x"))

        other = repo.insert(make_video())
        assert repo.find(other.id) == other


def test_insert_rejects_invalid_video(video_repo):
    with pytest.raises(ValidationError):
        video_repo.insert(Video(id="", file_path="/a.mp4", resource_id="r"))
    assert video_repo.count() == 0


def test_find_by_resource_orders_oldest_first(video_repo):
    now = datetime.utcnow()
    newer = Video.new("/b.mp4", "batch-1")
    newer.created_at = now
    older = Video.new("/a.mp4", "batch-1")
    older.created_at = now - timedelta(minutes=5)
    video_repo.insert(newer)
    video_repo.insert(older)
    video_repo.insert(Video.new("/c.mp4", "batch-2"))

    found = video_repo.find_by_resource("batch-1")

    assert [v.id for v in found] == [older.id, newer.id]
    assert video_repo.find_by_resource("missing") == []
