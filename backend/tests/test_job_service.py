import logging

import pytest

from conftest import BUCKET, VIDEO_OBJECT
from domain.entities import Video
from exceptions import DownloadError, FragmentationError, PersistenceError, ValidationError
from repositories import JobRepository
from services.job_service import JobService
from services.video_service import VideoService
from utils.logging_utils import get_logging_context


@pytest.fixture
def job_service(db_session):
    return JobService(db_session)


@pytest.fixture
def source_video(video_repo):
    return video_repo.insert(Video.new(file_path=VIDEO_OBJECT, resource_id="video"))


@pytest.fixture
def video_service(video_repo, storage_client, work_dir):
    return VideoService(video_repo, storage_client, work_dir)


def test_create_job_is_pending(job_service, stored_video, job_repo):
    job = job_service.create_job(stored_video, "output_path")

    assert job.status == "Pending"
    assert job_repo.find(job.id).video.id == stored_video.id


def test_create_job_validates(job_service, stored_video):
    with pytest.raises(ValidationError):
        job_service.create_job(stored_video, "")


def test_create_job_for_unstored_video(job_service, make_video):
    with pytest.raises(PersistenceError):
        job_service.create_job(make_video(), "out")


def test_update_status_persists_error(job_service, stored_video, job_repo):
    job = job_service.create_job(stored_video, "out")

    job_service.update_status(job, "Failed", error="disk full")

    found = job_repo.find(job.id)
    assert found.status == "Failed"
    assert found.error == "disk full"


def test_update_status_clears_error_on_retry(job_service, stored_video, job_repo):
    job = job_service.mark_failed(job_service.create_job(stored_video, "out"), "timeout")

    job_service.update_status(job, "Pending")

    assert job_repo.find(job.id).error is None


def test_update_status_rejects_empty(job_service, stored_video):
    job = job_service.create_job(stored_video, "out")
    with pytest.raises(ValidationError):
        job_service.update_status(job, "")


def test_update_status_warns_outside_flow(job_service, stored_video, job_repo, caplog):
    job = job_service.create_job(stored_video, "out")
    job_service.update_status(job, "Completed")

    with caplog.at_level(logging.WARNING, logger="services.job_service"):
        job_service.update_status(job, "Pending")

    assert "outside the processing flow" in caplog.text
    assert job_repo.find(job.id).status == "Pending"


def test_process_completes_job(database, job_service, source_video, video_service, fake_fragmenter, work_dir):
    job = job_service.create_job(source_video, "output_path")

    fragment_path = job_service.process(job, video_service, BUCKET)

    assert fragment_path == work_dir / f"{source_video.id}.frag"
    assert fragment_path.is_file()
    with database.session_scope() as other:
        found = JobRepository(other).find(job.id)
    assert found.status == "Completed"
    assert found.error is None
    assert get_logging_context() == {}


def test_process_records_each_status(job_service, source_video, video_service, fake_fragmenter, monkeypatch):
    job = job_service.create_job(source_video, "out")
    seen = []
    original = job_service.job_repo.update

    def _update(updated):
        seen.append(updated.status)
        return original(updated)

    monkeypatch.setattr(job_service.job_repo, "update", _update)

    job_service.process(job, video_service, BUCKET)

    assert seen == ["Downloading", "Fragmenting", "Completed"]


def test_process_download_failure_marks_failed(job_service, job_repo, stored_video, video_service, fake_fragmenter):
    # stored_video's file_path does not exist in the bucket
    job = job_service.create_job(stored_video, "out")

    with pytest.raises(DownloadError):
        job_service.process(job, video_service, BUCKET)

    found = job_repo.find(job.id)
    assert found.status == "Failed"
    assert "Object not found" in found.error
    assert fake_fragmenter == []


def test_process_fragment_failure_marks_failed(job_service, job_repo, source_video, video_service, failing_fragmenter):
    job = job_service.create_job(source_video, "out")

    with pytest.raises(FragmentationError):
        job_service.process(job, video_service, BUCKET)

    found = job_repo.find(job.id)
    assert found.status == "Failed"
    assert "invalid moov box" in found.error
    assert get_logging_context() == {}
