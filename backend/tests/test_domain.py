import uuid

import pytest

from domain.entities import Video, new_job
from domain.value_objects import JobStatus
from exceptions import ValidationError


def test_new_job_assigns_fresh_id_and_binds_video(make_video):
    video = make_video()

    job = new_job("output_path", "Pending", video)

    assert uuid.UUID(job.id)
    assert job.video.id == video.id
    assert job.video_id == video.id
    assert job.output_path == "output_path"
    assert job.status == "Pending"
    assert job.error is None


def test_new_job_ids_are_unique(make_video):
    video = make_video()
    ids = {new_job("out", "Pending", video).id for _ in range(50)}
    assert len(ids) == 50


@pytest.mark.parametrize("output_path,status,field", [
    ("", "Pending", "output_path"),
    ("out", "", "status"),
    ("out", "pending", "status"),
    ("out", "Encoding", "status"),
])
def test_new_job_rejects_invalid_arguments(make_video, output_path, status, field):
    with pytest.raises(ValidationError) as exc_info:
        new_job(output_path, status, make_video())

    assert field in exc_info.value.details["invalid_fields"]


def test_new_job_requires_video():
    with pytest.raises(ValidationError) as exc_info:
        new_job("out", "Pending", None)
    assert "video" in exc_info.value.details["invalid_fields"]


def test_new_job_requires_video_id(make_video):
    video = make_video()
    video.id = ""
    with pytest.raises(ValidationError):
        new_job("out", "Pending", video)


def test_video_new_generates_uuid():
    video = Video.new(file_path="a.mp4", resource_id="r")
    assert uuid.UUID(video.id)
    video.validate()


def test_video_new_keeps_supplied_id():
    video_id = str(uuid.uuid4())
    assert Video.new(file_path="a.mp4", resource_id="r", video_id=video_id).id == video_id


def test_video_validate_reports_every_bad_field():
    video = Video(id="not-a-uuid", file_path="", resource_id="")

    with pytest.raises(ValidationError) as exc_info:
        video.validate()

    assert set(exc_info.value.details["invalid_fields"]) == {"id", "file_path", "resource_id"}


class TestJobStatus:
    def test_values_are_case_sensitive_strings(self):
        assert JobStatus.values() == ["Pending", "Downloading", "Fragmenting", "Completed", "Failed"]
        assert JobStatus.PENDING == "Pending"

    def test_from_string(self):
        assert JobStatus.from_string("Completed") is JobStatus.COMPLETED
        with pytest.raises(ValidationError):
            JobStatus.from_string("completed")

    def test_terminal_and_active(self):
        assert JobStatus.COMPLETED.is_terminal()
        assert JobStatus.FAILED.is_terminal()
        assert not JobStatus.PENDING.is_terminal()
        assert JobStatus.DOWNLOADING.is_active()
        assert not JobStatus.COMPLETED.is_active()

    @pytest.mark.parametrize("current,target", [
        (JobStatus.PENDING, JobStatus.DOWNLOADING),
        (JobStatus.PENDING, JobStatus.COMPLETED),
        (JobStatus.DOWNLOADING, JobStatus.FRAGMENTING),
        (JobStatus.FRAGMENTING, JobStatus.COMPLETED),
        (JobStatus.DOWNLOADING, JobStatus.FAILED),
        (JobStatus.FAILED, JobStatus.PENDING),
    ])
    def test_processing_flow_transitions(self, current, target):
        assert current.can_transition_to(target)

    @pytest.mark.parametrize("current,target", [
        (JobStatus.COMPLETED, JobStatus.PENDING),
        (JobStatus.PENDING, JobStatus.FRAGMENTING),
        (JobStatus.FRAGMENTING, JobStatus.DOWNLOADING),
    ])
    def test_transitions_outside_the_flow(self, current, target):
        assert not current.can_transition_to(target)

    def test_job_is_terminal_tolerates_free_form_status(self, make_video):
        job = new_job("out", "Pending", make_video())
        assert not job.is_terminal
        job.status = "Completed"
        assert job.is_terminal
        job.status = "Archived"
        assert not job.is_terminal
