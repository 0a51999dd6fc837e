import logging

import pytest
from fastapi import HTTPException

from exceptions import DownloadError, NotFoundError, ValidationError
from utils.error_handlers import handle_api_errors
from utils.logging_utils import log_operation


def test_handle_api_errors_maps_application_errors():
    @handle_api_errors("Video lookup")
    def lookup(video_id):
        raise NotFoundError("Video", video_id)

    with pytest.raises(HTTPException) as exc_info:
        lookup("abc")

    assert exc_info.value.status_code == 404
    assert exc_info.value.detail == "Video abc not found"
    assert lookup.__name__ == "lookup"


@pytest.mark.parametrize("error,status", [
    (ValidationError("bad"), 400),
    (DownloadError("v1", "unreachable"), 500),
    (RuntimeError("boom"), 500),
])
def test_handle_api_errors_status_codes(error, status):
    @handle_api_errors("Job creation")
    def create():
        raise error

    with pytest.raises(HTTPException) as exc_info:
        create()
    assert exc_info.value.status_code == status


def test_handle_api_errors_passes_results_and_http_exceptions():
    @handle_api_errors("Job lookup")
    def ok():
        return {"id": "1"}

    @handle_api_errors("Job lookup")
    def teapot():
        raise HTTPException(status_code=418, detail="teapot")

    assert ok() == {"id": "1"}
    with pytest.raises(HTTPException) as exc_info:
        teapot()
    assert exc_info.value.status_code == 418


def test_log_operation_logs_start_and_completion(caplog):
    @log_operation("download")
    def download(bucket_name):
        return bucket_name.upper()

    with caplog.at_level(logging.INFO):
        assert download(bucket_name="uploads") == "UPLOADS"

    messages = [r.getMessage() for r in caplog.records]
    assert messages == ["Starting download", "Completed download"]
    assert caplog.records[0].bucket_name == "uploads"
    assert caplog.records[0].operation == "download"


def test_log_operation_logs_failure_and_reraises(caplog):
    @log_operation("fragment")
    def fragment():
        raise ValueError("no moov box")

    with caplog.at_level(logging.INFO):
        with pytest.raises(ValueError):
            fragment()

    failure = caplog.records[-1]
    assert failure.getMessage() == "Failed fragment"
    assert failure.levelno == logging.ERROR
    assert failure.error_type == "ValueError"
