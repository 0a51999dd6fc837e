import sys
import subprocess
from pathlib import Path

# Add backend directory to Python path FIRST
backend_dir = Path(__file__).parent.parent
sys.path.insert(0, str(backend_dir))

# Now import after path is set
import pytest
from database import Database
from domain.entities import Video
from repositories import JobRepository, VideoRepository
from services.storage_client import LocalStorageClient
from utils import fragment_helper

BUCKET = "encoder-input"
VIDEO_OBJECT = "videos/3fa3291e/source.mp4"


@pytest.fixture
def database():
    """Migrated in-memory database"""
    db = Database.sqlite()
    db.connect()
    yield db
    db.close()


@pytest.fixture
def db_session(database):
    session = database.session()
    yield session
    session.close()


@pytest.fixture
def video_repo(db_session):
    return VideoRepository(db_session)


@pytest.fixture
def job_repo(db_session):
    return JobRepository(db_session)


@pytest.fixture
def make_video():
    def _make(file_path="/path/to/video.mp4", resource_id="video"):
        return Video.new(file_path=file_path, resource_id=resource_id)
    return _make


@pytest.fixture
def stored_video(video_repo, make_video):
    return video_repo.insert(make_video())


@pytest.fixture
def storage_root(tmp_path):
    """Bucket directory tree holding one source video"""
    root = tmp_path / "storage"
    source = root / BUCKET / VIDEO_OBJECT
    source.parent.mkdir(parents=True)
    source.write_bytes(b"\x00\x00\x00\x18ftypmp42" + b"\x00" * 64)
    return root


@pytest.fixture
def storage_client(storage_root):
    return LocalStorageClient(storage_root)


@pytest.fixture
def work_dir(tmp_path):
    path = tmp_path / "work"
    path.mkdir()
    return path


@pytest.fixture
def fake_fragmenter(monkeypatch):
    """
    Replace the external fragmenter with one that copies the source.

    Returns the list of (binary, source, destination) calls.
    """
    calls = []

    def _run_fragment(binary, source, destination, timeout=None):
        calls.append((binary, Path(source), Path(destination)))
        Path(destination).write_bytes(Path(source).read_bytes())
        return subprocess.CompletedProcess([binary, str(source), str(destination)], 0, stdout="fragmented\n", stderr="")

    monkeypatch.setattr(fragment_helper, "run_fragment", _run_fragment)
    return calls


@pytest.fixture
def failing_fragmenter(monkeypatch):
    def _run_fragment(binary, source, destination, timeout=None):
        raise subprocess.CalledProcessError(2, [binary, str(source), str(destination)], output="", stderr="invalid moov box")

    monkeypatch.setattr(fragment_helper, "run_fragment", _run_fragment)
