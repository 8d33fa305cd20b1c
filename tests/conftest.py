"""
Pytest fixtures: in-memory SQLite, fake object store, tmp assets/temp dirs.
Environment is set before any app import so the module-level engine and settings pick it up.
"""
import os
import tempfile
from pathlib import Path

_test_temp_dir = tempfile.mkdtemp()
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["ASSETS_ROOT"] = os.path.join(_test_temp_dir, "assets")
os.environ["TEMP_DIR"] = os.path.join(_test_temp_dir, "tmp")
os.environ["S3_BUCKET"] = "test-bucket"
os.environ["S3_REGION"] = "us-east-2"

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from app.auth import create_access_token  # noqa: E402
from app.config import get_settings  # noqa: E402
from app.database import Base, get_db  # noqa: E402
from app.main import app  # noqa: E402
from app.models.user import User  # noqa: E402
from app.models.video import Video  # noqa: E402
from app.services.object_store import get_object_store  # noqa: E402
from app.services.thumbnail_store import DiskThumbnailStore, get_thumbnail_store  # noqa: E402


class FakeObjectStore:
    """Records uploads in memory; presigned URLs are deterministic."""

    def __init__(self, bucket: str = "test-bucket", region: str = "us-east-2"):
        self.bucket = bucket
        self.region = region
        self.objects: dict[str, tuple[bytes, str]] = {}
        self.presigned: list[tuple[str, int]] = []

    def upload_file(self, file_path: Path, key: str, content_type: str) -> None:
        self.objects[key] = (Path(file_path).read_bytes(), content_type)

    def presign_get_url(self, key: str, expires_in: int) -> str:
        self.presigned.append((key, expires_in))
        return f"https://{self.bucket}.s3.{self.region}.amazonaws.com/{key}?X-Amz-Expires={expires_in}&X-Amz-Signature=test"

    def object_url(self, key: str) -> str:
        return f"https://{self.bucket}.s3.{self.region}.amazonaws.com/{key}"


@pytest.fixture
def settings(tmp_path, monkeypatch):
    """Cached settings pointed at per-test directories."""
    s = get_settings()
    monkeypatch.setattr(s, "assets_root", str(tmp_path / "assets"))
    monkeypatch.setattr(s, "temp_dir", str(tmp_path / "tmp"))
    (tmp_path / "assets").mkdir()
    (tmp_path / "tmp").mkdir()
    return s


@pytest.fixture
def engine():
    eng = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(eng)
    yield eng
    Base.metadata.drop_all(eng)
    eng.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def object_store():
    return FakeObjectStore()


@pytest.fixture
def thumbnail_store(settings):
    return DiskThumbnailStore()


@pytest.fixture
def client(settings, session_factory, object_store, thumbnail_store):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_object_store] = lambda: object_store
    app.dependency_overrides[get_thumbnail_store] = lambda: thumbnail_store
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def make_user(db):
    def _make(email: str, password: str = "not-a-real-hash") -> User:
        user = User(email=email, password=password)
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    return _make


@pytest.fixture
def owner(make_user):
    return make_user("owner@example.com")


@pytest.fixture
def other_user(make_user):
    return make_user("other@example.com")


def auth_headers(user: User) -> dict:
    return {"Authorization": f"Bearer {create_access_token(user.id, user.email)}"}


@pytest.fixture
def sample_video(db, owner):
    video = Video(user_id=owner.id, title="Boots", description="A video about boots")
    db.add(video)
    db.commit()
    db.refresh(video)
    return video


def fetch_video(db, video_id: str) -> Video | None:
    """Re-read a row after the app committed through its own session."""
    db.expire_all()
    return db.query(Video).filter(Video.id == video_id).first()
