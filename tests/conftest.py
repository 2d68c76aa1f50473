import pytest
from fastapi.testclient import TestClient

from echovid.auth import create_access_token
from echovid.config import Settings
from echovid.database import Database
from echovid.errors import StorageFailure
from echovid.main import create_app
from echovid.models.user import UserRole
from echovid.repositories.user_repository import create_user
from echovid.services.blob_storage import BlobStore

TEST_SECRET = "test-secret-key-0123456789-abcdefghijklmnop"
BLOB_BASE_URL = "https://blobs.example.test/videos"


class InMemoryBlobStore(BlobStore):
    """Records objects in a dict; fail_upload / fail_delete simulate an unavailable store."""

    def __init__(self):
        self.objects: dict[str, tuple[bytes, str]] = {}
        self.deleted: list[str] = []
        self.fail_upload = False
        self.fail_delete = False

    def upload(self, object_name: str, data: bytes, content_type: str) -> str:
        if self.fail_upload:
            raise StorageFailure("simulated outage: connection reset by blob host")
        self.objects[object_name] = (data, content_type)
        return f"{BLOB_BASE_URL}/{object_name}"

    def delete(self, object_name: str) -> None:
        if self.fail_delete:
            raise StorageFailure("simulated outage during delete")
        self.deleted.append(object_name)
        self.objects.pop(object_name, None)


@pytest.fixture
def settings():
    return Settings(secret_key=TEST_SECRET, database_url="sqlite://", _env_file=None)


@pytest.fixture
def database():
    database = Database("sqlite://")
    database.create_all()
    yield database
    database.dispose()


@pytest.fixture
def db(database):
    session = database.SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def blob_store():
    return InMemoryBlobStore()


@pytest.fixture
def app(settings, database, blob_store):
    return create_app(settings=settings, database=database, blob_store=blob_store)


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def make_user(db):
    def _make(
        email="viewer@example.com",
        password="correct-horse",
        name="Viewer",
        role=UserRole.CONSUMER,
    ):
        return create_user(db, name, email, password, role)
    return _make


@pytest.fixture
def auth_header(settings):
    def _header(user):
        token = create_access_token(user.id, UserRole(user.role), settings)
        return {"Authorization": f"Bearer {token}"}
    return _header


@pytest.fixture
def consumer(make_user):
    return make_user()


@pytest.fixture
def creator(make_user):
    return make_user(email="studio@example.com", name="Studio", role=UserRole.CREATOR)
