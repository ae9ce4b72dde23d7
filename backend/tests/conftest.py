import os
import tempfile

# Settings are read at import time, so the test environment goes first.
_TMP_DIR = tempfile.mkdtemp(prefix="referhub-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{_TMP_DIR}/test.db"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["CLOUDINARY_CLOUD_NAME"] = "test-cloud"
os.environ["CLOUDINARY_API_KEY"] = "test-key"
os.environ["CLOUDINARY_API_SECRET"] = "test-secret"

import pytest
from fastapi.testclient import TestClient

from referhub.client import ApiClient, MemoryStorage, Notifier, SessionStore
from referhub.core import media
from referhub.db.base import Base
from referhub.db.session import engine
from referhub.main import app

UPLOADED_URL = "https://res.cloudinary.com/test-cloud/image/upload/v1/referhub/resumes/cv.pdf"


@pytest.fixture(autouse=True)
def reset_db():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def uploads(monkeypatch):
    """Replace the Cloudinary upload with a recorder."""
    calls = []

    def fake_upload(fileobj, filename=None):
        calls.append({"filename": filename, "content": fileobj.read()})
        return UPLOADED_URL

    monkeypatch.setattr(media, "upload_resume", fake_upload)
    return calls


def signup(client, email="referrer@example.com", password="s3cret!", full_name="Sam Rivera"):
    response = client.post(
        "/api/auth/signup",
        json={"email": email, "password": password, "full_name": full_name},
    )
    assert response.status_code == 201, response.text
    return response.json()


@pytest.fixture
def auth_headers(client):
    token = signup(client)["access_token"]
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def session():
    return SessionStore(MemoryStorage())


@pytest.fixture
def notifier():
    return Notifier()


@pytest.fixture
def api(session, client):
    """API client wired to the in-process app instead of the network."""
    return ApiClient(session, base_url="", transport=client)


@pytest.fixture
def register(client):
    """Sign up another referrer and return the auth response body."""
    def _register(email, password="s3cret!", full_name="Another Referrer"):
        return signup(client, email=email, password=password, full_name=full_name)

    return _register
