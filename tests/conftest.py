"""Pytest configuration and fixtures."""

import os
import tempfile

# Settings are read once at import time and DATABASE_URL/JWT_SECRET are
# required, so the environment must be in place before carhub is imported.
UPLOAD_DIR = tempfile.mkdtemp(prefix="carhub-uploads-")
os.environ.setdefault("DATABASE_URL", "sqlite:///./test.db")
os.environ.setdefault("JWT_SECRET", "test-secret-key")
os.environ["UPLOAD_DIR"] = UPLOAD_DIR
os.environ["CELERY_TASK_ALWAYS_EAGER"] = "true"
os.environ["EXIT_ON_UNHANDLED_ERROR"] = "false"
os.environ.setdefault("BCRYPT_ROUNDS", "4")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402

from carhub.database import Base, get_db  # noqa: E402
from carhub.main import app  # noqa: E402


class AuthHeaders(dict):
    """Dict subclass that also stores the user's id, email and password."""

    def __init__(self, *args, user_id: int | None = None, email: str = "", password: str = "", **kwargs):
        super().__init__(*args, **kwargs)
        self.user_id = user_id
        self.email = email
        self.password = password


SQLALCHEMY_DATABASE_URL = os.environ["DATABASE_URL"]

connect_args = {"check_same_thread": False} if "sqlite" in SQLALCHEMY_DATABASE_URL else {}
engine = create_engine(SQLALCHEMY_DATABASE_URL, connect_args=connect_args)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# 1x1 transparent PNG
PNG_BYTES = bytes.fromhex(
    "89504e470d0a1a0a0000000d4948445200000001000000010806000000"
    "1f15c4890000000d49444154789c6360000002000100e221bc330000000049454e44ae426082"
)


@pytest.fixture(scope="session", autouse=True)
def setup_test_database():
    """Create test database schema once at the start of the test session."""
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture(scope="function", autouse=True)
def db():
    """Create a fresh database session for each test with cleanup."""
    session = TestingSessionLocal()

    yield session

    # Clean up all data after test
    session.rollback()
    for table in reversed(Base.metadata.sorted_tables):
        session.execute(table.delete())
    session.commit()
    session.close()


@pytest.fixture(scope="function")
def client(db):
    """Create a test client with database override."""

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def signup(client, name: str, username: str, email: str, password: str) -> AuthHeaders:
    """Sign up a user and return auth headers for it."""
    response = client.post(
        "/auth/signup",
        json={"name": name, "username": username, "email": email, "password": password},
    )
    assert response.status_code == 201, response.text
    token = response.json()["token"]
    headers = {"Authorization": f"Bearer {token}"}

    me = client.get("/auth/me", headers=headers)
    assert me.status_code == 200
    return AuthHeaders(headers, user_id=me.json()["id"], email=email, password=password)


@pytest.fixture
def auth_headers(client):
    """Create a user and return auth headers with user info."""
    return signup(client, "John", "john12", "john@example.com", "password123")


@pytest.fixture
def other_auth_headers(client):
    """A second, unrelated user."""
    return signup(client, "Jane", "jane34", "jane@example.com", "password456")


def create_car(
    client,
    headers,
    title: str = "SUV Deal",
    description: str = "2020 Toyota",
    tags=("SUV", "Toyota"),
    image_count: int = 1,
):
    """POST a car as multipart form data and return the response."""
    files = [
        ("images", (f"car{i}.png", PNG_BYTES, "image/png")) for i in range(image_count)
    ]
    data = {
        "title": title,
        "description": description,
        "tags": tags if isinstance(tags, str) or tags is None else list(tags),
    }
    data = {key: value for key, value in data.items() if value is not None}
    return client.post("/cars", headers=headers, data=data, files=files or None)


@pytest.fixture
def post_car(client):
    """POST /cars for the given headers and return the raw response."""

    def post(headers, **kwargs):
        return create_car(client, headers, **kwargs)

    return post


@pytest.fixture
def car_factory(post_car):
    """Create cars through the API for the given headers."""

    def factory(headers, **kwargs):
        response = post_car(headers, **kwargs)
        assert response.status_code == 201, response.text
        return response.json()["car"]

    return factory
