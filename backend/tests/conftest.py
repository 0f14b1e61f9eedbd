import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from app.database import Base, get_db
from app.main import app
from app.models.course import Course
from app.models.user import User
from app.services.table_store import TableStore

TEST_DB_URL = "sqlite:///./test_tracker.db"

engine = create_engine(TEST_DB_URL, connect_args={"check_same_thread": False})
TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def override_get_db():
    db = TestingSession()
    try:
        yield db
    finally:
        db.close()


app.dependency_overrides[get_db] = override_get_db


@pytest.fixture(autouse=True)
def setup_db():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    db = TestingSession()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def store(db):
    return TableStore(db)


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def seed_users(db):
    users = {
        "student": User(name="Alex Kim", email="a@x.edu", role="student"),
        "student2": User(name="Sam Choi", email="sam@x.edu", role="student"),
        "advisor": User(name="Dr. Lee", email="lee@x.edu", role="advisor"),
        "advisor2": User(name="Dr. Park", email="park@x.edu", role="advisor"),
        "coordinator": User(name="Dana", email="dana@x.edu", role="coordinator"),
    }
    for u in users.values():
        db.add(u)
    db.commit()
    for u in users.values():
        db.refresh(u)
    return users


@pytest.fixture
def seed_course(db):
    course = Course(course_code="CS499", name="Capstone Project")
    db.add(course)
    db.commit()
    db.refresh(course)
    return course


def get_token(client, email: str) -> str:
    resp = client.post("/api/auth/login", json={"email": email})
    assert resp.status_code == 200, resp.text
    return resp.json()["access_token"]


def auth_headers(client, email: str) -> dict:
    return {"Authorization": f"Bearer {get_token(client, email)}"}
