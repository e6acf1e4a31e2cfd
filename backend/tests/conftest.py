import pytest
from datetime import datetime
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from hr_admin.database import Base, get_db
from hr_admin.main import app
from hr_admin.models.user import AppUser
from hr_admin.models.personnel import CommutingMember, Personnel
from hr_admin.utils.clock import FixedClock, get_clock

TEST_DB_URL = "sqlite:///./test_hr_admin.db"

engine = create_engine(TEST_DB_URL, connect_args={"check_same_thread": False})
TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def override_get_db():
    db = TestingSession()
    try:
        yield db
    finally:
        db.close()


app.dependency_overrides[get_db] = override_get_db


def tehran(year, month, day, hour=0, minute=0):
    return datetime.fromisoformat(f"{year:04d}-{month:02d}-{day:02d}T{hour:02d}:{minute:02d}:00+03:30")


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
def clock():
    clock = FixedClock(tehran(2024, 3, 1, 9, 0), "Asia/Tehran")
    app.dependency_overrides[get_clock] = lambda: clock
    yield clock
    app.dependency_overrides.pop(get_clock, None)


@pytest.fixture
def client(clock):
    return TestClient(app)


@pytest.fixture
def seed_users(db):
    users = {
        "admin": AppUser(username="admin", password="admin", full_name="Admin", role="admin"),
        "hr": AppUser(username="hr", password="hr", full_name="HR", role="hr"),
        "guard": AppUser(username="guard", password="guard", full_name="Gate Guard", role="guard"),
    }
    for u in users.values():
        db.add(u)
    db.commit()
    for u in users.values():
        db.refresh(u)
    return users


@pytest.fixture
def seed_members(db):
    personnel = [
        Personnel(personnel_code="1001", first_name="Ali", last_name="Rezaei", department="Production"),
        Personnel(personnel_code="1002", first_name="Sara", last_name="Karimi", department="Finance"),
    ]
    members = [
        CommutingMember(personnel_code="1001", full_name="Ali Rezaei", department="Production", position="Operator"),
        CommutingMember(personnel_code="1002", full_name="Sara Karimi", department="Finance", position="Accountant"),
    ]
    db.add_all(personnel + members)
    db.commit()
    return members


def get_token(client, username: str) -> str:
    resp = client.post("/api/auth/login", json={"username": username, "password": username})
    assert resp.status_code == 200, resp.text
    return resp.json()["access_token"]


def auth_headers(client, username: str) -> dict:
    return {"Authorization": f"Bearer {get_token(client, username)}"}
