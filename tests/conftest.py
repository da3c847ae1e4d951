import os

os.environ.setdefault("DATABASE_URL", "sqlite:///./test.db")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from app.main import app
from app.api.deps import get_db, get_session_factory
from app.db.base import Base

SQLALCHEMY_DATABASE_URL = "sqlite:///./test.db"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL, connect_args={"check_same_thread": False}
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()

def override_get_session_factory():
    return TestingSessionLocal

app.dependency_overrides[get_db] = override_get_db
app.dependency_overrides[get_session_factory] = override_get_session_factory

@pytest.fixture(autouse=True)
def setup_database():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)

@pytest.fixture
def client():
    return TestClient(app)

@pytest.fixture
def db():
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()

@pytest.fixture
def partner_payload():
    return {
        "name": "Alice Partner",
        "username": "alice",
        "requisites": "4276 1234 5678 9012",
        "requisiteType": "Card",
        "code": "P1",
    }

@pytest.fixture
def request_payload():
    return {
        "fullName": "Ivan Petrov",
        "phone": "+79990001122",
        "email": "ivan@example.com",
        "telegram": "@ivan",
        "source": "landing",
    }

@pytest.fixture
def payment_payload():
    return {
        "fullName": "Olga Smirnova",
        "email": "olga@example.com",
        "source": "landing",
        "product": "Course",
        "amount": 5000,
    }

@pytest.fixture
def visitor_payload():
    return {
        "trafficSource": "google",
        "utmTags": "utm_source=google",
        "country": "Russia",
        "device": "desktop",
        "browser": "Chrome",
        "pagesViewed": 3,
        "timeOnSite": "00:02:15",
        "cookieFile": "cookie-abc",
    }
