import pytest
import os
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

# Set env before importing app components
os.environ["APP_ENV"] = "testing"
os.environ["DATABASE_URL"] = "sqlite:///:memory:"

from app.database import Base, get_db
from app.main import app
from app.schemas.auth import Identity
from app.services.auth import create_access_token
from app.services.events import ChangeFeed
from app.services.records import RecordService
from fastapi.testclient import TestClient

# SQLite in-memory database configuration
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

@pytest.fixture(scope="session", autouse=True)
def setup_database():
    """Create tables once for the whole test session."""
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)

@pytest.fixture(scope="function")
def db_session():
    """Get a clean database session for each test function with rollback safety."""
    connection = engine.connect()
    transaction = connection.begin()
    # Use sessionmaker with the active connection
    session = TestingSessionLocal(bind=connection)

    yield session

    session.close()
    transaction.rollback()
    connection.close()

@pytest.fixture(scope="function")
def identity_for():
    """Build a signed-in identity holding the given identity-provider groups."""
    def _identity_for(*groups, subject="user-1"):
        return Identity(
            subject=subject,
            name=f"Test {subject}",
            email=f"{subject}@acme.io",
            groups=list(groups),
            authenticated=True,
        )
    return _identity_for

@pytest.fixture(scope="function")
def feed():
    """A private change feed so subscriptions never leak between tests."""
    return ChangeFeed()

@pytest.fixture(scope="function")
def service_for(db_session, identity_for, feed):
    """Record service acting as a caller with the given groups."""
    def _service_for(*groups, subject="user-1"):
        return RecordService(db_session, identity_for(*groups, subject=subject), feed=feed)
    return _service_for

@pytest.fixture(scope="function")
def anonymous_service(db_session, feed):
    return RecordService(db_session, Identity.anonymous(), feed=feed)

@pytest.fixture(scope="function")
def get_token():
    """Helper fixture to mint session tokens in the identity provider's layout."""
    def _get_token(*groups, subject="user-1"):
        return create_access_token(subject, groups=groups, email=f"{subject}@acme.io")
    return _get_token

@pytest.fixture(scope="function")
def auth_headers(get_token):
    def _auth_headers(*groups, subject="user-1"):
        return {"Authorization": f"Bearer {get_token(*groups, subject=subject)}"}
    return _auth_headers

@pytest.fixture(scope="function")
def employee_payload():
    """Minimal valid Employee fields, camelCase as the dashboard sends them."""
    def _employee_payload(**overrides):
        payload = {
            "fullName": "Jane Citizen",
            "email": "jane.citizen@acme.io",
            "department": "Engineering",
            "position": "Software Engineer",
            "hireDate": "2024-01-15",
        }
        payload.update(overrides)
        return payload
    return _employee_payload

@pytest.fixture(scope="function")
def client(db_session):
    """Get a TestClient that uses the test database session via dependency override."""
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
