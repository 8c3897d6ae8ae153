import pytest
from unittest.mock import MagicMock
from datetime import datetime, timezone
import uuid


TEST_JWT_SECRET = "test-jwt-secret-key-with-enough-length-for-hs256"


@pytest.fixture
def test_db():
    from sqlalchemy import create_engine, event
    from sqlalchemy.orm import sessionmaker
    from sqlalchemy.pool import StaticPool
    from src.core.database import Base
    from src.models import user, news  # noqa: F401

    # Use in-memory SQLite for tests
    SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"
    engine = create_engine(
        SQLALCHEMY_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    @event.listens_for(engine, "connect")
    def _enable_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    Base.metadata.create_all(bind=engine)

    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


def make_user(db, name="Test User", email=None, google_id=None):
    from src.models.user import User
    user = User(
        id=str(uuid.uuid4()),
        google_id=google_id or f"google-{uuid.uuid4().hex[:12]}",
        email=email or f"{uuid.uuid4().hex[:8]}@example.com",
        name=name,
        picture="https://example.com/avatar.png",
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture
def mock_current_user(test_db):
    return make_user(test_db, name="Test User", email="test@example.com", google_id="test_google_id")


@pytest.fixture
def other_user(test_db):
    return make_user(test_db, name="Other User", email="other@example.com", google_id="other_google_id")


@pytest.fixture
def token_service():
    from src.services.token_service import TokenService
    return TokenService(secret=TEST_JWT_SECRET, algorithm="HS256", expiration_hours=24)


@pytest.fixture
def mock_openai_client():
    client = MagicMock()
    client.chat.completions.create = MagicMock(
        return_value=make_completion("FALSE. There is no evidence supporting this claim.")
    )
    return client


def make_completion(text):
    message = MagicMock()
    message.content = text
    choice = MagicMock()
    choice.message = message
    response = MagicMock()
    response.choices = [choice]
    return response


@pytest.fixture
def verification_service(mock_openai_client):
    from src.services.verification_service import VerificationService
    return VerificationService(api_key="test-openai-key", client=mock_openai_client)


@pytest.fixture
async def api_client(test_db, token_service, verification_service):
    """Client with the database and external services stubbed but the real auth gate."""
    from httpx import AsyncClient, ASGITransport
    from src.main import app
    from src.core.database import get_db
    from src.api.dependencies import get_token_service, get_verification_service

    def override_get_db():
        try:
            yield test_db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_token_service] = lambda: token_service
    app.dependency_overrides[get_verification_service] = lambda: verification_service

    # Use ASGITransport for direct app interaction
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c

    app.dependency_overrides.clear()


@pytest.fixture
async def async_client(api_client, mock_current_user):
    """Client already authenticated as mock_current_user."""
    from src.main import app
    from src.api.dependencies import get_current_user_id

    app.dependency_overrides[get_current_user_id] = lambda: mock_current_user.id
    yield api_client


@pytest.fixture
def fixed_now():
    return datetime(2026, 10, 18, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def user_factory(test_db):
    def _create(**kwargs):
        return make_user(test_db, **kwargs)
    return _create


@pytest.fixture
def completion_factory():
    return make_completion
