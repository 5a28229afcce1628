import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from artmarket.auth.passwords import hash_password
from artmarket.auth.tokens import TokenService
from artmarket.config import Settings
from artmarket.database.base import Base
from artmarket.models import Identity, Listing, Role

# Test secret - only used in tests
TEST_SECRET = "test-secret-key-for-testing-only"
TEST_PASSWORD = "secret1"


def _set_sqlite_pragma(dbapi_connection, connection_record):
    """Enable foreign key enforcement in SQLite."""
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def auth_headers(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def engine():
    """Create an in-memory SQLite engine for testing.

    Uses StaticPool to ensure all connections share the same in-memory database.
    Without this, each connection would get a fresh database without tables.
    """
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False,
    )
    # Enable foreign key enforcement in SQLite
    event.listen(engine, "connect", _set_sqlite_pragma)
    Base.metadata.create_all(engine)
    yield engine
    Base.metadata.drop_all(engine)


@pytest.fixture
def session(engine) -> Session:
    """Create a test database session."""
    TestSessionLocal = sessionmaker(
        bind=engine,
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
    )
    session = TestSessionLocal()
    yield session
    session.rollback()
    session.close()


@pytest.fixture
def settings() -> Settings:
    """Settings isolated from any local .env file."""
    return Settings(
        _env_file=None,
        database_url="sqlite://",
        jwt_secret=TEST_SECRET,
        cloudinary_cloud_name="demo-cloud",
        cloudinary_api_key="cloud-key",
        cloudinary_api_secret="cloud-secret",
        geoapify_api_key="geo-key",
    )


@pytest.fixture
def token_service() -> TokenService:
    return TokenService(secret=TEST_SECRET)


@pytest.fixture
def app(settings: Settings, engine) -> FastAPI:
    """Application wired to the in-memory test database."""
    from artmarket.main import create_app

    app = create_app(settings)
    app.state.session_factory = sessionmaker(
        bind=engine,
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
    )
    return app


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    with TestClient(app) as client:
        yield client


def _register(client: TestClient, kind: str, email: str, **extra) -> dict:
    body = {
        "email": email,
        "password": TEST_PASSWORD,
        "fullname": {"firstname": "Alice", "lastname": "Painter"},
        "city": "Lisbon",
        **extra,
    }
    response = client.post(f"/{kind}/register", json=body)
    assert response.status_code == 201, response.text
    data = response.json()
    return {"id": data[kind]["id"], "token": data["token"], "email": email}


@pytest.fixture
def artist_a(client: TestClient) -> dict:
    """Registered artist A: id, token and email."""
    return _register(client, "artist", "a@x.com")


@pytest.fixture
def artist_b(client: TestClient) -> dict:
    return _register(client, "artist", "b@x.com")


@pytest.fixture
def user_account(client: TestClient) -> dict:
    return _register(client, "user", "reader@x.com")


@pytest.fixture
def listing_body() -> dict:
    return {
        "title": "Sun",
        "typeOfArt": "Digital Art",
        "image": "http://img/1.png",
        "description": "desc",
    }


@pytest.fixture
def sample_artist(session: Session) -> Identity:
    """An artist stored directly through the session."""
    artist = Identity(
        email="artist@example.com",
        password_hash=hash_password(TEST_PASSWORD),
        role=Role.ARTIST,
        firstname="Frida",
        city="Mexico City",
    )
    session.add(artist)
    session.commit()
    session.refresh(artist)
    return artist


@pytest.fixture
def sample_user(session: Session) -> Identity:
    user = Identity(
        email="user@example.com",
        password_hash=hash_password(TEST_PASSWORD),
        role=Role.USER,
        firstname="Theo",
    )
    session.add(user)
    session.commit()
    session.refresh(user)
    return user


@pytest.fixture
def sample_listing(session: Session, sample_artist: Identity) -> Listing:
    listing = Listing(
        owner_id=sample_artist.id,
        title="Blue Hour",
        description="Oil on linen",
        image_url="https://img.example.com/blue.png",
        location="Coyoacan",
        country="Mexico",
        type_of_art="Painting",
        price="900",
    )
    session.add(listing)
    session.commit()
    session.refresh(listing)
    return listing
