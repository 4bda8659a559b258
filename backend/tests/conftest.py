import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from marketplace.config import settings
from marketplace.database import get_db, get_engine, init_db
from marketplace.main import app
from marketplace.models.profile import Profile
from marketplace.services.identity_service import identity_service
from marketplace.services.store import Store
from marketplace.utils.validation import utc_now


@pytest.fixture
def tmp_data_dir(tmp_path):
    data_dir = tmp_path / "marketplace"
    data_dir.mkdir()
    return data_dir


@pytest.fixture
def test_db(tmp_data_dir):
    db_path = tmp_data_dir / "marketplace.sqlite"
    engine = get_engine(db_path)
    TestSession = sessionmaker(bind=engine, autoflush=False, autocommit=False)

    init_db(db_path)

    def override_get_db():
        db = TestSession()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestSession
    app.dependency_overrides.clear()
    engine.dispose()


@pytest.fixture
def store(test_db):
    db = test_db()
    yield Store(db)
    db.close()


@pytest.fixture
def fresh_identity_service():
    """Reset the session registry for each test."""
    original = identity_service._active_tokens
    identity_service._active_tokens = {}
    yield identity_service
    identity_service._active_tokens = original


@pytest.fixture
def restore_settings():
    original = settings.model_dump()
    yield settings
    for key, value in original.items():
        setattr(settings, key, value)


@pytest.fixture
def client(tmp_data_dir, test_db, fresh_identity_service, restore_settings):
    settings.data_dir = tmp_data_dir
    yield TestClient(app)


@pytest.fixture
def make_profile(store):
    """Insert a profile directly, bypassing passphrase hashing."""
    def _make(full_name="Test User", rating=None, total_reviews=0):
        return store.insert(
            Profile,
            {
                "email": f"{full_name.lower().replace(' ', '.')}.{utc_now()}@example.com",
                "full_name": full_name,
                "passphrase_hash": "not-a-real-hash",
                "rating": rating,
                "total_reviews": total_reviews,
                "created_at": utc_now(),
            },
        )
    return _make
