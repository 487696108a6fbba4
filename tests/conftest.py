import os

# Configure before the application modules read settings
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("CACHE_ENABLED", "false")
os.environ.setdefault("LOG_JSON", "false")

from datetime import datetime, timedelta

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from marketplace.database import get_db
from marketplace.main import app
from marketplace.models import Base, Message

BASE_TIME = datetime(2024, 5, 1, 12, 0, 0)


@pytest.fixture
def engine():
    """Fresh in-memory database for each test"""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def client(session_factory):
    """API client bound to the test database"""

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


class FakeRedis:
    """Dict-backed stand-in for the few Redis commands the cache uses"""

    def __init__(self):
        self.store = {}

    def get(self, key):
        return self.store.get(key)

    def setex(self, key, ttl, value):
        self.store[key] = value
        return True

    def delete(self, *keys):
        return sum(1 for key in keys if self.store.pop(key, None) is not None)

    def ping(self):
        return True


@pytest.fixture
def fake_redis(monkeypatch):
    """Enable the global cache service against a FakeRedis"""
    from marketplace.services import cache_service

    fake = FakeRedis()
    monkeypatch.setattr(cache_service, "_client", fake)
    monkeypatch.setattr(cache_service, "enabled", True)
    return fake


def make_message(sender_id, receiver_id, listing_id, content, minute, read=False, message_id=None):
    """Unsaved message with a deterministic timestamp"""
    return Message(
        id=message_id or f"{sender_id}-{receiver_id}-{listing_id}-{minute}",
        sender_id=sender_id,
        receiver_id=receiver_id,
        listing_id=listing_id,
        content=content,
        read=read,
        created_at=BASE_TIME + timedelta(minutes=minute),
    )


@pytest.fixture
def add_message(db):
    """Insert a message with a fixed timestamp"""

    def _add(sender_id, receiver_id, listing_id, content, minute, read=False):
        message = make_message(sender_id, receiver_id, listing_id, content, minute, read=read)
        db.add(message)
        db.commit()
        return message

    return _add


@pytest.fixture
def message_factory():
    return make_message
