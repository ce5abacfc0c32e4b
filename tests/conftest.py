"""Shared fixtures: in-memory database, temporary content directory, fake clock."""

import base64
import os
from datetime import datetime, timedelta, timezone

# must be set before files_manager.config is imported
os.environ.setdefault('FILES_MANAGER_DATABASE_URL', 'sqlite://')

import pytest
from fastapi import Depends
from fastapi.testclient import TestClient
from sqlmodel import Session, SQLModel

from files_manager.auth import get_password_hash, get_session_store
from files_manager.db import get_session, make_engine
from files_manager.main import app
from files_manager.models import User
from files_manager.sessions import DatabaseSessionStore
from files_manager.storage import ContentStore, get_content_store


class FakeClock:
    """Callable clock that only moves when told to."""

    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture
def engine():
    """Fresh in-memory database with all tables."""
    engine = make_engine('sqlite://')
    SQLModel.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def clock():
    return FakeClock(datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc))


@pytest.fixture
def content_store(tmp_path):
    return ContentStore(tmp_path / 'files')


@pytest.fixture
def user(session):
    """Registered user with password 'toto1234!'."""
    user = User(email='bob@dylan.com', hashed_password=get_password_hash('toto1234!'))
    session.add(user)
    session.commit()
    session.refresh(user)
    return user


@pytest.fixture
def other_user(session):
    """Second user for isolation tests."""
    user = User(email='other@example.com', hashed_password=get_password_hash('secret'))
    session.add(user)
    session.commit()
    session.refresh(user)
    return user


@pytest.fixture
def client(engine, clock, content_store):
    """TestClient wired to the test database, clock and content directory."""

    def override_session():
        with Session(engine) as session:
            yield session

    def override_session_store(session: Session = Depends(get_session)):
        return DatabaseSessionStore(session, clock=clock)

    app.dependency_overrides[get_session] = override_session
    app.dependency_overrides[get_session_store] = override_session_store
    app.dependency_overrides[get_content_store] = lambda: content_store
    yield TestClient(app)
    app.dependency_overrides.clear()


def basic_auth(email: str, password: str) -> dict:
    encoded = base64.b64encode(f'{email}:{password}'.encode()).decode()
    return {'Authorization': f'Basic {encoded}'}


def register(client, email='bob@dylan.com', password='toto1234!'):
    return client.post('/users', json={'email': email, 'password': password})


def login(client, email='bob@dylan.com', password='toto1234!') -> dict:
    """Register (if needed) and connect; returns the token header."""
    register(client, email, password)
    response = client.get('/connect', headers=basic_auth(email, password))
    assert response.status_code == 200, response.text
    return {'X-Token': response.json()['token']}
