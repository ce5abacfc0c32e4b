"""Tests for the service status endpoints and app-level error handling."""

from datetime import datetime, timezone

from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError
from sqlmodel import Session

from conftest import login
from files_manager import db
from files_manager.file_store import get_file_store
from files_manager.main import app
from files_manager.models import AuthSession


def test_root(client):
    response = client.get('/')

    assert response.status_code == 200
    assert response.json()['status'] == 'ok'


def test_status(client):
    response = client.get('/status')

    assert response.status_code == 200
    assert response.json() == {'db': True, 'sessions': True}


def test_stats(client):
    assert client.get('/stats').json() == {'users': 0, 'files': 0}

    headers = login(client)
    login(client, email='alice@example.com', password='wonderland')
    client.post('/files', json={'name': 'docs', 'type': 'folder'}, headers=headers)

    assert client.get('/stats').json() == {'users': 2, 'files': 1}


def test_storage_failure_is_a_500_without_details(client):
    headers = login(client)

    class BrokenStore:
        def get(self, user_id, file_id):
            raise OperationalError('SELECT secret', {}, Exception('db is down'))

    app.dependency_overrides[get_file_store] = lambda: BrokenStore()

    response = client.get('/files/1', headers=headers)

    assert response.status_code == 500
    assert response.json() == {'error': 'Internal Server Error'}


def test_unwritable_content_root_is_a_json_500(client, content_store):
    headers = login(client)
    # a regular file where the content directory should be
    content_store.root.parent.mkdir(parents=True, exist_ok=True)
    content_store.root.write_bytes(b'')
    # unhandled errors are re-raised by the server middleware after the response is sent
    lenient = TestClient(app, raise_server_exceptions=False)

    response = lenient.post('/files', json={'name': 'a.txt', 'type': 'file', 'data': 'aGVsbG8='}, headers=headers)

    assert response.status_code == 500
    assert response.headers['content-type'] == 'application/json'
    assert response.json() == {'error': 'Internal Server Error'}


def test_startup_purges_expired_sessions():
    db.init_db()
    with Session(db.engine) as session:
        session.add(AuthSession(key='auth_old', value='1', expires_at=datetime(2000, 1, 1, tzinfo=timezone.utc)))
        session.add(AuthSession(key='auth_live', value='2', expires_at=datetime(2999, 1, 1, tzinfo=timezone.utc)))
        session.commit()

    with TestClient(app):
        pass

    with Session(db.engine) as session:
        assert session.get(AuthSession, 'auth_old') is None
        assert session.get(AuthSession, 'auth_live') is not None
        session.delete(session.get(AuthSession, 'auth_live'))
        session.commit()
