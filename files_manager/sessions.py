# Filename: files_manager/sessions.py
"""Expiring key/value stores used to hold login tokens.

A value stored with a TTL is returned by ``get`` until the TTL elapses and
never afterwards; the store evicts expired keys itself when it touches them,
callers never poll.
"""
import logging
from datetime import datetime, timedelta, timezone
from typing import Callable, Dict, Optional, Tuple

from sqlalchemy import delete
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from .models import AuthSession, utc_now

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def as_utc(value: datetime) -> datetime:
    """SQLite hands timestamps back without tzinfo; they are stored as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class SessionStore:
    """Interface of an expiring key/value store."""

    clock: Clock

    def get(self, key: str) -> Optional[str]:
        raise NotImplementedError

    def set(self, key: str, value: str, ttl_seconds: int) -> None:
        raise NotImplementedError

    def delete(self, key: str) -> None:
        raise NotImplementedError

    def is_alive(self) -> bool:
        return True


class DatabaseSessionStore(SessionStore):
    """Session store kept in the ``auth_sessions`` table."""

    def __init__(self, session: Session, clock: Clock = utc_now):
        self.session = session
        self.clock = clock

    def get(self, key: str) -> Optional[str]:
        row = self.session.get(AuthSession, key)
        if row is None:
            return None
        if as_utc(row.expires_at) <= self.clock():
            self.session.delete(row)
            self.session.commit()
            return None
        return row.value

    def set(self, key: str, value: str, ttl_seconds: int) -> None:
        expires_at = self.clock() + timedelta(seconds=ttl_seconds)
        row = self.session.get(AuthSession, key)
        if row is None:
            row = AuthSession(key=key, value=value, expires_at=expires_at)
        else:
            row.value = value
            row.expires_at = expires_at
        self.session.add(row)
        self.session.commit()

    def delete(self, key: str) -> None:
        self.session.exec(delete(AuthSession).where(AuthSession.key == key))
        self.session.commit()

    def purge_expired(self) -> int:
        """Drop every expired row; returns how many were removed."""
        statement = (
            delete(AuthSession)
            .where(AuthSession.expires_at <= self.clock())
            .execution_options(synchronize_session=False)
        )
        result = self.session.exec(statement)
        self.session.commit()
        if result.rowcount:
            logger.info("Purged %d expired sessions", result.rowcount)
        return result.rowcount

    def is_alive(self) -> bool:
        try:
            self.session.connection()
        except SQLAlchemyError:
            logger.exception("Session store unreachable")
            return False
        return True


class MemorySessionStore(SessionStore):
    """Process-local session store, for single-process deployments and tests."""

    def __init__(self, clock: Clock = utc_now):
        self.clock = clock
        self._data: Dict[str, Tuple[str, datetime]] = {}

    def get(self, key: str) -> Optional[str]:
        entry = self._data.get(key)
        if entry is None:
            return None
        value, expires_at = entry
        if expires_at <= self.clock():
            self._data.pop(key, None)
            return None
        return value

    def set(self, key: str, value: str, ttl_seconds: int) -> None:
        self._data[key] = (value, self.clock() + timedelta(seconds=ttl_seconds))

    def delete(self, key: str) -> None:
        self._data.pop(key, None)


# shared by every request when the memory backend is configured
memory_store = MemorySessionStore()
