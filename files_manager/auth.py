# Filename: files_manager/auth.py
import base64
import binascii
import logging
from typing import Optional, Tuple
from uuid import uuid4

from fastapi import Depends, Request
from passlib.context import CryptContext
from sqlmodel import Session, select

from .config import settings
from .db import get_session
from .errors import Unauthorized
from .models import User
from .sessions import DatabaseSessionStore, SessionStore, memory_store

logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=settings.password_schemes, deprecated="auto")

TOKEN_HEADER = "x-token"
TOKEN_KEY_PREFIX = "auth_"


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def get_user_by_email(session: Session, email: str) -> Optional[User]:
    statement = select(User).where(User.email == email)
    return session.exec(statement).first()


def decode_basic_credentials(authorization: Optional[str]) -> Tuple[str, str]:
    """Split a ``Basic <base64(email:password)>`` header into its two parts."""
    if not authorization or not authorization.startswith("Basic "):
        raise Unauthorized()
    encoded = authorization.split(" ", 1)[1].strip()
    try:
        decoded = base64.b64decode(encoded).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError):
        raise Unauthorized()
    email, _, password = decoded.partition(":")
    if not email or not password:
        raise Unauthorized()
    return email, password


def session_key(token: str) -> str:
    return f"{TOKEN_KEY_PREFIX}{token}"


class AuthGate:
    """Mints, resolves and revokes login tokens.

    Users come from the credential store (the ``user`` table reached through
    ``session``); live tokens live in ``sessions`` under ``auth_<token>``.
    """

    def __init__(self, session: Session, sessions: SessionStore, ttl_seconds: int = None):
        self.session = session
        self.sessions = sessions
        self.ttl_seconds = ttl_seconds or settings.session_ttl_seconds

    def mint_token(self, authorization: Optional[str]) -> str:
        email, password = decode_basic_credentials(authorization)
        statement = select(User).where(
            User.email == email,
            User.hashed_password == get_password_hash(password),
        )
        user = self.session.exec(statement).first()
        if user is None:
            logger.warning("Rejected credentials for %s", email)
            raise Unauthorized()

        token = str(uuid4())
        self.sessions.set(session_key(token), str(user.id), self.ttl_seconds)
        logger.info("Token %s issued for user %s", token[:8], user.id)
        return token

    def resolve_token(self, token: Optional[str]) -> User:
        """Return the user a live token belongs to. Never extends the expiry."""
        if not token:
            raise Unauthorized()
        user_id = self.sessions.get(session_key(token))
        if not user_id:
            raise Unauthorized()
        try:
            user = self.session.get(User, int(user_id))
        except ValueError:
            user = None
        if user is None:
            raise Unauthorized()
        return user

    def revoke_token(self, token: Optional[str]) -> None:
        user = self.resolve_token(token)
        self.sessions.delete(session_key(token))
        logger.info("Token %s revoked for user %s", token[:8], user.id)


def get_session_store(session: Session = Depends(get_session)) -> SessionStore:
    if settings.session_backend == "memory":
        return memory_store
    return DatabaseSessionStore(session)


def get_auth_gate(
    session: Session = Depends(get_session),
    sessions: SessionStore = Depends(get_session_store),
) -> AuthGate:
    return AuthGate(session, sessions)


def get_token_from_headers(request: Request) -> Optional[str]:
    """
    The X-Token header wins; "Authorization: Bearer <token>" is accepted too.
    """
    token = request.headers.get(TOKEN_HEADER)
    if token:
        return token
    auth_header = request.headers.get("authorization")
    if auth_header and auth_header.lower().startswith("bearer "):
        return auth_header.split(" ", 1)[1].strip()
    return None


def get_current_user(request: Request, gate: AuthGate = Depends(get_auth_gate)) -> User:
    return gate.resolve_token(get_token_from_headers(request))


def get_optional_user(request: Request, gate: AuthGate = Depends(get_auth_gate)) -> Optional[User]:
    """Like get_current_user, but anonymous callers resolve to None."""
    try:
        return gate.resolve_token(get_token_from_headers(request))
    except Unauthorized:
        return None
