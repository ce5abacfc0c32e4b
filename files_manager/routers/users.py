# Filename: files_manager/routers/users.py
import logging

from fastapi import APIRouter, status, Depends
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session
from files_manager.db import get_session
from files_manager.errors import BadRequest, Conflict
from files_manager.models import User
from files_manager.auth import get_current_user, get_password_hash, get_user_by_email
from files_manager.schemas import UserCreate, UserOut

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["users"])


@router.post("", response_model=UserOut, status_code=status.HTTP_201_CREATED)
def register_user(data: UserCreate, session: Session = Depends(get_session)):
    if not data.email:
        raise BadRequest("Missing email")
    if not data.password:
        raise BadRequest("Missing password")

    if get_user_by_email(session, data.email):
        raise Conflict("Already exist")

    user = User(email=data.email, hashed_password=get_password_hash(data.password))
    session.add(user)
    try:
        session.commit()
    except IntegrityError:
        # lost a race against a concurrent registration
        session.rollback()
        raise Conflict("Already exist")
    session.refresh(user)
    logger.info("Registered user %d", user.id)

    return UserOut(id=user.id, email=user.email)


@router.get("/me", response_model=UserOut)
def me(current_user: User = Depends(get_current_user)):
    return UserOut(id=current_user.id, email=current_user.email)
