# Filename: files_manager/routers/root.py
from fastapi import APIRouter, Depends
from sqlalchemy import func
from sqlmodel import Session, select

from ..auth import get_session_store
from ..config import settings
from ..db import get_session, is_alive
from ..models import FileRecord, User
from ..schemas import StatsOut, StatusOut
from ..sessions import SessionStore

router = APIRouter(tags=["root"])


@router.get("/")
def root():
    """
    Root endpoint with app version and health.
    """
    return {
        "app_name": settings.app_name,
        "app_version": settings.app_version,
        "status": "ok",
    }


@router.get("/status", response_model=StatusOut)
def get_status(session: Session = Depends(get_session), sessions: SessionStore = Depends(get_session_store)):
    return StatusOut(db=is_alive(session), sessions=sessions.is_alive())


@router.get("/stats", response_model=StatsOut)
def get_stats(session: Session = Depends(get_session)):
    users = session.exec(select(func.count()).select_from(User)).one()
    files = session.exec(select(func.count()).select_from(FileRecord)).one()
    return StatsOut(users=users, files=files)
