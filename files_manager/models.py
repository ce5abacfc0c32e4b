# Filename: files_manager/models.py
from sqlmodel import SQLModel, Field
from typing import Optional
from datetime import datetime, timezone


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


FOLDER = "folder"
FILE = "file"
IMAGE = "image"
FILE_TYPES = (FOLDER, FILE, IMAGE)


class User(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    email: str = Field(index=True, unique=True)
    hashed_password: str
    created_at: datetime = Field(default_factory=utc_now)


class FileRecord(SQLModel, table=True):
    __tablename__ = "files"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="user.id", index=True)
    name: str
    type: str
    is_public: bool = Field(default=False)
    # None is the root; otherwise the id of a folder record
    parent_id: Optional[int] = Field(default=None, foreign_key="files.id", index=True)
    local_path: Optional[str] = None  # set iff type != folder
    created_at: datetime = Field(default_factory=utc_now)

    @property
    def is_folder(self) -> bool:
        return self.type == FOLDER


class AuthSession(SQLModel, table=True):
    """Expiring key/value row backing the database session store."""

    __tablename__ = "auth_sessions"

    key: str = Field(primary_key=True)
    value: str
    expires_at: datetime = Field(index=True)
