# Filename: files_manager/file_store.py
"""File and folder metadata with ownership and visibility rules.

Every lookup made on behalf of a user is scoped by that user's id, so a
record owned by somebody else looks exactly like a missing one.
"""
import base64
import binascii
import logging
import mimetypes
from typing import List, NamedTuple, Optional, Union

from fastapi import Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from .config import settings
from .db import get_session
from .errors import BadRequest, NotFound
from .models import FILE_TYPES, FOLDER, FileRecord
from .storage import ContentStore, get_content_store, make_storage_key, variant_path

logger = logging.getLogger(__name__)

ParentRef = Optional[int]  # None is the root folder

# wire forms of the root parent
ROOT_IDS = (None, "", 0, "0")

# ids are stored in a signed 64-bit INTEGER column
MAX_ID = 2 ** 63 - 1


def parse_id(value) -> Optional[int]:
    """Record ids arrive as path/query strings; anything non-numeric is None."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        number = value
    else:
        try:
            number = int(str(value).strip())
        except (TypeError, ValueError):
            return None
    if not -MAX_ID - 1 <= number <= MAX_ID:
        return None
    return number


def parse_parent(value) -> ParentRef:
    """Map the wire form of a parent id (0, "0", empty) to the root."""
    if value in ROOT_IDS:
        return None
    return parse_id(value)


class FileContent(NamedTuple):
    data: bytes
    media_type: str


def decode_content(data: str) -> bytes:
    try:
        return base64.b64decode(data, validate=True)
    except (binascii.Error, ValueError):
        raise BadRequest("Invalid data")


class FileMetadataStore:
    def __init__(self, session: Session, content: ContentStore, page_size: int = None):
        self.session = session
        self.content = content
        self.page_size = page_size or settings.page_size

    def _owned(self, user_id: int, file_id) -> Optional[FileRecord]:
        record_id = parse_id(file_id)
        if record_id is None:
            return None
        statement = select(FileRecord).where(FileRecord.id == record_id, FileRecord.user_id == user_id)
        return self.session.exec(statement).first()

    async def create(
        self,
        user_id: int,
        name: Optional[str],
        type: Optional[str],
        parent_id: Union[int, str, None] = 0,
        is_public: bool = False,
        data: Optional[str] = None,
    ) -> FileRecord:
        if not name:
            raise BadRequest("Missing name")
        if not type or type not in FILE_TYPES:
            raise BadRequest("Missing type")
        if type != FOLDER and not data:
            raise BadRequest("Missing data")

        parent = None
        if parent_id not in ROOT_IDS:
            parent_ref = parse_id(parent_id)
            parent = self.session.get(FileRecord, parent_ref) if parent_ref is not None else None
            if parent is None:
                raise BadRequest("Parent not found")
            if not parent.is_folder:
                raise BadRequest("Parent is not a folder")

        local_path = None
        if type != FOLDER:
            content = decode_content(data)
            local_path = await self.content.save(make_storage_key(), content)

        record = FileRecord(
            user_id=user_id,
            name=name,
            type=type,
            is_public=bool(is_public),
            parent_id=parent.id if parent else None,
            local_path=local_path,
        )
        try:
            self.session.add(record)
            self.session.commit()
        except SQLAlchemyError:
            logger.exception("Could not insert file record %r, removing stored content", name)
            self.session.rollback()
            if local_path:
                self.content.delete(local_path)
            raise
        self.session.refresh(record)
        logger.info("Created %s %d (%r) for user %d", type, record.id, name, user_id)
        return record

    def get(self, user_id: int, file_id) -> FileRecord:
        record = self._owned(user_id, file_id)
        if record is None:
            raise NotFound()
        return record

    def list(self, user_id: int, parent_id: ParentRef = None, page: int = 0) -> List[FileRecord]:
        offset = max(page, 0) * self.page_size
        if offset > MAX_ID:
            return []
        statement = select(FileRecord).where(FileRecord.user_id == user_id)
        if parent_id is None:
            statement = statement.where(FileRecord.parent_id == None)  # noqa: E711
        else:
            statement = statement.where(FileRecord.parent_id == parent_id)
        statement = statement.order_by(FileRecord.id).offset(offset).limit(self.page_size)
        return list(self.session.exec(statement).all())

    def set_visibility(self, user_id: int, file_id, is_public: bool) -> FileRecord:
        record = self._owned(user_id, file_id)
        if record is None:
            raise NotFound()
        record.is_public = is_public
        self.session.add(record)
        self.session.commit()
        self.session.refresh(record)
        return record

    async def read_content(self, requestor_id: Optional[int], file_id, size: int = 0) -> FileContent:
        record_id = parse_id(file_id)
        record = self.session.get(FileRecord, record_id) if record_id is not None else None
        if record is None:
            raise NotFound()
        owner = requestor_id is not None and requestor_id == record.user_id
        if not record.is_public and not owner:
            raise NotFound()
        if record.is_folder:
            raise BadRequest("A folder doesn't have content")
        try:
            data = await self.content.load(variant_path(record.local_path, size))
        except OSError:
            raise NotFound()
        media_type = mimetypes.guess_type(record.name)[0] or "application/octet-stream"
        return FileContent(data, media_type)


def get_file_store(
    session: Session = Depends(get_session),
    content: ContentStore = Depends(get_content_store),
) -> FileMetadataStore:
    return FileMetadataStore(session, content)
