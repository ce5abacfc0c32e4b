# Filename: files_manager/routers/files.py
from fastapi import APIRouter, Depends, Query, Response, status
from typing import List, Optional

from ..auth import get_current_user, get_optional_user
from ..file_store import FileMetadataStore, get_file_store, parse_id, parse_parent
from ..models import User
from ..schemas import FileCreate, FileOut

router = APIRouter(prefix="/files", tags=["files"])


@router.post("", response_model=FileOut, status_code=status.HTTP_201_CREATED)
async def upload(
    data: FileCreate,
    current_user: User = Depends(get_current_user),
    store: FileMetadataStore = Depends(get_file_store),
):
    record = await store.create(
        current_user.id,
        name=data.name,
        type=data.type,
        parent_id=data.parent_id,
        is_public=data.is_public,
        data=data.data,
    )
    return FileOut.model_validate(record)


@router.get("", response_model=List[FileOut])
def list_files(
    parent_id: Optional[str] = Query(default=None, alias="parentId"),
    page: Optional[str] = Query(default=None),
    current_user: User = Depends(get_current_user),
    store: FileMetadataStore = Depends(get_file_store),
):
    # unparseable values fall back to the root and the first page
    parent_ref = parse_parent(parent_id)
    page_number = parse_id(page) or 0
    records = store.list(current_user.id, parent_ref, page_number)
    return [FileOut.model_validate(f) for f in records]


@router.get("/{file_id}", response_model=FileOut)
def show(file_id: str, current_user: User = Depends(get_current_user), store: FileMetadataStore = Depends(get_file_store)):
    return FileOut.model_validate(store.get(current_user.id, file_id))


@router.put("/{file_id}/publish", response_model=FileOut)
def publish(file_id: str, current_user: User = Depends(get_current_user), store: FileMetadataStore = Depends(get_file_store)):
    return FileOut.model_validate(store.set_visibility(current_user.id, file_id, True))


@router.put("/{file_id}/unpublish", response_model=FileOut)
def unpublish(file_id: str, current_user: User = Depends(get_current_user), store: FileMetadataStore = Depends(get_file_store)):
    return FileOut.model_validate(store.set_visibility(current_user.id, file_id, False))


@router.get("/{file_id}/data")
async def data(
    file_id: str,
    size: Optional[str] = Query(default=None),
    requestor: Optional[User] = Depends(get_optional_user),
    store: FileMetadataStore = Depends(get_file_store),
):
    content = await store.read_content(requestor.id if requestor else None, file_id, parse_id(size) or 0)
    return Response(content=content.data, media_type=content.media_type)
