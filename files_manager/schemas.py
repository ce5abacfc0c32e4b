# Filename: files_manager/schemas.py
from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel
from typing import Optional, Union


class Token(BaseModel):
    token: str


class UserCreate(BaseModel):
    # presence is checked by the users router so that missing fields get
    # their own error messages
    email: Optional[str] = None
    password: Optional[str] = None


class UserOut(BaseModel):
    id: int
    email: str

    model_config = ConfigDict(from_attributes=True)


class FileCreate(BaseModel):
    name: Optional[str] = None
    type: Optional[str] = None
    parent_id: Union[int, str, None] = 0
    is_public: bool = False
    data: Optional[str] = None  # base64 content, required unless type is folder

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class FileOut(BaseModel):
    id: int
    user_id: int
    name: str
    type: str
    is_public: bool
    parent_id: int = 0

    model_config = ConfigDict(from_attributes=True, alias_generator=to_camel, populate_by_name=True)

    @field_validator("parent_id", mode="before")
    @classmethod
    def root_as_zero(cls, v):
        return 0 if v is None else v


class StatusOut(BaseModel):
    db: bool
    sessions: bool


class StatsOut(BaseModel):
    users: int
    files: int
