from typing import Optional, Union

from pydantic import BaseModel, Field


class NoteCreate(BaseModel):
    content: str = Field(min_length=1)
    important: Optional[bool] = False
    userId: Optional[str] = None


class NoteUpdate(BaseModel):
    content: str = Field(min_length=1)
    important: Optional[bool] = False


class OwnerSummary(BaseModel):
    id: str
    username: str
    name: Optional[str] = None


class NoteOut(BaseModel):
    id: str
    content: str
    important: bool
    user: Union[OwnerSummary, str, None] = None
