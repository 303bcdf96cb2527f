from typing import Optional, Union

from pydantic import BaseModel


class UserCreate(BaseModel):
    username: str
    name: Optional[str] = None
    # length is checked by the route so the error message stays specific
    password: Optional[str] = None


class NoteSummary(BaseModel):
    id: str
    content: str
    important: bool


class UserOut(BaseModel):
    id: str
    username: str
    name: Optional[str] = None
    notes: list[Union[NoteSummary, str]] = []
