from typing import Optional

from pydantic import BaseModel


class User(BaseModel):
    user_id: str
    username: Optional[str] = None
    email: Optional[str] = None


class Author(BaseModel):
    id: str
    username: Optional[str] = None
    email: Optional[str] = None
