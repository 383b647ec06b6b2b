from typing import Optional

from pydantic import BaseModel, Field, field_validator


class PostCreate(BaseModel):
    """Body of POST /posts. The author always comes from the bearer token, so any
    author field sent by the client is dropped."""
    title: str = Field(..., min_length=1, max_length=200)
    content: str = Field(..., min_length=1)
    slug: Optional[str] = Field(None, max_length=100)
    category: Optional[str] = None

    @field_validator("title", "content")
    @classmethod
    def not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value


class PostUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    content: Optional[str] = Field(None, min_length=1)
    slug: Optional[str] = Field(None, max_length=100)
    category: Optional[str] = None

    @field_validator("title", "content")
    @classmethod
    def not_blank(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and not value.strip():
            raise ValueError("must not be blank")
        return value
