from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


def _min_trimmed(value: str, length: int, label: str) -> str:
    if len(value.strip()) < length:
        raise ValueError(f"{label} must be at least {length} characters")
    return value


class PatchModel(BaseModel):
    """
    Base for partial-update payloads.

    A field is either absent (not in the request body, left untouched) or
    present with a value.  Sending ``null`` for a field is rejected rather
    than being confused with "absent".
    """

    @model_validator(mode="after")
    def _reject_explicit_null(self):
        nulls = sorted(name for name in self.model_fields_set if getattr(self, name) is None)
        if nulls:
            raise ValueError(f"fields cannot be null: {', '.join(nulls)}")
        return self

    def changes(self) -> dict[str, Any]:
        """Mapping of present field name → new value."""
        return self.model_dump(exclude_unset=True)


# --- Listing ---

class ListingCreate(BaseModel):
    name: str
    description: str
    price: float = Field(ge=0)
    tags: list[str] = []
    images: list[str] = []

    @field_validator("name")
    @classmethod
    def _name_length(cls, v: str) -> str:
        return _min_trimmed(v, 2, "name")

    @field_validator("description")
    @classmethod
    def _description_length(cls, v: str) -> str:
        return _min_trimmed(v, 5, "description")


class ListingUpdate(PatchModel):
    name: str | None = None
    description: str | None = None
    price: float | None = Field(None, ge=0)
    tags: list[str] | None = None
    images: list[str] | None = None

    @field_validator("name")
    @classmethod
    def _name_length(cls, v: str | None) -> str | None:
        return v if v is None else _min_trimmed(v, 2, "name")

    @field_validator("description")
    @classmethod
    def _description_length(cls, v: str | None) -> str | None:
        return v if v is None else _min_trimmed(v, 5, "description")


class ListingSummary(BaseModel):
    """List-view projection."""

    id: int
    name: str
    price: float
    created_at: datetime = Field(alias="createdAt")
    model_config = ConfigDict(populate_by_name=True)


class ListingDetail(ListingSummary):
    description: str
    tags: list[str] = []


# --- Article ---

class ArticleCreate(BaseModel):
    title: str
    content: str

    @field_validator("title")
    @classmethod
    def _title_length(cls, v: str) -> str:
        return _min_trimmed(v, 2, "title")

    @field_validator("content")
    @classmethod
    def _content_length(cls, v: str) -> str:
        return _min_trimmed(v, 5, "content")


class ArticleUpdate(PatchModel):
    title: str | None = None
    content: str | None = None

    @field_validator("title")
    @classmethod
    def _title_length(cls, v: str | None) -> str | None:
        return v if v is None else _min_trimmed(v, 2, "title")

    @field_validator("content")
    @classmethod
    def _content_length(cls, v: str | None) -> str | None:
        return v if v is None else _min_trimmed(v, 5, "content")


class ArticleSummary(BaseModel):
    id: int
    title: str
    content: str
    created_at: datetime = Field(alias="createdAt")
    model_config = ConfigDict(populate_by_name=True)


# --- Comment ---

class CommentCreate(BaseModel):
    content: str

    @field_validator("content")
    @classmethod
    def _not_blank(cls, v: str) -> str:
        return _min_trimmed(v, 1, "content")


class CommentUpdate(CommentCreate):
    pass


class CommentItem(BaseModel):
    id: int
    content: str
    created_at: datetime = Field(alias="createdAt")
    model_config = ConfigDict(populate_by_name=True)


# --- Pages ---

class OffsetPagination(BaseModel):
    offset: int
    limit: int
    total: int


class ListingPage(BaseModel):
    items: list[ListingSummary]
    pagination: OffsetPagination


class ArticlePage(BaseModel):
    items: list[ArticleSummary]
    pagination: OffsetPagination


class CommentPage(BaseModel):
    items: list[CommentItem]
    next_cursor: int | None = Field(alias="nextCursor")
    model_config = ConfigDict(populate_by_name=True)
