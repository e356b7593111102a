"""Request/response schemas for blogs, events and news.

Create and Update models are the allow-list of writable fields per content
type; anything else in a request body is ignored.
"""

import json
from datetime import date, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class _Writable(BaseModel):
    model_config = ConfigDict(extra="ignore")


class BlogCreate(_Writable):
    blog_title: str | None = Field(default=None, max_length=255)
    blog_slug: str | None = Field(default=None, max_length=255)
    blog_author: str | None = Field(default=None, max_length=100)
    blog_content: str | None = None
    blog_heroimg: str | None = Field(default=None, max_length=255)
    blog_tag: str | None = None
    blog_keywords: str | None = Field(default=None, max_length=255)
    blog_description: str | None = Field(default=None, max_length=255)
    blog_ispub: bool = False


class BlogUpdate(_Writable):
    blog_title: str | None = Field(default=None, max_length=255)
    blog_slug: str | None = Field(default=None, max_length=255)
    blog_author: str | None = Field(default=None, max_length=100)
    blog_content: str | None = None
    blog_heroimg: str | None = Field(default=None, max_length=255)
    blog_tag: str | None = None
    blog_keywords: str | None = Field(default=None, max_length=255)
    blog_description: str | None = Field(default=None, max_length=255)
    blog_ispub: bool | None = None


class BlogOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    blog_id: int
    blog_title: str
    blog_slug: str
    blog_heroimg: str | None = None
    blog_content: str
    blog_author: str | None = None
    blog_tag: str | None = None
    blog_keywords: str | None = None
    blog_description: str | None = None
    blog_view: int = 0
    blog_like: int = 0
    blog_created: datetime | None = None
    blog_updated: datetime | None = None
    blog_ispub: bool
    created_by: int | None = None


def _normalize_imgset(v: Any) -> str | None:
    """Store image sets as a JSON string; accept a list/dict or an already-encoded string."""
    if v is None or v == "":
        return None
    if isinstance(v, str):
        try:
            json.loads(v)
        except json.JSONDecodeError as e:
            raise ValueError("Invalid JSON for image set") from e
        return v
    if isinstance(v, (list, dict)):
        return json.dumps(v)
    raise ValueError("Invalid JSON for image set")


class EventCreate(_Writable):
    events_title: str | None = Field(default=None, max_length=255)
    events_slug: str | None = Field(default=None, max_length=255)
    events_heroimg: str | None = Field(default=None, max_length=255)
    events_imgset: str | None = None
    events_content: str | None = None
    events_start: date | None = None
    events_end: date | None = None
    events_ispub: bool = True

    @field_validator("events_imgset", mode="before")
    @classmethod
    def validate_imgset(cls, v: Any) -> str | None:
        return _normalize_imgset(v)


class EventUpdate(_Writable):
    events_title: str | None = Field(default=None, max_length=255)
    events_slug: str | None = Field(default=None, max_length=255)
    events_heroimg: str | None = Field(default=None, max_length=255)
    events_imgset: str | None = None
    events_content: str | None = None
    events_start: date | None = None
    events_end: date | None = None
    events_ispub: bool | None = None

    @field_validator("events_imgset", mode="before")
    @classmethod
    def validate_imgset(cls, v: Any) -> str | None:
        return _normalize_imgset(v)


class EventOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    events_id: int
    events_title: str
    events_slug: str
    events_heroimg: str | None = None
    events_imgset: str | None = None
    events_content: str
    events_start: date | None = None
    events_end: date | None = None
    events_ispub: bool
    created_by: int | None = None


class NewsCreate(_Writable):
    news_title: str | None = Field(default=None, max_length=255)
    news_slug: str | None = Field(default=None, max_length=255)
    news_img: str | None = Field(default=None, max_length=255)
    news_content: str | None = None
    news_ispub: bool = True


class NewsUpdate(_Writable):
    news_title: str | None = Field(default=None, max_length=255)
    news_slug: str | None = Field(default=None, max_length=255)
    news_img: str | None = Field(default=None, max_length=255)
    news_content: str | None = None
    news_ispub: bool | None = None


class NewsOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    news_id: int
    news_title: str
    news_slug: str
    news_img: str | None = None
    news_content: str | None = None
    news_view: int = 0
    news_created: datetime | None = None
    news_ispub: bool
    created_by: int | None = None


class ContentCreatedResponse(BaseModel):
    message: str
    id: int
    slug: str
