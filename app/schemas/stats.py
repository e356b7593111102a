"""Pydantic schema for dashboard record counts."""

from pydantic import BaseModel


class StatsResponse(BaseModel):
    products: int
    blogs: int
    events: int
    news: int
