"""ORM models for public site content: blog posts, events and news articles."""

from sqlalchemy import Boolean, Column, Date, DateTime, ForeignKey, Integer, String, Text, func

from app.models.base import Base


class Blog(Base):
    """Blog post. blog_author is a free-text display name; created_by is the owning account."""

    __tablename__ = "blogs"

    blog_id = Column(Integer, primary_key=True, autoincrement=True)
    blog_title = Column(String(255), nullable=False)
    blog_slug = Column(String(255), nullable=False, unique=True, index=True)
    blog_heroimg = Column(String(255), nullable=True)
    blog_content = Column(Text, nullable=False)
    blog_author = Column(String(100), nullable=True)
    blog_tag = Column(Text, nullable=True)
    blog_keywords = Column(String(255), nullable=True)
    blog_description = Column(String(255), nullable=True)
    blog_view = Column(Integer, nullable=False, default=0)
    blog_like = Column(Integer, nullable=False, default=0)
    blog_created = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    blog_updated = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )
    blog_ispub = Column(Boolean, nullable=False, default=False)
    created_by = Column(Integer, ForeignKey("users.id"), nullable=True, index=True)


class Event(Base):
    """Event listing. events_imgset holds a JSON document (list of image paths)."""

    __tablename__ = "web_events"

    events_id = Column(Integer, primary_key=True, autoincrement=True)
    events_title = Column(String(255), nullable=False)
    events_slug = Column(String(255), nullable=False, unique=True, index=True)
    events_heroimg = Column(String(255), nullable=True)
    events_imgset = Column(Text, nullable=True)
    events_content = Column(Text, nullable=False)
    events_start = Column(Date, nullable=True)
    events_end = Column(Date, nullable=True)
    events_ispub = Column(Boolean, nullable=False, default=True)
    created_by = Column(Integer, ForeignKey("users.id"), nullable=True, index=True)


class News(Base):
    """News article."""

    __tablename__ = "web_news"

    news_id = Column(Integer, primary_key=True, autoincrement=True)
    news_title = Column(String(255), nullable=False)
    news_slug = Column(String(255), nullable=False, unique=True, index=True)
    news_img = Column(String(255), nullable=True)
    news_content = Column(Text, nullable=True)
    news_view = Column(Integer, nullable=False, default=0)
    news_created = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    news_ispub = Column(Boolean, nullable=False, default=True)
    created_by = Column(Integer, ForeignKey("users.id"), nullable=True, index=True)
