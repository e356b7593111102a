"""Add blogs, web_events and web_news content tables.

Revision ID: 20251019100000
Revises: 20251019000000
Create Date: 2025-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "20251019100000"
down_revision: Union[str, None] = "20251019000000"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "blogs",
        sa.Column("blog_id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("blog_title", sa.String(length=255), nullable=False),
        sa.Column("blog_slug", sa.String(length=255), nullable=False),
        sa.Column("blog_heroimg", sa.String(length=255), nullable=True),
        sa.Column("blog_content", sa.Text(), nullable=False),
        sa.Column("blog_author", sa.String(length=100), nullable=True),
        sa.Column("blog_tag", sa.Text(), nullable=True),
        sa.Column("blog_keywords", sa.String(length=255), nullable=True),
        sa.Column("blog_description", sa.String(length=255), nullable=True),
        sa.Column("blog_view", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("blog_like", sa.Integer(), nullable=False, server_default="0"),
        sa.Column(
            "blog_created",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column(
            "blog_updated",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column("blog_ispub", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("created_by", sa.Integer(), nullable=True),
        sa.ForeignKeyConstraint(["created_by"], ["users.id"]),
        sa.PrimaryKeyConstraint("blog_id"),
    )
    op.create_index(op.f("ix_blogs_blog_slug"), "blogs", ["blog_slug"], unique=True)
    op.create_index(op.f("ix_blogs_created_by"), "blogs", ["created_by"], unique=False)

    op.create_table(
        "web_events",
        sa.Column("events_id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("events_title", sa.String(length=255), nullable=False),
        sa.Column("events_slug", sa.String(length=255), nullable=False),
        sa.Column("events_heroimg", sa.String(length=255), nullable=True),
        sa.Column("events_imgset", sa.Text(), nullable=True),
        sa.Column("events_content", sa.Text(), nullable=False),
        sa.Column("events_start", sa.Date(), nullable=True),
        sa.Column("events_end", sa.Date(), nullable=True),
        sa.Column("events_ispub", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("created_by", sa.Integer(), nullable=True),
        sa.ForeignKeyConstraint(["created_by"], ["users.id"]),
        sa.PrimaryKeyConstraint("events_id"),
    )
    op.create_index(
        op.f("ix_web_events_events_slug"), "web_events", ["events_slug"], unique=True
    )
    op.create_index(
        op.f("ix_web_events_created_by"), "web_events", ["created_by"], unique=False
    )

    op.create_table(
        "web_news",
        sa.Column("news_id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("news_title", sa.String(length=255), nullable=False),
        sa.Column("news_slug", sa.String(length=255), nullable=False),
        sa.Column("news_img", sa.String(length=255), nullable=True),
        sa.Column("news_content", sa.Text(), nullable=True),
        sa.Column("news_view", sa.Integer(), nullable=False, server_default="0"),
        sa.Column(
            "news_created",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column("news_ispub", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("created_by", sa.Integer(), nullable=True),
        sa.ForeignKeyConstraint(["created_by"], ["users.id"]),
        sa.PrimaryKeyConstraint("news_id"),
    )
    op.create_index(op.f("ix_web_news_news_slug"), "web_news", ["news_slug"], unique=True)
    op.create_index(op.f("ix_web_news_created_by"), "web_news", ["created_by"], unique=False)


def downgrade() -> None:
    op.drop_index(op.f("ix_web_news_created_by"), table_name="web_news")
    op.drop_index(op.f("ix_web_news_news_slug"), table_name="web_news")
    op.drop_table("web_news")
    op.drop_index(op.f("ix_web_events_created_by"), table_name="web_events")
    op.drop_index(op.f("ix_web_events_events_slug"), table_name="web_events")
    op.drop_table("web_events")
    op.drop_index(op.f("ix_blogs_created_by"), table_name="blogs")
    op.drop_index(op.f("ix_blogs_blog_slug"), table_name="blogs")
    op.drop_table("blogs")
