"""ORM model for per-role product column edit overrides."""

from sqlalchemy import Boolean, Column, Integer, String, UniqueConstraint

from app.models.base import Base


class ColumnPermission(Base):
    """
    Explicit editability override for one product column and role.

    No row for a column means the column is editable.
    """

    __tablename__ = "role_column_permissions"
    __table_args__ = (
        UniqueConstraint("role_id", "column_name", name="uq_role_column_permissions_role_column"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    role_id = Column(Integer, nullable=False, index=True)
    column_name = Column(String(255), nullable=False)
    is_editable = Column(Boolean, nullable=False, default=True)
