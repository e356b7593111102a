"""Schemas for registration token issuance and listing (Superadmin only)."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class GeneratedTokenResponse(BaseModel):
    """Response for POST /tokens/generate."""

    model_config = ConfigDict(populate_by_name=True)

    token: str
    token_id: int = Field(..., serialization_alias="tokenId")
    expires_at: datetime = Field(..., serialization_alias="expiresAt")
    created_by: int = Field(..., serialization_alias="createdBy")


class TokenListItem(BaseModel):
    """One registration token with creator and redeemer names."""

    model_config = ConfigDict(populate_by_name=True)

    id: int
    token: str
    created_by: int = Field(..., serialization_alias="createdBy")
    creator_name: str | None = Field(default=None, serialization_alias="creatorName")
    expires_at: datetime = Field(..., serialization_alias="expiresAt")
    is_used: bool = Field(..., serialization_alias="isUsed")
    used_by: int | None = Field(default=None, serialization_alias="usedBy")
    user_name: str | None = Field(default=None, serialization_alias="userName")
    used_at: datetime | None = Field(default=None, serialization_alias="usedAt")
    created_at: datetime | None = Field(default=None, serialization_alias="createdAt")


class TokenListResponse(BaseModel):
    tokens: list[TokenListItem]
