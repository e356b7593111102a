"""Schemas for the product catalog endpoints. Product rows are open-ended dicts."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ProductListMetadata(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    total: int
    page: int
    limit: int
    total_pages: int = Field(..., serialization_alias="totalPages")


class ProductListResponse(BaseModel):
    products: list[dict[str, Any]]
    metadata: ProductListMetadata


class ProductResponse(BaseModel):
    product: dict[str, Any]


class ProductUpdateResponse(BaseModel):
    """Result of PATCH /products/{id}: which submitted fields were written and which were not."""

    message: str = "Product updated successfully"
    updated_fields: list[str] = Field(default_factory=list)
    ignored_fields: list[str] = Field(
        default_factory=list,
        description="Submitted fields dropped because they are unknown, protected or locked for the caller's role.",
    )
