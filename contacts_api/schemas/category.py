"""Category-related Pydantic schemas."""

from typing import List
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator


class CategoryRequest(BaseModel):
    """Body of category create and update requests."""

    name: str = Field(
        ...,
        description="Category name, unique among categories",
        examples=["Family", "Work"]
    )

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Name is required")
        return v


class CategoryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str


class CategoryListResponse(BaseModel):
    """One page of categories."""

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "categories": [
                        {"id": "550e8400-e29b-41d4-a716-446655440000", "name": "Family"}
                    ],
                    "total_items": 1,
                    "total_pages": 1
                }
            ]
        }
    )

    categories: List[CategoryResponse]
    total_items: int = Field(..., ge=0)
    total_pages: int = Field(..., ge=0)
