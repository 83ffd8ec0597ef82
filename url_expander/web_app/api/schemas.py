"""Pydantic schemas for API requests and responses."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class ExpandRequest(BaseModel):
    """Request to expand a URL."""

    url: str = Field(..., description="The URL to wrap in an expanded URL")
    length: Optional[int] = Field(
        None,
        description="Token length (5-1000); the configured default is used if omitted",
    )

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "url": "https://example.com/article",
                    "length": 100
                },
                {
                    "url": "https://github.com/user/repo",
                    "length": 10
                }
            ]
        }
    }


class ExpandResponse(BaseModel):
    """Response after expanding a URL."""

    expanded_url: str = Field(
        ...,
        serialization_alias="expandedUrl",
        description="The complete expanded URL",
    )
    token: str = Field(..., description="The random token at the end of the expanded URL")
    original_url: str = Field(..., description="The original URL")
    description: str = Field(..., description="Human-readable description")
    created_at: datetime = Field(..., description="When the link was first created")
    updated_at: datetime = Field(..., description="When the expanded URL was last replaced")


class LinkResponse(BaseModel):
    """Response with link information."""

    id: Optional[int] = None
    original_url: str
    expanded_url: str
    description: str
    created_at: datetime
    updated_at: datetime


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(..., description="Overall status")
    database: str = Field(..., description="Database status")
    cache: str = Field(..., description="Cache status")
    timestamp: datetime = Field(..., description="Check timestamp")


class ErrorResponse(BaseModel):
    """Error response."""

    detail: str = Field(..., description="Error message")


class StatisticsResponse(BaseModel):
    """Statistics response."""

    total_links: int
    database: str
    cache_enabled: bool
