"""Pydantic schemas for API requests and responses."""

from pydantic import BaseModel, Field
from typing import Optional


class ShortenRequest(BaseModel):
    """Request to shorten a URL."""

    url: str = Field(..., description="The URL to shorten", min_length=1)
    custom_key: Optional[str] = Field(
        None,
        alias="customKey",
        description="Optional key to store the URL under (overwrites an existing key)",
        min_length=1,
    )

    model_config = {
        "populate_by_name": True,
        "json_schema_extra": {
            "examples": [
                {
                    "url": "https://example.com/very/long/path/to/resource",
                },
                {
                    "url": "https://github.com/user/repo",
                    "customKey": "myrepo"
                }
            ]
        }
    }


class ShortenResponse(BaseModel):
    """Response after shortening a URL."""

    short_key: str = Field(..., alias="shortKey", description="The key the URL is stored under")

    model_config = {
        "populate_by_name": True,
        "json_schema_extra": {
            "examples": [
                {
                    "shortKey": "9f86d081"
                }
            ]
        }
    }


class ErrorResponse(BaseModel):
    """Error response."""

    detail: str = Field(..., description="Error message")
