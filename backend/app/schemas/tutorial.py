"""
Tutorials API — Pydantic Request/Response Schemas
===================================================

What:  Pydantic models defining the API contract.
Why:   Input validation, serialization, and OpenAPI doc generation.
How:   FastAPI validates request bodies against the *Create/*Update models
       and serializes responses through the response models. JSON keys are
       camelCase (totalItems, createdAt) via an alias generator; Python code
       keeps snake_case names.

Request bodies ignore unknown keys, so a client-supplied `id`, `createdAt`
or any other extra field never reaches the database.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model serializing field names as camelCase."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class TutorialCreate(BaseModel):
    """Body of POST /tutorials."""

    model_config = ConfigDict(extra="ignore")

    title: str = Field(min_length=1, max_length=255, description="Tutorial title (required)")
    description: Optional[str] = Field(default=None, description="Free-text description")
    published: bool = Field(default=False, description="Whether the tutorial is published")


class TutorialUpdate(BaseModel):
    """
    Body of PUT /tutorials/{id}.

    Every field is optional at the schema level; the service insists on a
    non-empty title and applies only the keys the client actually sent.
    """

    model_config = ConfigDict(extra="ignore")

    title: Optional[str] = Field(default=None, max_length=255)
    description: Optional[str] = None
    published: Optional[bool] = None


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class TutorialResponse(CamelModel):
    """A stored tutorial record, as returned by GET /tutorials/{id} and the list endpoints."""

    id: int
    title: str
    description: Optional[str] = None
    published: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class TutorialPageResponse(CamelModel):
    """
    Paged envelope returned by GET /tutorials and GET /tutorials/published.

    Example:
        {"totalItems": 8, "tutorials": [...], "totalPages": 3, "currentPage": 3}

    currentPage carries the row offset of the page, not its index.
    """

    total_items: int = Field(description="Number of rows matching the filter")
    tutorials: List[TutorialResponse] = Field(description="Rows of the requested page")
    total_pages: int = Field(description="ceil(totalItems / limit)")
    current_page: int = Field(description="Offset of the first row of this page")


class MessageResponse(BaseModel):
    """Plain acknowledgement returned by update and delete."""

    message: str


class CreatedResponse(BaseModel):
    """Returned by POST /tutorials with HTTP 201."""

    message: str = "New tutorial created."
    location: str = Field(description="Path of the new resource")


class ErrorResponse(BaseModel):
    """
    Error body shared by every non-2xx response.

    Fields:
        error: Machine-readable error code (e.g., "validation_error", "not_found")
        message: Human-readable description
        details: Optional extra context (e.g., schema validation errors)
        request_id: Correlation ID for tracing this error in server logs
    """

    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Returned by GET /health for monitoring and load balancer checks."""

    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
