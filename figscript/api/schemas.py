"""API request and response schemas.

Pydantic v2 models for API serialization/deserialization.
"""

from typing import Any, Literal

from pydantic import BaseModel, Field

from figscript.catalog.models import CatalogSection, CodeGenerator
from figscript.tasks.models import TaskItem


# =============================================================================
# Common Schemas
# =============================================================================


class ErrorResponse(BaseModel):
    """Standard error response."""

    detail: str = Field(description="Error message")
    error_code: str | None = Field(default=None, description="Application-specific error code")
    extra: dict[str, Any] | None = Field(default=None, description="Additional error context")


# =============================================================================
# Render Schemas
# =============================================================================


class RenderRequest(BaseModel):
    """Request to render an ad-hoc template."""

    template: str = Field(description="Template source")
    variables: dict[str, str] = Field(default_factory=dict, description="Variable bindings")
    syntax: Literal["mustache", "directive"] | None = Field(
        default=None,
        description="Syntax preset; defaults to the configured one",
    )


class RenderResponse(BaseModel):
    """Rendered template output."""

    code: str = Field(description="Rendered code")
    variables: list[str] = Field(default_factory=list, description="Variable names the template references")


class ScriptResponse(BaseModel):
    """Rendered code wrapped into a runnable script."""

    code: str = Field(description="Rendered code without boilerplate")
    script: str = Field(description="Code wrapped in the selection loop")


# =============================================================================
# Catalog Schemas
# =============================================================================


class CatalogResponse(BaseModel):
    """Catalog sections, possibly filtered."""

    sections: list[CatalogSection]
    total: int = Field(description="Number of generators across the returned sections")


class LayerTypesResponse(BaseModel):
    types: list[str]


class GeneratorResponse(BaseModel):
    """A single generator and its default values."""

    generator: CodeGenerator
    default_values: dict[str, str]


class PreviewRequest(BaseModel):
    """Values to preview a generator with. Missing keys use defaults."""

    values: dict[str, str] = Field(default_factory=dict)


class PreviewResponse(BaseModel):
    """Live preview of a configured generator."""

    code: str = Field(description="Rendered snippet")
    script: str = Field(description="Runnable script for this snippet alone")
    problems: list[str] = Field(default_factory=list, description="Validation problems with the values")
    has_valid_inputs: bool = Field(description="Whether the generator can be queued as configured")


# =============================================================================
# Task Schemas
# =============================================================================


class TaskCreateRequest(BaseModel):
    """Snapshot a catalog generator into the queue."""

    generator_id: str = Field(min_length=1)
    values: dict[str, str] = Field(default_factory=dict, description="Overrides for generator defaults")


class TaskChangeResponse(BaseModel):
    """Result of a queue mutation."""

    changed: bool = Field(description="False when the operation was a no-op")
    count: int = Field(description="Queue length after the operation")


class ReorderRequest(BaseModel):
    from_index: int
    to_index: int


class UpdateVarsRequest(BaseModel):
    vars: dict[str, str] = Field(description="Replacement bindings")


class TaskListResponse(BaseModel):
    items: list[TaskItem]
    count: int


class MergedScriptResponse(BaseModel):
    """Merged queue output."""

    body: str = Field(description="Rendered snippets joined by blank lines")
    script: str = Field(description="Runnable script with helpers and the selection loop")
    count: int = Field(description="Number of queued tasks")
