"""Task queue domain models."""

from pydantic import BaseModel, Field


class TaskItem(BaseModel):
    """One queued, user-configured instantiation of a template."""

    id: str = Field(min_length=1, description="Identifier, unique within a queue")
    name: str = Field(description="Human-readable label")
    template: str = Field(description="Code template with placeholders and conditional blocks")
    vars: dict[str, str] = Field(default_factory=dict, description="Variable bindings owned by this task")
    comment: str | None = Field(default=None, description="Comment line emitted above the snippet")
    helpers: list[str] = Field(default_factory=list, description="JS helper functions the snippet calls")

    def snapshot(self) -> "TaskItem":
        """Return a deep copy that shares no mutable state with this item."""
        return self.model_copy(deep=True)
