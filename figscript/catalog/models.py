"""Catalog domain models.

Pydantic models describing the code generators users configure and
queue. Generators are read-only reference data.
"""

from enum import Enum

from pydantic import BaseModel, Field


class InputType(str, Enum):
    """Form control kinds a generator input can use."""

    TEXT = "text"
    NUMBER = "number"
    SELECT = "select"
    COLOR = "color"
    BOOLEAN = "boolean"


class SelectOption(BaseModel):
    value: str
    label: str


class InputField(BaseModel):
    """One user-editable variable of a generator."""

    key: str = Field(pattern=r"^\w+$", description="Template variable name")
    label: str
    type: InputType = InputType.TEXT
    placeholder: str | None = None
    default_value: str | int | float | bool | None = None
    required: bool = False
    options: list[SelectOption] = Field(default_factory=list)
    min: float | None = None
    max: float | None = None
    step: float | None = None


class HelperDependency(BaseModel):
    """A JS helper function a generator's code calls."""

    name: str
    description: str


class CodeGenerator(BaseModel):
    """A catalog entry producing one kind of snippet."""

    id: str = Field(min_length=1)
    name: str
    description: str = ""
    types: list[str] = Field(default_factory=list, description="Supported layer types")
    inputs: list[InputField] = Field(default_factory=list)
    display_code: str = Field(default="", description="Static example shown before configuration")
    code_template: str
    helpers: list[HelperDependency] = Field(default_factory=list)
    add_comment: bool = False
    comment_template: str | None = None

    def get_input(self, key: str) -> InputField | None:
        for field in self.inputs:
            if field.key == key:
                return field
        return None


class CatalogSection(BaseModel):
    section: str
    items: list[CodeGenerator]


class CatalogDocument(BaseModel):
    """Top-level shape of a catalog file."""

    syntax: str = Field(default="mustache", description="Template syntax the code templates use")
    sections: list[CatalogSection]


class CatalogError(Exception):
    """Exception raised when the catalog cannot be loaded or is inconsistent."""


class UnknownGeneratorError(CatalogError):
    """Exception raised when a generator id is not in the catalog."""

    def __init__(self, generator_id: str) -> None:
        super().__init__(f"Unknown generator: {generator_id}")
        self.generator_id = generator_id


class InvalidInputError(CatalogError):
    """Exception raised when values do not fit a generator's inputs."""

    def __init__(self, generator_id: str, problems: list[str]) -> None:
        super().__init__(f"Invalid values for {generator_id}: {'; '.join(problems)}")
        self.generator_id = generator_id
        self.problems = problems
