"""Catalog of code generators users configure and queue."""

from figscript.catalog.loader import BUNDLED_CATALOG, load_catalog
from figscript.catalog.models import (
    CatalogError,
    CatalogSection,
    CodeGenerator,
    InputField,
    InputType,
    InvalidInputError,
    UnknownGeneratorError,
)
from figscript.catalog.service import CatalogService

__all__ = [
    "BUNDLED_CATALOG",
    "load_catalog",
    "CatalogError",
    "CatalogSection",
    "CodeGenerator",
    "InputField",
    "InputType",
    "InvalidInputError",
    "UnknownGeneratorError",
    "CatalogService",
]
