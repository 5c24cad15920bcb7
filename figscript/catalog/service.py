"""Catalog browsing, filtering and task snapshots."""

import logging
import math
import re
from collections.abc import Iterable, Iterator, Mapping

from figscript.catalog.models import (
    CatalogSection,
    CodeGenerator,
    InputType,
    InvalidInputError,
    UnknownGeneratorError,
)
from figscript.strategies.template_engine.renderer import has_value
from figscript.tasks.models import TaskItem

logger = logging.getLogger(__name__)

_COLOR = re.compile(
    r"^(#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6}|[0-9a-fA-F]{8})|rgba?\([^)]+\)|hsla?\([^)]+\))$"
)


def format_value(value: str | int | float | bool | None) -> str:
    """Render a default value the way a form field would hold it."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


class CatalogService:
    """Read-only access to the generator catalog."""

    def __init__(self, sections: Iterable[CatalogSection]) -> None:
        self._sections = list(sections)
        self._by_id: dict[str, CodeGenerator] = {
            generator.id: generator for generator in self.generators()
        }

    @property
    def sections(self) -> list[CatalogSection]:
        return list(self._sections)

    def __len__(self) -> int:
        return len(self._by_id)

    def generators(self) -> Iterator[CodeGenerator]:
        for section in self._sections:
            yield from section.items

    def get(self, generator_id: str) -> CodeGenerator | None:
        return self._by_id.get(generator_id)

    def require(self, generator_id: str) -> CodeGenerator:
        """Return a generator by id.

        Raises:
            UnknownGeneratorError: If the id is not in the catalog.
        """
        generator = self.get(generator_id)
        if generator is None:
            raise UnknownGeneratorError(generator_id)
        return generator

    def filter(self, query: str = "", types: Iterable[str] = ()) -> list[CatalogSection]:
        """Filter generators by free text and layer types.

        A generator matches when the query is a case-insensitive substring
        of its name or description and, if types are given, it supports at
        least one of them. Sections without matches are dropped.

        Args:
            query: Free-text search; empty matches everything.
            types: Layer types such as ``FRAME`` or ``TEXT``.

        Returns:
            New sections holding only the matching generators.
        """
        needle = query.strip().lower()
        wanted = set(types)

        def matches(generator: CodeGenerator) -> bool:
            if needle and needle not in generator.name.lower() and needle not in generator.description.lower():
                return False
            return not wanted or any(layer in wanted for layer in generator.types)

        filtered = []
        for section in self._sections:
            items = [generator for generator in section.items if matches(generator)]
            if items:
                filtered.append(CatalogSection(section=section.section, items=items))
        return filtered

    def layer_types(self) -> list[str]:
        """Return every layer type used in the catalog, in first-seen order."""
        seen: dict[str, None] = {}
        for generator in self.generators():
            for layer in generator.types:
                seen.setdefault(layer, None)
        return list(seen)

    def default_values(self, generator: CodeGenerator) -> dict[str, str]:
        return {field.key: format_value(field.default_value) for field in generator.inputs}

    def validate_values(self, generator: CodeGenerator, values: Mapping[str, str]) -> list[str]:
        """Check values against a generator's input definitions.

        Returns:
            Human-readable problems; empty when the values are acceptable.
        """
        problems = [f"Unknown input: {key}" for key in values if generator.get_input(key) is None]

        for field in generator.inputs:
            value = values.get(field.key)
            if not has_value(value):
                if field.required:
                    problems.append(f"{field.label} is required")
                continue
            value = value.strip()

            match field.type:
                case InputType.NUMBER:
                    try:
                        number = float(value)
                    except ValueError:
                        problems.append(f"{field.label} must be a number")
                        continue
                    if not math.isfinite(number):
                        problems.append(f"{field.label} must be a finite number")
                    elif field.min is not None and number < field.min:
                        problems.append(f"{field.label} must be at least {format_value(field.min)}")
                    elif field.max is not None and number > field.max:
                        problems.append(f"{field.label} must be at most {format_value(field.max)}")
                case InputType.SELECT:
                    allowed = [option.value for option in field.options]
                    if allowed and value not in allowed:
                        problems.append(f"{field.label} must be one of: {', '.join(allowed)}")
                case InputType.BOOLEAN:
                    if value not in ("true", "false"):
                        problems.append(f"{field.label} must be 'true' or 'false'")
                case InputType.COLOR:
                    if not _COLOR.match(value):
                        problems.append(f"{field.label} must be a hex, rgb(a) or hsl(a) color")
        return problems

    def has_valid_inputs(self, generator: CodeGenerator, values: Mapping[str, str]) -> bool:
        """True if the generator takes no inputs or at least one value is filled in."""
        if not generator.inputs:
            return True
        return any(has_value(values.get(field.key)) for field in generator.inputs)

    def to_task(self, generator: CodeGenerator, values: Mapping[str, str] | None = None) -> TaskItem:
        """Snapshot a generator and its current values into a task item.

        Values override the generator defaults. The returned item owns its
        bindings; later catalog or caller changes do not affect it.

        Raises:
            InvalidInputError: If values name keys the generator does not declare.
        """
        values = dict(values or {})
        unknown = [f"Unknown input: {key}" for key in values if generator.get_input(key) is None]
        if unknown:
            raise InvalidInputError(generator.id, unknown)

        bindings = self.default_values(generator)
        bindings.update(values)
        return TaskItem(
            id=generator.id,
            name=generator.name,
            template=generator.code_template,
            vars=bindings,
            comment=generator.comment_template if generator.add_comment else None,
            helpers=[helper.name for helper in generator.helpers],
        )
