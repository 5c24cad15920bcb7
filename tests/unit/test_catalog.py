"""Unit tests for catalog loading and the catalog service."""

import json
import logging

import pytest

from figscript.catalog import (
    BUNDLED_CATALOG,
    CatalogError,
    InvalidInputError,
    UnknownGeneratorError,
    load_catalog,
)
from figscript.catalog.service import format_value
from figscript.strategies.template_engine import DIRECTIVE, TemplateRenderer


def write_catalog(path, items, syntax="mustache"):
    path.write_text(
        json.dumps({"syntax": syntax, "sections": [{"section": "Test", "items": items}]}),
        encoding="utf-8",
    )
    return path


def generator(generator_id="g", template="node.x = {{x}};", **extra):
    return {
        "id": generator_id,
        "name": generator_id.upper(),
        "code_template": template,
        "inputs": [{"key": "x", "label": "X", "type": "number"}],
        **extra,
    }


@pytest.fixture(scope="module")
def catalog():
    """Load the bundled catalog once."""
    return load_catalog(renderer=TemplateRenderer())


# =============================================================================
# Loader Tests
# =============================================================================


class TestLoadCatalog:
    """Test suite for load_catalog."""

    def test_bundled_catalog(self, catalog):
        """Test that the bundled catalog loads with all its sections."""
        assert BUNDLED_CATALOG.exists()
        assert [section.section for section in catalog.sections] == [
            "Geometry & Transform",
            "Auto Layout",
            "Fill & Stroke",
            "Text",
        ]
        assert len(catalog) == 26

    def test_missing_file(self, tmp_path):
        """Test that a missing file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            load_catalog(tmp_path / "missing.json")

    def test_malformed_file(self, tmp_path):
        """Test that invalid JSON is reported as CatalogError."""
        path = tmp_path / "catalog.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(CatalogError, match="Invalid catalog"):
            load_catalog(path)

    def test_missing_required_field(self, tmp_path):
        """Test that a generator without a template is rejected."""
        path = write_catalog(tmp_path / "catalog.json", [{"id": "g", "name": "G"}])
        with pytest.raises(CatalogError):
            load_catalog(path)

    def test_duplicate_ids(self, tmp_path):
        """Test that generator ids must be unique."""
        path = write_catalog(tmp_path / "catalog.json", [generator("g"), generator("g")])
        with pytest.raises(CatalogError, match="Duplicate generator id"):
            load_catalog(path)

    def test_unknown_helper(self, tmp_path):
        """Test that helpers must be known JS functions."""
        item = generator(helpers=[{"name": "doMagic", "description": "Magic"}])
        path = write_catalog(tmp_path / "catalog.json", [item])
        with pytest.raises(CatalogError, match="doMagic"):
            load_catalog(path)

    def test_syntax_mismatch(self):
        """Test that the renderer must parse the catalog's syntax."""
        with pytest.raises(CatalogError, match="directive"):
            load_catalog(renderer=TemplateRenderer(DIRECTIVE))

    def test_directive_catalog(self, tmp_path):
        """Test loading a catalog written in the directive syntax."""
        path = write_catalog(
            tmp_path / "catalog.json", [generator(template="node.x = VAR(x);")], syntax="directive"
        )
        loaded = load_catalog(path, TemplateRenderer(DIRECTIVE))
        assert loaded.require("g").code_template == "node.x = VAR(x);"

    def test_undeclared_variable_warning(self, tmp_path, caplog):
        """Test that template variables without an input are logged."""
        path = write_catalog(tmp_path / "catalog.json", [generator(template="{{x}} {{y}}")])
        with caplog.at_level(logging.WARNING, logger="figscript.catalog.loader"):
            load_catalog(path, TemplateRenderer())
        assert "undeclared variables: y" in caplog.text


# =============================================================================
# Catalog Service Tests
# =============================================================================


class TestCatalogService:
    """Test suite for CatalogService."""

    def test_get_and_require(self, catalog):
        """Test generator lookup by id."""
        assert catalog.get("position").name == "Position (X / Y)"
        assert catalog.get("nope") is None
        with pytest.raises(UnknownGeneratorError) as exc_info:
            catalog.require("nope")
        assert exc_info.value.generator_id == "nope"

    def test_filter_by_query(self, catalog):
        """Test case-insensitive search on name and description."""
        sections = catalog.filter("CORNER")
        assert [section.section for section in sections] == ["Geometry & Transform"]
        assert [g.id for g in sections[0].items] == ["corner-radius", "individual-corner-radius"]

    def test_filter_matches_description(self, catalog):
        """Test that the description is searched too."""
        ids = [g.id for section in catalog.filter("gap between") for g in section.items]
        assert ids == ["item-spacing"]

    def test_filter_by_types(self, catalog):
        """Test that sections without matching generators are dropped."""
        sections = catalog.filter(types=["TEXT"])
        assert [section.section for section in sections] == ["Geometry & Transform", "Fill & Stroke", "Text"]
        assert all("TEXT" in g.types for section in sections for g in section.items)

    def test_filter_combines_query_and_types(self, catalog):
        """Test that query and types must both match."""
        assert catalog.filter("radius", ["TEXT"]) == []

    def test_filter_without_criteria(self, catalog):
        """Test that an empty filter returns everything."""
        assert sum(len(section.items) for section in catalog.filter()) == len(catalog)

    def test_layer_types(self, catalog):
        """Test the ordered list of supported layer types."""
        assert catalog.layer_types() == [
            "FRAME",
            "RECTANGLE",
            "ELLIPSE",
            "TEXT",
            "INSTANCE",
            "GROUP",
            "VECTOR",
            "COMPONENT",
        ]

    def test_default_values(self, catalog):
        """Test that defaults are rendered as form strings."""
        assert catalog.default_values(catalog.require("position")) == {"x": "100", "y": "200"}
        assert catalog.default_values(catalog.require("opacity")) == {"opacity": "0.5"}
        assert catalog.default_values(catalog.require("remove-fills")) == {}

    @pytest.mark.parametrize(
        ("value", "expected"),
        [(None, ""), (True, "true"), (False, "false"), (2.0, "2"), (0.5, "0.5"), (7, "7"), ("a", "a")],
    )
    def test_format_value(self, value, expected):
        """Test conversion of default values to strings."""
        assert format_value(value) == expected

    # =========================================================================
    # Validation Tests
    # =========================================================================

    def test_validate_defaults(self, catalog):
        """Test that every bundled generator accepts its own defaults."""
        for item in catalog.generators():
            assert catalog.validate_values(item, catalog.default_values(item)) == [], item.id

    def test_validate_problems(self, catalog):
        """Test the problems reported for bad values."""
        fill = catalog.require("fill-solid")
        problems = catalog.validate_values(fill, {"color": "", "opacity": "2", "z": "1"})
        assert problems == [
            "Unknown input: z",
            "Fill Color is required",
            "Opacity must be at most 1",
        ]

    @pytest.mark.parametrize(
        ("generator_id", "values", "problem"),
        [
            ("position", {"x": "abc"}, "X Position must be a number"),
            ("position", {"x": "nan"}, "X Position must be a finite number"),
            ("size", {"width": "0"}, "Width must be at least 1"),
            ("layout-direction", {"direction": "DIAGONAL"}, "Layout Direction must be one of: HORIZONTAL, VERTICAL"),
            ("fill-solid", {"color": "blue"}, "Fill Color must be a hex, rgb(a) or hsl(a) color"),
        ],
    )
    def test_validate_single_problem(self, catalog, generator_id, values, problem):
        """Test individual validation rules."""
        assert catalog.validate_values(catalog.require(generator_id), values) == [problem]

    @pytest.mark.parametrize("color", ["#fff", "#1A2B3C", "#1A2B3C80", "rgb(0, 0, 0)", "rgba(0,0,0,0.5)", "hsl(120, 50%, 50%)"])
    def test_validate_colors(self, catalog, color):
        """Test accepted color notations."""
        assert catalog.validate_values(catalog.require("fill-solid"), {"color": color}) == []

    def test_has_valid_inputs(self, catalog):
        """Test the queueing precondition."""
        position = catalog.require("position")
        assert catalog.has_valid_inputs(position, {"x": "", "y": "5"})
        assert not catalog.has_valid_inputs(position, {"x": " ", "y": ""})
        assert catalog.has_valid_inputs(catalog.require("remove-fills"), {})

    # =========================================================================
    # Task Snapshot Tests
    # =========================================================================

    def test_to_task(self, catalog):
        """Test that a task snapshots defaults overlaid with values."""
        task = catalog.to_task(catalog.require("position"), {"y": ""})
        assert task.id == "position"
        assert task.name == "Position (X / Y)"
        assert task.vars == {"x": "100", "y": ""}
        assert task.comment == "// Set node position"
        assert task.helpers == []
        assert TemplateRenderer().render(task.template, task.vars) == "node.x = 100;"

    def test_to_task_helpers(self, catalog):
        """Test that helper dependencies are carried over by name."""
        task = catalog.to_task(catalog.require("complex-text-styling"))
        assert task.helpers == ["loadFonts", "convertColor"]

    def test_to_task_rejects_unknown_keys(self, catalog):
        """Test that tasks only carry declared keys."""
        with pytest.raises(InvalidInputError) as exc_info:
            catalog.to_task(catalog.require("position"), {"z": "1"})
        assert exc_info.value.problems == ["Unknown input: z"]

    def test_to_task_is_a_snapshot(self, catalog):
        """Test that changing the caller's values later has no effect."""
        values = {"x": "1"}
        task = catalog.to_task(catalog.require("position"), values)
        values["x"] = "2"
        assert task.vars["x"] == "1"
