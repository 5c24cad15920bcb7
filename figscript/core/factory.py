"""Component Factory for strategy instantiation.

Builds the renderer, catalog, script assembler and task queues from
settings, so the API and the command line share one configuration path.
"""

import logging

from figscript.catalog.loader import load_catalog
from figscript.catalog.service import CatalogService
from figscript.core.config import Settings, get_settings
from figscript.interfaces.template import BaseTemplateRenderer
from figscript.script.assembler import ScriptAssembler
from figscript.strategies.template_engine import DIRECTIVE, MUSTACHE, TemplateRenderer
from figscript.tasks.queue import TaskQueue

logger = logging.getLogger(__name__)


class ComponentFactory:
    """Factory for creating component instances based on configuration.

    Example:
        ```python
        factory = ComponentFactory(get_settings())

        renderer = factory.get_renderer()
        catalog = factory.get_catalog()
        queue = factory.create_task_queue()
        ```
    """

    def __init__(self, settings: Settings | None = None) -> None:
        """Initialize the factory with optional settings.

        Args:
            settings: Application settings. If None, uses global settings.
        """
        self._settings = settings or get_settings()
        self._renderer_cache: BaseTemplateRenderer | None = None
        self._catalog_cache: CatalogService | None = None
        self._assembler_cache: ScriptAssembler | None = None

    @property
    def settings(self) -> Settings:
        return self._settings

    def get_renderer(self, syntax: str | None = None) -> BaseTemplateRenderer:
        """Get a template renderer for the given syntax preset.

        Args:
            syntax: The syntax preset to parse. If None, uses settings and
                returns the cached renderer.

        Returns:
            A BaseTemplateRenderer implementation instance.

        Raises:
            ValueError: If the syntax is unknown.
        """
        if syntax is None and self._renderer_cache is not None:
            return self._renderer_cache

        syntax_name = syntax or self._settings.template_syntax
        policy = self._settings.unresolved_placeholders

        match syntax_name:
            case "mustache":
                renderer = TemplateRenderer(MUSTACHE, unresolved=policy)
            case "directive":
                renderer = TemplateRenderer(DIRECTIVE, unresolved=policy)
            case _:
                raise ValueError(
                    f"Unknown template syntax: {syntax_name}. "
                    f"Valid options: 'mustache', 'directive'"
                )

        if syntax is None:
            logger.info(f"Instantiating renderer: {syntax_name} (unresolved={policy})")
            self._renderer_cache = renderer
        return renderer

    def get_catalog(self) -> CatalogService:
        """Get the generator catalog, loading it on first access.

        Raises:
            FileNotFoundError: If the configured catalog file doesn't exist.
            CatalogError: If the catalog is malformed or inconsistent.
        """
        if self._catalog_cache is None:
            self._catalog_cache = load_catalog(self._settings.catalog_path, self.get_renderer())
        return self._catalog_cache

    def get_script_assembler(self) -> ScriptAssembler:
        """Get a script assembler configured from settings."""
        if self._assembler_cache is None:
            logger.info("Instantiating script assembler")
            self._assembler_cache = ScriptAssembler(
                renderer=self.get_renderer(),
                indent=self._settings.script_indent,
                include_comments=self._settings.include_comments,
                include_helpers=self._settings.include_helpers,
            )
        return self._assembler_cache

    def create_task_queue(self) -> TaskQueue:
        """Create an empty task queue sharing the configured renderer."""
        return TaskQueue(renderer=self.get_renderer())

    def clear_cache(self) -> None:
        """Clear all cached component instances.

        This forces new instances to be created on next access.
        """
        self._renderer_cache = None
        self._catalog_cache = None
        self._assembler_cache = None
        logger.debug("Component factory cache cleared")


# Global factory instance
_factory: ComponentFactory | None = None


def get_factory() -> ComponentFactory:
    """Get or create the global ComponentFactory instance.

    Returns:
        The singleton ComponentFactory instance.
    """
    global _factory
    if _factory is None:
        _factory = ComponentFactory()
    return _factory
