"""Template rendering interface.

Defines the abstract base class for snippet template renderers.
"""

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any


class BaseTemplateRenderer(ABC):
    """Abstract base class for template rendering strategies.

    Turns a code template plus variable bindings into the final snippet.
    Implementations must be deterministic and side-effect free.
    """

    @abstractmethod
    def parse(self, template: str) -> list[Any]:
        """Parse a template into a sequence of nodes.

        Args:
            template: The template source.

        Returns:
            List of template nodes in document order.
        """

    @abstractmethod
    def render(self, template: str, variables: Mapping[str, str]) -> str:
        """Render a template with the given variable bindings.

        Args:
            template: The template source.
            variables: Mapping of variable name to string value.

        Returns:
            The rendered code. Never raises for missing variables.
        """

    @abstractmethod
    def variables(self, template: str) -> set[str]:
        """Return the names of all variables a template references."""

    @property
    @abstractmethod
    def syntax_name(self) -> str:
        """Return the name of the syntax preset this renderer parses."""
