"""Figma snippet generator: conditional code templates and task queues."""

__version__ = "0.1.0"
