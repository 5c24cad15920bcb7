"""Runnable script assembly and JS helper sources."""

from figscript.script.assembler import ScriptAssembler
from figscript.script.helpers import HELPERS, Helper, get_helper

__all__ = [
    "ScriptAssembler",
    "HELPERS",
    "Helper",
    "get_helper",
]
