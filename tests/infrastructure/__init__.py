"""
Shared test infrastructure: markup builders and CLI helpers.
"""

from .cli_utils import run_cli, jload
from .markup_builders import el, text, comment

__all__ = ["run_cli", "jload", "el", "text", "comment"]
