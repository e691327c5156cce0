"""CLI command handlers."""

from .run import run_script
from .request import handle_request
from .template import list_placeholders, render_script

__all__ = ['run_script', 'handle_request', 'list_placeholders', 'render_script']
