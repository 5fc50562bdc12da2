"""Report renderers.

A renderer takes a RenderInput and returns the finished document as a
string ready for stdout or a file.
"""

import logging
from typing import Callable, Optional

from psi_report.constants import DEFAULT_FORMAT, FORMAT_CLI, FORMAT_JSON
from psi_report.formats.cli_format import render as render_cli
from psi_report.formats.json_format import render as render_json
from psi_report.models import RenderInput

logger = logging.getLogger(__name__)

Renderer = Callable[[RenderInput], str]

RENDERERS: dict[str, Renderer] = {
    FORMAT_CLI: render_cli,
    FORMAT_JSON: render_json,
}


def resolve_format(name: Optional[str]) -> str:
    """Return the effective format name, falling back to the default."""
    if name in RENDERERS:
        return name
    if name:
        logger.warning(f"Unknown format '{name}', using '{DEFAULT_FORMAT}'")
    return DEFAULT_FORMAT


def get_renderer(name: Optional[str]) -> Renderer:
    """Look up a renderer by format name (unknown names fall back to cli)."""
    return RENDERERS[resolve_format(name)]


__all__ = ["RENDERERS", "Renderer", "get_renderer", "resolve_format", "render_cli", "render_json"]
