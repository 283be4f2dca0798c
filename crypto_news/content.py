"""
Marked-up content blocks for resolved articles.

Each section owns a Jinja2 template under templates/content/. Templates get
the context built by SectionProfile.content_context (or mock_context) and
always autoescape feed text.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape
from markupsafe import Markup, escape

TEMPLATE_DIR = Path(__file__).parent / "templates"


def paragraphs(text: str, limit: int | None = None) -> Markup:
    """Escape text and turn newlines into paragraph breaks.

    When limit is given the raw text is cut to that many characters first.
    """
    if limit is not None:
        text = text[:limit]
    return Markup(str(escape(text)).replace("\n", "</p><p>"))


def build_environment() -> Environment:
    env = Environment(
        loader=FileSystemLoader(str(TEMPLATE_DIR)),
        autoescape=select_autoescape(["html"]),
        undefined=StrictUndefined,
        trim_blocks=True,
        lstrip_blocks=True,
    )
    env.filters["paragraphs"] = paragraphs
    return env


class ContentRenderer:
    """Render section content templates to HTML strings."""

    def __init__(self, env: Environment | None = None):
        self._env = env or build_environment()

    def render(self, template_name: str, context: dict[str, Any]) -> str:
        template = self._env.get_template(template_name)
        return template.render(**context).strip()
