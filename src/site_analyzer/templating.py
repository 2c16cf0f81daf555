"""Shared Jinja2 environment for the SVG and recreation templates."""

from __future__ import annotations

import re
from functools import lru_cache
from pathlib import Path

import jinja2

TEMPLATE_DIR = Path(__file__).parent / "templates"


def slug(value: str) -> str:
    return re.sub(r"[^a-z0-9]+", "-", value.lower()).strip("-")


def pascal(value: str) -> str:
    return "".join(part.capitalize() for part in re.split(r"[^A-Za-z0-9]+", value) if part)


@lru_cache(maxsize=1)
def get_environment() -> jinja2.Environment:
    """Markup templates (``*.svg.j2``, ``*.html.j2``) are autoescaped; code templates are not."""
    env = jinja2.Environment(
        loader=jinja2.FileSystemLoader(str(TEMPLATE_DIR)),
        autoescape=jinja2.select_autoescape(enabled_extensions=("svg.j2", "html.j2"), default=False),
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
        undefined=jinja2.StrictUndefined,
    )
    env.filters["slug"] = slug
    env.filters["pascal"] = pascal
    return env


def render(template_name: str, **context) -> str:
    return get_environment().get_template(template_name).render(**context)
