"""Design token extraction: colours, fonts, spacing and breakpoints."""

from __future__ import annotations

import re

from site_analyzer.models import Design
from site_analyzer.parser import ParsedDocument

MAX_COLORS = 8
MAX_FONTS = 3
MAX_SPACING_VALUES = 10

COLOR_RE = re.compile(r"#[0-9a-fA-F]{6}\b|#[0-9a-fA-F]{3}\b|rgba?\([^)]+\)")
FONT_FAMILY_RE = re.compile(r"font-family\s*:\s*([^;}]+)", re.IGNORECASE)
MARGIN_RE = re.compile(r"margin[^;:]*:\s*([^;]+)", re.IGNORECASE)
PADDING_RE = re.compile(r"padding[^;:]*:\s*([^;]+)", re.IGNORECASE)
MEDIA_RE = re.compile(r"@media[^{]+", re.IGNORECASE)
MEDIA_WIDTH_RE = re.compile(r"\((?:min-|max-)?width\s*:\s*(\d+px)", re.IGNORECASE)

_IGNORED_FONTS = {"inherit", "initial", "unset", "var"}


def _first_n(values, limit: int) -> list[str]:
    """Dedup while keeping first-seen order, then truncate."""
    return list(dict.fromkeys(values))[:limit]


def _colors(doc: ParsedDocument) -> list[str]:
    found: list[str] = []
    for style in doc.inline_styles:
        found.extend(COLOR_RE.findall(style))
    found.extend(COLOR_RE.findall(doc.style_text))
    return _first_n(found, MAX_COLORS)


def _fonts(doc: ParsedDocument) -> list[str]:
    found: list[str] = []
    for source in (*doc.inline_styles, doc.style_text):
        for declaration in FONT_FAMILY_RE.findall(source):
            family = declaration.replace('"', "").replace("'", "").split(",")[0].strip()
            family = family.replace("!important", "").strip()
            if family and family.split("(")[0].lower() not in _IGNORED_FONTS:
                found.append(family)
    return _first_n(found, MAX_FONTS)


def _spacing(doc: ParsedDocument) -> str:
    values: set[int] = set()
    for style in doc.inline_styles:
        for pattern in (MARGIN_RE, PADDING_RE):
            match = pattern.search(style)
            if match:
                values.update(int(n) for n in re.findall(r"\d+", match.group(1)))
    if not values:
        return "8px grid system"
    common = sorted(values)[:MAX_SPACING_VALUES]
    return f"Common spacing: {', '.join(str(v) for v in common)}px"


def _breakpoints(doc: ParsedDocument) -> list[str]:
    found: set[str] = set()
    for query in MEDIA_RE.findall(doc.style_text):
        match = MEDIA_WIDTH_RE.search(query)
        if match:
            found.add(match.group(1))
    return sorted(found, key=lambda bp: int(bp[:-2]))


def extract_design(doc: ParsedDocument) -> Design:
    """Sample design tokens in document order; fall back to defaults when none are found."""
    defaults = Design()
    return Design(
        colors=_colors(doc) or defaults.colors,
        fonts=_fonts(doc) or defaults.fonts,
        spacing=_spacing(doc),
        breakpoints=_breakpoints(doc) or defaults.breakpoints,
    )
