"""Visual style classification: animations, backgrounds, graphics, effects, scheme, layout."""

from __future__ import annotations

import re

from site_analyzer.models import VisualAnalysis
from site_analyzer.parser import ParsedDocument

ANIMATION_LIBRARIES: tuple[tuple[str, str], ...] = (
    ("gsap", "GSAP"),
    ("anime.js", "Anime.js"),
    ("lottie", "Lottie"),
    ("three.js", "Three.js"),
    ("framer-motion", "Framer Motion"),
)

EFFECTS: tuple[tuple[str, str], ...] = (
    ("box-shadow", "Shadows"),
    ("filter: blur", "Blur"),
    ("opacity", "Transparency"),
    ("border-radius", "Rounded Corners"),
    ("backdrop-filter", "Backdrop Filters"),
)

_DARK_BODY_RE = re.compile(
    r"body[^{]*\{[^}]*background(?:-color)?\s*:\s*(#000\b|#000000|#1[0-9a-f]{5}|#2[0-9a-f]{5}|black|rgb\(\s*[0-3]?\d\s*,)",
    re.IGNORECASE,
)
_IMAGE_BACKGROUND_RE = re.compile(r"background[^;]*url|background-image", re.IGNORECASE)


def _animations(styles: str, doc: ParsedDocument) -> list[str]:
    found = []
    if "@keyframes" in styles:
        found.append("CSS Keyframe Animations")
    if "transform" in styles:
        found.append("CSS Transforms")
    if "transition" in styles:
        found.append("CSS Transitions")
    scripts = (doc.markup + " " + " ".join(doc.script_sources)).lower()
    for needle, label in ANIMATION_LIBRARIES:
        if needle in scripts:
            found.append(label)
    return found


def _background(styles: str, doc: ParsedDocument) -> str:
    if "linear-gradient" in styles or "radial-gradient" in styles:
        return "gradient"
    if _IMAGE_BACKGROUND_RE.search(styles):
        return "image"
    if doc.count("canvas") or "webgl" in doc.markup.lower():
        return "dynamic/canvas"
    return "solid"


def _graphics(doc: ParsedDocument) -> list[str]:
    found = []
    if doc.count("svg"):
        found.append("SVG Graphics")
    if doc.count("canvas"):
        found.append("Canvas Graphics")
    if doc.count("video"):
        found.append("Video Content")
    if doc.count('img[src*=".gif"]'):
        found.append("Animated GIFs")
    if doc.count('img[src*=".webp"], img[src*=".avif"]'):
        found.append("Modern Image Formats")
    return found


def _color_scheme(styles: str, doc: ParsedDocument) -> str:
    lowered = doc.markup.lower()
    if "dark-mode" in lowered or "dark-theme" in lowered or _DARK_BODY_RE.search(styles):
        return "dark"
    return "light"


def _layout(styles: str, doc: ParsedDocument) -> str:
    if "display: grid" in styles or "display:grid" in styles or "grid-template" in styles:
        return "CSS Grid"
    if "display: flex" in styles or "display:flex" in styles:
        return "Flexbox"
    if "bootstrap" in doc.markup.lower() or doc.count(".container .row, [class*=col-]"):
        return "Bootstrap Grid"
    return "standard"


def analyze_visuals(doc: ParsedDocument) -> VisualAnalysis:
    """Classify visual style from embedded CSS, inline styles and linked sheet names.

    Background precedence is gradient, then image, then canvas, then solid.
    """
    styles = "\n".join([doc.style_text, *doc.inline_styles, *doc.stylesheet_hrefs])

    animations = _animations(styles, doc)
    background = _background(styles, doc)
    graphics = _graphics(doc)
    effects = [label for needle, label in EFFECTS if needle in styles]

    return VisualAnalysis(
        has_animations=bool(animations),
        animations=animations,
        background_type=background,
        background=[background],
        has_graphics=bool(graphics),
        graphics=graphics,
        has_visual_effects=bool(effects),
        effects=effects,
        color_scheme=[_color_scheme(styles, doc)],
        layout=[_layout(styles, doc)],
    )
