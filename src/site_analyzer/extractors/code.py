"""Embedded code, data and library references."""

from __future__ import annotations

import json
import logging
import re
from urllib.parse import urlparse

from site_analyzer.models import CodeExtraction
from site_analyzer.parser import ParsedDocument

logger = logging.getLogger(__name__)

MAX_JSON_BLOCKS = 5
MAX_INLINE_SCRIPTS = 3
MAX_LIBRARIES = 15
MAX_API_ENDPOINTS = 10
INLINE_SCRIPT_MIN_CHARS = 50
INLINE_SCRIPT_PREVIEW_CHARS = 200

CDN_RE = re.compile(r"cdn|unpkg|jsdelivr", re.IGNORECASE)
API_RE = re.compile(
    r"""['"](/api/[^'"]+|https?://[^'"]*api[^'"]*)['"]|fetch\(['"]([^'"]+)['"]"""
)
REACT_RE = re.compile(
    r"\bReact\b|data-reactroot"
    r"|\breact(?:-dom)?(?:\.development|\.production)?(?:\.min)?\.js"
)
VUE_RE = re.compile(
    r"\bVue\b|\bv-(?:if|else|for|bind|model|on|show)\b|data-v-[0-9a-f]|@click="
    r"|\bvue(?:\.runtime)?(?:\.global)?(?:\.prod)?(?:\.min)?\.js"
)

CONFIG_CUES: tuple[tuple[tuple[str, ...], str], ...] = (
    (("webpack", "vite.config", "rollup"), "Build Configuration"),
    (("package.json", "node_modules"), "Package Configuration"),
    (("process.env", ".env"), "Environment Configuration"),
)


def _json_blocks(doc: ParsedDocument) -> list:
    blocks = []
    for tag in doc.select('script[type="application/json"], script[type="application/ld+json"]'):
        try:
            blocks.append(json.loads(tag.get_text()))
        except ValueError:
            logger.debug("Skipping unparseable JSON block")
        if len(blocks) >= MAX_JSON_BLOCKS:
            break
    return blocks


def _inline_scripts(doc: ParsedDocument) -> list[str]:
    previews = []
    for tag in doc.select("script:not([src])"):
        if tag.get("type") in ("application/json", "application/ld+json"):
            continue
        body = tag.get_text().strip()
        if len(body) > INLINE_SCRIPT_MIN_CHARS:
            previews.append(body[:INLINE_SCRIPT_PREVIEW_CHARS] + "...")
        if len(previews) >= MAX_INLINE_SCRIPTS:
            break
    return previews


def _library_name(src: str) -> str:
    segment = urlparse(src).path.rstrip("/").rsplit("/", 1)[-1]
    return segment.split(".", 1)[0]


def _external_libraries(doc: ParsedDocument) -> list[str]:
    names = [_library_name(src) for src in doc.script_sources if CDN_RE.search(src)]
    return list(dict.fromkeys(n for n in names if n))[:MAX_LIBRARIES]


def _api_endpoints(doc: ParsedDocument) -> list[str]:
    found = []
    for quoted, fetched in API_RE.findall(doc.script_text):
        endpoint = quoted or fetched
        if endpoint and endpoint not in found:
            found.append(endpoint)
        if len(found) >= MAX_API_ENDPOINTS:
            break
    return found


def extract_code(doc: ParsedDocument) -> CodeExtraction:
    markup = doc.markup
    has_react = bool(REACT_RE.search(markup))
    has_vue = bool(VUE_RE.search(markup))

    components = []
    if has_react:
        components.append("React")
    if has_vue:
        components.append("Vue")

    return CodeExtraction(
        has_react_components=has_react,
        has_vue_components=has_vue,
        json_data=_json_blocks(doc),
        config_files=[label for needles, label in CONFIG_CUES if any(n in markup for n in needles)],
        api_endpoints=_api_endpoints(doc),
        external_libraries=_external_libraries(doc),
        inline_scripts=_inline_scripts(doc),
        components=components,
    )
