"""Synthesize a starter HTML/CSS/JS project from the extracted signals."""

from __future__ import annotations

import logging
from datetime import date

from site_analyzer.models import (
    SEO,
    CodeExtraction,
    Component,
    Design,
    Framework,
    Recreation,
    TechStack,
    VisualAnalysis,
)
from site_analyzer.templating import render

logger = logging.getLogger(__name__)

MAX_FORM_FIELDS = 15
MAX_CARDS = 6
NAV_ITEMS = ("Home", "About", "Services", "Contact")

# (needle in library name, npm package)
LIBRARY_PACKAGES: tuple[tuple[str, str], ...] = (
    ("gsap", "gsap"),
    ("anime", "animejs"),
    ("three", "three"),
    ("lottie", "lottie-web"),
)

# Fallbacks for palette slots the analysis did not fill.
PALETTE: tuple[tuple[str, str], ...] = (
    ("primary-color", "#2563eb"),
    ("secondary-color", "#64748b"),
    ("accent-color", "#f59e0b"),
    ("background-color", "#ffffff"),
    ("surface-color", "#f8fafc"),
    ("text-primary", "#1e293b"),
    ("text-secondary", "#64748b"),
    ("border-color", "#e2e8f0"),
)

_FIELD_PRESETS: tuple[tuple[str, str, str], ...] = (
    ("name", "Name", "text"),
    ("email", "Email", "email"),
    ("message", "Message", "textarea"),
)

_NAVIGATION_NAMES = {"Header", "Navigation Menu"}


def determine_framework(tech_stack: TechStack, code_extraction: CodeExtraction) -> Framework:
    if "React" in tech_stack.frontend or "React" in code_extraction.components:
        return "react"
    if "Vue.js" in tech_stack.frontend or "Vue" in code_extraction.components:
        return "vue"
    return "vanilla"


def resolve_dependencies(framework: Framework, code_extraction: CodeExtraction) -> list[str]:
    deps: list[str] = []
    if framework == "react":
        deps.extend(["react", "react-dom"])
    elif framework == "vue":
        deps.append("vue")
    for library in code_extraction.external_libraries:
        lowered = library.lower()
        for needle, package in LIBRARY_PACKAGES:
            if needle in lowered and package not in deps:
                deps.append(package)
    return deps


def form_fields(component: Component) -> list[dict]:
    """One scaffold field per detected input, capped at MAX_FORM_FIELDS."""
    count = min(component.children or 0, MAX_FORM_FIELDS)
    fields = []
    for index in range(count):
        if index < len(_FIELD_PRESETS):
            field_id, label, kind = _FIELD_PRESETS[index]
        else:
            field_id, label, kind = f"field-{index + 1}", f"Field {index + 1}", "text"
        fields.append(
            {
                "id": field_id,
                "label": label,
                "kind": kind,
                "required": "validation" in component.props,
            }
        )
    return fields


def card_count(component: Component) -> int:
    return max(1, min(component.children or 3, MAX_CARDS))


def _palette(design: Design) -> list[tuple[str, str]]:
    return [
        (var, design.colors[i] if i < len(design.colors) else fallback)
        for i, (var, fallback) in enumerate(PALETTE)
    ]


def recreate_website(
    url: str,
    tech_stack: TechStack,
    design: Design,
    components: list[Component],
    visual_analysis: VisualAnalysis,
    code_extraction: CodeExtraction,
    seo: SEO,
) -> Recreation:
    """Build a framework-appropriate scaffold mirroring the detected components and design."""
    framework = determine_framework(tech_stack, code_extraction)
    dependencies = resolve_dependencies(framework, code_extraction)

    title = seo.title if seo.title != SEO().title else "Recreated Website"
    description = (
        seo.description
        if seo.description != SEO().description
        else "Recreated website based on analysis"
    )
    primary_font = design.fonts[0] if design.fonts else "Inter"
    unique: dict[str, Component] = {}
    for component in components:
        unique.setdefault(component.name, component)

    context = {
        "url": url,
        "framework": framework,
        "dependencies": dependencies,
        "title": title,
        "description": description,
        "brand": title.split()[0] if title.split() else "Brand",
        "year": date.today().year,
        "nav_items": NAV_ITEMS,
        "components": components,
        "unique_components": list(unique.values()),
        "body_components": [c for c in components if c.name not in _NAVIGATION_NAMES],
        "has_navigation": any(c.name in _NAVIGATION_NAMES for c in components),
        "has_forms": any(c.name == "Form" for c in components),
        "has_animations": visual_analysis.has_animations,
        "design": design,
        "visual_analysis": visual_analysis,
        "palette": _palette(design),
        "primary_font": primary_font,
        "secondary_font": design.fonts[1] if len(design.fonts) > 1 else primary_font,
        "background_type": visual_analysis.background_type,
        "layout": visual_analysis.layout[0] if visual_analysis.layout else "standard",
        "effects": visual_analysis.effects,
        "form_fields": form_fields,
        "card_count": card_count,
    }

    if framework == "react":
        html = render("recreation/app_index.html.j2", mount_id="root", entry="/src/main.jsx", **context)
        javascript = render("recreation/react.jsx.j2", **context)
    elif framework == "vue":
        html = render("recreation/app_index.html.j2", mount_id="app", entry="/src/main.js", **context)
        javascript = render("recreation/vue.js.j2", **context)
    else:
        html = render("recreation/vanilla.html.j2", **context)
        javascript = render("recreation/vanilla.js.j2", **context)

    logger.info("Generated %s recreation with %d components", framework, len(components))
    return Recreation(
        html=html,
        css=render("recreation/styles.css.j2", **context),
        javascript=javascript,
        framework=framework,
        dependencies=dependencies,
        instructions=render("recreation/instructions.md.j2", **context),
    )
