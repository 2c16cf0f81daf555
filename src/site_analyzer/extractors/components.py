"""Map page structure to semantic UI components.

Heuristics run in a fixed order and each records an element count used as a
complexity signal. Sizes are estimated from text length and child count since
no layout engine is available.
"""

from __future__ import annotations

from bs4.element import Tag

from site_analyzer.models import Complexity, Component
from site_analyzer.parser import ParsedDocument

HEADER = "header, .header, #header, .site-header, .main-header"
NAV = "nav, .nav, .navbar, .navigation, .menu"
HERO = ".hero, .banner, .jumbotron, .hero-section, .main-banner"
CARDS = ".card, .cards, .card-item, .product-card, .feature-card"
BUTTONS = "button, .btn, .button, input[type=button], input[type=submit]"
MODALS = ".modal, .dialog, .popup, .overlay"
SIDEBAR = ".sidebar, .side-nav, .aside, aside"
FOOTER = "footer, .footer, #footer, .site-footer"
GALLERY = ".gallery, .carousel, .slider, .slideshow"
MAIN = "main, .main, .content, .main-content"


def _complexity(count: int, complex_above: int, moderate_above: int) -> Complexity:
    if count > complex_above:
        return "complex"
    if count > moderate_above:
        return "moderate"
    return "simple"


def element_size(element: Tag) -> str:
    text = len(element.get_text())
    children = len(element.find_all(recursive=False))
    if text > 1000 or children > 20:
        return "Large"
    if text > 500 or children > 10:
        return "Medium"
    return "Small"


def _has(element: Tag, selector: str) -> bool:
    return element.select_one(selector) is not None


def _header(doc: ParsedDocument) -> list[Component]:
    header = doc.select_one(HEADER)
    if header is None:
        return []
    nav_items = len(header.select("a, .nav-item"))
    props = [
        prop
        for prop, selector in (
            ("logo", "img, .logo, .brand"),
            ("navigation", "nav, .nav, ul"),
            ("search", "input[type=search], .search"),
        )
        if _has(header, selector)
    ]
    return [
        Component(
            name="Header",
            type="navigation",
            size=element_size(header),
            description=f"Main site header with {nav_items} navigation items",
            props=props,
            children=nav_items,
            complexity=_complexity(nav_items, 10, 5),
        )
    ]


def _navigation(doc: ParsedDocument) -> list[Component]:
    components = []
    for nav in doc.select(NAV):
        links = len(nav.select("a"))
        has_dropdown = _has(nav, ".dropdown, .submenu")
        props = []
        if has_dropdown:
            props.append("dropdown")
        if "mobile" in (nav.get("class") or []) or _has(nav, ".hamburger, .menu-toggle"):
            props.append("mobile-responsive")
        components.append(
            Component(
                name="Navigation Menu",
                type="navigation",
                size=element_size(nav),
                description=f"Navigation menu with {links} links"
                + (" and dropdown menus" if has_dropdown else ""),
                props=props,
                children=links,
                complexity=_complexity(links, 15, 8),
            )
        )
    return components


def _heroes(doc: ParsedDocument) -> list[Component]:
    components = []
    for hero in doc.select(HERO):
        buttons = len(hero.select("button, .btn, .button"))
        has_image = _has(hero, "img")
        has_video = _has(hero, "video")
        has_animation = _has(hero, "[class*=animate], [data-aos]")
        props = []
        if buttons:
            props.append("call-to-action")
        if has_image:
            props.append("background-image")
        if has_video:
            props.append("background-video")
        if has_animation:
            props.append("animations")

        if has_video or has_animation:
            complexity: Complexity = "complex"
        elif has_image:
            complexity = "moderate"
        else:
            complexity = "simple"
        background = " and video background" if has_video else " and image background" if has_image else ""
        components.append(
            Component(
                name="Hero Section",
                type="banner",
                size=element_size(hero),
                description=f"Main hero section with {buttons} action buttons{background}",
                props=props,
                children=buttons,
                complexity=complexity,
            )
        )
    return components


def _cards(doc: ParsedDocument) -> list[Component]:
    cards = doc.select(CARDS)
    if not cards:
        return []
    first = cards[0]
    has_price = _has(first, ".price, .cost, [class*=price]")
    props = [
        prop
        for prop, present in (
            ("image", _has(first, "img")),
            ("action-button", _has(first, "button, .btn, a")),
            ("pricing", has_price),
        )
        if present
    ]
    return [
        Component(
            name="Cards",
            type="grid",
            size=element_size(first),
            description=f"Card grid with {len(cards)} items"
            + (" (product/pricing cards)" if has_price else ""),
            props=props,
            children=len(cards),
            complexity=_complexity(len(cards), 20, 8),
        )
    ]


def _forms(doc: ParsedDocument) -> list[Component]:
    components = []
    for form in doc.select("form"):
        inputs = len(form.select("input, textarea, select"))
        multi_step = len(form.select(".step, .page, [data-step]")) > 1
        props = [
            prop
            for prop, present in (
                ("validation", _has(form, "[required], .required, [data-validate]")),
                ("file-upload", _has(form, "input[type=file]")),
                ("multi-step", multi_step),
                ("submit-action", _has(form, "input[type=submit], button[type=submit], .submit")),
            )
            if present
        ]
        complexity = "complex" if multi_step else _complexity(inputs, 15, 8)
        components.append(
            Component(
                name="Form",
                type="form",
                size=element_size(form),
                description=f"Form with {inputs} input fields" + (" (multi-step)" if multi_step else ""),
                props=props,
                children=inputs,
                complexity=complexity,
            )
        )
    return components


def _counted(doc: ParsedDocument, selector: str, name: str, type_: str, noun: str) -> list[Component]:
    count = doc.count(selector)
    if not count:
        return []
    return [Component(name=name, type=type_, size=f"{count} {noun}", children=count)]


def _sidebar(doc: ParsedDocument) -> list[Component]:
    sidebar = doc.select_one(SIDEBAR)
    if sidebar is None:
        return []
    return [Component(name="Sidebar", type="sidebar", size=element_size(sidebar))]


def _footer(doc: ParsedDocument) -> list[Component]:
    footer = doc.select_one(FOOTER)
    if footer is None:
        return []
    links = len(footer.select("a"))
    social = _has(footer, ".social, .social-media, [class*=social]")
    return [
        Component(
            name="Footer",
            type="footer",
            size=f"{links} links" + (", with social media" if social else ""),
            props=["social-links"] if social else [],
            children=links,
        )
    ]


def _main(doc: ParsedDocument) -> list[Component]:
    main = doc.select_one(MAIN)
    if main is None:
        return []
    return [Component(name="Main Content", type="content", size=element_size(main))]


def map_components(doc: ParsedDocument) -> list[Component]:
    """Apply every structural heuristic in order. Empty list when nothing matches."""
    return [
        *_header(doc),
        *_navigation(doc),
        *_heroes(doc),
        *_cards(doc),
        *_forms(doc),
        *_counted(doc, BUTTONS, "Buttons", "button", "buttons"),
        *_counted(doc, MODALS, "Modals", "modal", "modals"),
        *_sidebar(doc),
        *_footer(doc),
        *_counted(doc, "table", "Tables", "table", "tables"),
        *_counted(doc, GALLERY, "Image Gallery", "gallery", "galleries"),
        *_main(doc),
    ]
