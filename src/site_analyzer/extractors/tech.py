"""Technology detection by pattern matching over markup and asset references."""

from __future__ import annotations

import re

from site_analyzer.models import TechStack
from site_analyzer.parser import ParsedDocument

# Placeholder values for categories with no match. Callers must read these as
# "unknown", not as a discovered technology.
SENTINELS: dict[str, str] = {
    "frontend": "HTML/CSS/JavaScript",
    "backend": "Server-side technology not detected",
    "database": "Database not detected",
    "hosting": "Hosting provider not detected",
    "analytics": "No analytics detected",
}

# (category, label, pattern) checked against markup + script/link references.
CONTENT_PATTERNS: tuple[tuple[str, str, str], ...] = (
    ("frontend", "React", r"\breact(?:dom|-dom)?\b|data-reactroot"),
    ("frontend", "Vue.js", r"\bvue(?:\.js|\.min\.js|\.runtime)?\b|data-v-[0-9a-f]"),
    ("frontend", "Angular", r"\bangular(?:js)?\b|ng-version"),
    ("frontend", "Next.js", r"next\.js|/_next/|__NEXT_DATA__"),
    ("frontend", "Nuxt.js", r"\bnuxt\b|__NUXT__"),
    ("frontend", "Svelte", r"\bsvelte"),
    ("frontend", "jQuery", r"jquery"),
    ("frontend", "Tailwind CSS", r"tailwind"),
    ("frontend", "Bootstrap", r"bootstrap"),
    ("frontend", "Bulma", r"\bbulma\b"),
    ("frontend", "Foundation", r"foundation(?:\.min)?\.(?:css|js)"),
    ("frontend", "Materialize", r"materialize"),
    ("build_tools", "Webpack", r"webpack"),
    ("build_tools", "Vite", r"\bvite\b|/@vite/"),
    ("build_tools", "Parcel", r"\bparcel\b"),
    ("backend", "PHP", r"\.php\b"),
    ("backend", "ASP.NET", r"asp\.net|aspnet|__VIEWSTATE"),
    ("backend", "Django", r"django|csrfmiddlewaretoken"),
    ("backend", "Flask", r"\bflask\b"),
    ("backend", "Ruby on Rails", r"\brails\b|csrf-param"),
    ("backend", "Laravel", r"laravel"),
    ("backend", "Node.js", r"\bexpress\.js\b|node\.js"),
    ("backend", "Spring Framework", r"\bspring(?:framework|boot)\b"),
    ("database", "MySQL", r"mysql"),
    ("database", "PostgreSQL", r"postgres(?:ql)?"),
    ("database", "MongoDB", r"mongodb"),
    ("database", "Redis", r"\bredis\b"),
    ("database", "SQLite", r"sqlite"),
    ("database", "Firebase", r"firebase"),
    ("database", "Supabase", r"supabase"),
    ("analytics", "Google Analytics", r"google-analytics|gtag\(|\bga\("),
    ("analytics", "Google Tag Manager", r"googletagmanager|GTM-[A-Z0-9]+"),
    ("analytics", "Facebook Pixel", r"connect\.facebook\.net|fbevents|fbq\("),
    ("analytics", "Hotjar", r"hotjar"),
    ("analytics", "Mixpanel", r"mixpanel"),
    ("hosting", "Vercel", r"vercel"),
    ("hosting", "Netlify", r"netlify"),
    ("hosting", "Cloudflare", r"cloudflare"),
    ("hosting", "AWS", r"amazonaws|cloudfront\.net"),
)

# (category, label, css selector) structural markers.
DOM_MARKERS: tuple[tuple[str, str, str], ...] = (
    ("frontend", "React", "[data-reactroot], #root"),
    ("frontend", "Next.js", "#__next"),
    ("frontend", "Nuxt.js", "#__nuxt"),
    ("frontend", "Angular", "[ng-app], [ng-controller], [data-ng-app]"),
)

GENERATORS: tuple[str, ...] = ("WordPress", "Drupal", "Joomla", "Shopify", "Squarespace", "Wix")

# (label, host pattern) matched against the analyzed URL's host.
HOST_PATTERNS: tuple[tuple[str, str], ...] = (
    ("Vercel", r"\.vercel\.app$"),
    ("Netlify", r"\.netlify\.app$"),
    ("GitHub Pages", r"\.github\.io$"),
)

_COMPILED = tuple((cat, label, re.compile(p, re.IGNORECASE)) for cat, label, p in CONTENT_PATTERNS)


def _add(buckets: dict[str, list[str]], category: str, label: str) -> None:
    if label not in buckets[category]:
        buckets[category].append(label)


def detect_tech_stack(doc: ParsedDocument) -> TechStack:
    """Detect technologies. Matches accumulate; empty categories get their sentinel."""
    buckets: dict[str, list[str]] = {cat: [] for cat in (*SENTINELS, "build_tools")}

    scripts = " ".join(doc.script_sources)
    links = " ".join(doc.link_hrefs)
    content = f"{doc.markup} {scripts} {links}"

    for category, label, pattern in _COMPILED:
        if pattern.search(content):
            _add(buckets, category, label)

    for category, label, selector in DOM_MARKERS:
        if doc.count(selector):
            _add(buckets, category, label)

    generator = doc.meta_content("generator") or ""
    for name in GENERATORS:
        if name.lower() in generator.lower():
            _add(buckets, "backend", name)

    host = doc.host
    for label, pattern in HOST_PATTERNS:
        if host and re.search(pattern, host, re.IGNORECASE):
            _add(buckets, "hosting", label)

    for category, sentinel in SENTINELS.items():
        if not buckets[category]:
            buckets[category].append(sentinel)

    return TechStack(**buckets)
