"""SEO metadata read directly from the document head."""

from __future__ import annotations

from site_analyzer.models import SEO
from site_analyzer.parser import ParsedDocument


def extract_seo(doc: ParsedDocument) -> SEO:
    defaults = SEO()
    keywords = doc.meta_content("keywords") or ""
    return SEO(
        title=doc.title or defaults.title,
        description=(doc.meta_content("description") or "").strip() or defaults.description,
        keywords=[k.strip() for k in keywords.split(",") if k.strip()],
        meta_tags=doc.count("meta"),
    )
