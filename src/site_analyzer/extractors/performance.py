"""Performance estimate derived from the already-downloaded markup.

Nothing here is measured over the network: size comes from the markup
length and the request count from sub-resource tags. The returned model is
flagged ``estimated=True`` so callers do not mistake it for real timings.
"""

from __future__ import annotations

from site_analyzer.models import Performance
from site_analyzer.parser import ParsedDocument

BASE_LOAD_SECONDS = 0.5
SECONDS_PER_MB = 1.0
SECONDS_PER_REQUEST = 0.05


def estimate_performance(doc: ParsedDocument) -> Performance:
    size_kb = round(len(doc.markup) / 1024)
    # +1 for the document itself
    requests = doc.count("script") + doc.count("link") + doc.count("img") + 1

    load_time = BASE_LOAD_SECONDS + size_kb / 1000 * SECONDS_PER_MB + requests * SECONDS_PER_REQUEST

    score = 100
    if load_time > 3:
        score -= 30
    elif load_time > 2:
        score -= 20
    elif load_time > 1:
        score -= 10

    if size_kb > 1000:
        score -= 20
    elif size_kb > 500:
        score -= 10

    if requests > 50:
        score -= 15
    elif requests > 30:
        score -= 10

    if doc.count('link[href*=".min.css"]'):
        score += 5
    if doc.count('script[src*=".min.js"]'):
        score += 5
    if "gzip" in doc.markup or "compress" in doc.markup:
        score += 5

    return Performance(
        load_time=round(load_time, 2),
        size_kb=size_kb,
        requests=requests,
        score=max(min(score, 100), 0),
    )
