"""Relay selection: which content relays to try, in which order, for a host."""

from __future__ import annotations

from site_analyzer.models import RelayDescriptor

HIGH_TRAFFIC_DOMAINS: tuple[str, ...] = (
    "youtube.com",
    "facebook.com",
    "twitter.com",
    "instagram.com",
    "tiktok.com",
)

ALL_ORIGINS = "https://api.allorigins.win/get?url={encoded_url}"
CORS_PROXY = "https://corsproxy.io/?{encoded_url}"
CORS_EU = "https://cors.eu.org/{url}"

# Busy sites answer slowly; give them generous timeouts and lead with the
# relay that copes best with load.
_HIGH_TRAFFIC_RELAYS: tuple[RelayDescriptor, ...] = (
    RelayDescriptor(name="CorsEU", endpoint_template=CORS_EU, timeout=12.0),
    RelayDescriptor(name="CorsProxy", endpoint_template=CORS_PROXY, timeout=10.0),
    RelayDescriptor(name="AllOrigins", endpoint_template=ALL_ORIGINS, timeout=15.0),
)

# Everything else: fail fast, most reliable relay first.
_GENERAL_RELAYS: tuple[RelayDescriptor, ...] = (
    RelayDescriptor(name="AllOrigins", endpoint_template=ALL_ORIGINS, timeout=8.0),
    RelayDescriptor(name="CorsProxy", endpoint_template=CORS_PROXY, timeout=6.0),
    RelayDescriptor(name="CorsEU", endpoint_template=CORS_EU, timeout=5.0),
)


def host_matches(host: str, domains: tuple[str, ...]) -> bool:
    host = host.lower().rstrip(".")
    return any(host == d or host.endswith("." + d) for d in domains)


def is_high_traffic(host: str) -> bool:
    return host_matches(host, HIGH_TRAFFIC_DOMAINS)


def select_relays(host: str) -> list[RelayDescriptor]:
    """Return the ordered relay list for a target host. Never empty."""
    if is_high_traffic(host):
        return list(_HIGH_TRAFFIC_RELAYS)
    return list(_GENERAL_RELAYS)
