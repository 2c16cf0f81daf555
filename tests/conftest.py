"""Shared fixtures for site-analyzer tests."""

from __future__ import annotations

import base64
import json

import pytest

from site_analyzer.config import Settings
from site_analyzer.models import RawDocument
from site_analyzer.parser import ParsedDocument, parse_document


@pytest.fixture()
def settings() -> Settings:
    """Settings with no relay delay and the browser tier switched off."""
    return Settings(relay_delay=0.0, render_enabled=False, render_timeout=0.5)


@pytest.fixture()
def parse():
    """Build a ParsedDocument from a markup string."""

    def _parse(markup: str, url: str = "https://example.com") -> ParsedDocument:
        return parse_document(RawDocument(markup=markup, relay="test", url=url))

    return _parse


@pytest.fixture()
def sample_doc(parse) -> ParsedDocument:
    return parse(SAMPLE_HTML)


SAMPLE_HTML = """\
<!DOCTYPE html>
<html lang="en">
<head>
    <title>Acme Widgets</title>
    <meta name="description" content="The finest widgets on the web">
    <meta name="keywords" content="widgets, gadgets , tools">
    <meta name="viewport" content="width=device-width">
    <link rel="stylesheet" href="/static/app.min.css">
    <style>
        body { font-family: "Inter", sans-serif; background: linear-gradient(90deg, #112233, #ffffff); }
        .hero { background-image: url('/hero.jpg'); }
        .grid { display: grid; gap: 16px; }
        .card { box-shadow: 0 1px 2px rgba(0,0,0,0.2); border-radius: 8px; transition: transform 0.2s; }
        @keyframes pulse { from { opacity: 1; } to { opacity: 0.5; } }
        @media (max-width: 1024px) { .grid { display: block; } }
        @media (min-width: 768px) { .hero { padding: 40px; } }
    </style>
    <script src="https://cdn.jsdelivr.net/npm/gsap@3.12/dist/gsap.min.js"></script>
    <script type="application/ld+json">{"@type": "Organization", "name": "Acme"}</script>
</head>
<body>
    <header class="site-header">
        <img class="logo" src="/logo.png" alt="Acme">
        <nav>
            <a href="/">Home</a>
            <a href="/shop">Shop</a>
            <a href="/about">About</a>
        </nav>
    </header>
    <section class="hero">
        <h1 style="color: #ff6600; font-family: 'Georgia', serif; margin: 24px 0">Widgets for everyone</h1>
        <button class="btn">Buy now</button>
    </section>
    <div class="grid">
        <div class="card"><h3>Basic</h3><span class="price">$10</span><a href="/buy/basic">Buy</a></div>
        <div class="card"><h3>Pro</h3><span class="price">$20</span><a href="/buy/pro">Buy</a></div>
    </div>
    <form action="/contact">
        <input type="text" name="name" required>
        <input type="email" name="email" required>
        <textarea name="message"></textarea>
        <button type="submit">Send</button>
    </form>
    <footer>
        <a href="/terms">Terms</a>
        <div class="social"><a href="https://x.com/acme">X</a></div>
    </footer>
    <script>
        document.addEventListener("DOMContentLoaded", function () {
            fetch("/api/widgets").then(function (r) { return r.json(); });
        });
    </script>
</body>
</html>
"""

PLAIN_HTML = """\
<html>
<head><title>Plain Page</title></head>
<body><p>Hello there, this is a plain page with nothing interesting on it at all.</p></body>
</html>
"""

ANALYTICS_HTML = """\
<html>
<head>
    <title>Local Bakery</title>
    <script>
        (function(i,s,o,g,r,a,m){i['GoogleAnalyticsObject']=r;i[r]=i[r]||function(){
        (i[r].q=i[r].q||[]).push(arguments)},i[r].l=1*new Date();a=s.createElement(o),
        m=s.getElementsByTagName(o)[0];a.async=1;a.src=g;m.parentNode.insertBefore(a,m)
        })(window,document,'script','https://www.google-analytics.com/analytics.js','ga');
        ga('create', 'UA-12345-1', 'auto');
    </script>
</head>
<body>
    <ul class="nav-list">
        <li class="nav-item"><a href="/">Home</a></li>
        <li class="nav-item"><a href="/menu">Menu</a></li>
    </ul>
    <p>Fresh bread every morning.</p>
</body>
</html>
"""

# Minimal PNG signature padded past the capture size threshold.
PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00\x00\x00\rIHDR" + b"\x00" * 2048


def allorigins_body(markup: str) -> str:
    return json.dumps({"contents": markup, "status": {"http_code": 200}})


def decode_data_uri(data_uri: str) -> bytes:
    """Payload bytes of a base64 data URI."""
    return base64.b64decode(data_uri.split(",", 1)[1])
