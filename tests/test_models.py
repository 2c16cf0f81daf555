"""Tests for site_analyzer.models module."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from site_analyzer.models import (
    SEO,
    AnalysisTarget,
    CaptureArtifact,
    CaptureSignals,
    CaptureTier,
    Component,
    Performance,
    RelayDescriptor,
    TechStack,
)


class TestAnalysisTarget:
    def test_prefixes_https(self):
        target = AnalysisTarget.from_url("example.com/path")
        assert target.url == "https://example.com/path"
        assert target.host == "example.com"

    def test_keeps_explicit_scheme(self):
        target = AnalysisTarget.from_url("http://Example.COM")
        assert target.url == "http://Example.COM"
        assert target.host == "example.com"

    @pytest.mark.parametrize("raw", ["", "   ", "https://"])
    def test_rejects_missing_host(self, raw):
        with pytest.raises(ValueError, match="Invalid URL"):
            AnalysisTarget.from_url(raw)

    @pytest.mark.parametrize("raw", ["ftp://example.com", "file:///etc/hosts", "javascript://x"])
    def test_rejects_unsupported_scheme(self, raw):
        with pytest.raises(ValueError, match="unsupported scheme"):
            AnalysisTarget.from_url(raw)

    def test_query_with_embedded_url_is_prefixed(self):
        target = AnalysisTarget.from_url("example.com/?next=http://other.org")
        assert target.url == "https://example.com/?next=http://other.org"
        assert target.host == "example.com"


class TestRelayDescriptor:
    def test_build_url_encodes_target(self):
        relay = RelayDescriptor(name="R", endpoint_template="https://relay/?u={encoded_url}", timeout=1)
        url = relay.build_url(AnalysisTarget.from_url("https://example.com/a?b=1"))
        assert url == "https://relay/?u=https%3A%2F%2Fexample.com%2Fa%3Fb%3D1"

    def test_build_url_raw_target(self):
        relay = RelayDescriptor(name="R", endpoint_template="https://relay/{url}", timeout=1)
        assert relay.build_url(AnalysisTarget.from_url("example.com")) == "https://relay/https://example.com"

    def test_accepts_status(self):
        relay = RelayDescriptor(name="R", endpoint_template="x", timeout=1, tolerated_statuses=frozenset({404}))
        assert relay.accepts_status(200)
        assert relay.accepts_status(404)
        assert not relay.accepts_status(500)

    def test_frozen(self):
        relay = RelayDescriptor(name="R", endpoint_template="x", timeout=1)
        with pytest.raises(ValidationError):
            relay.name = "other"


class TestDefaults:
    def test_tech_stack_sentinels(self):
        stack = TechStack()
        assert stack.frontend == ["HTML/CSS/JavaScript"]
        assert stack.analytics == ["No analytics detected"]
        assert stack.build_tools == []

    def test_seo_defaults(self):
        assert SEO().title == "No title found"
        assert SEO().description == "No description found"

    def test_performance_is_marked_estimated(self):
        assert Performance().estimated is True

    def test_performance_score_bounds(self):
        with pytest.raises(ValidationError):
            Performance(score=101)


class TestCaptureArtifact:
    def test_from_bytes_builds_data_uri(self):
        artifact = CaptureArtifact.from_bytes(b"abc", "image/png", CaptureTier.EXTERNAL, "svc")
        assert artifact.data_uri == "data:image/png;base64,YWJj"
        assert artifact.mime_type == "image/png"
        assert artifact.reason is None

    def test_signals_from_analysis(self):
        components = [
            Component(name="Header", type="navigation", size="Small"),
            Component(name="Cards", type="grid", size="Small"),
        ]
        signals = CaptureSignals.from_analysis(components, SEO(title="Acme"))
        assert signals.title == "Acme"
        assert signals.has_header and signals.has_cards
        assert not signals.has_hero and not signals.has_footer

    def test_signals_ignore_placeholder_title(self):
        assert CaptureSignals.from_analysis([], SEO()).title == ""
