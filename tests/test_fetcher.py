"""Tests for site_analyzer.fetcher module."""

from __future__ import annotations

import asyncio
import json
from dataclasses import replace

import httpx
import pytest

from site_analyzer.errors import (
    AllRelaysExhausted,
    FailureCause,
    NetworkUnreachable,
    UpstreamServerError,
    UpstreamTimeout,
)
from site_analyzer.fetcher import RelayFetcher
from site_analyzer.models import AnalysisTarget, RelayDescriptor
from site_analyzer.relays import select_relays

from .conftest import SAMPLE_HTML, allorigins_body

TARGET = AnalysisTarget.from_url("https://example.com")


def _relays(timeout: float = 1.0) -> list[RelayDescriptor]:
    return [
        RelayDescriptor(name=name, endpoint_template=f"https://{name.lower()}.test/?u={{encoded_url}}", timeout=timeout)
        for name in ("First", "Second", "Third")
    ]


def _fetch(settings, handler, relays=None, on_progress=None, sleep=None):
    kwargs = {"transport": httpx.MockTransport(handler)}
    if sleep is not None:
        kwargs["sleep"] = sleep
    fetcher = RelayFetcher(settings, **kwargs)
    return asyncio.run(fetcher.fetch(TARGET, relays or _relays(), on_progress=on_progress))


class TestRelayFetcher:
    def test_first_success_short_circuits(self, settings):
        calls = []

        def handler(request):
            calls.append(request.url.host)
            return httpx.Response(200, text=allorigins_body(SAMPLE_HTML))

        doc = _fetch(settings, handler, relays=select_relays("example.com"))
        assert doc.relay == "AllOrigins"
        assert doc.markup == SAMPLE_HTML
        assert doc.url == "https://example.com"
        assert calls == ["api.allorigins.win"]

    def test_falls_back_to_next_relay(self, settings):
        messages = []

        def handler(request):
            if request.url.host == "first.test":
                return httpx.Response(500, text="boom")
            return httpx.Response(200, text=SAMPLE_HTML)

        doc = _fetch(settings, handler, on_progress=messages.append)
        assert doc.relay == "Second"
        assert messages == ["Connecting via First...", "Connecting via Second..."]

    def test_sends_browser_headers(self, settings):
        seen = {}

        def handler(request):
            seen.update(request.headers)
            return httpx.Response(200, text=SAMPLE_HTML)

        _fetch(replace(settings, user_agent="UA/1.0"), handler)
        assert seen["user-agent"] == "UA/1.0"
        assert "application/json" in seen["accept"]

    def test_all_server_errors(self, settings):
        calls = []

        def handler(request):
            calls.append(request.url.host)
            return httpx.Response(500)

        with pytest.raises(UpstreamServerError) as excinfo:
            _fetch(settings, handler)
        error = excinfo.value
        assert isinstance(error, AllRelaysExhausted)
        assert [f.relay for f in error.failures] == ["First", "Second", "Third"]
        assert all(f.status == 500 for f in error.failures)
        assert len(calls) == 3

    def test_mixed_failures_are_generic_exhaustion(self, settings):
        def handler(request):
            host = request.url.host
            if host == "first.test":
                return httpx.Response(403)
            if host == "second.test":
                raise httpx.ConnectError("refused", request=request)
            return httpx.Response(200, text="tiny")

        with pytest.raises(AllRelaysExhausted) as excinfo:
            _fetch(settings, handler)
        error = excinfo.value
        assert type(error) is AllRelaysExhausted
        assert [f.cause for f in error.failures] == [
            FailureCause.DENIED,
            FailureCause.NETWORK,
            FailureCause.IMPLAUSIBLE,
        ]
        assert len(error.reasons) == 3

    def test_all_connect_errors(self, settings):
        def handler(request):
            raise httpx.ConnectError("dns failure", request=request)

        with pytest.raises(NetworkUnreachable):
            _fetch(settings, handler)

    def test_unknown_envelope_is_relay_failure(self, settings):
        def handler(request):
            if request.url.host == "first.test":
                return httpx.Response(200, text=json.dumps({"unexpected": SAMPLE_HTML}))
            return httpx.Response(200, text=SAMPLE_HTML)

        assert _fetch(settings, handler).relay == "Second"

    def test_short_content_rejected(self, settings):
        def handler(request):
            return httpx.Response(200, text=allorigins_body("<html></html>"))

        with pytest.raises(AllRelaysExhausted) as excinfo:
            _fetch(settings, handler)
        assert {f.cause for f in excinfo.value.failures} == {FailureCause.IMPLAUSIBLE}

    def test_slow_relay_loses_race(self, settings):
        async def handler(request):
            await asyncio.sleep(1)
            return httpx.Response(200, text=SAMPLE_HTML)

        with pytest.raises(UpstreamTimeout) as excinfo:
            _fetch(settings, handler, relays=_relays(timeout=0.05))
        assert all(f.cause is FailureCause.TIMEOUT for f in excinfo.value.failures)

    def test_delay_between_relays_not_after_last(self, settings):
        delays = []

        async def fake_sleep(seconds):
            delays.append(seconds)

        def handler(request):
            return httpx.Response(502)

        with pytest.raises(AllRelaysExhausted):
            _fetch(replace(settings, relay_delay=0.75), handler, sleep=fake_sleep)
        assert delays == [0.75, 0.75]

    def test_no_delay_after_success(self, settings):
        delays = []

        async def fake_sleep(seconds):
            delays.append(seconds)

        def handler(request):
            return httpx.Response(200, text=SAMPLE_HTML)

        _fetch(replace(settings, relay_delay=0.75), handler, sleep=fake_sleep)
        assert delays == []

    def test_empty_relay_list(self, settings):
        fetcher = RelayFetcher(settings, transport=httpx.MockTransport(lambda r: httpx.Response(200)))
        with pytest.raises(AllRelaysExhausted):
            asyncio.run(fetcher.fetch(TARGET, []))
