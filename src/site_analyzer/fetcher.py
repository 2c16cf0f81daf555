"""Fetch page markup through an ordered chain of third-party relays."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable

import httpx
from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_fixed,
)

from site_analyzer.config import Settings
from site_analyzer.envelopes import EnvelopeError, decode_envelope
from site_analyzer.errors import (
    FailureCause,
    RelayError,
    RelayFailure,
    classify_relay_failures,
)
from site_analyzer.models import AnalysisTarget, RawDocument, RelayDescriptor

logger = logging.getLogger(__name__)

RELAY_ACCEPT = "application/json, text/plain, */*"


class RelayFetcher:
    """Tries relays in order until one returns plausible markup.

    Build one per analysis run; it holds no state between calls.
    """

    def __init__(
        self,
        settings: Settings,
        transport: httpx.AsyncBaseTransport | None = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self.settings = settings
        self._transport = transport
        self._sleep = sleep

    async def fetch(
        self,
        target: AnalysisTarget,
        relays: list[RelayDescriptor],
        on_progress: Callable[[str], None] | None = None,
    ) -> RawDocument:
        """Return the first plausible document, or raise the classified exhaustion error."""
        failures: list[RelayFailure] = []
        if not relays:
            raise classify_relay_failures(failures)

        pending = iter(relays)
        retrying = AsyncRetrying(
            stop=stop_after_attempt(len(relays)),
            wait=wait_fixed(self.settings.relay_delay),
            retry=retry_if_exception_type(RelayError),
            sleep=self._sleep,
            reraise=True,
        )

        headers = {
            "User-Agent": self.settings.user_agent,
            "Accept": RELAY_ACCEPT,
            "Accept-Language": "en-US,en;q=0.9",
        }
        async with httpx.AsyncClient(
            transport=self._transport,
            headers=headers,
            follow_redirects=True,
        ) as client:
            try:
                async for attempt in retrying:
                    with attempt:
                        relay = next(pending)
                        logger.info("Trying %s relay for %s", relay.name, target.url)
                        if on_progress:
                            on_progress(f"Connecting via {relay.name}...")
                        try:
                            markup = await self._attempt(client, relay, target)
                        except RelayError as exc:
                            failures.append(exc.failure)
                            logger.warning("%s relay failed: %s", relay.name, exc.failure.detail)
                            raise
                        logger.info("%s relay returned %d chars", relay.name, len(markup))
                        return RawDocument(markup=markup, relay=relay.name, url=target.url)
            except RelayError as exc:
                logger.error("All %d relays failed for %s", len(failures), target.url)
                raise classify_relay_failures(failures) from exc

        raise classify_relay_failures(failures)

    async def _attempt(
        self,
        client: httpx.AsyncClient,
        relay: RelayDescriptor,
        target: AnalysisTarget,
    ) -> str:
        """One relay call raced against the relay's timeout."""
        try:
            response = await asyncio.wait_for(
                client.get(relay.build_url(target), timeout=relay.timeout),
                timeout=relay.timeout,
            )
        except (asyncio.TimeoutError, httpx.TimeoutException) as exc:
            raise RelayError(relay.name, FailureCause.TIMEOUT, f"{relay.name} timeout") from exc
        except httpx.ConnectError as exc:
            raise RelayError(relay.name, FailureCause.NETWORK, f"connection failed ({exc})") from exc
        except httpx.HTTPError as exc:
            raise RelayError(relay.name, FailureCause.TRANSPORT, str(exc) or type(exc).__name__) from exc

        status = response.status_code
        if not relay.accepts_status(status):
            raise RelayError(relay.name, _status_cause(status), f"returned status {status}", status)

        try:
            markup = decode_envelope(response.text)
        except EnvelopeError as exc:
            raise RelayError(relay.name, FailureCause.ENVELOPE, str(exc), status) from exc

        if len(markup.strip()) < self.settings.min_markup_chars:
            raise RelayError(
                relay.name,
                FailureCause.IMPLAUSIBLE,
                f"content too short ({len(markup.strip())} chars)",
                status,
            )
        return markup


def _status_cause(status: int) -> FailureCause:
    if status in (401, 403, 451):
        return FailureCause.DENIED
    if status >= 500:
        return FailureCause.SERVER_ERROR
    return FailureCause.STATUS
