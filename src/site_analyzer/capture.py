"""Three-tier page capture: external services, in-process render, synthetic wireframe.

``CaptureService.capture`` always returns an artifact. Each tier's failures
are logged and the next tier is tried; the synthetic tier cannot fail.
"""

from __future__ import annotations

import asyncio
import logging
from html import escape

import filetype
import httpx

from site_analyzer.config import Settings
from site_analyzer.models import (
    AnalysisTarget,
    CaptureArtifact,
    CaptureEndpoint,
    CaptureSignals,
    CaptureTier,
)
from site_analyzer.relays import host_matches
from site_analyzer.render import PlaywrightRenderer, Renderer
from site_analyzer.templating import render as render_template

logger = logging.getLogger(__name__)

CAPTURE_ENDPOINTS: tuple[CaptureEndpoint, ...] = (
    CaptureEndpoint(
        name="ScreenshotAPI",
        endpoint_template=(
            "https://shot.screenshotapi.net/screenshot?token=demo&url={encoded_url}"
            "&width=1200&height=800&output=image&file_type=png&wait_for_event=load"
        ),
        timeout=15,
    ),
    CaptureEndpoint(
        name="ScreenshotMachine",
        endpoint_template=(
            "https://api.screenshotmachine.com/?key=demo&url={encoded_url}"
            "&dimension=1200x800&format=png&cacheLimit=0"
        ),
        timeout=12,
    ),
    CaptureEndpoint(
        name="Thum.io",
        endpoint_template="https://image.thum.io/get/width/1200/crop/800/noanimate/{encoded_url}",
        timeout=10,
    ),
    CaptureEndpoint(
        name="PagePeeker",
        endpoint_template="https://free.pagepeeker.com/v2/thumbs.php?size=l&url={encoded_url}",
        timeout=8,
    ),
)

RESTRICTIVE_DOMAINS: tuple[str, ...] = ("trae.ai", "stripe.com", "github.com", "google.com")

BLOCKED_HEADLINE = "Screenshot blocked by website security policy"
BLOCKED_SUBLINE = "This website prevents external screenshot capture"
UNAVAILABLE_HEADLINE = "Screenshot services temporarily unavailable"
UNAVAILABLE_SUBLINE = "Website structure analyzed from the page markup"

SVG_MIME = "image/svg+xml"
MAX_TITLE_CHARS = 50

# Sketch used when no structural signals are available.
GENERIC_SIGNALS = CaptureSignals(has_header=True, has_nav=True, has_footer=True)


class CaptureError(Exception):
    """Raised for a single failed capture attempt. Never escapes ``capture``."""


def is_restrictive(host: str) -> bool:
    return host_matches(host, RESTRICTIVE_DOMAINS)


def detect_image_mime(data: bytes) -> str | None:
    kind = filetype.guess(data)
    if kind and kind.mime.startswith("image/"):
        return kind.mime
    return None


class CaptureService:
    """Produce a visual preview of the target page.

    Build one per analysis run. ``transport`` and ``renderer`` are injectable
    for tests; by default httpx's network transport and headless Chromium are used.
    """

    def __init__(
        self,
        settings: Settings,
        transport: httpx.AsyncBaseTransport | None = None,
        renderer: Renderer | None = None,
        endpoints: tuple[CaptureEndpoint, ...] = CAPTURE_ENDPOINTS,
    ) -> None:
        self.settings = settings
        self._transport = transport
        self._renderer = renderer
        self._endpoints = endpoints

    async def capture(
        self,
        target: AnalysisTarget,
        signals: CaptureSignals | None = None,
    ) -> CaptureArtifact:
        try:
            artifact = await self._external(target)
        except Exception as exc:
            logger.error("External capture tier failed for %s: %s", target.url, exc)
            artifact = None
        if artifact is not None:
            return artifact

        if self.settings.render_enabled:
            artifact = await self._render(target)
            if artifact is not None:
                return artifact
        else:
            logger.debug("In-process rendering disabled, skipping render tier")

        return self.synthesize(target, signals)

    async def _external(self, target: AnalysisTarget) -> CaptureArtifact | None:
        async with httpx.AsyncClient(
            transport=self._transport,
            headers={"User-Agent": self.settings.user_agent},
            follow_redirects=True,
        ) as client:
            for endpoint in self._endpoints:
                try:
                    data, mime = await self._fetch_image(client, endpoint, target)
                except CaptureError as exc:
                    logger.warning("%s capture failed: %s", endpoint.name, exc)
                    continue
                except Exception as exc:
                    logger.warning("%s capture raised %s: %s", endpoint.name, type(exc).__name__, exc)
                    continue
                logger.info("Captured %s via %s (%d bytes)", target.url, endpoint.name, len(data))
                return CaptureArtifact.from_bytes(data, mime, CaptureTier.EXTERNAL, endpoint.name)
        return None

    async def _fetch_image(
        self,
        client: httpx.AsyncClient,
        endpoint: CaptureEndpoint,
        target: AnalysisTarget,
    ) -> tuple[bytes, str]:
        try:
            response = await asyncio.wait_for(
                client.get(endpoint.build_url(target), timeout=endpoint.timeout),
                timeout=endpoint.timeout,
            )
        except (asyncio.TimeoutError, httpx.TimeoutException) as exc:
            raise CaptureError(f"timed out after {endpoint.timeout}s") from exc
        except httpx.HTTPError as exc:
            raise CaptureError(str(exc) or type(exc).__name__) from exc

        if response.status_code != 200:
            raise CaptureError(f"returned status {response.status_code}")
        data = response.content
        if len(data) <= self.settings.min_capture_bytes:
            raise CaptureError(f"image too small ({len(data)} bytes)")
        mime = detect_image_mime(data)
        if mime is None:
            raise CaptureError("response is not a recognised image")
        return data, mime

    async def _render(self, target: AnalysisTarget) -> CaptureArtifact | None:
        renderer = self._renderer or PlaywrightRenderer(self.settings)
        try:
            data = await asyncio.wait_for(
                renderer.render(target.url),
                timeout=self.settings.render_timeout,
            )
        except asyncio.TimeoutError:
            logger.warning("Render of %s timed out after %ss", target.url, self.settings.render_timeout)
            return None
        except Exception as exc:
            logger.warning("Render of %s failed: %s", target.url, exc)
            return None

        mime = detect_image_mime(data or b"")
        if mime is None:
            logger.warning("Renderer returned no usable image for %s", target.url)
            return None
        return CaptureArtifact.from_bytes(
            data,
            mime,
            CaptureTier.RENDER,
            renderer.name,
            reason="External screenshot services unavailable",
        )

    def synthesize(
        self,
        target: AnalysisTarget,
        signals: CaptureSignals | None = None,
    ) -> CaptureArtifact:
        """Synthetic wireframe annotated with the domain and why no real image exists."""
        restricted = is_restrictive(target.host)
        headline = BLOCKED_HEADLINE if restricted else UNAVAILABLE_HEADLINE
        subline = BLOCKED_SUBLINE if restricted else UNAVAILABLE_SUBLINE
        sketch = signals if signals is not None and _has_structure(signals) else GENERIC_SIGNALS

        try:
            svg = render_template(
                "capture/wireframe.svg.j2",
                width=self.settings.viewport_width,
                height=self.settings.viewport_height,
                signals=sketch,
                title=(signals.title if signals else "")[:MAX_TITLE_CHARS],
                domain=target.host,
                restricted=restricted,
                headline=headline,
                subline=subline,
            )
        except Exception as exc:
            logger.error("Wireframe template failed, using minimal preview: %s", exc)
            svg = _minimal_svg(target.url)

        return CaptureArtifact.from_bytes(
            svg.strip().encode("utf-8"),
            SVG_MIME,
            CaptureTier.SYNTHETIC,
            "wireframe",
            reason=headline,
        )


def _has_structure(signals: CaptureSignals) -> bool:
    return any(
        (signals.has_header, signals.has_nav, signals.has_hero, signals.has_cards, signals.has_footer)
    )


def _minimal_svg(url: str) -> str:
    return (
        '<svg width="1200" height="800" xmlns="http://www.w3.org/2000/svg">'
        '<rect width="100%" height="100%" fill="#f8f9fa"/>'
        '<text x="50%" y="50%" text-anchor="middle" font-family="Arial" font-size="20" fill="#6c757d">'
        f"Preview not available for {escape(url)}"
        "</text></svg>"
    )
