"""Analysis orchestration: fetch, parse, extract, synthesize, capture.

Pipeline stages:
  1. Fetching      relay chain returns raw markup
  2. Parsing       markup becomes a read-only ParsedDocument
  3. Extracting    seven signal extractors run concurrently
  4. Synthesizing  starter project generated from the signals
  5. Capturing     screenshot via external services, render or wireframe
  6. Complete

Only Fetching and Parsing can fail the run. Everything after is recovered
locally with defaults.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from enum import Enum
from typing import Any

import httpx

from site_analyzer.capture import CaptureService
from site_analyzer.config import Settings
from site_analyzer.errors import AnalysisError, UnknownAnalysisError
from site_analyzer.extractors import get_extractor, list_extractors
from site_analyzer.fetcher import RelayFetcher
from site_analyzer.models import (
    SEO,
    AnalysisResult,
    AnalysisTarget,
    CaptureSignals,
    CodeExtraction,
    Design,
    Performance,
    ProgressEvent,
    Recreation,
    TechStack,
    VisualAnalysis,
)
from site_analyzer.parser import ParsedDocument, parse_document
from site_analyzer.recreation import recreate_website
from site_analyzer.relays import select_relays
from site_analyzer.render import Renderer

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int, str], None]


class Stage(str, Enum):
    IDLE = "idle"
    FETCHING = "fetching"
    PARSING = "parsing"
    EXTRACTING = "extracting"
    SYNTHESIZING = "synthesizing"
    CAPTURING = "capturing"
    COMPLETE = "complete"
    FAILED = "failed"


# (step index, message) emitted on entry to each stage.
STAGE_PROGRESS: dict[Stage, tuple[int, str]] = {
    Stage.FETCHING: (1, "Fetching website content..."),
    Stage.PARSING: (2, "Parsing document structure..."),
    Stage.EXTRACTING: (3, "Extracting design, components and code signals..."),
    Stage.SYNTHESIZING: (4, "Generating website recreation..."),
    Stage.CAPTURING: (5, "Capturing screenshot..."),
    Stage.COMPLETE: (6, "Analysis complete!"),
}
TOTAL_STEPS = len(STAGE_PROGRESS)

EXTRACTOR_DEFAULTS: dict[str, Callable[[], Any]] = {
    "tech_stack": TechStack,
    "design": Design,
    "components": list,
    "seo": SEO,
    "performance": Performance,
    "visual_analysis": VisualAnalysis,
    "code_extraction": CodeExtraction,
}


class Analyzer:
    """Runs one analysis. Build a new instance per call."""

    def __init__(
        self,
        settings: Settings | None = None,
        on_progress: ProgressCallback | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        capture_transport: httpx.AsyncBaseTransport | None = None,
        renderer: Renderer | None = None,
    ) -> None:
        self.settings = settings or Settings.from_env()
        self._on_progress = on_progress
        self._transport = transport
        self._capture_transport = capture_transport if capture_transport is not None else transport
        self._renderer = renderer
        self.stage = Stage.IDLE
        self.events: list[ProgressEvent] = []

    def _emit(self, step: int, message: str) -> None:
        event = ProgressEvent(step_index=step, total_steps=TOTAL_STEPS, message=message)
        self.events.append(event)
        logger.debug("Progress %d/%d: %s", step, TOTAL_STEPS, message)
        if self._on_progress:
            try:
                self._on_progress(event.step_index, event.total_steps, event.message)
            except Exception as exc:
                logger.warning("Progress callback raised at step %d: %s", step, exc)

    def _enter(self, stage: Stage) -> None:
        self.stage = stage
        step, message = STAGE_PROGRESS[stage]
        self._emit(step, message)

    async def run(self, url: str) -> AnalysisResult:
        try:
            self._enter(Stage.FETCHING)
            target = AnalysisTarget.from_url(url)
            fetcher = RelayFetcher(self.settings, transport=self._transport)
            fetch_step = STAGE_PROGRESS[Stage.FETCHING][0]
            raw = await fetcher.fetch(
                target,
                select_relays(target.host),
                on_progress=lambda message: self._emit(fetch_step, message),
            )

            self._enter(Stage.PARSING)
            doc = parse_document(raw)
        except AnalysisError:
            self.stage = Stage.FAILED
            raise
        except Exception as exc:
            self.stage = Stage.FAILED
            logger.error("Analysis of %s failed unexpectedly: %s", url, exc)
            raise UnknownAnalysisError(str(exc)) from exc

        self._enter(Stage.EXTRACTING)
        signals = await self._extract(doc)

        self._enter(Stage.SYNTHESIZING)
        recreation = self._synthesize(target.url, signals)

        self._enter(Stage.CAPTURING)
        capture = CaptureService(
            self.settings,
            transport=self._capture_transport,
            renderer=self._renderer,
        )
        screenshot = await capture.capture(
            target,
            CaptureSignals.from_analysis(signals["components"], signals["seo"]),
        )

        result = AnalysisResult(
            url=target.url,
            recreation=recreation,
            screenshot=screenshot,
            **signals,
        )
        self._enter(Stage.COMPLETE)
        return result

    async def _extract(self, doc: ParsedDocument) -> dict[str, Any]:
        names = list_extractors()
        outcomes = await asyncio.gather(
            *(asyncio.to_thread(get_extractor(name), doc) for name in names),
            return_exceptions=True,
        )
        signals: dict[str, Any] = {}
        for name, outcome in zip(names, outcomes):
            if isinstance(outcome, Exception):
                logger.warning("Extractor %s failed, using defaults: %s", name, outcome)
                outcome = EXTRACTOR_DEFAULTS[name]()
            signals[name] = outcome
        return signals

    def _synthesize(self, url: str, signals: dict[str, Any]) -> Recreation | None:
        try:
            return recreate_website(
                url,
                tech_stack=signals["tech_stack"],
                design=signals["design"],
                components=signals["components"],
                visual_analysis=signals["visual_analysis"],
                code_extraction=signals["code_extraction"],
                seo=signals["seo"],
            )
        except Exception as exc:
            logger.warning("Website recreation failed, omitting it: %s", exc)
            return None


async def analyze(
    url: str,
    on_progress: ProgressCallback | None = None,
    settings: Settings | None = None,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
    capture_transport: httpx.AsyncBaseTransport | None = None,
    renderer: Renderer | None = None,
) -> AnalysisResult:
    """Analyze a website. Raises an ``AnalysisError`` subclass when no content can be obtained."""
    analyzer = Analyzer(
        settings,
        on_progress=on_progress,
        transport=transport,
        capture_transport=capture_transport,
        renderer=renderer,
    )
    return await analyzer.run(url)


def analyze_sync(
    url: str,
    on_progress: ProgressCallback | None = None,
    settings: Settings | None = None,
    **kwargs: Any,
) -> AnalysisResult:
    """Blocking wrapper around ``analyze`` for callers without an event loop."""
    return asyncio.run(analyze(url, on_progress, settings, **kwargs))
