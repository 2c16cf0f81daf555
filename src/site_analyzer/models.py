"""Pydantic models for the analysis pipeline."""

from __future__ import annotations

import base64
import re
from enum import Enum
from typing import Any, Literal
from urllib.parse import quote, urlparse

from pydantic import BaseModel, ConfigDict, Field

_SCHEME_RE = re.compile(r"^([a-zA-Z][a-zA-Z0-9+.-]*)://")


class AnalysisTarget(BaseModel):
    """The normalized absolute URL being analyzed."""

    model_config = ConfigDict(frozen=True)

    url: str
    host: str

    @classmethod
    def from_url(cls, raw: str) -> AnalysisTarget:
        """Prefix a bare host with https:// and validate that a host is present."""
        url = (raw or "").strip()
        if not url:
            raise ValueError("Invalid URL provided for analysis")
        scheme = _SCHEME_RE.match(url)
        if scheme and scheme.group(1).lower() not in ("http", "https"):
            raise ValueError(f"Invalid URL provided for analysis: unsupported scheme {scheme.group(1)!r}")
        if not scheme:
            url = "https://" + url
        host = urlparse(url).hostname
        if not host:
            raise ValueError(f"Invalid URL provided for analysis: {raw!r}")
        return cls(url=url, host=host.lower())


class RelayDescriptor(BaseModel):
    """A third-party endpoint that fetches a page (or an image of it) for us.

    ``endpoint_template`` may contain ``{url}`` (raw target URL) and/or
    ``{encoded_url}`` (percent-encoded target URL).
    """

    model_config = ConfigDict(frozen=True)

    name: str
    endpoint_template: str
    timeout: float = Field(description="Per-attempt timeout in seconds")
    tolerated_statuses: frozenset[int] = Field(default_factory=frozenset)

    def build_url(self, target: AnalysisTarget) -> str:
        return self.endpoint_template.format(
            url=target.url,
            encoded_url=quote(target.url, safe=""),
        )

    def accepts_status(self, status: int) -> bool:
        return 200 <= status < 300 or status in self.tolerated_statuses


class CaptureEndpoint(RelayDescriptor):
    """A screenshot service returning raw image bytes."""


class RawDocument(BaseModel):
    """Decoded markup plus the relay it came from."""

    markup: str
    relay: str
    url: str = Field(default="", description="Target URL the markup was fetched for")


class TechStack(BaseModel):
    frontend: list[str] = Field(default_factory=lambda: ["HTML/CSS/JavaScript"])
    backend: list[str] = Field(default_factory=lambda: ["Server-side technology not detected"])
    database: list[str] = Field(default_factory=lambda: ["Database not detected"])
    hosting: list[str] = Field(default_factory=lambda: ["Hosting provider not detected"])
    analytics: list[str] = Field(default_factory=lambda: ["No analytics detected"])
    build_tools: list[str] = Field(default_factory=list)


class Design(BaseModel):
    colors: list[str] = Field(
        default_factory=lambda: ["#000000", "#ffffff", "#333333", "#666666", "#f5f5f5"]
    )
    fonts: list[str] = Field(default_factory=lambda: ["Arial", "Helvetica", "sans-serif"])
    spacing: str = "8px grid system"
    breakpoints: list[str] = Field(
        default_factory=lambda: ["sm: 768px", "md: 1024px", "lg: 1200px", "xl: 1440px"]
    )


class Performance(BaseModel):
    """Estimated from the downloaded markup only; nothing here is a network measurement."""

    load_time: float = Field(default=0.0, description="Estimated load time in seconds")
    size_kb: int = 0
    requests: int = 0
    score: int = Field(default=0, ge=0, le=100)
    estimated: Literal[True] = True


class SEO(BaseModel):
    title: str = "No title found"
    description: str = "No description found"
    keywords: list[str] = Field(default_factory=list)
    meta_tags: int = 0


Complexity = Literal["simple", "moderate", "complex"]


class Component(BaseModel):
    name: str
    type: str
    size: str
    description: str | None = None
    props: list[str] = Field(default_factory=list)
    children: int | None = None
    complexity: Complexity | None = None


class VisualAnalysis(BaseModel):
    has_animations: bool = False
    animations: list[str] = Field(default_factory=list)
    background_type: str = "solid"
    background: list[str] = Field(default_factory=lambda: ["solid"])
    has_graphics: bool = False
    graphics: list[str] = Field(default_factory=list)
    has_visual_effects: bool = False
    effects: list[str] = Field(default_factory=list)
    color_scheme: list[str] = Field(default_factory=lambda: ["light"])
    layout: list[str] = Field(default_factory=lambda: ["standard"])


class CodeExtraction(BaseModel):
    has_react_components: bool = False
    has_vue_components: bool = False
    json_data: list[Any] = Field(default_factory=list)
    config_files: list[str] = Field(default_factory=list)
    api_endpoints: list[str] = Field(default_factory=list)
    external_libraries: list[str] = Field(default_factory=list)
    inline_scripts: list[str] = Field(default_factory=list)
    components: list[str] = Field(default_factory=list)


Framework = Literal["vanilla", "react", "vue"]


class Recreation(BaseModel):
    html: str
    css: str
    javascript: str
    framework: Framework
    dependencies: list[str] = Field(default_factory=list)
    instructions: str = ""


class CaptureTier(str, Enum):
    EXTERNAL = "external"
    RENDER = "render"
    SYNTHETIC = "synthetic"


class CaptureArtifact(BaseModel):
    """A data-URI encoded image of the target page."""

    data_uri: str
    tier: CaptureTier
    source: str = Field(description="Service, renderer or generator that produced the image")
    reason: str | None = Field(
        default=None,
        description="Why a lower-fidelity tier was used (None for external captures)",
    )

    @property
    def mime_type(self) -> str:
        return self.data_uri[len("data:"):].split(";", 1)[0]

    @classmethod
    def from_bytes(
        cls,
        data: bytes,
        mime_type: str,
        tier: CaptureTier,
        source: str,
        reason: str | None = None,
    ) -> CaptureArtifact:
        encoded = base64.b64encode(data).decode("ascii")
        return cls(
            data_uri=f"data:{mime_type};base64,{encoded}",
            tier=tier,
            source=source,
            reason=reason,
        )


class CaptureSignals(BaseModel):
    """Structural hints used to sketch a synthetic page diagram."""

    title: str = ""
    has_header: bool = False
    has_nav: bool = False
    has_hero: bool = False
    has_cards: bool = False
    has_footer: bool = False

    @classmethod
    def from_analysis(cls, components: list[Component], seo: SEO | None = None) -> CaptureSignals:
        names = {c.name for c in components}
        title = seo.title if seo and seo.title != SEO().title else ""
        return cls(
            title=title,
            has_header="Header" in names,
            has_nav="Navigation Menu" in names,
            has_hero="Hero Section" in names,
            has_cards="Cards" in names,
            has_footer="Footer" in names,
        )


class ProgressEvent(BaseModel):
    step_index: int
    total_steps: int
    message: str


class AnalysisResult(BaseModel):
    """Final aggregated output from one analysis run."""

    url: str = Field(description="Resolved target URL")
    tech_stack: TechStack
    design: Design
    performance: Performance
    seo: SEO
    components: list[Component] = Field(default_factory=list)
    visual_analysis: VisualAnalysis
    code_extraction: CodeExtraction
    recreation: Recreation | None = None
    screenshot: CaptureArtifact | None = None
