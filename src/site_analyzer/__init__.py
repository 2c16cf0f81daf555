"""site-analyzer - Resilient website acquisition and heuristic analysis."""

__version__ = "0.1.0"

from site_analyzer.analyzer import Analyzer, analyze, analyze_sync
from site_analyzer.errors import (
    AllRelaysExhausted,
    AnalysisError,
    NetworkUnreachable,
    ParseFailure,
    UnknownAnalysisError,
    UpstreamDenied,
    UpstreamServerError,
    UpstreamTimeout,
)
from site_analyzer.models import AnalysisResult, CaptureArtifact, Recreation

__all__ = [
    "analyze",
    "analyze_sync",
    "Analyzer",
    "AnalysisResult",
    "CaptureArtifact",
    "Recreation",
    "AnalysisError",
    "AllRelaysExhausted",
    "NetworkUnreachable",
    "ParseFailure",
    "UpstreamDenied",
    "UpstreamServerError",
    "UpstreamTimeout",
    "UnknownAnalysisError",
]
