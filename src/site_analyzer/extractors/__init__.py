"""Signal extractor registry with lazy imports."""

from __future__ import annotations

import importlib
from collections.abc import Callable
from typing import Any

from site_analyzer.parser import ParsedDocument

Extractor = Callable[[ParsedDocument], Any]

_EXTRACTOR_REGISTRY: dict[str, str] = {
    "tech_stack": "site_analyzer.extractors.tech.detect_tech_stack",
    "design": "site_analyzer.extractors.design.extract_design",
    "components": "site_analyzer.extractors.components.map_components",
    "seo": "site_analyzer.extractors.seo.extract_seo",
    "performance": "site_analyzer.extractors.performance.estimate_performance",
    "visual_analysis": "site_analyzer.extractors.visual.analyze_visuals",
    "code_extraction": "site_analyzer.extractors.code.extract_code",
}


def get_extractor(name: str) -> Extractor:
    """Resolve an extractor function by name. Uses lazy imports."""
    if name not in _EXTRACTOR_REGISTRY:
        available = ", ".join(sorted(_EXTRACTOR_REGISTRY))
        raise ValueError(f"Unknown extractor '{name}'. Available: {available}")

    module_path, func_name = _EXTRACTOR_REGISTRY[name].rsplit(".", 1)
    module = importlib.import_module(module_path)
    return getattr(module, func_name)


def list_extractors() -> list[str]:
    """Extractor names in pipeline order."""
    return list(_EXTRACTOR_REGISTRY)
