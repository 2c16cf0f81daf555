"""Tests for site_analyzer.cli module."""

from __future__ import annotations

import json
from unittest.mock import patch

import pytest

from site_analyzer.cli import build_parser, main
from site_analyzer.errors import FailureCause, RelayFailure, UpstreamTimeout
from site_analyzer.models import (
    SEO,
    AnalysisResult,
    CaptureArtifact,
    CaptureTier,
    CodeExtraction,
    Design,
    Performance,
    TechStack,
    VisualAnalysis,
)


@pytest.fixture()
def result() -> AnalysisResult:
    return AnalysisResult(
        url="https://example.com",
        tech_stack=TechStack(),
        design=Design(),
        performance=Performance(),
        seo=SEO(title="Example"),
        visual_analysis=VisualAnalysis(),
        code_extraction=CodeExtraction(),
        screenshot=CaptureArtifact.from_bytes(b"<svg/>", "image/svg+xml", CaptureTier.SYNTHETIC, "wireframe"),
    )


class TestBuildParser:
    def test_requires_url(self):
        parser = build_parser()
        with pytest.raises(SystemExit):
            parser.parse_args([])

    def test_defaults(self):
        args = build_parser().parse_args(["example.com"])
        assert args.url == "example.com"
        assert args.output is None
        assert args.verbose is False
        assert args.no_render is False
        assert args.no_screenshot_data is False
        assert args.relay_delay is None

    def test_flags(self):
        args = build_parser().parse_args(
            ["example.com", "-o", "out.json", "-v", "--no-render", "--no-screenshot-data", "--relay-delay", "0.5"]
        )
        assert args.output == "out.json"
        assert args.verbose is True
        assert args.no_render is True
        assert args.no_screenshot_data is True
        assert args.relay_delay == 0.5


class TestMain:
    def test_prints_json(self, result, capsys):
        with patch("site_analyzer.cli.analyze_sync", return_value=result), \
             patch("site_analyzer.config.load_dotenv"):
            code = main(["example.com"])

        assert code == 0
        payload = json.loads(capsys.readouterr().out)
        assert payload["seo"]["title"] == "Example"
        assert payload["screenshot"]["tier"] == "synthetic"
        assert payload["screenshot"]["data_uri"].startswith("data:image/svg+xml")

    def test_overrides_applied(self, result):
        with patch("site_analyzer.cli.analyze_sync", return_value=result) as mock_analyze, \
             patch("site_analyzer.config.load_dotenv"):
            main(["example.com", "--no-render", "--relay-delay", "0"])

        settings = mock_analyze.call_args.kwargs["settings"]
        assert settings.render_enabled is False
        assert settings.relay_delay == 0.0

    def test_no_screenshot_data(self, result, capsys):
        with patch("site_analyzer.cli.analyze_sync", return_value=result), \
             patch("site_analyzer.config.load_dotenv"):
            main(["example.com", "--no-screenshot-data"])

        payload = json.loads(capsys.readouterr().out)
        assert "data_uri" not in payload["screenshot"]
        assert payload["screenshot"]["source"] == "wireframe"

    def test_writes_output_file(self, result, tmp_path):
        out = tmp_path / "result.json"
        with patch("site_analyzer.cli.analyze_sync", return_value=result), \
             patch("site_analyzer.config.load_dotenv"):
            code = main(["example.com", "-o", str(out)])

        assert code == 0
        assert json.loads(out.read_text(encoding="utf-8"))["url"] == "https://example.com"

    def test_analysis_error_exit_code(self, capsys):
        error = UpstreamTimeout(
            "All relay services failed",
            [RelayFailure(relay="AllOrigins", cause=FailureCause.TIMEOUT, detail="AllOrigins timeout")],
        )
        with patch("site_analyzer.cli.analyze_sync", side_effect=error), \
             patch("site_analyzer.config.load_dotenv"):
            code = main(["example.com"])

        assert code == 1
        err = capsys.readouterr().err
        assert "Request timed out" in err
        assert "AllOrigins: AllOrigins timeout" in err
        assert "Suggestions:" in err
