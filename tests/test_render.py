"""Tests for site_analyzer.render module."""

from __future__ import annotations

import asyncio
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from site_analyzer.render import PlaywrightRenderer

from .conftest import PNG_BYTES


def _playwright(page):
    browser = AsyncMock()
    browser.new_page.return_value = page
    playwright = MagicMock()
    playwright.chromium.launch = AsyncMock(return_value=browser)
    manager = MagicMock()
    manager.__aenter__ = AsyncMock(return_value=playwright)
    manager.__aexit__ = AsyncMock(return_value=False)
    return manager, playwright, browser


def _page():
    page = AsyncMock()
    page.set_default_navigation_timeout = MagicMock()
    page.screenshot.return_value = PNG_BYTES
    return page


class TestPlaywrightRenderer:
    def test_screenshots_viewport(self, settings):
        page = _page()
        manager, playwright, browser = _playwright(page)

        with patch("site_analyzer.render.async_playwright", return_value=manager):
            data = asyncio.run(PlaywrightRenderer(settings).render("https://example.com"))

        assert data == PNG_BYTES
        playwright.chromium.launch.assert_awaited_once_with(headless=True)
        viewport = browser.new_page.call_args.kwargs["viewport"]
        assert viewport == {"width": 1200, "height": 800}
        page.goto.assert_awaited_once_with("https://example.com", wait_until="load")
        page.wait_for_timeout.assert_awaited_once_with(2000)
        browser.close.assert_awaited_once()

    def test_browser_closed_on_navigation_error(self, settings):
        page = _page()
        page.goto.side_effect = RuntimeError("net::ERR_NAME_NOT_RESOLVED")
        manager, _, browser = _playwright(page)

        with patch("site_analyzer.render.async_playwright", return_value=manager):
            with pytest.raises(RuntimeError):
                asyncio.run(PlaywrightRenderer(settings).render("https://example.com"))

        browser.close.assert_awaited_once()
