"""Headless-browser rasterization of a page, used only by the capture chain."""

from __future__ import annotations

import logging
from typing import Protocol

from playwright.async_api import async_playwright

from site_analyzer.config import Settings

logger = logging.getLogger(__name__)


class Renderer(Protocol):
    name: str

    async def render(self, url: str) -> bytes:
        """Return PNG bytes of the page's first viewport."""
        ...


class PlaywrightRenderer:
    """Navigate headless Chromium to the page and screenshot the viewport."""

    name = "Playwright"

    def __init__(self, settings: Settings) -> None:
        self.settings = settings

    async def render(self, url: str) -> bytes:
        async with async_playwright() as playwright:
            browser = await playwright.chromium.launch(headless=True)
            try:
                page = await browser.new_page(
                    viewport={
                        "width": self.settings.viewport_width,
                        "height": self.settings.viewport_height,
                    },
                    user_agent=self.settings.user_agent,
                )
                page.set_default_navigation_timeout(self.settings.render_timeout * 1000)
                logger.info("Rendering %s", url)
                await page.goto(url, wait_until="load")
                if self.settings.render_settle_seconds:
                    await page.wait_for_timeout(int(self.settings.render_settle_seconds * 1000))
                return await page.screenshot(type="png")
            finally:
                await browser.close()
