"""Screenshot capture — drives a Playwright browser to a page and screenshots it."""

from __future__ import annotations

import asyncio
import logging
import re
from typing import Any, Optional

from playwright.async_api import Browser, Error as PlaywrightError, Page, Playwright, async_playwright

from shotdiff.errors import ExternalToolFailure
from shotdiff.models.config import CaptureConfig, ClickStep, validate_config
from shotdiff.models.results import CaptureResult

logger = logging.getLogger(__name__)

_JPG_RE = re.compile(r"\.(jpg|jpeg)$", re.IGNORECASE)
_PNG_RE = re.compile(r"\.png$", re.IGNORECASE)


def image_type(name: Optional[str]) -> Optional[str]:
    """Return the Playwright screenshot type for a file name: ``jpeg``, ``png`` or None."""
    if not name:
        return None
    if _JPG_RE.search(name):
        return "jpeg"
    if _PNG_RE.search(name):
        return "png"
    return None


async def launch_browser(playwright: Playwright, engine: str) -> Browser:
    """Launch one of the supported engines, firefox unless told otherwise."""
    match engine:
        case "chromium":
            return await playwright.chromium.launch()
        case "webkit":
            return await playwright.webkit.launch()
        case _:
            return await playwright.firefox.launch()


async def perform_clicks(page: Page, clicks: list[ClickStep]) -> Page:
    """Run click steps strictly in order, pausing after a step when asked."""
    for step in clicks:
        logger.debug("%s click on %s%s", step.button, step.selector,
                     f" [wait {step.wait_after}ms]" if step.wait_after else "")
        await page.click(step.selector, button=step.button)
        if step.wait_after > 0:
            await page.wait_for_timeout(step.wait_after)
    return page


async def _take_screenshot(page: Page, config: CaptureConfig) -> bytes:
    output = config.output_path()
    kwargs: dict[str, Any] = {}
    if output is not None:
        await asyncio.to_thread(output.parent.mkdir, parents=True, exist_ok=True)
        kwargs["path"] = str(output)
    screenshot_type = image_type(config.name)
    if screenshot_type:
        kwargs["type"] = screenshot_type

    if config.el is None:
        return await page.screenshot(full_page=config.full_page, **kwargs)

    element = await page.wait_for_selector(config.el)
    if element is None:
        raise ExternalToolFailure("playwright", ValueError(f"Element {config.el} not found"))
    return await element.screenshot(**kwargs)


async def capture(config: CaptureConfig | dict[str, Any]) -> CaptureResult:
    """Open ``config.goto``, perform clicks and screenshot the page or element.

    The image is saved to ``path/name`` when ``path`` is set and is always
    returned in ``CaptureResult.binary``.
    """
    config = validate_config(CaptureConfig, config)
    logger.info("Generating screenshot %s in %s browser", config.name, config.engine)

    try:
        async with async_playwright() as p:
            browser = await launch_browser(p, config.engine)
            try:
                page = await browser.new_page()
                await page.set_viewport_size({"width": config.width, "height": config.height})
                await page.goto(config.goto, wait_until="networkidle")
                await perform_clicks(page, config.clicks)
                binary = await _take_screenshot(page, config)
            finally:
                await browser.close()
    except PlaywrightError as e:
        raise ExternalToolFailure("playwright", e) from e

    output = config.output_path()
    msg = f"Saved to: {output}" if output else f"Captured {config.name or config.goto}"
    if output:
        logger.info(msg)

    return CaptureResult(
        msg=msg,
        name=config.name,
        path=config.path,
        el=config.el,
        binary=binary,
    )
