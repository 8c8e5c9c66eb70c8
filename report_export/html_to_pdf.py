#!/usr/bin/env python3
"""
Convert HTML to PDF using Playwright/Chromium.

The service calls render_pdf() with an HTML string. From the command line
the same print settings apply to a local file:

    python -m report_export.html_to_pdf input.html output.pdf [--install-browser]
"""
from __future__ import annotations

import argparse
import asyncio
import logging
import subprocess
import sys
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator, Optional, Sequence

from playwright.async_api import Page, async_playwright

logger = logging.getLogger(__name__)

PAGE_FORMAT = "Letter"
PAGE_MARGINS = {"top": "18mm", "right": "12mm", "bottom": "18mm", "left": "12mm"}


def ensure_chromium() -> None:
    """Install Playwright's Chromium build. Idempotent."""
    subprocess.run([sys.executable, "-m", "playwright", "install", "chromium"], check=True)


@asynccontextmanager
async def chromium_page(
    executable_path: Optional[str] = None,
    launch_args: Sequence[str] = (),
) -> AsyncIterator[Page]:
    """Yield a fresh page in its own headless browser.

    The browser and the Playwright driver are shut down when the block
    exits, whether it returns or raises.
    """
    async with async_playwright() as p:
        browser = await p.chromium.launch(
            headless=True,
            executable_path=executable_path or None,
            args=list(launch_args),
        )
        try:
            page = await browser.new_page()
            yield page
        finally:
            await browser.close()
            logger.debug("Chromium closed")


async def render_pdf(
    html: str,
    *,
    executable_path: Optional[str] = None,
    launch_args: Sequence[str] = (),
) -> bytes:
    """Rasterize *html* to Letter-sized PDF bytes once the network is idle."""
    async with chromium_page(executable_path, launch_args) as page:
        await page.set_content(html, wait_until="networkidle")
        pdf = await page.pdf(
            format=PAGE_FORMAT,
            print_background=True,
            margin=PAGE_MARGINS,
        )
    logger.info("Rendered PDF (%d bytes)", len(pdf))
    return pdf


async def render_file(html_path: Path, pdf_path: Path) -> None:
    pdf = await render_pdf(html_path.read_text("utf-8"))
    pdf_path.write_bytes(pdf)


def main(argv: Optional[Sequence[str]] = None) -> None:
    ap = argparse.ArgumentParser(description="Render an HTML file to PDF with headless Chromium")
    ap.add_argument("html_path", help="Input HTML file")
    ap.add_argument("pdf_path", help="Output PDF file")
    ap.add_argument("--install-browser", action="store_true", help="Run `playwright install chromium` first")
    args = ap.parse_args(argv)

    html_path = Path(args.html_path).expanduser().resolve()
    pdf_path = Path(args.pdf_path).expanduser().resolve()
    if not html_path.exists():
        sys.exit(f"{html_path} not found")

    if args.install_browser:
        ensure_chromium()
    asyncio.run(render_file(html_path, pdf_path))
    print(f"PDF written to {pdf_path}")


if __name__ == "__main__":
    main()
