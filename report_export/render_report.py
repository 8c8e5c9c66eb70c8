#!/usr/bin/env python3
"""Render a local report JSON to HTML (and optionally PDF) without touching storage.

Usage:
    render-report report.json --out report.html [--pdf report.pdf]
"""
from __future__ import annotations

import argparse
import asyncio
import json
import sys
from pathlib import Path
from typing import Optional, Sequence

from .config import get_settings
from .html_to_pdf import render_pdf
from .report_html import render_report_html


def main(argv: Optional[Sequence[str]] = None) -> None:
    ap = argparse.ArgumentParser(description="Render a business report JSON file")
    ap.add_argument("json_path", help="Path to report JSON")
    ap.add_argument("--out", help="HTML output path (default: next to the JSON)")
    ap.add_argument("--pdf", help="Also rasterize to this PDF path")
    args = ap.parse_args(argv)

    json_path = Path(args.json_path)
    if not json_path.exists():
        sys.exit(f"{json_path} not found")
    data = json.loads(json_path.read_text("utf-8"))

    html = render_report_html(data)
    out_path = Path(args.out) if args.out else json_path.with_suffix(".html")
    out_path.write_text(html, encoding="utf-8")
    print(f"HTML written to {out_path}")

    if args.pdf:
        settings = get_settings()
        pdf = asyncio.run(render_pdf(
            html,
            executable_path=settings.chromium_executable_path,
            launch_args=settings.chromium_args,
        ))
        Path(args.pdf).write_bytes(pdf)
        print(f"PDF written to {args.pdf}")


if __name__ == "__main__":
    main()
