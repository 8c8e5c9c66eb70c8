import logging
import os
from functools import partial
from typing import Any, Awaitable, Callable, Dict

from fastapi import APIRouter, Depends, FastAPI, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import JSONResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import Settings, get_settings
from .errors import (
    ExportError,
    cannot_parse_report_path,
    error_message,
    invalid_json_url,
    method_not_allowed,
    missing_json_url,
    unsupported_format,
)
from .fetcher import ReportFetchError, ReportFetcher
from .html_to_pdf import render_pdf
from .report_html import render_report_html
from .schema import ExportRequest
from .storage import ReportStorage, get_storage, parse_report_path

logging.basicConfig(
    level=get_settings().log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

EXPORT_PATHS = ("/", "/api/reports/export")
HELLO_PATHS = ("/hello", "/api/hello")

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}

Rasterizer = Callable[[str], Awaitable[bytes]]

app = FastAPI(title="Report Export Service")
router = APIRouter()


# ---------------------------------------------------------------------------
# Dependencies (overridden in tests)
# ---------------------------------------------------------------------------
def get_fetcher(settings: Settings = Depends(get_settings)) -> ReportFetcher:
    return ReportFetcher(timeout=settings.fetch_timeout)


def get_rasterizer(settings: Settings = Depends(get_settings)) -> Rasterizer:
    return partial(
        render_pdf,
        executable_path=settings.chromium_executable_path,
        launch_args=settings.chromium_args,
    )


def get_storage_provider() -> Callable[[], ReportStorage]:
    # Resolved lazily so that missing credentials fail the upload step, not the request.
    return get_storage


def _json(content: Dict[str, Any], status_code: int) -> JSONResponse:
    return JSONResponse(content, status_code=status_code, headers=CORS_HEADERS)


@app.exception_handler(ExportError)
async def _export_error_handler(request: Request, exc: ExportError) -> JSONResponse:
    logger.info("Export rejected: %s %s", exc.status_code, exc.code)
    return _json({"error": exc.code}, exc.status_code)


@app.exception_handler(StarletteHTTPException)
async def _http_error_handler(request: Request, exc: StarletteHTTPException) -> Response:
    # Methods without an explicit route on the export paths (TRACE, custom verbs)
    if exc.status_code == 405 and request.url.path in EXPORT_PATHS:
        return await _export_error_handler(request, method_not_allowed())
    return await http_exception_handler(request, exc)


async def _read_body(request: Request) -> Any:
    try:
        return await request.json()
    except ValueError:
        return {}


# ---------------------------------------------------------------------------
# Export: report.json URL -> PDF in storage
# ---------------------------------------------------------------------------
async def export_report(
    request: Request,
    settings: Settings = Depends(get_settings),
    fetcher: ReportFetcher = Depends(get_fetcher),
    rasterize: Rasterizer = Depends(get_rasterizer),
    storage_provider: Callable[[], ReportStorage] = Depends(get_storage_provider),
):
    req = ExportRequest.from_body(await _read_body(request))
    if not req.json_url:
        raise missing_json_url()
    if req.format != "pdf":
        raise unsupported_format()

    try:
        try:
            content = await fetcher.fetch(req.json_url)
        except ReportFetchError as e:
            logger.info("Report JSON unavailable: %s", e)
            raise invalid_json_url() from e

        html = render_report_html(content)
        pdf = await rasterize(html)

        business_id, report_id = parse_report_path(req.json_url, settings.supabase_bucket)
        if not business_id or not report_id:
            raise cannot_parse_report_path()

        storage = await run_in_threadpool(storage_provider)
        url = await run_in_threadpool(storage.upload_pdf, business_id, report_id, pdf)
    except ExportError:
        raise
    except Exception as e:
        logger.exception("Report export failed for %s", req.json_url)
        return _json({"error": error_message(e)}, 500)

    logger.info("Report exported: %s", url)
    return _json({"ok": True, "url": url}, 200)


async def export_preflight():
    return Response(status_code=204, headers=CORS_HEADERS)


async def export_wrong_method():
    raise method_not_allowed()


for path in EXPORT_PATHS:
    router.add_api_route(path, export_report, methods=["POST"])
    router.add_api_route(path, export_preflight, methods=["OPTIONS"], include_in_schema=False)
    router.add_api_route(
        path,
        export_wrong_method,
        methods=["GET", "HEAD", "PUT", "PATCH", "DELETE"],
        include_in_schema=False,
    )


# ---------------------------------------------------------------------------
# Health check
# ---------------------------------------------------------------------------
async def hello():
    return JSONResponse({"ok": True, "runtime": "node"})


for path in HELLO_PATHS:
    router.add_api_route(path, hello, methods=["GET"])

app.include_router(router)


def run() -> None:
    import uvicorn

    uvicorn.run(
        "report_export.main:app",
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "8000")),
    )


if __name__ == "__main__":
    run()
