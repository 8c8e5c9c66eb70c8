from __future__ import annotations

import json
from typing import Dict, List, Optional

import httpx
import pytest
from fastapi.testclient import TestClient

from report_export.config import Settings, get_settings
from report_export.fetcher import ReportFetcher
from report_export.main import app, get_fetcher, get_rasterizer, get_storage_provider
from report_export.storage import pdf_path

REPORT_URL = "https://xyz.supabase.co/storage/v1/object/public/enrich-reports/biz-1/rep-9/report.json"
PUBLIC_BASE = "https://xyz.supabase.co/storage/v1/object/public/enrich-reports"
FAKE_PDF = b"%PDF-1.4\n%fake\n"


class FakeStorage:
    def __init__(self, fail: Optional[Exception] = None):
        self.fail = fail
        self.uploads: List[tuple] = []

    def upload_pdf(self, business_id: str, report_id: str, content: bytes) -> str:
        if self.fail is not None:
            raise self.fail
        key = pdf_path(business_id, report_id)
        self.uploads.append((key, content))
        return f"{PUBLIC_BASE}/{key}"


class FakeRasterizer:
    def __init__(self, fail: Optional[Exception] = None):
        self.fail = fail
        self.calls: List[str] = []

    async def __call__(self, html: str) -> bytes:
        self.calls.append(html)
        if self.fail is not None:
            raise self.fail
        return FAKE_PDF


class Remote:
    """Canned responses for the report JSON fetch, keyed by URL."""

    def __init__(self):
        self.responses: Dict[str, httpx.Response] = {}
        self.requests: List[httpx.Request] = []
        self.error: Optional[Exception] = None

    def serve_json(self, url: str, payload, status_code: int = 200) -> None:
        self.responses[url] = httpx.Response(status_code, content=json.dumps(payload).encode())

    def serve(self, url: str, response: httpx.Response) -> None:
        self.responses[url] = response

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return self.responses.get(str(request.url), httpx.Response(404))


@pytest.fixture
def settings() -> Settings:
    return Settings(supabase_url="https://xyz.supabase.co", supabase_service_role_key="service-key")


@pytest.fixture
def remote() -> Remote:
    return Remote()


@pytest.fixture
def storage() -> FakeStorage:
    return FakeStorage()


@pytest.fixture
def rasterizer() -> FakeRasterizer:
    return FakeRasterizer()


@pytest.fixture
def client(settings, remote, storage, rasterizer):
    fetcher = ReportFetcher(transport=httpx.MockTransport(remote.handler))
    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_fetcher] = lambda: fetcher
    app.dependency_overrides[get_rasterizer] = lambda: rasterizer
    app.dependency_overrides[get_storage_provider] = lambda: (lambda: storage)
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
