import asyncio

import httpx
import pytest

from report_export.fetcher import ReportFetchError, ReportFetcher

URL = "https://xyz.supabase.co/storage/v1/object/public/enrich-reports/b/r/report.json"


def fetch(handler, url=URL, **kwargs):
    fetcher = ReportFetcher(transport=httpx.MockTransport(handler), **kwargs)
    return asyncio.run(fetcher.fetch(url))


def test_fetch_returns_parsed_json():
    assert fetch(lambda request: httpx.Response(200, json={"header": {"business_name": "Acme"}})) == {
        "header": {"business_name": "Acme"}
    }


@pytest.mark.parametrize("status", [301, 400, 403, 404, 500])
def test_non_success_status_raises(status):
    with pytest.raises(ReportFetchError) as excinfo:
        fetch(lambda request: httpx.Response(status))
    assert excinfo.value.status_code == status
    assert excinfo.value.url == URL


def test_redirects_are_followed():
    def handler(request):
        if request.url.path.endswith("report.json"):
            return httpx.Response(307, headers={"Location": "https://cdn.example.com/copy"})
        return httpx.Response(200, json={"ok": 1})

    assert fetch(handler) == {"ok": 1}


def test_invalid_json_body_raises():
    with pytest.raises(ValueError):
        fetch(lambda request: httpx.Response(200, content=b"<html></html>"))


def test_default_has_no_timeout():
    assert ReportFetcher().timeout is None
    assert ReportFetcher(timeout=2.5).timeout == 2.5
