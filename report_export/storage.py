"""
Supabase storage access for report PDFs.
"""
from __future__ import annotations

import logging
import re
import threading
from typing import Optional, Tuple
from urllib.parse import urlparse

from supabase import Client, create_client

from .config import DEFAULT_BUCKET, Settings, get_settings

logger = logging.getLogger(__name__)

PDF_CONTENT_TYPE = "application/pdf"
CACHE_SECONDS = 3600


def parse_report_path(json_url, bucket: str = DEFAULT_BUCKET) -> Tuple[Optional[str], Optional[str]]:
    """Extract (business_id, report_id) from a .../<bucket>/<biz>/<report>/report.json URL.

    Returns (None, None) for anything that does not match, never raises.
    """
    if not isinstance(json_url, str) or not json_url:
        return None, None
    try:
        parsed = urlparse(json_url)
    except ValueError:
        return None, None
    if not parsed.scheme or not parsed.netloc:
        return None, None
    pattern = rf"/{re.escape(bucket)}/([^/]+)/([^/]+)/report\.json$"
    m = re.search(pattern, parsed.path)
    if not m:
        return None, None
    return m.group(1), m.group(2)


def pdf_path(business_id: str, report_id: str) -> str:
    return f"{business_id}/{report_id}/report.pdf"


class ReportStorage:
    """Uploads rendered PDFs next to their report.json and hands back public URLs."""

    def __init__(self, client: Client, bucket: str = DEFAULT_BUCKET):
        self.client = client
        self.bucket = bucket

    @classmethod
    def from_settings(cls, settings: Settings) -> "ReportStorage":
        settings.require_storage_credentials()
        logger.info("Creating Supabase client for bucket %s", settings.supabase_bucket)
        client = create_client(settings.supabase_url, settings.supabase_service_role_key)
        return cls(client, settings.supabase_bucket)

    def upload_pdf(self, business_id: str, report_id: str, content: bytes) -> str:
        """Write report.pdf (overwriting any previous render) and return its public URL."""
        key = pdf_path(business_id, report_id)
        bucket = self.client.storage.from_(self.bucket)
        logger.info("Uploading %s (%d bytes) to bucket %s", key, len(content), self.bucket)
        bucket.upload(
            key,
            content,
            file_options={
                "content-type": PDF_CONTENT_TYPE,
                "cache-control": str(CACHE_SECONDS),
                "upsert": "true",
                "x-upsert": "true",
            },
        )
        return bucket.get_public_url(key)


_storage: ReportStorage | None = None
_storage_lock = threading.Lock()


def get_storage() -> ReportStorage:
    """Process-wide storage, created on first use."""
    global _storage
    with _storage_lock:
        if _storage is None:
            _storage = ReportStorage.from_settings(get_settings())
    return _storage
