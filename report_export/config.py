from __future__ import annotations

import os
import shlex
from functools import lru_cache
from typing import List, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field

load_dotenv()

DEFAULT_BUCKET = "enrich-reports"


class Settings(BaseModel):
    supabase_url: str = ""
    supabase_service_role_key: str = ""
    supabase_bucket: str = DEFAULT_BUCKET
    # None means the fetch may wait indefinitely
    fetch_timeout: Optional[float] = None
    chromium_executable_path: Optional[str] = None
    chromium_args: List[str] = Field(default_factory=list)
    log_level: str = "INFO"

    def require_storage_credentials(self) -> None:
        missing = [
            name
            for name, value in (
                ("SUPABASE_URL", self.supabase_url),
                ("SUPABASE_SERVICE_ROLE_KEY", self.supabase_service_role_key),
            )
            if not value
        ]
        if missing:
            raise RuntimeError(f"Missing required environment variables: {', '.join(missing)}")


def _optional_float(raw: Optional[str]) -> Optional[float]:
    if raw is None or not raw.strip():
        return None
    return float(raw)


def load_settings() -> Settings:
    """Read settings from the environment (and .env, loaded at import)."""
    return Settings(
        supabase_url=os.getenv("SUPABASE_URL", "").strip(),
        supabase_service_role_key=os.getenv("SUPABASE_SERVICE_ROLE_KEY", "").strip(),
        supabase_bucket=os.getenv("SUPABASE_BUCKET") or DEFAULT_BUCKET,
        fetch_timeout=_optional_float(os.getenv("REPORT_FETCH_TIMEOUT")),
        chromium_executable_path=os.getenv("CHROMIUM_EXECUTABLE_PATH") or None,
        chromium_args=shlex.split(os.getenv("CHROMIUM_ARGS", "")),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return load_settings()
