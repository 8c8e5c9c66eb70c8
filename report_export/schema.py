from __future__ import annotations

import json
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _scalar_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (list, tuple)):
        return ",".join(_scalar_text(v) for v in value)
    if isinstance(value, dict):
        return json.dumps(value, sort_keys=True, separators=(",", ":"), ensure_ascii=False)
    return str(value)


def to_text(value: Any) -> str:
    """Coerce an arbitrary JSON value to display text; falsy values become ""."""
    if value is None or value is False or value == "":
        return ""
    if isinstance(value, (int, float)) and not isinstance(value, bool) and value == 0:
        return ""
    return _scalar_text(value)


class _TextBlock(BaseModel):
    """A JSON object whose fields are all optional free text."""

    model_config = ConfigDict(extra="ignore")

    @field_validator("*", mode="before")
    @classmethod
    def _coerce_text(cls, v):  # type: ignore[no-untyped-def]
        return to_text(v)


class _Container(BaseModel):
    model_config = ConfigDict(extra="ignore")

    @field_validator("*", mode="before")
    @classmethod
    def _coerce_object(cls, v):  # type: ignore[no-untyped-def]
        return v if isinstance(v, dict) else {}


class Header(_TextBlock):
    business_name: str = ""
    location_city: str = ""
    location_country: str = ""
    website_url: str = ""
    contact_email: str = ""


class Overview(_TextBlock):
    ai_summary: str = ""
    goals: str = ""
    certifications: str = ""
    growth_transparency_badge: str = ""


class Operations(_TextBlock):
    information: str = ""


class Standards(_TextBlock):
    global_unwto: str = ""
    national_ctc: str = ""


class LocalImpact(_TextBlock):
    information: str = ""


class PeoplePartnerships(_TextBlock):
    information: str = ""


class Insights(_TextBlock):
    local_suppliers: str = ""
    employee: str = ""
    economic: str = ""


class Recommendations(_TextBlock):
    goals: str = ""
    operations: str = ""


class Sections(_Container):
    overview: Overview = Field(default_factory=Overview)
    operations: Operations = Field(default_factory=Operations)
    standards: Standards = Field(default_factory=Standards)
    local_impact: LocalImpact = Field(default_factory=LocalImpact)
    people_partnerships: PeoplePartnerships = Field(default_factory=PeoplePartnerships)
    insights: Insights = Field(default_factory=Insights)
    recommendations: Recommendations = Field(default_factory=Recommendations)


class ReportDocument(_Container):
    header: Header = Field(default_factory=Header)
    sections: Sections = Field(default_factory=Sections)

    @classmethod
    def from_json(cls, data: Any) -> "ReportDocument":
        """Build a document from parsed JSON; anything but an object is an empty report."""
        return cls.model_validate(data if isinstance(data, dict) else {})


class ExportRequest(BaseModel):
    """Body of the export endpoint. Only presence is checked."""

    model_config = ConfigDict(extra="ignore")

    json_url: Optional[str] = None
    format: Optional[str] = "pdf"

    @classmethod
    def from_body(cls, body: Any) -> "ExportRequest":
        if not isinstance(body, dict):
            return cls()
        json_url = body.get("json_url")
        fmt = body.get("format", "pdf")
        return cls(
            json_url=json_url if isinstance(json_url, str) else None,
            format=fmt if isinstance(fmt, str) else None,
        )
