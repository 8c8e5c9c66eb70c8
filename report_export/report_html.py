"""
Business report HTML rendering.

render_report_html() is pure: the same document always yields the same
string, and every value taken from the document is escaped before it is
interpolated into the markup.
"""
from __future__ import annotations

from typing import Any, Union

from .schema import ReportDocument

_HTML_ESCAPES = str.maketrans({
    "&": "&amp;",
    "<": "&lt;",
    ">": "&gt;",
    '"': "&quot;",
    "'": "&#39;",
})

DEFAULT_BADGE = "Initiated"

CSS = """
  body { font-family: Inter, system-ui, -apple-system, Segoe UI, Roboto, Arial, sans-serif; color: #111; padding: 16px; }
  .header { display:flex; justify-content:space-between; align-items:flex-start; border-bottom:1px solid #e5e7eb; padding:16px 0; }
  .h-title { font-size:20px; font-weight:700; }
  .h-meta { color:#555; font-size:12px; }
  .section { padding:12px 0; }
  .k { font-weight:600; margin-bottom:4px; }
  .pill { display:inline-block; padding:4px 8px; border-radius:999px; font-size:12px; background:#f3f4f6; }
  .grid-2 { display:grid; grid-template-columns: 1fr 1fr; gap:16px; }
  @media print { [data-no-print="true"]{ display:none !important; } }
"""


def escape_html(value: Any) -> str:
    """Escape & < > " ' for use in element text."""
    if value is None:
        return ""
    return str(value).translate(_HTML_ESCAPES)


def escape_attr(value: Any) -> str:
    """Escape for use inside a double-quoted attribute value."""
    return escape_html(value).replace('"', "%22")


def _section(title: str, *values: str) -> str:
    body = "\n".join(f"      <div>{escape_html(v)}</div>" for v in values)
    return f"""    <div class="section">
      <div class="k">{title}</div>
{body}
    </div>"""


def _grid(*sections: str) -> str:
    inner = "\n".join(sections)
    return f"""  <div class="grid-2">
{inner}
  </div>"""


def _meta_line(header) -> str:
    city = header.location_city
    country = header.location_country
    location = (
        (escape_html(city) if city else "")
        + (", " if city and country else "")
        + (escape_html(country) if country else "")
    )
    website = (
        f' • <a href="{escape_attr(header.website_url)}">{escape_html(header.website_url)}</a>'
        if header.website_url
        else ""
    )
    email = f" • {escape_html(header.contact_email)}" if header.contact_email else ""
    return f"""        {location}
        {website}
        {email}"""


def render_report_html(document: Union[ReportDocument, dict, Any]) -> str:
    """Build the complete HTML page for a report document.

    Accepts a ReportDocument or the raw parsed JSON; missing fields render
    as empty strings.
    """
    if not isinstance(document, ReportDocument):
        document = ReportDocument.from_json(document)
    h = document.header
    s = document.sections
    badge = s.overview.growth_transparency_badge or DEFAULT_BADGE

    body = "\n\n".join([
        f"""  <div class="header">
    <div>
      <div class="h-title">{escape_html(h.business_name or "Business")}</div>
      <div class="h-meta">
{_meta_line(h)}
      </div>
    </div>
    <div><span class="pill">{escape_html(badge)}</span></div>
  </div>""",
        _section("Executive Summary", s.overview.ai_summary),
        _grid(
            _section("Goals", s.overview.goals),
            _section("Certifications", s.overview.certifications),
        ),
        _grid(
            _section("Operations", s.operations.information),
            _section("Standards (UN / National)", s.standards.global_unwto, s.standards.national_ctc),
        ),
        _grid(
            _section("Local Impact", s.local_impact.information),
            _section("People &amp; Partnerships", s.people_partnerships.information),
        ),
        _grid(
            _section("Insight — Local Suppliers", s.insights.local_suppliers),
            _section("Insight — Employee", s.insights.employee),
        ),
        _section("Insight — Economic", s.insights.economic),
        _grid(
            _section("Recommendations — Goals", s.recommendations.goals),
            _section("Recommendations — Operations", s.recommendations.operations),
        ),
    ])

    return f"""<!doctype html>
<html>
<head>
<meta charset="utf-8"/>
<title>{escape_html(h.business_name or "Business Overview")}</title>
<style>{CSS}</style>
</head>
<body>
{body}
</body>
</html>"""
