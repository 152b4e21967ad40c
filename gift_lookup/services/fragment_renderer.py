"""
Fragment Renderer - HTML display form of a lookup outcome.

The fragment is self-contained (inline styles only) so the storefront can
drop it straight into a page. Every piece of inserted text goes through
escape_html first.
"""
from typing import Dict

from gift_lookup.models.enums import LookupStatus
from gift_lookup.models.lookup import LookupOutcome


HEADING = "Gift message lookup"

PLACEHOLDERS: Dict[LookupStatus, str] = {
    LookupStatus.BAD_REQUEST: "Please enter both last name and postcode.",
    LookupStatus.NOT_FOUND: "No gift message found for those details.",
    LookupStatus.FOUND_NO_MESSAGE: "No gift message found for those details.",
    LookupStatus.UPSTREAM_ERROR: "Shopify API error: {code}",
    LookupStatus.INTERNAL_ERROR: "Lookup failed. Please try again.",
}

_ESCAPES = {
    "&": "&amp;",
    "<": "&lt;",
    ">": "&gt;",
    '"': "&quot;",
    "'": "&#39;",
}


def escape_html(value: str) -> str:
    """Escape the five reserved markup characters."""
    return "".join(_ESCAPES.get(ch, ch) for ch in str(value))


def placeholder_for(outcome: LookupOutcome) -> str:
    template = PLACEHOLDERS.get(outcome.status, PLACEHOLDERS[LookupStatus.INTERNAL_ERROR])
    return template.format(code=outcome.upstream_status if outcome.upstream_status is not None else "")


def render_fragment(outcome: LookupOutcome) -> str:
    if outcome.status == LookupStatus.FOUND_WITH_MESSAGE and outcome.message:
        body = escape_html(outcome.message).replace("\r\n", "\n").replace("\n", "<br>")
        inner = f'<div style="white-space:pre-wrap;line-height:1.5">{body}</div>'
    else:
        inner = f'<p style="margin:0;color:#666">{escape_html(placeholder_for(outcome))}</p>'

    return (
        '<div style="padding:16px;border:1px solid #e6e6e6;border-radius:12px;background:#fff">\n'
        f'  <h2 style="margin:0 0 8px;font-weight:700;color:#4b3f43">{escape_html(HEADING)}</h2>\n'
        f"  {inner}\n"
        "</div>"
    )
