"""Response error extraction for load test observability.

Parses Marketplace API error responses into human-readable messages.
Handles two response shapes:

- Pydantic validation (422): {"detail": [{"loc": [...], "msg": "...", "type": "..."}]}
- Marketplace errors (400/401/403/404/409/500): {"message": "...", **details}
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from requests import Response


def extract_error_detail(response: Response) -> str:
    """Extract a human-readable error message from an API error response.

    Returns a compact string suitable for Locust failure messages and log lines.
    Gracefully handles unparseable bodies and missing fields.
    """
    try:
        body = response.json()
    except ValueError:
        # Not JSON, return raw text, truncated
        text = getattr(response, "text", "") or ""
        return text[:300] or "(empty response body)"

    if not isinstance(body, dict):
        return str(body)[:300]

    # Pydantic validation errors: {"detail": [{"loc": [...], "msg": "..."}]}
    if "detail" in body and isinstance(body["detail"], list):
        parts = []
        for err in body["detail"]:
            loc = ".".join(str(p) for p in err.get("loc", []))
            msg = err.get("msg", str(err))
            parts.append(f"{loc}: {msg}" if loc else msg)
        return " | ".join(parts)

    # Marketplace errors: {"message": "...", "field": "...", ...}
    if "message" in body:
        extras = {k: v for k, v in body.items() if k != "message"}
        if extras:
            return f"{body['message']} ({', '.join(f'{k}={v}' for k, v in extras.items())})"
        return str(body["message"])

    # Unknown shape, stringify and truncate
    return str(body)[:300]
