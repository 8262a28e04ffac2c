from __future__ import annotations

import json
from typing import Any

from .domain.endpoints import STATUS_PATH, format_players, format_resources
from .domain.models import ResolutionResult

NO_ENDPOINTS = (
    "No connect endpoints present in response. "
    "Response may be a redirect or server is offline."
)
PROBE_UNAVAILABLE = (
    f"Could not fetch {STATUS_PATH} from endpoint "
    "(blocked by CORS/firewall or not serving http)."
)


def summarize(result: ResolutionResult) -> dict[str, Any]:
    """Compact, display-ready view of a result (used by the HTTP app too)."""
    summary: dict[str, Any] = {
        "token": result.token,
        "endpoints": list(result.endpoints),
        "endpoint": result.endpoint,
        "status_available": result.status is not None,
    }
    if not result.has_endpoints:
        summary["note"] = NO_ENDPOINTS
        return summary

    doc = result.status
    if doc is None:
        summary["note"] = PROBE_UNAVAILABLE
        return summary

    raw = doc.raw
    summary["hostname"] = raw.get("hostname")
    summary["players"] = format_players(raw.get("clients"), raw.get("sv_maxclients"))
    resources = raw.get("resources")
    if isinstance(resources, list):
        summary["resource_count"] = len(resources)
        summary["resources"] = format_resources(resources)
    return summary


def render_lines(result: ResolutionResult) -> list[str]:
    """Text report for the console, one entry per output line."""
    lines = [
        f"Token: {result.token}",
        "Raw servers-frontend response:",
        json.dumps(result.record.payload, indent=2, ensure_ascii=False),
    ]
    if not result.has_endpoints:
        lines += ["", NO_ENDPOINTS]
        return lines

    lines += ["", "Resolved connect endpoints:"]
    lines += [f" - {ep}" for ep in result.endpoints]

    doc = result.status
    if doc is None:
        lines += ["", PROBE_UNAVAILABLE]
        return lines

    # Render what the server sent, even where the typed view reads None.
    raw = doc.raw
    hostname = raw.get("hostname")
    lines += [
        "",
        f"Fetched {STATUS_PATH} from {result.endpoint}",
        f"  hostname: {hostname if hostname is not None else '?'}",
        f"  players: {format_players(raw.get('clients'), raw.get('sv_maxclients'))}",
    ]
    resources = raw.get("resources")
    if isinstance(resources, list):
        lines.append(f"  resources ({len(resources)}): {format_resources(resources)}")
    return lines
