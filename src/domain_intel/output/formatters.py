"""Render resolution results and intelligence reports as JSON or text."""

from __future__ import annotations

import json
from typing import Optional

from ..registration import WhoisRecord
from ..resolution import ResolutionResult
from .serialize import (
    serialize_report,
    serialize_resolution,
    serialize_whois_record,
)
from .templates import _render_template

OUTPUT_CHOICES = ("text", "json")


def build_json_payload(
    resolution: ResolutionResult, report: Optional[object] = None
) -> dict:
    """Build the JSON payload for a pipeline run.

    Args:
        resolution (ResolutionResult): Resolution outcome.
        report (Optional[object]): IntelligenceReport when one was built.

    Returns:
        dict: Payload with a resolution section and an optional report section.
    """
    payload = {"resolution": serialize_resolution(resolution)}
    if report is not None:
        payload["report"] = serialize_report(report)
    return payload


def to_json(resolution: ResolutionResult, report: Optional[object] = None) -> str:
    """Render a pipeline run as indented JSON.

    Args:
        resolution (ResolutionResult): Resolution outcome.
        report (Optional[object]): IntelligenceReport when one was built.

    Returns:
        str: JSON document.
    """
    return json.dumps(build_json_payload(resolution, report), indent=2)


def to_text(resolution: ResolutionResult, report: Optional[object] = None) -> str:
    """Render a pipeline run as plain text.

    Args:
        resolution (ResolutionResult): Resolution outcome.
        report (Optional[object]): IntelligenceReport when one was built.

    Returns:
        str: Text report.
    """
    payload = build_json_payload(resolution, report)
    sections = [_render_template("resolution.txt.j2", {"resolution": payload["resolution"]})]
    if "report" in payload:
        sections.append(_render_template("report.txt.j2", {"report": payload["report"]}))
    return "\n\n".join(sections)


def whois_to_json(record: WhoisRecord) -> str:
    """Render a parsed WHOIS record as JSON.

    Args:
        record (WhoisRecord): Parsed record.

    Returns:
        str: JSON document.
    """
    return json.dumps(serialize_whois_record(record), indent=2)


def whois_to_text(record: WhoisRecord) -> str:
    """Render a parsed WHOIS record as text.

    Args:
        record (WhoisRecord): Parsed record.

    Returns:
        str: Text listing of present fields.
    """
    return _render_template("whois.txt.j2", {"whois": serialize_whois_record(record)})
