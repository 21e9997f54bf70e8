"""Default output formatter - full analysis report."""

import json
from typing import Any

from photometa.models import AnalysisSnapshot, MetadataTag

# Raw values longer than this are cut in the metadata table
MAX_VALUE_LENGTH = 200


def format_metadata_value(value: Any) -> str:
    """Render a metadata value for display.

    None becomes "N/A"; tags and dicts show their description; lists are
    comma-joined; other dicts are shown as indented JSON.
    """
    if value is None:
        return "N/A"
    if isinstance(value, MetadataTag):
        return value.description or format_metadata_value(value.value)
    if isinstance(value, dict):
        if value.get("description"):
            return str(value["description"])
        return json.dumps(value, indent=2, ensure_ascii=False, default=str)
    if isinstance(value, (list, tuple)):
        return ", ".join(str(v) for v in value)
    return str(value)


def _truncate(text: str) -> str:
    if len(text) <= MAX_VALUE_LENGTH:
        return text
    return text[: MAX_VALUE_LENGTH - 3] + "..."


def _remote_lines(snapshot: AnalysisSnapshot) -> list[str]:
    remote = snapshot.record.remote
    if remote is None and not snapshot.remote_pending and not snapshot.remote_error:
        return []

    lines = ["## REMOTE CHECK"]
    if remote is not None:
        verdict = "AI-generated" if remote.is_ai_generated else "likely authentic"
        lines.append(f"  Verdict:      {verdict}")
        lines.append(f"  Confidence:   {remote.confidence}%")
        lines.append(f"  Reasoning:    {remote.reasoning}")
        for indicator in remote.visual_indicators:
            lines.append(f"    - {indicator}")
    elif snapshot.remote_error:
        lines.append(f"  Error:        {snapshot.remote_error}")
    else:
        lines.append("  Status:       analyzing...")
    return lines


def format_remote(snapshot: AnalysisSnapshot) -> str:
    """Format only the remote verdict section of a snapshot."""
    return "\n".join(_remote_lines(snapshot))


def format_default(snapshot: AnalysisSnapshot, show_metadata: bool = True) -> str:
    """Format a snapshot as a readable report.

    Sections:
    - File info (name, size, dimensions)
    - Metadata heuristic verdict and indicators
    - Remote verdict (or its pending/error state)
    - Metadata tags
    """
    record = snapshot.record
    lines = []

    lines.append("=" * 70)
    lines.append(f"File: {record.file_name}")
    lines.append("=" * 70)
    lines.append(f"  Size:         {record.file_size}")
    lines.append(f"  Dimensions:   {record.dimensions}")
    if record.file_info.mime_type:
        lines.append(f"  Type:         {record.file_info.mime_type}")

    heuristic = record.heuristic
    lines.append("")
    lines.append("## METADATA CHECK")
    if heuristic.is_ai:
        lines.append("  Verdict:      AI generation markers found")
        for indicator in heuristic.indicators:
            lines.append(f"    - {indicator}")
    else:
        lines.append("  Verdict:      no AI markers in metadata")

    remote_lines = _remote_lines(snapshot)
    if remote_lines:
        lines.append("")
        lines.extend(remote_lines)

    if show_metadata:
        lines.append("")
        lines.append(f"## METADATA ({len(record.metadata)} tags)")
        if not record.metadata:
            lines.append("  (none)")
        for name, value in record.metadata.items():
            lines.append(f"  {name}: {_truncate(format_metadata_value(value))}")

    return "\n".join(lines)
