"""JSON output formatter."""

import json
from typing import Any

from photometa.models import AnalysisRecord, AnalysisSnapshot


def to_dict(record: AnalysisRecord) -> dict[str, Any]:
    """Convert a record to a JSON-ready dictionary.

    Keys follow the camelCase names used by the web front end
    (``fileName``, ``isAIGenerated``, ``aiIndicators``, ...).
    """
    data: dict[str, Any] = {
        "fileName": record.file_name,
        "fileSize": record.file_size,
        "dimensions": record.dimensions,
        "metadata": {
            name: value.model_dump(mode="json") if hasattr(value, "model_dump") else value
            for name, value in record.metadata.items()
        },
        "isAIGenerated": record.heuristic.is_ai,
        "aiIndicators": list(record.heuristic.indicators),
    }
    if record.remote is not None:
        data["geminiAnalysis"] = record.remote.model_dump(mode="json", by_alias=True)
    return data


def snapshot_to_dict(snapshot: AnalysisSnapshot) -> dict[str, Any]:
    """Convert a snapshot to a dictionary, including remote status."""
    data = to_dict(snapshot.record)
    data["remotePending"] = snapshot.remote_pending
    if snapshot.remote_error:
        data["remoteError"] = snapshot.remote_error
    return data


def format_json(snapshot: AnalysisSnapshot, indent: int = 2) -> str:
    """Format a snapshot as JSON string.

    Args:
        snapshot: AnalysisSnapshot object
        indent: JSON indentation level

    Returns:
        JSON formatted string
    """
    return json.dumps(snapshot_to_dict(snapshot), indent=indent, ensure_ascii=False, default=str)


def format_json_list(snapshots: list[AnalysisSnapshot], indent: int = 2) -> str:
    """Format multiple snapshots as JSON array."""
    data = [snapshot_to_dict(s) for s in snapshots]
    return json.dumps(data, indent=indent, ensure_ascii=False, default=str)
