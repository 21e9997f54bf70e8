"""Quiet output formatter - one-line summary."""

from photometa.models import AnalysisSnapshot


def format_quiet(snapshot: AnalysisSnapshot) -> str:
    """Format a snapshot as one-line summary.

    Format: filename | WxH | size | AI: yes/no (n indicators) | Remote: ...
    """
    record = snapshot.record
    parts = [record.file_name, f"{record.width}x{record.height}", record.file_size]

    heuristic = record.heuristic
    if heuristic.is_ai:
        parts.append(f"AI: yes ({len(heuristic.indicators)} indicators)")
    else:
        parts.append("AI: no")

    if record.remote is not None:
        verdict = "AI" if record.remote.is_ai_generated else "not AI"
        parts.append(f"Remote: {verdict} ({record.remote.confidence}%)")
    elif snapshot.remote_error:
        parts.append("Remote: error")
    elif snapshot.remote_pending:
        parts.append("Remote: pending")

    return " | ".join(parts)
