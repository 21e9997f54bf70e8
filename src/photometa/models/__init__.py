"""Pydantic models for photometa."""

from .analysis import AnalysisRecord, AnalysisSnapshot, new_record_id
from .analytics import VisitorCount
from .file import FileInfo, format_size
from .metadata import MetadataMapping, MetadataTag, tag_description
from .verdict import NO_REASONING, HeuristicVerdict, RemoteVerdict

__all__ = [
    # Analysis
    "AnalysisRecord",
    "AnalysisSnapshot",
    "new_record_id",
    # Metadata
    "MetadataMapping",
    "MetadataTag",
    "tag_description",
    # Verdicts
    "HeuristicVerdict",
    "RemoteVerdict",
    "NO_REASONING",
    # File
    "FileInfo",
    "format_size",
    # Analytics
    "VisitorCount",
]
