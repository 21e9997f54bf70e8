"""photometa - image metadata viewer with AI-generation detection.

Usage:
    from photometa import analyze_file, classify, extract_metadata

    # Full analysis (metadata heuristic + optional Gemini verdict)
    snapshot = analyze_file("photo.png")
    if snapshot.record.heuristic.is_ai:
        print(snapshot.record.heuristic.indicators)

    # Heuristic only, on raw bytes
    verdict = classify(extract_metadata(data))

    # Streaming analysis with supersession
    session = AnalysisSession()
    async for snapshot in session.analyze(ImageSource.from_path("photo.png")):
        ...
"""

from photometa._version import __version__
from photometa.analyze import AnalysisSession, analyze_file, analyze_image, build_record
from photometa.detectors import (
    BaseVerifier,
    GeminiVerifier,
    UnconfiguredVerifier,
    classify,
    parse_remote_verdict,
)
from photometa.errors import (
    AnalyticsError,
    ConfigurationError,
    DecodeError,
    FetchError,
    MalformedResponseError,
    PhotometaError,
    RemoteAnalysisError,
)
from photometa.extractors import extract_metadata, get_extractor_status, probe_dimensions
from photometa.formatters import (
    format_default,
    format_json,
    format_metadata_value,
    format_quiet,
    to_dict,
)
from photometa.models import (
    AnalysisRecord,
    AnalysisSnapshot,
    FileInfo,
    HeuristicVerdict,
    MetadataMapping,
    MetadataTag,
    RemoteVerdict,
    VisitorCount,
)
from photometa.sources import ImageSource, fetch_image

__all__ = [
    # Version
    "__version__",
    # Main functions
    "AnalysisSession",
    "analyze_file",
    "analyze_image",
    "build_record",
    "classify",
    "extract_metadata",
    "probe_dimensions",
    "parse_remote_verdict",
    "get_extractor_status",
    # Sources
    "ImageSource",
    "fetch_image",
    # Verifiers
    "BaseVerifier",
    "GeminiVerifier",
    "UnconfiguredVerifier",
    # Models
    "AnalysisRecord",
    "AnalysisSnapshot",
    "FileInfo",
    "HeuristicVerdict",
    "MetadataMapping",
    "MetadataTag",
    "RemoteVerdict",
    "VisitorCount",
    # Formatters
    "format_default",
    "format_json",
    "format_metadata_value",
    "format_quiet",
    "to_dict",
    # Errors
    "PhotometaError",
    "DecodeError",
    "FetchError",
    "ConfigurationError",
    "RemoteAnalysisError",
    "MalformedResponseError",
    "AnalyticsError",
]
