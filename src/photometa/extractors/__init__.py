"""Metadata extractors for photometa."""

import warnings

from photometa.errors import DecodeError
from photometa.extractors.base import BaseExtractor
from photometa.extractors.exiftool import ExifToolExtractor
from photometa.extractors.pillow import PillowExtractor, open_image, probe_dimensions
from photometa.models import MetadataMapping

# All extractor classes (order doesn't matter, priority is used)
_EXTRACTORS: list[type[BaseExtractor]] = [
    PillowExtractor,
    ExifToolExtractor,
]


def get_available_extractors() -> list[BaseExtractor]:
    """Get list of available extractor instances, sorted by priority.

    Returns:
        List of extractor instances that are available on this system,
        sorted by priority (lowest first).
    """
    available = [cls() for cls in _EXTRACTORS if cls.is_available()]
    available.sort(key=lambda x: x.priority)
    return available


def get_extractor_status() -> dict[str, bool]:
    """Get availability status of all extractors.

    Returns:
        Dict mapping extractor names to availability status.
    """
    return {cls.name: cls.is_available() for cls in _EXTRACTORS}


def extract_metadata(data: bytes) -> MetadataMapping:
    """Decode all available metadata tags from raw image bytes.

    Required extractors propagate DecodeError. Optional extractors that
    fail only emit a warning.

    Args:
        data: Raw image bytes

    Returns:
        MetadataMapping of tag name to MetadataTag

    Raises:
        DecodeError: If the image cannot be decoded
    """
    metadata: MetadataMapping = {}
    for extractor in get_available_extractors():
        if extractor.required:
            extractor.extract(data, metadata)
            continue
        try:
            extractor.extract(data, metadata)
        except Exception as e:
            warnings.warn(f"{extractor.name} extraction failed: {e}", stacklevel=2)
    return metadata


__all__ = [
    # Base class
    "BaseExtractor",
    "DecodeError",
    # Extractors
    "PillowExtractor",
    "ExifToolExtractor",
    # Functions
    "extract_metadata",
    "get_available_extractors",
    "get_extractor_status",
    "open_image",
    "probe_dimensions",
]
