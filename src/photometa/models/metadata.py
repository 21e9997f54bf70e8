"""Image metadata models."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict

# Mapping from exact, case-sensitive tag name to MetadataTag (or a raw value
# for free-form keys such as PNG text chunks left undecoded by a source).
MetadataMapping = dict[str, Any]


class MetadataTag(BaseModel):
    """A single decoded metadata tag.

    Attributes:
        description: Printable rendering of the tag value
        value: Raw decoded value (JSON-friendly)
    """

    model_config = ConfigDict(frozen=True)

    description: str
    value: Any = None


def tag_description(metadata: MetadataMapping, key: str) -> str | None:
    """Return the description of ``metadata[key]`` if it has one.

    Accepts MetadataTag values and plain dicts carrying a ``description``
    key; any other value yields None.
    """
    tag = metadata.get(key)
    if isinstance(tag, MetadataTag):
        return tag.description
    if isinstance(tag, dict):
        description = tag.get("description")
        return description if isinstance(description, str) else None
    return None
