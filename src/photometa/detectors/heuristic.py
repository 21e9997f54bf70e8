"""Heuristic AI detection based on metadata keywords."""

from __future__ import annotations

from typing import Any

from photometa.models import HeuristicVerdict, MetadataMapping, tag_description

# Generator/platform names and generic AI terms, matched as lower-case
# substrings (not whole words: "ai" also matches inside "detail")
AI_KEYWORDS = (
    "midjourney",
    "stable diffusion",
    "dall-e",
    "dalle",
    "ai",
    "artificial intelligence",
    "generated",
    "synthesis",
    "diffusion",
    "neural",
    "gan",
    "gpt",
    "openai",
    "runway",
    "firefly",
    "adobe firefly",
    "bing image creator",
    "craiyon",
    "bluewillow",
)

# Stable Diffusion and similar tools write these keys as PNG text chunks
GENERATION_PARAMETER_KEYS = ("Dream", "prompt", "parameters")
AI_METADATA_KEYS = ("parameters", "prompt", "sd-metadata")

GENERATION_PARAMETERS_INDICATOR = "Contains AI generation parameters"
AI_METADATA_INDICATOR = "Contains AI metadata fields"


def _is_set(value: Any) -> bool:
    """Presence test: empty strings, zero, False and None count as absent."""
    if isinstance(value, (str, int, float)):
        return bool(value)
    return value is not None


def _keyword_indicators(metadata: MetadataMapping, key: str, label: str) -> list[str]:
    """One indicator per keyword found in the tag's description.

    A description matching several keywords yields several identical
    entries.
    """
    description = tag_description(metadata, key)
    if not description:
        return []
    lowered = description.lower()
    return [f"{label}: {description}" for keyword in AI_KEYWORDS if keyword in lowered]


def classify(metadata: MetadataMapping) -> HeuristicVerdict:
    """Flag AI generation markers in decoded image metadata.

    Checks, in this order:
    1. Software tag keywords
    2. Artist tag keywords
    3. UserComment keywords
    4. Generation parameter keys (Dream, prompt, parameters)
    5. ImageDescription keywords
    6. AI metadata keys (parameters, prompt, sd-metadata)

    Steps 4 and 6 overlap on ``prompt`` and ``parameters``; both
    indicators are reported when either key is present.

    Args:
        metadata: Decoded tag mapping (may be empty)

    Returns:
        HeuristicVerdict with indicators in check order
    """
    indicators: list[str] = []

    indicators += _keyword_indicators(metadata, "Software", "Software")
    indicators += _keyword_indicators(metadata, "Artist", "Artist")
    indicators += _keyword_indicators(metadata, "UserComment", "Comment")

    if any(_is_set(metadata.get(key)) for key in GENERATION_PARAMETER_KEYS):
        indicators.append(GENERATION_PARAMETERS_INDICATOR)

    indicators += _keyword_indicators(metadata, "ImageDescription", "Description")

    if any(_is_set(metadata.get(key)) for key in AI_METADATA_KEYS):
        indicators.append(AI_METADATA_INDICATOR)

    return HeuristicVerdict(indicators=indicators)
