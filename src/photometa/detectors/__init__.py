"""AI-generation detectors.

- heuristic: keyword scan over decoded metadata tags (local, instant)
- gemini: second opinion from a hosted multimodal model (remote, optional)
"""

from photometa.detectors.base import BaseVerifier, UnconfiguredVerifier
from photometa.detectors.gemini import (
    DETECTION_PROMPT,
    GeminiVerifier,
    parse_remote_verdict,
    strip_code_fences,
)
from photometa.detectors.heuristic import AI_KEYWORDS, classify


def get_verifier_status(verifier: BaseVerifier | None = None) -> dict[str, bool]:
    """Get configuration status of the remote verifier.

    Returns:
        Dict mapping verifier name to whether it is configured.
    """
    verifier = verifier or GeminiVerifier.from_config()
    return {GeminiVerifier.name: verifier.is_configured()}


__all__ = [
    # Heuristic
    "AI_KEYWORDS",
    "classify",
    # Remote
    "BaseVerifier",
    "UnconfiguredVerifier",
    "GeminiVerifier",
    "DETECTION_PROMPT",
    "parse_remote_verdict",
    "strip_code_fences",
    "get_verifier_status",
]
