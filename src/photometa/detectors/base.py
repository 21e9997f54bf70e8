"""Base class for remote verifiers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, ClassVar

from photometa.errors import ConfigurationError

if TYPE_CHECKING:
    from photometa.models import RemoteVerdict


class BaseVerifier(ABC):
    """Abstract base class for remote AI-generation verifiers.

    A verifier is built once from configuration. Callers check
    ``is_configured()`` and skip ``verify()`` entirely when it is False.
    """

    name: ClassVar[str] = "base"

    @abstractmethod
    def is_configured(self) -> bool:
        """Return True if the verifier can reach its service."""

    @abstractmethod
    async def verify(self, image: bytes, mime_type: str) -> RemoteVerdict:
        """Ask the remote service for a verdict on ``image``.

        Raises:
            ConfigurationError: If the verifier is not configured
            RemoteAnalysisError: If the remote analysis fails
        """

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r}, configured={self.is_configured()})"


class UnconfiguredVerifier(BaseVerifier):
    """Stand-in for a verifier whose credentials are missing."""

    name: ClassVar[str] = "unconfigured"

    def __init__(self, reason: str = "Remote verifier is not configured") -> None:
        self.reason = reason

    def is_configured(self) -> bool:
        return False

    async def verify(self, image: bytes, mime_type: str) -> RemoteVerdict:
        raise ConfigurationError(self.reason)
