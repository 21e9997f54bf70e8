"""Base extractor class."""

from abc import ABC, abstractmethod
from typing import ClassVar

from photometa.models import MetadataMapping


class BaseExtractor(ABC):
    """Abstract base class for metadata extractors.

    Extractors decode tags from raw image bytes into a shared
    MetadataMapping. Each extractor checks its own availability and is
    skipped when its dependencies are missing.

    Attributes:
        name: Human-readable name of the extractor
        priority: Lower numbers run first (default: 100). Tags written by
            earlier extractors are not overwritten by later ones.
        required: A failure of a required extractor aborts the analysis
    """

    name: ClassVar[str] = "base"
    priority: ClassVar[int] = 100
    required: ClassVar[bool] = False

    @classmethod
    @abstractmethod
    def is_available(cls) -> bool:
        """Check if this extractor is available.

        Returns:
            True if all dependencies are available
        """

    @abstractmethod
    def extract(self, data: bytes, metadata: MetadataMapping) -> None:
        """Extract tags and add them to the mapping.

        Args:
            data: Raw image bytes
            metadata: MetadataMapping to populate (modified in place)
        """

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r}, priority={self.priority})"
