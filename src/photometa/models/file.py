"""File information models."""

from pydantic import BaseModel


def format_size(size_bytes: int | float) -> str:
    """Render a byte count in kilobytes with two decimals."""
    if size_bytes < 0:
        return "N/A"
    return f"{size_bytes / 1024:.2f} KB"


class FileInfo(BaseModel):
    """Basic information about the analyzed image."""

    filename: str
    size_bytes: int
    mime_type: str | None = None

    @property
    def size_human(self) -> str:
        """Return human-readable file size."""
        return format_size(self.size_bytes)
