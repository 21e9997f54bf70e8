"""Image inputs: local files, raw bytes (paste/stdin) and URLs."""

from __future__ import annotations

import mimetypes
import os
from dataclasses import dataclass

import httpx

from photometa.config import get_config
from photometa.errors import DecodeError, FetchError
from photometa.extractors import open_image

# Name given to images fetched from a URL
URL_IMAGE_NAME = "image-from-url.jpg"
PASTED_IMAGE_NAME = "pasted-image"
FALLBACK_MIME_TYPE = "application/octet-stream"


def sniff_mime_type(data: bytes) -> str:
    """Guess the MIME type of raw image bytes from their content."""
    try:
        with open_image(data) as img:
            return img.get_format_mimetype() or FALLBACK_MIME_TYPE
    except DecodeError:
        return FALLBACK_MIME_TYPE


@dataclass(frozen=True)
class ImageSource:
    """Raw image bytes plus the name and MIME type they arrived with."""

    name: str
    data: bytes
    mime_type: str

    @property
    def size_bytes(self) -> int:
        return len(self.data)

    @classmethod
    def from_path(cls, path: str) -> ImageSource:
        """Read an image file from disk.

        Raises:
            FileNotFoundError: If the file does not exist
        """
        if not os.path.exists(path):
            raise FileNotFoundError(f"File not found: {path}")
        with open(path, "rb") as f:
            data = f.read()
        mime_type = mimetypes.guess_type(path)[0] or sniff_mime_type(data)
        return cls(name=os.path.basename(path), data=data, mime_type=mime_type)

    @classmethod
    def from_bytes(
        cls, data: bytes, name: str = PASTED_IMAGE_NAME, mime_type: str | None = None
    ) -> ImageSource:
        """Wrap bytes obtained from a paste, drop or stdin."""
        return cls(name=name, data=data, mime_type=mime_type or sniff_mime_type(data))


def _content_type(response: httpx.Response) -> str:
    return response.headers.get("content-type", "").split(";")[0].strip().lower()


def _read_limited(response: httpx.Response, limit: int) -> bytes:
    """Read a streamed body, stopping as soon as it passes ``limit`` bytes."""
    declared = response.headers.get("content-length", "")
    if declared.isdigit() and int(declared) > limit:
        raise FetchError(f"Image exceeds {limit // (1024 * 1024)} MB")

    chunks: list[bytes] = []
    received = 0
    for chunk in response.iter_bytes():
        received += len(chunk)
        if received > limit:
            raise FetchError(f"Image exceeds {limit // (1024 * 1024)} MB")
        chunks.append(chunk)
    return b"".join(chunks)


def fetch_image(
    url: str, timeout: float | None = None, client: httpx.Client | None = None
) -> ImageSource:
    """Download an image from ``url``.

    The body is streamed; a response whose ``Content-Length`` or streamed
    size passes ``fetch.max_file_size_mb`` is abandoned without reading
    the rest.

    Args:
        url: http(s) URL of the image
        timeout: Request timeout in seconds (default: from configuration)
        client: httpx client to send the request with (default: a new one)

    Returns:
        ImageSource named "image-from-url.jpg"

    Raises:
        FetchError: On network failure, non-2xx status, a non-image
            content type or an oversized body
    """
    config = get_config().fetch
    if timeout is None:
        timeout = config.timeout_seconds
    limit = config.max_file_size_mb * 1024 * 1024

    owns_client = client is None
    if client is None:
        client = httpx.Client(timeout=timeout, follow_redirects=True)
    try:
        with client.stream("GET", url, timeout=timeout, follow_redirects=True) as response:
            response.raise_for_status()
            content_type = _content_type(response)
            if (
                content_type
                and not content_type.startswith("image/")
                and content_type != FALLBACK_MIME_TYPE
            ):
                raise FetchError(f"URL did not return an image (content-type: {content_type})")
            data = _read_limited(response, limit)
    except httpx.HTTPError as e:
        raise FetchError(f"Could not load image from {url}: {e}") from e
    finally:
        if owns_client:
            client.close()

    if not content_type or content_type == FALLBACK_MIME_TYPE:
        content_type = sniff_mime_type(data)
    return ImageSource(name=URL_IMAGE_NAME, data=data, mime_type=content_type)
