"""Pillow-based extractor for EXIF tags and PNG text chunks."""

from __future__ import annotations

import io
from typing import Any, ClassVar

from PIL import ExifTags, Image, UnidentifiedImageError
from PIL.TiffImagePlugin import IFDRational

from photometa.errors import DecodeError
from photometa.extractors.base import BaseExtractor
from photometa.models import MetadataMapping, MetadataTag

# EXIF UserComment starts with an 8-byte character code
USER_COMMENT_CHARSETS = {
    b"ASCII\x00\x00\x00": "ascii",
    b"UNICODE\x00": "utf-16",
    b"JIS\x00\x00\x00\x00\x00": "shift_jis",
    b"\x00" * 8: "utf-8",
}

# Pointer tags whose values are offsets, not metadata
IFD_POINTER_TAGS = {
    ExifTags.IFD.Exif,
    ExifTags.IFD.GPSInfo,
    ExifTags.IFD.Interop,
}


def _decode_bytes(raw: bytes) -> str:
    return raw.decode("utf-8", errors="replace").strip("\x00").strip()


def decode_user_comment(raw: bytes) -> str:
    """Decode an EXIF UserComment, honouring its charset header."""
    header, payload = raw[:8], raw[8:]
    encoding = USER_COMMENT_CHARSETS.get(header)
    if encoding is None:
        return _decode_bytes(raw)
    if encoding == "utf-16":
        # Byte order follows the TIFF header, which is not known here
        encoding = "utf-16-le" if payload[1:2] == b"\x00" else "utf-16-be"
    return payload.decode(encoding, errors="replace").strip("\x00").strip()


def describe_value(value: Any) -> str:
    """Render a decoded EXIF value as printable text."""
    if isinstance(value, str):
        return value.strip("\x00").strip()
    if isinstance(value, bytes):
        return _decode_bytes(value)
    if isinstance(value, IFDRational):
        if not value.denominator:
            return "N/A"
        number = float(value)
        return str(int(number)) if number.is_integer() else f"{number:g}"
    if isinstance(value, (tuple, list)):
        return ", ".join(describe_value(v) for v in value)
    return str(value)


def json_value(value: Any) -> Any:
    """Convert a decoded EXIF value into a JSON-friendly one."""
    if isinstance(value, IFDRational):
        return float(value) if value.denominator else None
    if isinstance(value, bytes):
        return _decode_bytes(value)
    if isinstance(value, str):
        return value.strip("\x00")
    if isinstance(value, (tuple, list)):
        return [json_value(v) for v in value]
    if isinstance(value, dict):
        return {str(k): json_value(v) for k, v in value.items()}
    if isinstance(value, (int, float, bool)) or value is None:
        return value
    return str(value)


def open_image(data: bytes) -> Image.Image:
    """Open raw bytes with Pillow.

    Raises:
        DecodeError: If Pillow cannot identify or read the image
    """
    try:
        return Image.open(io.BytesIO(data))
    except (UnidentifiedImageError, OSError, ValueError) as e:
        raise DecodeError(f"Cannot decode image: {e}") from e


def probe_dimensions(data: bytes) -> tuple[int, int]:
    """Return ``(width, height)`` of the image in pixels.

    Raises:
        DecodeError: If the image cannot be decoded
    """
    with open_image(data) as img:
        width, height = img.size
    if width <= 0 or height <= 0:
        raise DecodeError(f"Invalid image dimensions: {width}x{height}")
    return width, height


class PillowExtractor(BaseExtractor):
    """Extract EXIF tags and embedded text chunks using Pillow.

    Tag names follow Pillow's EXIF tag table (``Software``, ``Artist``,
    ``ImageDescription``, ``UserComment``, ...). PNG text chunks written by
    image generators (``parameters``, ``prompt``, ``Dream``,
    ``sd-metadata``, ...) keep their literal keyword as the tag name.
    """

    name: ClassVar[str] = "pillow"
    priority: ClassVar[int] = 10
    required: ClassVar[bool] = True

    @classmethod
    def is_available(cls) -> bool:
        """Always available."""
        return True

    def extract(self, data: bytes, metadata: MetadataMapping) -> None:
        """Decode tags from ``data`` into ``metadata``.

        Raises:
            DecodeError: If the image cannot be decoded
        """
        with open_image(data) as img:
            try:
                self._parse_exif(img, metadata)
                self._parse_text_chunks(img, metadata)
                self._parse_file_tags(img, metadata)
            except (OSError, SyntaxError, ValueError) as e:
                raise DecodeError(f"Cannot read image metadata: {e}") from e

    def _add(self, metadata: MetadataMapping, name: str, value: Any) -> None:
        if name == "UserComment" and isinstance(value, bytes):
            description = decode_user_comment(value)
            metadata.setdefault(name, MetadataTag(description=description, value=description))
            return
        metadata.setdefault(
            name, MetadataTag(description=describe_value(value), value=json_value(value))
        )

    def _parse_exif(self, img: Image.Image, metadata: MetadataMapping) -> None:
        """Parse base IFD, Exif sub-IFD and GPS tags."""
        exif = img.getexif()
        if not exif:
            return

        for tag_id, value in exif.items():
            if tag_id in IFD_POINTER_TAGS:
                continue
            self._add(metadata, ExifTags.TAGS.get(tag_id, f"Tag{tag_id:#06x}"), value)

        for tag_id, value in exif.get_ifd(ExifTags.IFD.Exif).items():
            if tag_id in IFD_POINTER_TAGS:
                continue
            self._add(metadata, ExifTags.TAGS.get(tag_id, f"Tag{tag_id:#06x}"), value)

        for tag_id, value in exif.get_ifd(ExifTags.IFD.GPSInfo).items():
            self._add(metadata, ExifTags.GPSTAGS.get(tag_id, f"GPSTag{tag_id:#06x}"), value)

    def _parse_text_chunks(self, img: Image.Image, metadata: MetadataMapping) -> None:
        """Parse PNG tEXt/iTXt/zTXt chunks and JPEG/GIF comments."""
        text_chunks = getattr(img, "text", None) or {}
        for keyword, value in text_chunks.items():
            self._add(metadata, keyword, str(value))

        comment = img.info.get("comment")
        if comment:
            self._add(metadata, "Comment", comment)

    def _parse_file_tags(self, img: Image.Image, metadata: MetadataMapping) -> None:
        """Record container-level facts (format, pixel size)."""
        width, height = img.size
        metadata.setdefault("Image Width", MetadataTag(description=f"{width}px", value=width))
        metadata.setdefault("Image Height", MetadataTag(description=f"{height}px", value=height))
        if img.format:
            metadata.setdefault("FileType", MetadataTag(description=img.format, value=img.format))
            mime = Image.MIME.get(img.format)
            if mime:
                metadata.setdefault("MIMEType", MetadataTag(description=mime, value=mime))
