"""ExifTool extractor for XMP and IPTC tags Pillow does not decode."""

import json
import os
import shutil
import subprocess
import tempfile
from typing import Any, ClassVar

from photometa.extractors.base import BaseExtractor
from photometa.models import MetadataMapping, MetadataTag

# Tags describing the temporary file rather than the image
SKIPPED_TAGS = {
    "SourceFile",
    "ExifToolVersion",
    "FileName",
    "Directory",
    "FileSize",
    "FileModifyDate",
    "FileAccessDate",
    "FileInodeChangeDate",
    "FileCreateDate",
    "FilePermissions",
    "FileTypeExtension",
}


class ExifToolExtractor(BaseExtractor):
    """Extract metadata using ExifTool.

    Adds XMP (CreatorTool, Credit, DigitalSourceType, ...) and IPTC tags
    on top of what Pillow decodes. Tags already present are left alone.

    Install: brew install exiftool (macOS) or apt install libimage-exiftool-perl (Linux)
    """

    name: ClassVar[str] = "exiftool"
    priority: ClassVar[int] = 20

    @classmethod
    def is_available(cls) -> bool:
        """Check if exiftool is available."""
        return shutil.which("exiftool") is not None

    def extract(self, data: bytes, metadata: MetadataMapping) -> None:
        """Run exiftool over ``data`` and merge new tags."""
        for name, value in self._run_exiftool(data).items():
            if name in SKIPPED_TAGS or value in (None, ""):
                continue
            metadata.setdefault(name, MetadataTag(description=self._describe(value), value=value))

    def _run_exiftool(self, data: bytes) -> dict[str, Any]:
        """Run exiftool on a temporary copy and return its JSON output."""
        fd, path = tempfile.mkstemp(prefix="photometa-")
        try:
            with os.fdopen(fd, "wb") as f:
                f.write(data)
            cmd = ["exiftool", "-json", "-s", "-charset", "utf8", path]
            result = subprocess.run(cmd, capture_output=True, text=True, timeout=30)
            if result.returncode == 0 and result.stdout:
                parsed = json.loads(result.stdout)
                if parsed and isinstance(parsed, list):
                    return parsed[0]  # ExifTool returns a list
        finally:
            os.unlink(path)
        return {}

    @staticmethod
    def _describe(value: Any) -> str:
        if isinstance(value, list):
            return ", ".join(str(v) for v in value)
        return str(value)
