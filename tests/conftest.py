"""Pytest configuration and fixtures."""

import io
import shutil

import pytest
from PIL import ExifTags, Image
from PIL.PngImagePlugin import PngInfo

from photometa.config import reset_config
from photometa.detectors import BaseVerifier
from photometa.models import MetadataTag, RemoteVerdict

ENV_VARS = [
    "PHOTOMETA_GEMINI_API_KEY",
    "GEMINI_API_KEY",
    "VITE_GEMINI_API_KEY",
    "PHOTOMETA_GEMINI_MODEL",
    "PHOTOMETA_REMOTE_TIMEOUT",
    "PHOTOMETA_FETCH_TIMEOUT",
    "PHOTOMETA_FETCH_MAX_SIZE",
    "GA_PROPERTY_ID",
    "GOOGLE_APPLICATION_CREDENTIALS_JSON",
]


def make_png(text: dict[str, str] | None = None, size: tuple[int, int] = (40, 30)) -> bytes:
    """Build a PNG, optionally with tEXt chunks."""
    img = Image.new("RGB", size, (200, 40, 40))
    info = PngInfo()
    for key, value in (text or {}).items():
        info.add_text(key, value)
    buffer = io.BytesIO()
    img.save(buffer, format="PNG", pnginfo=info)
    return buffer.getvalue()


def make_jpeg(exif_tags: dict[int, str] | None = None, size: tuple[int, int] = (64, 48)) -> bytes:
    """Build a JPEG with base-IFD EXIF string tags."""
    img = Image.new("RGB", size, (10, 120, 200))
    exif = Image.Exif()
    for tag_id, value in (exif_tags or {}).items():
        exif[tag_id] = value
    buffer = io.BytesIO()
    img.save(buffer, format="JPEG", exif=exif)
    return buffer.getvalue()


def tag(description: str) -> MetadataTag:
    return MetadataTag(description=description, value=description)


class FakeVerifier(BaseVerifier):
    """In-memory verifier returning a fixed verdict or raising."""

    name = "fake"

    def __init__(self, verdict=None, error=None, configured=True):
        self.verdict = verdict or RemoteVerdict(
            is_ai_generated=True,
            confidence=85,
            reasoning="Smooth skin and malformed hands",
            visual_indicators=["extra fingers"],
        )
        self.error = error
        self.configured = configured
        self.calls = []

    def is_configured(self):
        return self.configured

    async def verify(self, image, mime_type):
        self.calls.append((image, mime_type))
        if self.error is not None:
            raise self.error
        return self.verdict


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """Isolate configuration from the environment and config files."""
    from photometa import config

    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr(config, "CONFIG_LOCATIONS", [tmp_path / "missing.yaml"])
    reset_config()
    yield
    reset_config()


@pytest.fixture
def png_bytes() -> bytes:
    return make_png()


@pytest.fixture
def sd_png_bytes() -> bytes:
    """PNG carrying Stable Diffusion style text chunks."""
    return make_png({"parameters": "a cat in space\nSteps: 20, Sampler: Euler a"})


@pytest.fixture
def midjourney_jpeg() -> bytes:
    return make_jpeg(
        {
            ExifTags.Base.Software: "Midjourney v5",
            ExifTags.Base.Artist: "Jane Doe",
        }
    )


@pytest.fixture
def has_exiftool() -> bool:
    """Check if exiftool is available."""
    return shutil.which("exiftool") is not None
