"""Gemini-backed remote verifier.

Sends the image and a fixed instruction prompt to a hosted Gemini model
and parses the JSON verdict from its free-text reply.

Requirements:
- google-genai (pip install google-genai)
- API key (set via PHOTOMETA_GEMINI_API_KEY / GEMINI_API_KEY or config)
"""

from __future__ import annotations

import asyncio
import json
import logging
import re
from typing import Any, ClassVar

import httpx
from google import genai
from google.genai import errors as genai_errors
from google.genai import types
from pydantic import ValidationError

from photometa.config import DEFAULT_GEMINI_MODEL, GeminiConfig, get_config
from photometa.detectors.base import BaseVerifier, UnconfiguredVerifier
from photometa.errors import ConfigurationError, MalformedResponseError, RemoteAnalysisError
from photometa.models import NO_REASONING, RemoteVerdict

logger = logging.getLogger(__name__)

# Code fences the model sometimes emits despite being asked not to
_FENCE_JSON = re.compile(r"```json\n?")
_FENCE = re.compile(r"```\n?")

# Instruction prompt (Thai). Asks for pure JSON with keys isAIGenerated,
# confidence (0-100), reasoning and visualIndicators, without markdown.
DETECTION_PROMPT = """\
วิเคราะห์ภาพนี้อย่างละเอียดและบอกว่าภาพนี้ถูกสร้างโดย AI image generator (เช่น Midjourney, DALL-E, Stable Diffusion ฯลฯ) หรือเป็นภาพถ่ายจริง/งานศิลปะแบบดั้งเดิม

ให้มองหาสัญญาณเหล่านี้ที่บ่งชี้ว่าเป็นภาพจาก AI:
1. **Texture artifacts**: การเบลอผิดปกติ, รูปแบบ diffusion, หรือพื้นผิวสังเคราะห์
2. **ปัญหาทางกายวิภาค**: นิ้วมือเกิน, มือผิดรูป, สัดส่วนร่างกายที่เป็นไปไม่ได้
3. **แสงเงาไม่สอดคล้อง**: เงาที่ไม่ตรงกับแหล่งกำเนิดแสง, การสะท้อนที่ไม่สมจริง
4. **ความสอดคล้องของพื้นหลัง**: วัตถุที่ผสมผสานกันอย่างไม่เป็นธรรมชาติ, รายละเอียดที่ไร้สาระ
5. **ข้อความ/สัญลักษณ์**: ข้อความที่อ่านไม่ออก หรือโลโก้ที่ผิดรูป
6. **ลักษณะเฉพาะของ AI**: ผิวเรียบเกินไป, ลักษณะ "AI aesthetic", คุณภาพเหมือนฝัน
7. **การทำซ้ำของรูปแบบ**: ความสมมาตรที่ผิดธรรมชาติ หรือองค์ประกอบที่ซ้ำกัน

**สำคัญ: ตอบกลับเป็นภาษาไทยทั้งหมด** ในรูปแบบ JSON ดังนี้ (ไม่ต้องใส่ markdown, JSON บริสุทธิ์เท่านั้น):
{
  "isAIGenerated": true หรือ false,
  "confidence": ตัวเลข 0-100,
  "reasoning": "คำอธิบายสั้นๆ เป็นภาษาไทยว่าทำไมถึงคิดแบบนั้น",
  "visualIndicators": ["ลักษณะที่พบ 1 (ภาษาไทย)", "ลักษณะที่พบ 2 (ภาษาไทย)", ...]
}

วิเคราะห์อย่างละเอียดแต่กระชับ ถ้าไม่แน่ใจก็อธิบายว่าทำไม
"""


def strip_code_fences(text: str) -> str:
    """Remove ```json and ``` markers and surrounding whitespace."""
    return _FENCE.sub("", _FENCE_JSON.sub("", text)).strip()


def parse_remote_verdict(text: str) -> RemoteVerdict:
    """Parse the model's reply into a RemoteVerdict.

    Missing or empty keys fall back to defaults: ``isAIGenerated`` False,
    ``confidence`` 0, ``reasoning`` "No reasoning provided",
    ``visualIndicators`` [].

    Raises:
        MalformedResponseError: If the reply is not a JSON object of the
            expected shape
    """
    cleaned = strip_code_fences(text)
    try:
        parsed: Any = json.loads(cleaned)
    except json.JSONDecodeError as e:
        raise MalformedResponseError(f"Response is not valid JSON: {e}") from e

    if not isinstance(parsed, dict):
        raise MalformedResponseError(f"Expected a JSON object, got {type(parsed).__name__}")

    try:
        return RemoteVerdict(
            is_ai_generated=parsed.get("isAIGenerated") or False,
            confidence=parsed.get("confidence") or 0,
            reasoning=parsed.get("reasoning") or NO_REASONING,
            visual_indicators=parsed.get("visualIndicators") or [],
        )
    except ValidationError as e:
        raise MalformedResponseError(f"Unexpected response shape: {e}") from e


class GeminiVerifier(BaseVerifier):
    """Ask a Gemini multimodal model whether an image is AI-generated.

    Build with ``from_config()``, which returns an UnconfiguredVerifier
    when no usable API key is set.
    """

    name: ClassVar[str] = "gemini"

    def __init__(
        self,
        api_key: str,
        model: str = DEFAULT_GEMINI_MODEL,
        timeout: float | None = 60.0,
        client: genai.Client | None = None,
    ) -> None:
        if not api_key:
            raise ConfigurationError("Gemini API key is empty")
        self.model = model
        self.timeout = timeout
        self._client = client or genai.Client(api_key=api_key)

    @classmethod
    def from_config(cls, config: GeminiConfig | None = None) -> BaseVerifier:
        """Build a verifier from configuration.

        Args:
            config: Gemini settings (default: global configuration)

        Returns:
            GeminiVerifier, or UnconfiguredVerifier if the key is missing
            or still the placeholder value
        """
        config = config or get_config().gemini
        if not config.has_api_key:
            return UnconfiguredVerifier(
                "Gemini API is not configured. Set PHOTOMETA_GEMINI_API_KEY "
                "or add gemini.api_key to the config file."
            )
        return cls(config.api_key or "", model=config.model, timeout=config.timeout_seconds)

    def is_configured(self) -> bool:
        return True

    async def verify(self, image: bytes, mime_type: str) -> RemoteVerdict:
        """Send ``image`` to Gemini and parse its verdict.

        Args:
            image: Raw image bytes
            mime_type: MIME type of the image (e.g. "image/png")

        Returns:
            RemoteVerdict parsed from the model reply

        Raises:
            RemoteAnalysisError: On network failure, API error status,
                timeout, empty reply or unparsable reply
        """
        try:
            text = await asyncio.wait_for(self._generate(image, mime_type), self.timeout)
            if not text:
                raise RemoteAnalysisError("Failed to analyze image: empty response from Gemini")
            return parse_remote_verdict(text)
        except MalformedResponseError as e:
            logger.error(f"Gemini returned an unparsable verdict: {e}")
            raise MalformedResponseError(f"Failed to analyze image: {e}") from e
        except asyncio.TimeoutError as e:
            logger.error(f"Gemini request timed out after {self.timeout}s")
            raise RemoteAnalysisError(
                f"Failed to analyze image: request timed out after {self.timeout}s"
            ) from e
        except RemoteAnalysisError:
            raise
        except (genai_errors.APIError, httpx.HTTPError, OSError) as e:
            logger.error(f"Gemini API error: {e}")
            raise RemoteAnalysisError(f"Failed to analyze image: {e}") from e
        except Exception as e:
            # The SDK also raises ValueError/ValidationError for blocked or
            # unreadable responses
            logger.exception(f"Gemini request failed: {e}")
            raise RemoteAnalysisError(f"Failed to analyze image: {e}") from e

    async def _generate(self, image: bytes, mime_type: str) -> str | None:
        response = await self._client.aio.models.generate_content(
            model=self.model,
            contents=[
                types.Part.from_bytes(data=image, mime_type=mime_type),
                DETECTION_PROMPT,
            ],
        )
        return response.text
