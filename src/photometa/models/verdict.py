"""Heuristic and remote verdict models."""

from __future__ import annotations

import math
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator

NO_REASONING = "No reasoning provided"


class HeuristicVerdict(BaseModel):
    """Result of the metadata keyword heuristic.

    ``is_ai`` is derived from ``indicators`` and cannot be set on its own.
    """

    model_config = ConfigDict(frozen=True)

    indicators: list[str] = Field(default_factory=list)

    @computed_field(alias="isAI")  # type: ignore[prop-decorator]
    @property
    def is_ai(self) -> bool:
        """True when at least one indicator was found."""
        return len(self.indicators) > 0


class RemoteVerdict(BaseModel):
    """Verdict returned by the remote multimodal model.

    Confidence is coerced to an integer in [0, 100]. It is not checked
    against ``is_ai_generated``; the model's answer is taken as given.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    is_ai_generated: bool = Field(default=False, alias="isAIGenerated")
    confidence: int = 0
    reasoning: str = NO_REASONING
    visual_indicators: list[str] = Field(default_factory=list, alias="visualIndicators")

    @field_validator("confidence", mode="before")
    @classmethod
    def _clamp_confidence(cls, value: Any) -> int:
        try:
            number = float(value)
        except (TypeError, ValueError):
            return 0
        if math.isnan(number):
            return 0
        if math.isinf(number):
            return 100 if number > 0 else 0
        return max(0, min(100, round(number)))
