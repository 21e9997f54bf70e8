"""Visitor-count analytics models."""

from pydantic import BaseModel, ConfigDict, Field


class VisitorCount(BaseModel):
    """Payload of the visitor-count endpoint.

    Deployments report either ``activeUsers`` over a period or
    ``totalUsers``; mock payloads carry ``isMock``.
    """

    model_config = ConfigDict(populate_by_name=True)

    active_users: int | None = Field(default=None, alias="activeUsers")
    total_users: int | None = Field(default=None, alias="totalUsers")
    period: str | None = None
    is_mock: bool | None = Field(default=None, alias="isMock")
    message: str | None = None

    @property
    def count(self) -> int:
        """Whichever user count the payload carries."""
        if self.active_users is not None:
            return self.active_users
        return self.total_users or 0

    def to_payload(self) -> dict:
        """Serialize with camelCase keys, omitting unset fields."""
        return self.model_dump(by_alias=True, exclude_none=True)
