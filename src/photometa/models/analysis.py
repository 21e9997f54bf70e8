"""Analysis record models."""

from __future__ import annotations

import uuid

from pydantic import BaseModel, ConfigDict, Field

from .file import FileInfo
from .metadata import MetadataMapping
from .verdict import HeuristicVerdict, RemoteVerdict


def new_record_id() -> str:
    """Return a fresh record identity."""
    return uuid.uuid4().hex


class AnalysisRecord(BaseModel):
    """Everything known about one analyzed image.

    A record is never modified after creation. Attaching the remote verdict
    produces a new record with the same ``record_id``.
    """

    model_config = ConfigDict(frozen=True)

    record_id: str = Field(default_factory=new_record_id)
    file_info: FileInfo
    width: int
    height: int
    metadata: MetadataMapping = Field(default_factory=dict)
    heuristic: HeuristicVerdict = Field(default_factory=HeuristicVerdict)
    remote: RemoteVerdict | None = None

    @property
    def file_name(self) -> str:
        return self.file_info.filename

    @property
    def file_size(self) -> str:
        return self.file_info.size_human

    @property
    def dimensions(self) -> str:
        """Return dimensions as ``W x H``."""
        return f"{self.width} x {self.height}"

    @property
    def is_ai_generated(self) -> bool:
        """Heuristic verdict, or the remote one when it is available."""
        if self.remote is not None:
            return self.remote.is_ai_generated
        return self.heuristic.is_ai

    def with_remote(self, verdict: RemoteVerdict) -> AnalysisRecord:
        """Return a copy of this record carrying ``verdict``."""
        return self.model_copy(update={"remote": verdict})


class AnalysisSnapshot(BaseModel):
    """One state of an analysis as seen by the presentation layer.

    Attributes:
        record: The current record
        preview: ``data:`` URL thumbnail, or None if it could not be built
        remote_pending: Remote verification is still running
        remote_error: Message of a failed remote verification
    """

    model_config = ConfigDict(frozen=True)

    record: AnalysisRecord
    preview: str | None = None
    remote_pending: bool = False
    remote_error: str | None = None
