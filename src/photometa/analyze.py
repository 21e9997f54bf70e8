"""Core analysis functions."""

from __future__ import annotations

import asyncio
import base64
import io
import logging
from collections.abc import AsyncIterator

from PIL import Image

from photometa.detectors import BaseVerifier, GeminiVerifier, classify
from photometa.errors import DecodeError, RemoteAnalysisError
from photometa.extractors import extract_metadata, open_image, probe_dimensions
from photometa.models import AnalysisRecord, AnalysisSnapshot, FileInfo, new_record_id
from photometa.sources import ImageSource

logger = logging.getLogger(__name__)

PREVIEW_MAX_SIZE = (512, 512)


def make_preview(source: ImageSource) -> str | None:
    """Build a PNG thumbnail of the image as a ``data:`` URL.

    Returns None if the thumbnail cannot be built; a missing preview
    never aborts an analysis.
    """
    try:
        with open_image(source.data) as img:
            img.thumbnail(PREVIEW_MAX_SIZE)
            if img.mode not in ("RGB", "RGBA", "L", "LA", "P"):
                img = img.convert("RGBA")
            buffer = io.BytesIO()
            img.save(buffer, format="PNG")
    except (DecodeError, OSError, ValueError) as e:
        logger.warning(f"Preview failed for {source.name}: {e}")
        return None
    return "data:image/png;base64," + base64.b64encode(buffer.getvalue()).decode("ascii")


def build_record(source: ImageSource, record_id: str | None = None) -> AnalysisRecord:
    """Decode metadata and dimensions, then run the heuristic.

    Raises:
        DecodeError: If metadata or dimensions cannot be decoded
    """
    metadata = extract_metadata(source.data)
    width, height = probe_dimensions(source.data)
    return AnalysisRecord(
        record_id=record_id or new_record_id(),
        file_info=FileInfo(
            filename=source.name,
            size_bytes=source.size_bytes,
            mime_type=source.mime_type,
        ),
        width=width,
        height=height,
        metadata=metadata,
        heuristic=classify(metadata),
    )


class AnalysisSession:
    """Holds the single "current analysis" slot.

    Each call to ``analyze()`` supersedes the previous one: its pending
    remote verification is cancelled, and a remote result that still
    arrives for a superseded record is dropped.

    Example:
        session = AnalysisSession()
        async for snapshot in session.analyze(ImageSource.from_path("a.png")):
            render(snapshot)
    """

    def __init__(self, verifier: BaseVerifier | None = None) -> None:
        self.verifier = verifier if verifier is not None else GeminiVerifier.from_config()
        self._current: AnalysisRecord | None = None
        self._current_id: str | None = None
        self._remote_task: asyncio.Task | None = None

    @property
    def current(self) -> AnalysisRecord | None:
        """The record of the latest analysis, or None while it is decoding."""
        return self._current

    def is_current(self, record_id: str) -> bool:
        return self._current_id == record_id

    def _supersede(self, record_id: str) -> None:
        self._current_id = record_id
        self._current = None
        if self._remote_task is not None and not self._remote_task.done():
            self._remote_task.cancel()
        self._remote_task = None

    async def analyze(self, source: ImageSource) -> AsyncIterator[AnalysisSnapshot]:
        """Analyze ``source`` and yield snapshots as results arrive.

        1. Heuristic snapshot (``remote`` absent), right after decoding
        2. If the verifier is configured, a second snapshot with either
           ``remote`` attached or ``remote_error`` set

        Nothing further is yielded once a newer analysis has started.

        Raises:
            DecodeError: If metadata or dimensions cannot be decoded; no
                snapshot is produced in that case
        """
        record_id = new_record_id()
        self._supersede(record_id)

        preview = make_preview(source)
        record = build_record(source, record_id)
        self._current = record
        logger.info(
            f"Analyzed {record.file_name}: {len(record.heuristic.indicators)} heuristic indicator(s)"
        )

        if not self.verifier.is_configured():
            yield AnalysisSnapshot(record=record, preview=preview)
            return

        task = asyncio.ensure_future(self.verifier.verify(source.data, source.mime_type))
        self._remote_task = task
        try:
            yield AnalysisSnapshot(record=record, preview=preview, remote_pending=True)

            try:
                verdict = await task
            except asyncio.CancelledError:
                if task.cancelled() and not self.is_current(record_id):
                    logger.debug(f"Remote verification for {record.file_name} superseded")
                    return
                raise
            except RemoteAnalysisError as e:
                if not self.is_current(record_id):
                    return
                logger.warning(f"Remote verification failed for {record.file_name}: {e}")
                yield AnalysisSnapshot(record=record, preview=preview, remote_error=str(e))
                return

            if not self.is_current(record_id):
                logger.debug(f"Dropping late remote verdict for {record.file_name}")
                return
            record = record.with_remote(verdict)
            self._current = record
            yield AnalysisSnapshot(record=record, preview=preview)
        finally:
            if not task.done():
                task.cancel()


async def analyze_image(
    source: ImageSource, verifier: BaseVerifier | None = None
) -> AnalysisSnapshot:
    """Run a full analysis and return the final snapshot.

    Raises:
        DecodeError: If metadata or dimensions cannot be decoded
    """
    session = AnalysisSession(verifier)
    snapshots = session.analyze(source)
    # The first snapshot always exists once decoding succeeded
    final = await anext(snapshots)
    async for final in snapshots:
        pass
    return final


def analyze_file(path: str, verifier: BaseVerifier | None = None) -> AnalysisSnapshot:
    """Analyze an image file and return the final snapshot.

    Raises:
        FileNotFoundError: If the file does not exist
        DecodeError: If metadata or dimensions cannot be decoded
    """
    return asyncio.run(analyze_image(ImageSource.from_path(path), verifier))
