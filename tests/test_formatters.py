"""Tests for output formatters."""

import json

import pytest
from conftest import tag

from photometa.formatters import (
    format_default,
    format_json,
    format_json_list,
    format_metadata_value,
    format_quiet,
    format_remote,
    snapshot_to_dict,
    to_dict,
)
from photometa.models import (
    AnalysisRecord,
    AnalysisSnapshot,
    FileInfo,
    HeuristicVerdict,
    RemoteVerdict,
)

REMOTE = RemoteVerdict(
    is_ai_generated=True,
    confidence=92,
    reasoning="Hands have six fingers",
    visual_indicators=["extra fingers", "smooth skin"],
)


@pytest.fixture
def record() -> AnalysisRecord:
    return AnalysisRecord(
        file_info=FileInfo(filename="cat.png", size_bytes=2048, mime_type="image/png"),
        width=640,
        height=480,
        metadata={"Software": tag("Midjourney v5"), "Artist": tag("Jane")},
        heuristic=HeuristicVerdict(indicators=["Software: Midjourney v5"]),
    )


class TestFormatMetadataValue:
    """Test format_metadata_value()."""

    def test_none(self):
        assert format_metadata_value(None) == "N/A"

    def test_tag_description(self):
        assert format_metadata_value(tag("Canon EOS R5")) == "Canon EOS R5"

    def test_dict_with_description(self):
        assert format_metadata_value({"description": "f/2.8", "value": 2.8}) == "f/2.8"

    def test_plain_dict(self):
        assert json.loads(format_metadata_value({"a": 1})) == {"a": 1}

    def test_list(self):
        assert format_metadata_value([1, 2, 3]) == "1, 2, 3"

    def test_scalar(self):
        assert format_metadata_value(72) == "72"


class TestFormatDefault:
    """Test format_default()."""

    def test_local_report(self, record):
        output = format_default(AnalysisSnapshot(record=record))

        assert "File: cat.png" in output
        assert "2.00 KB" in output
        assert "640 x 480" in output
        assert "AI generation markers found" in output
        assert "Software: Midjourney v5" in output
        assert "## METADATA (2 tags)" in output
        assert "REMOTE CHECK" not in output

    def test_pending(self, record):
        output = format_default(AnalysisSnapshot(record=record, remote_pending=True))
        assert "## REMOTE CHECK" in output
        assert "analyzing..." in output

    def test_remote_verdict(self, record):
        output = format_default(AnalysisSnapshot(record=record.with_remote(REMOTE)))
        assert "Confidence:   92%" in output
        assert "Hands have six fingers" in output
        assert "- extra fingers" in output

    def test_remote_error(self, record):
        output = format_default(AnalysisSnapshot(record=record, remote_error="Failed to analyze image: boom"))
        assert "Error:        Failed to analyze image: boom" in output

    def test_hide_metadata(self, record):
        output = format_default(AnalysisSnapshot(record=record), show_metadata=False)
        assert "## METADATA (" not in output

    def test_clean_image(self, record):
        clean = record.model_copy(update={"heuristic": HeuristicVerdict(), "metadata": {}})
        output = format_default(AnalysisSnapshot(record=clean))
        assert "no AI markers in metadata" in output
        assert "(none)" in output

    def test_long_values_truncated(self, record):
        long = record.model_copy(update={"metadata": {"parameters": tag("x" * 500)}})
        output = format_default(AnalysisSnapshot(record=long))
        assert "x" * 500 not in output
        assert "..." in output


def test_format_remote_only(record):
    output = format_remote(AnalysisSnapshot(record=record.with_remote(REMOTE)))
    assert output.startswith("## REMOTE CHECK")
    assert "File:" not in output
    assert format_remote(AnalysisSnapshot(record=record)) == ""


class TestFormatQuiet:
    """Test format_quiet()."""

    def test_heuristic_only(self, record):
        assert format_quiet(AnalysisSnapshot(record=record)) == (
            "cat.png | 640x480 | 2.00 KB | AI: yes (1 indicators)"
        )

    def test_with_remote(self, record):
        output = format_quiet(AnalysisSnapshot(record=record.with_remote(REMOTE)))
        assert output.endswith("Remote: AI (92%)")

    def test_error(self, record):
        output = format_quiet(AnalysisSnapshot(record=record, remote_error="boom"))
        assert output.endswith("Remote: error")


class TestJson:
    """Test JSON formatting."""

    def test_to_dict_keys(self, record):
        data = to_dict(record)
        assert data["fileName"] == "cat.png"
        assert data["fileSize"] == "2.00 KB"
        assert data["dimensions"] == "640 x 480"
        assert data["isAIGenerated"] is True
        assert data["aiIndicators"] == ["Software: Midjourney v5"]
        assert data["metadata"]["Software"]["description"] == "Midjourney v5"
        assert "geminiAnalysis" not in data

    def test_gemini_analysis_uses_camel_case(self, record):
        data = to_dict(record.with_remote(REMOTE))
        assert data["geminiAnalysis"] == {
            "isAIGenerated": True,
            "confidence": 92,
            "reasoning": "Hands have six fingers",
            "visualIndicators": ["extra fingers", "smooth skin"],
        }

    def test_snapshot_status(self, record):
        data = snapshot_to_dict(AnalysisSnapshot(record=record, remote_error="boom"))
        assert data["remotePending"] is False
        assert data["remoteError"] == "boom"

    def test_format_json_valid(self, record):
        data = json.loads(format_json(AnalysisSnapshot(record=record)))
        assert data["fileName"] == "cat.png"

    def test_format_json_list(self, record):
        snapshots = [AnalysisSnapshot(record=record), AnalysisSnapshot(record=record)]
        data = json.loads(format_json_list(snapshots))
        assert isinstance(data, list)
        assert len(data) == 2
