"""Tests for the command-line interface."""

import json
import sys

import pytest
from conftest import make_png

from photometa import cli


def run_cli(monkeypatch, *args) -> int:
    monkeypatch.setattr(sys, "argv", ["photometa", *args])
    return cli.main()


@pytest.fixture
def sd_file(tmp_path):
    path = tmp_path / "sd.png"
    path.write_bytes(make_png({"parameters": "a cat, Steps: 20"}))
    return path


def test_default_report(monkeypatch, capsys, clean_env, sd_file):
    assert run_cli(monkeypatch, "--no-remote", str(sd_file)) == 0

    output = capsys.readouterr().out
    assert "File: sd.png" in output
    assert "Contains AI generation parameters" in output


def test_quiet(monkeypatch, capsys, clean_env, sd_file):
    assert run_cli(monkeypatch, "--no-remote", "-q", str(sd_file)) == 0

    output = capsys.readouterr().out.strip()
    assert output.startswith("sd.png | 40x30 |")
    assert "AI: yes" in output


def test_json_output_file(monkeypatch, capsys, clean_env, sd_file, tmp_path):
    report = tmp_path / "report.json"
    assert run_cli(monkeypatch, "--no-remote", "--json", "-o", str(report), str(sd_file)) == 0

    data = json.loads(report.read_text(encoding="utf-8"))
    assert data[0]["fileName"] == "sd.png"
    assert data[0]["isAIGenerated"] is True


def test_missing_file_fails(monkeypatch, capsys, clean_env, tmp_path):
    assert run_cli(monkeypatch, "--no-remote", str(tmp_path / "missing.png")) == 1
    assert "File not found" in capsys.readouterr().err


def test_undecodable_file_fails(monkeypatch, capsys, clean_env, tmp_path):
    path = tmp_path / "broken.png"
    path.write_bytes(b"not a png")

    assert run_cli(monkeypatch, "--no-remote", str(path)) == 1
    assert "Error analyzing broken.png" in capsys.readouterr().err


def test_requires_input(monkeypatch, clean_env):
    with pytest.raises(SystemExit):
        run_cli(monkeypatch)


def test_status(monkeypatch, capsys, clean_env):
    assert run_cli(monkeypatch, "--status") == 0
    output = capsys.readouterr().out
    assert "pillow" in output
    assert "gemini" in output
