"""Tests for the mediabridge CLI argument handling."""

from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import patch

import pytest

from mediabridge.interfaces.cli import cli


class TestParseArgs:
    def test_extract(self) -> None:
        args = cli._parse_args(
            ["--log-level", "DEBUG", "extract", "https://a/e/1", "--media-type", "anime"]
        )
        assert args.command == "extract"
        assert args.url == "https://a/e/1"
        assert args.category == "video"
        assert args.media_type == "anime"
        assert args.log_level == "DEBUG"

    def test_call_with_json_args(self) -> None:
        args = cli._parse_args(["call", "sample", "search", '"q"', "1", "[]"])
        assert args.extension_id == "sample"
        assert cli._parse_json_args(args.args) == ["q", 1, []]

    def test_command_required(self) -> None:
        with pytest.raises(SystemExit):
            cli._parse_args([])

    def test_invalid_json_arg(self) -> None:
        with pytest.raises(SystemExit, match="Invalid JSON"):
            cli._parse_json_args(["{nope"])


class TestStart:
    def test_extractors_lists_catalog(
        self,
        tmp_path: Path,
        capsys: pytest.CaptureFixture[str],
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        monkeypatch.delenv("MEDIABRIDGE_EXTENSION_DIR", raising=False)
        with patch.object(cli, "configure_logging"):
            code = cli.start(["--extension-dir", str(tmp_path), "extractors"])

        assert code == 0
        assert json.loads(capsys.readouterr().out) == [
            "streamwish",
            "streamtape",
            "filemoon",
            "mixdrop",
            "mp4upload",
        ]

    def test_extract_unsupported_host(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        with patch.object(cli, "configure_logging"):
            code = cli.start(
                ["--extension-dir", str(tmp_path), "extract", "https://unknown.org/e/1"]
            )

        assert code == 1
        assert json.loads(capsys.readouterr().out) == []

    def test_call_unknown_extension(self, tmp_path: Path) -> None:
        with patch.object(cli, "configure_logging"):
            code = cli.start(
                ["--extension-dir", str(tmp_path), "call", "ghost", "search"]
            )
        assert code == 1
