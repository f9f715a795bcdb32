"""Tests for tdeskdroid.core.manifest."""

from pathlib import Path

import pytest

from tdeskdroid.core.manifest import (
    MANIFEST_FILENAME, SENTINEL_COLOR, SENTINEL_KEY, parse_manifest, parse_manifest_lines,
)
from tdeskdroid.errors import ErrorCode, TDeskDroidError


def _write_manifest(theme_dir: Path, text: str) -> Path:
    theme_dir.mkdir(parents=True, exist_ok=True)
    (theme_dir / MANIFEST_FILENAME).write_text(text, encoding="utf-8")
    return theme_dir


class TestParseManifestLines:
    def test_hex_values_lose_hash(self):
        symbols = parse_manifest_lines(["windowBg: #112233;", "windowFg: #aabbccdd;"])
        assert symbols["windowBg"] == "112233"
        assert symbols["windowFg"] == "aabbccdd"

    def test_alias_resolves_to_earlier_rule(self):
        symbols = parse_manifest_lines(["base: #010203;", "accent: base;", "deeper: accent;"])
        assert symbols["accent"] == "010203"
        assert symbols["deeper"] == "010203"

    def test_forward_alias_resolves_empty(self):
        symbols = parse_manifest_lines(["accent: base;", "base: #010203;"])
        assert symbols["accent"] == ""
        assert symbols["base"] == "010203"

    def test_skips_blank_comment_and_malformed_lines(self):
        symbols = parse_manifest_lines([
            "",
            "// generated theme",
            "no separator here",
            "windowBg: #ffffff; // trailing: comment",
        ])
        assert symbols == {"windowBg": "ffffff", SENTINEL_KEY: SENTINEL_COLOR}

    def test_sentinel_always_present(self):
        assert parse_manifest_lines([]) == {SENTINEL_KEY: SENTINEL_COLOR}

    def test_sentinel_replaces_manifest_value(self):
        symbols = parse_manifest_lines(["whatever: #000000;"])
        assert symbols[SENTINEL_KEY] == "ff00ff"

    def test_value_without_semicolon(self):
        assert parse_manifest_lines(["k: #123456"])["k"] == "123456"

    def test_strips_line_endings(self):
        assert parse_manifest_lines(["k: #123456;\r\n"])["k"] == "123456"


class TestParseManifest:
    def test_reads_file(self, tmp_path):
        theme_dir = _write_manifest(tmp_path / "theme", "bg: #112233;\nfg: bg;\n")
        symbols = parse_manifest(theme_dir)
        assert symbols["bg"] == "112233"
        assert symbols["fg"] == "112233"

    def test_crlf_file(self, tmp_path):
        theme_dir = _write_manifest(tmp_path / "theme", "bg: #112233;\r\nfg: #445566;\r\n")
        assert parse_manifest(theme_dir)["fg"] == "445566"

    def test_missing_manifest_raises(self, tmp_path):
        with pytest.raises(TDeskDroidError) as info:
            parse_manifest(tmp_path)
        assert info.value.code is ErrorCode.MANIFEST_MISSING

    def test_binary_manifest_raises(self, tmp_path):
        tmp_path.joinpath(MANIFEST_FILENAME).write_bytes(b"\xff\xfe\x00bad")
        with pytest.raises(TDeskDroidError) as info:
            parse_manifest(tmp_path)
        assert info.value.code is ErrorCode.MANIFEST_UNREADABLE
