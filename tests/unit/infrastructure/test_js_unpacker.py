"""Tests for the packed-JS unpacker and script scraping helpers."""

from __future__ import annotations

import re
from unittest.mock import MagicMock, patch

import pytest

from mediabridge.infrastructure.extractors import js_unpacker
from mediabridge.infrastructure.extractors.js_unpacker import (
    extract_variable,
    extract_via_pattern,
    find_packed_blocks,
    is_packed,
    to_base36,
    unpack,
)

_PACKER_BODY = (
    "{while(c--)if(k[c])p=p.replace(new RegExp('\\\\b'+c.toString(a)+'\\\\b','g'),k[c]);"
    "return p}"
)


def _pack(payload: str, words: list[str], base: int = 36) -> str:
    return (
        f"eval(function(p,a,c,k,e,d){_PACKER_BODY}"
        f"('{payload}',{base},{len(words)},'{'|'.join(words)}'.split('|'),0,{{}}))"
    )


class TestToBase36:
    @pytest.mark.parametrize(
        ("num", "expected"),
        [(0, "0"), (9, "9"), (10, "a"), (35, "z"), (36, "10"), (1295, "zz")],
    )
    def test_matches_js_to_string(self, num: int, expected: str) -> None:
        assert to_base36(num) == expected


class TestUnpack:
    def test_substitutes_tokens(self) -> None:
        assert "foo bar" in unpack(_pack("0 1", ["foo", "bar"]))

    def test_empty_entries_are_not_substituted(self) -> None:
        assert unpack(_pack("0 1", ["", "bar"])) == "0 bar"

    def test_letter_tokens_above_nine(self) -> None:
        words = [f"w{i}" for i in range(12)]
        assert unpack(_pack("a b 9", words)) == "w10 w11 w9"

    def test_only_whole_tokens_are_replaced(self) -> None:
        words = [f"w{i}" for i in range(11)]
        # "10" is base-36 for 36, outside the dictionary; "0x" is not a token
        assert unpack(_pack("0 10 0x", words)) == "w0 10 0x"

    def test_substitution_does_not_cascade(self) -> None:
        # "0" -> "1" must not be rewritten again to "bar"
        assert unpack(_pack("0", ["1", "bar"])) == "1"
        assert unpack(_pack("0 1", ["1", "bar"])) == "1 bar"

    def test_base_field_is_ignored(self) -> None:
        assert unpack(_pack("0 1", ["foo", "bar"], base=62)) == "foo bar"

    def test_packed_inside_script_tag(self) -> None:
        html = f"<script type='text/javascript'>{_pack('0', ['hello'])}</script>"
        assert unpack(html) == "hello"

    def test_plain_text_strips_script_tags(self) -> None:
        assert unpack("<SCRIPT>var x = 1;</script>") == "var x = 1;"

    def test_plain_text_without_tags_unchanged(self) -> None:
        assert unpack("var quality = '720p';") == "var quality = '720p';"

    def test_split_tags_are_fully_removed(self) -> None:
        assert unpack("<scr<script>ipt>x</script>") == "x"

    @pytest.mark.parametrize(
        "text",
        [
            "",
            "plain text",
            "<script>a</script>",
            "<scr<script>ipt>alert(1)</scr</script>ipt>",
            "<script src='x.js'></script><p>hi</p>",
        ],
    )
    def test_idempotent_on_unpacked_text(self, text: str) -> None:
        once = unpack(text)
        assert unpack(once) == once

    def test_failure_returns_input_and_logs(self) -> None:
        packed = _pack("0 1", ["foo", "bar"])
        mock_log = MagicMock()
        with (
            patch.object(js_unpacker, "log", mock_log),
            patch.object(js_unpacker, "to_base36", side_effect=RuntimeError("boom")),
        ):
            assert unpack(packed) == packed

        mock_log.warning.assert_called_once()
        assert mock_log.warning.call_args.args[0] == "js_unpack_failed"


class TestIsPacked:
    def test_detects_idiom(self) -> None:
        assert is_packed(_pack("0", ["a"]))

    def test_detects_r_variant(self) -> None:
        assert is_packed("eval(function(p,a,c,k,e,r){}")

    def test_plain_js(self) -> None:
        assert not is_packed("function foo() { return 1; }")


class TestFindPackedBlocks:
    def test_returns_every_block_in_order(self) -> None:
        html = (
            "<html><script>"
            + _pack("0", ["first"])
            + "</script><p>between</p><script>"
            + _pack("0", ["second"])
            + "</script></html>"
        )
        assert find_packed_blocks(html) == ["first", "second"]

    def test_no_blocks(self) -> None:
        assert find_packed_blocks("<html><body>nothing</body></html>") == []

    def test_marker_without_payload_is_skipped(self) -> None:
        assert find_packed_blocks("eval(function(p,a,c,k,e,d){ broken") == []


class TestExtractVariable:
    def test_double_quotes(self) -> None:
        assert extract_variable('var quality = "1080p";', "quality") == "1080p"

    def test_single_quotes(self) -> None:
        assert extract_variable("quality='720p'", "quality") == "720p"

    def test_name_is_case_insensitive(self) -> None:
        assert extract_variable('MDCore.WURL="//cdn/v.mp4"', "wurl") == "//cdn/v.mp4"

    def test_missing_assignment(self) -> None:
        assert extract_variable('var other = "x";', "quality") is None

    def test_first_assignment_wins(self) -> None:
        text = 'quality = "480p"; quality = "1080p";'
        assert extract_variable(text, "quality") == "480p"

    def test_special_characters_in_name(self) -> None:
        assert extract_variable('a.b = "x"', "a.b") == "x"
        assert extract_variable('axb = "x"', "a.b") is None


class TestExtractViaPattern:
    def test_returns_first_group(self) -> None:
        assert extract_via_pattern('file:"https://x/v.m3u8"', r'file:"([^"]+)"') == (
            "https://x/v.m3u8"
        )

    def test_accepts_compiled_pattern(self) -> None:
        assert extract_via_pattern("id=42", re.compile(r"id=(\d+)")) == "42"

    def test_no_match(self) -> None:
        assert extract_via_pattern("nothing", r"id=(\d+)") is None

    def test_invalid_pattern_logs_and_returns_none(self) -> None:
        mock_log = MagicMock()
        with patch.object(js_unpacker, "log", mock_log):
            assert extract_via_pattern("text", "(unclosed") is None

        mock_log.warning.assert_called_once()
        assert mock_log.warning.call_args.args[0] == "js_pattern_extract_failed"

    def test_pattern_without_group_logs_and_returns_none(self) -> None:
        mock_log = MagicMock()
        with patch.object(js_unpacker, "log", mock_log):
            assert extract_via_pattern("abc", r"abc") is None

        assert mock_log.warning.call_args.args[0] == "js_pattern_extract_failed"
