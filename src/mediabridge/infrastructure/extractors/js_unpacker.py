"""Dean Edwards packed JavaScript unpacking and script scraping helpers.

Format: eval(function(p,a,c,k,e,d){...}('payload',base,count,'dict'.split('|')))

Only the payload and the pipe-delimited dictionary are used.  Tokens are
the base-36 spelling of the dictionary index, so the dictionary length
alone determines the token range.

All helpers operate on uncontrolled third-party markup and never raise:
failures are logged and degrade to the "no match" result.
"""

from __future__ import annotations

import re

import structlog

log = structlog.get_logger(__name__)

_PACKED_RE = re.compile(
    r"eval\s*\(\s*function\s*\(\s*p\s*,\s*a\s*,\s*c\s*,\s*k\s*,\s*e\s*,\s*[dr]\s*\)"
    r"\s*\{.*?\}\s*\(\s*'(.*?)'\s*,\s*(\d+)\s*,\s*(\d+)\s*,\s*'(.*?)'\s*\.split\('\|'\)",
    re.DOTALL,
)

_PACKED_START_RE = re.compile(
    r"eval\s*\(\s*function\s*\(\s*p\s*,\s*a\s*,\s*c\s*,\s*k\s*,\s*e\s*,\s*[dr]\s*\)"
)

_SCRIPT_OPEN_RE = re.compile(r"<script[^>]*>", re.IGNORECASE)
_SCRIPT_CLOSE_RE = re.compile(r"</script>", re.IGNORECASE)

_WORD_RE = re.compile(r"\b\w+\b")

_DIGITS = "0123456789abcdefghijklmnopqrstuvwxyz"

# Upper bound for a single packed block when scanning a full page
_MAX_BLOCK_CHARS = 65536


def to_base36(num: int) -> str:
    """Render a non-negative integer the way JS ``num.toString(36)`` does."""
    if num < 36:
        return _DIGITS[num]
    return to_base36(num // 36) + _DIGITS[num % 36]


def _strip_script_tags(text: str) -> str:
    # Repeat until stable
    while True:
        cleaned = _SCRIPT_CLOSE_RE.sub("", _SCRIPT_OPEN_RE.sub("", text))
        if cleaned == text:
            return cleaned
        text = cleaned


def is_packed(text: str) -> bool:
    """Return whether *text* contains a packed ``eval(function(p,a,c,k,e,d)`` call."""
    return _PACKED_START_RE.search(text) is not None


def unpack(text: str) -> str:
    """Reverse packed-script obfuscation.

    When the packed idiom is present, every whole-word base-36 token in
    the payload is swapped for its dictionary word.  Empty dictionary
    entries never replace anything.  Without the idiom, script wrapper
    tags are stripped and the remaining text is returned as-is.

    On any internal failure the input is returned unchanged.
    """
    try:
        cleaned = _strip_script_tags(text)
        match = _PACKED_RE.search(cleaned)
        if match is None:
            return cleaned

        payload = match.group(1)
        words = match.group(4).split("|")
        table = {to_base36(index): word for index, word in enumerate(words) if word}

        def _replace_word(m: re.Match[str]) -> str:
            token = m.group(0)
            return table.get(token, token)

        return _WORD_RE.sub(_replace_word, payload)
    except Exception as exc:  # noqa: BLE001
        log.warning("js_unpack_failed", error=str(exc))
        return text


def find_packed_blocks(html: str) -> list[str]:
    """Return every packed block in a page, unpacked, in document order.

    Uses start markers plus a bounded chunk per block, so surrounding
    markup after the block does not need to be matched exactly.
    """
    blocks: list[str] = []
    for m in _PACKED_START_RE.finditer(html):
        chunk = html[m.start() : m.start() + _MAX_BLOCK_CHARS]
        if _PACKED_RE.search(chunk) is None:
            continue
        blocks.append(unpack(chunk))
    return blocks


def extract_variable(text: str, name: str) -> str | None:
    """Return the first quoted value assigned to ``name``.

    Matches ``name = "value"`` and ``name = 'value'``; the variable name
    is matched case-insensitively.
    """
    try:
        pattern = re.compile(
            rf"""(?i:{re.escape(name)})\s*=\s*["']([^"']+)["']"""
        )
        match = pattern.search(text)
        return match.group(1) if match else None
    except Exception as exc:  # noqa: BLE001
        log.warning("js_variable_extract_failed", variable=name, error=str(exc))
        return None


def extract_via_pattern(text: str, pattern: str | re.Pattern[str]) -> str | None:
    """Return the first capture group of *pattern* in *text*, if any."""
    try:
        compiled = re.compile(pattern) if isinstance(pattern, str) else pattern
        match = compiled.search(text)
        return match.group(1) if match else None
    except Exception as exc:  # noqa: BLE001
        log.warning(
            "js_pattern_extract_failed",
            pattern=getattr(pattern, "pattern", pattern),
            error=str(exc),
        )
        return None
