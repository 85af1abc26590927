"""Unit tests for function fingerprints and comment markers."""

import re

import pytest

from ainspector.core.fingerprint import (
    FINGERPRINT_LENGTH,
    extract_marker,
    fingerprint,
    format_marker,
    function_fingerprint,
)
from ainspector.models import ExtractedFunction

_FIELDS = ("src/calc.py", "add", "def add(a, b):\n    return a + b", "+    return a + b")


class TestFingerprint:
    def test_known_digest(self) -> None:
        assert fingerprint(*_FIELDS) == "2b8bfccc9280"

    def test_is_twelve_lowercase_hex_characters(self) -> None:
        value = fingerprint(*_FIELDS)
        assert len(value) == FINGERPRINT_LENGTH
        assert re.fullmatch(r"[0-9a-f]{12}", value)

    def test_is_deterministic(self) -> None:
        assert fingerprint(*_FIELDS) == fingerprint(*_FIELDS)

    @pytest.mark.parametrize("index", range(4), ids=["file_path", "name", "content", "diff"])
    def test_each_field_changes_the_digest(self, index: int) -> None:
        changed = list(_FIELDS)
        changed[index] = changed[index] + "x"
        assert fingerprint(*changed) != fingerprint(*_FIELDS)

    def test_field_boundaries_are_unambiguous(self) -> None:
        assert fingerprint("a:b", "c", "", "") != fingerprint("a", "b:c", "", "")

    def test_function_fingerprint_uses_the_four_fields(self) -> None:
        fn = ExtractedFunction(
            name=_FIELDS[1],
            start_line=1,
            end_line=2,
            content=_FIELDS[2],
            diff=_FIELDS[3],
            file_path=_FIELDS[0],
            language="python",
            change_type="modified",
        )
        assert function_fingerprint(fn) == fingerprint(*_FIELDS)
        moved = fn.model_copy(update={"start_line": 40, "end_line": 41, "change_type": "added"})
        assert function_fingerprint(moved) == function_fingerprint(fn)


class TestMarkers:
    def test_format_marker(self) -> None:
        assert format_marker("0123456789ab") == "<!-- ainspector:fn:0123456789ab -->"

    @pytest.mark.parametrize("value", ["0123456789ab", "ffffffffffff", "000000000000", "2b8bfccc9280"])
    def test_round_trip(self, value: str) -> None:
        assert extract_marker(format_marker(value)) == value

    def test_found_inside_free_text(self) -> None:
        body = "Consider guarding against None.\n\n<!-- ainspector:fn:abcdef012345 -->\nthanks"
        assert extract_marker(body) == "abcdef012345"

    def test_first_marker_wins(self) -> None:
        body = f"{format_marker('aaaaaaaaaaaa')} {format_marker('bbbbbbbbbbbb')}"
        assert extract_marker(body) == "aaaaaaaaaaaa"

    @pytest.mark.parametrize(
        "text",
        [
            "",
            "no marker here",
            "<!-- ainspector:fn:abc123 -->",
            "<!-- ainspector:fn:0123456789abcd -->",
            "<!-- ainspector:fn:ABCDEF012345 -->",
            "<!-- inspector:fn:0123456789ab -->",
            "<!-- ainspector:fn:0123456789ab-->",
            "<!-- ainspector:fn:0123456789xz -->",
        ],
        ids=["empty", "plain", "short", "long", "uppercase", "prefix", "suffix", "non-hex"],
    )
    def test_malformed_markers_are_ignored(self, text: str) -> None:
        assert extract_marker(text) is None
