"""Unit tests for the payload locator.

Covers the balanced-delimiter scan and its failure modes.
"""

import sys
from pathlib import Path

import pytest

# Add src to path
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from kijiji_taxonomy.exceptions import MalformedPayloadError, PayloadNotFoundError
from kijiji_taxonomy.extract.payload_locator import (
    closing_char_index,
    extract_payload,
    locate,
)


def test_locate_skips_inner_closing_brace():
    """The scan must stop at the outer close, not after the nested object."""
    text = 'prefix{"a":[1,{"b":2}]}suffix'

    start, end = locate(text, "prefix{")

    assert start == text.index("{")
    assert end == text.index("suffix") - 1
    assert text[end] == "}"


def test_locate_unbalanced_is_malformed():
    with pytest.raises(MalformedPayloadError):
        locate('prefix{"a":[', "prefix{")


def test_locate_missing_anchor():
    with pytest.raises(PayloadNotFoundError) as exc_info:
        locate("<html>nothing here</html>", '"categories":[')

    assert exc_info.value.context["anchor"] == '"categories":['


def test_locate_empty_anchor_is_not_found():
    with pytest.raises(PayloadNotFoundError):
        locate("{}", "")


def test_locate_array_payload_uses_bracket_pairs():
    """Delimiter type comes from the char at the anchor, here '['."""
    text = 'x = {"categories":[{"id":1},{"id":2}], "other": {}}'

    payload = extract_payload(text, '"categories":[')

    assert payload == '[{"id":1},{"id":2}]'


def test_locate_anchor_before_delimiter():
    """Anchor without a trailing delimiter: payload opens after whitespace."""
    text = '<script>window.__data =  {"a": {"b": [1]}};</script>'

    payload = extract_payload(text, "window.__data =")

    assert payload == '{"a": {"b": [1]}}'


def test_locate_anchor_not_followed_by_delimiter():
    with pytest.raises(MalformedPayloadError):
        locate("window.__data = null;", "window.__data =")


def test_locate_uses_first_anchor_occurrence():
    text = 'A[1,[2]] A[3]'

    assert extract_payload(text, "A[") == "[1,[2]]"


def test_braces_inside_strings_are_ignored():
    text = 'data={"name":"Bikes }","note":"say \\"{hi\\""} tail'

    payload = extract_payload(text, "data={")

    assert payload == '{"name":"Bikes }","note":"say \\"{hi\\""}'


def test_closing_char_index_parentheses():
    text = "f((a)(b))c"

    assert closing_char_index(text, 1) == 8


def test_closing_char_index_unsupported_opening_char():
    with pytest.raises(MalformedPayloadError):
        closing_char_index("abc", 0)
