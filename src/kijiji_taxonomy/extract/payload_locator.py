"""
Locate the structured payload (JSON object or array) embedded in a page.

The page source holds something like ``window.__data = {... "categories":[...] ...}``.
Given an anchor that ends right at (or just before) the payload's opening
delimiter, a balanced-delimiter scan finds the matching close, however deep
the payload is nested.
"""

from ..exceptions import MalformedPayloadError, PayloadNotFoundError

DELIMITER_PAIRS = {
    "{": "}",
    "(": ")",
    "[": "]",
}


def closing_char_index(text: str, opening_index: int) -> int:
    """
    Index of the delimiter closing the one at ``opening_index``

    Only the delimiter type found at ``opening_index`` is counted. Delimiters
    inside double-quoted strings are skipped, so a name such as "Bikes }" does
    not end the payload early.

    Raises:
        MalformedPayloadError: unsupported opening char, or depth never returns to zero
    """
    opening_char = text[opening_index]
    closing_char = DELIMITER_PAIRS.get(opening_char)
    if closing_char is None:
        raise MalformedPayloadError(
            f"Invalid opening char {opening_char!r}", position=opening_index
        )

    depth = 0
    in_string = False
    escaped = False
    for idx in range(opening_index, len(text)):
        char = text[idx]
        if in_string:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_string = False
            continue
        if char == '"':
            in_string = True
        elif char == opening_char:
            depth += 1
        elif char == closing_char:
            depth -= 1
            if depth == 0:
                return idx

    raise MalformedPayloadError(
        f"Closing char {closing_char!r} not found", position=opening_index
    )


def _opening_index(document: str, anchor_index: int, anchor: str) -> int:
    # Anchor either ends with the opening delimiter ('"categories":[') or
    # precedes it ('window.__data = ').
    last = anchor_index + len(anchor) - 1
    if anchor and anchor[-1] in DELIMITER_PAIRS:
        return last
    idx = last + 1
    while idx < len(document) and document[idx].isspace():
        idx += 1
    return idx


def locate(document: str, anchor: str) -> tuple[int, int]:
    """
    Find the payload following ``anchor`` in ``document``

    Args:
        document: Raw page source
        anchor: Literal text marking the start of the payload

    Returns:
        (start, end): indexes of the opening and closing delimiters, inclusive

    Raises:
        PayloadNotFoundError: anchor is empty or absent
        MalformedPayloadError: no delimiter after the anchor, or unbalanced delimiters
    """
    anchor_index = document.find(anchor) if anchor else -1
    if anchor_index < 0:
        raise PayloadNotFoundError(anchor=anchor)

    start = _opening_index(document, anchor_index, anchor)
    if start >= len(document):
        raise MalformedPayloadError("Document ends right after the anchor", anchor=anchor)
    if document[start] not in DELIMITER_PAIRS:
        raise MalformedPayloadError(
            f"Expected an opening delimiter, found {document[start]!r}",
            anchor=anchor,
            position=start,
        )

    try:
        end = closing_char_index(document, start)
    except MalformedPayloadError as e:
        e.context["anchor"] = anchor
        raise
    return start, end


def extract_payload(document: str, anchor: str) -> str:
    """Substring holding the payload, delimiters included."""
    start, end = locate(document, anchor)
    return document[start : end + 1]
