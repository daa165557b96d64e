"""
Decode a located payload into locale-scoped source nodes.

Two JSON shapes are published by the site:
- category menu: a list of top-level nodes, each with nested ``children``
- location menu: a single root node whose ``children`` cover the whole tree

The rendered location list (``<ul>/<li id="group-<id>">``) can be decoded too.
Decoding is strict: any malformed node fails the whole payload.
"""

import json
import logging
from typing import Any

from bs4 import BeautifulSoup

from ..exceptions import DecodeError, PayloadNotFoundError
from ..models import SourceNode, SourceShape, TaxonomyKind

logger = logging.getLogger(__name__)

LOCATION_ID_PREFIX = "group-"


def _parse_id(raw: Any, path: str) -> int:
    # bool is an int subclass, never a valid id
    if isinstance(raw, bool):
        raise DecodeError(f"Invalid id {raw!r}", path=path)
    if isinstance(raw, int):
        value = raw
    elif isinstance(raw, str) and raw.strip().isdecimal():
        value = int(raw.strip())
    else:
        raise DecodeError(f"Invalid id {raw!r}", path=path)
    if value < 0:
        raise DecodeError(f"Negative id {value}", path=path)
    return value


def _first_key(data: dict[str, Any], keys: tuple[str, ...]) -> str | None:
    for key in keys:
        if key in data:
            return key
    return None


def _node_from_json(data: Any, kind: TaxonomyKind, path: str) -> SourceNode:
    if not isinstance(data, dict):
        raise DecodeError(f"Expected an object, got {type(data).__name__}", path=path)

    id_key = _first_key(data, kind.id_keys)
    if id_key is None:
        raise DecodeError(f"Missing {kind.label} id", path=path)
    node_id = _parse_id(data[id_key], f"{path}.{id_key}")

    name_key = _first_key(data, kind.name_keys)
    if name_key is None or not isinstance(data[name_key], str):
        raise DecodeError(f"Missing {kind.label} name", path=path)

    children_key = _first_key(data, kind.children_keys)
    raw_children = data.get(children_key) if children_key else None
    if raw_children is None:
        raw_children = []
    if not isinstance(raw_children, list):
        raise DecodeError("Children must be a list", path=f"{path}.{children_key}")

    children = [
        _node_from_json(child, kind, f"{path}.{children_key}[{i}]")
        for i, child in enumerate(raw_children)
    ]
    return SourceNode(id=node_id, name=data[name_key].strip(), children=children)


def _load_json(payload: str) -> Any:
    try:
        return json.loads(payload)
    except json.JSONDecodeError as e:
        raise DecodeError(f"Invalid JSON: {e.msg}", path=f"char {e.pos}", original_error=e) from e


def decode_forest(payload: str, kind: TaxonomyKind) -> list[SourceNode]:
    """Decode a JSON array of top-level nodes."""
    data = _load_json(payload)
    if not isinstance(data, list):
        raise DecodeError(f"Expected a list of {kind.label} nodes", path="$")
    return [_node_from_json(item, kind, f"$[{i}]") for i, item in enumerate(data)]


def decode_single_root(payload: str, kind: TaxonomyKind) -> SourceNode:
    """Decode a JSON object holding the root node of the whole hierarchy."""
    data = _load_json(payload)
    if not isinstance(data, dict):
        raise DecodeError(f"Expected a single root {kind.label} node", path="$")
    return _node_from_json(data, kind, "$")


def decode(payload: str, kind: TaxonomyKind) -> list[SourceNode]:
    """
    Decode ``payload`` with the shape ``kind`` expects

    Returns:
        Top-level nodes to merge (a single-root payload yields one node)

    Raises:
        DecodeError: invalid JSON or a node missing its id/name
    """
    if kind.shape is SourceShape.FOREST:
        nodes = decode_forest(payload, kind)
    else:
        nodes = [decode_single_root(payload, kind)]
    total = sum(1 for node in nodes for _ in node.walk())
    logger.debug(f"Decoded {total} {kind.label} nodes")
    return nodes


# ========== RENDERED LOCATION LIST ==========
def _location_from_li(li, path: str) -> SourceNode:
    raw_id = li.get("id")
    if raw_id is None:
        raise DecodeError("Missing location id", path=path)
    if raw_id.startswith(LOCATION_ID_PREFIX):
        raw_id = raw_id[len(LOCATION_ID_PREFIX) :]
    node_id = _parse_id(raw_id, f"{path}#id")

    link = li.find("a")
    name = link.get("title") if link is not None else None
    if name is None:
        raise DecodeError("Missing location name", path=path)

    nested = li.find("ul")
    children = _locations_from_ul(nested, f"{path}/ul") if nested is not None else []
    return SourceNode(id=node_id, name=name.strip(), children=children)


def _locations_from_ul(ul, path: str) -> list[SourceNode]:
    return [
        _location_from_li(li, f"{path}/li[{i}]")
        for i, li in enumerate(ul.find_all("li", recursive=False))
    ]


def decode_location_list(html: str, selector: str) -> list[SourceNode]:
    """
    Decode the rendered location list of the homepage

    Args:
        html: Page source after JavaScript rendering
        selector: CSS selector of the root ``<ul>``

    Raises:
        PayloadNotFoundError: selector matches nothing
        DecodeError: an ``<li>`` lacks a numeric id or a titled link
    """
    soup = BeautifulSoup(html, "html.parser")
    root_ul = soup.select_one(selector)
    if root_ul is None:
        raise PayloadNotFoundError("Location list not found", anchor=selector)
    return _locations_from_ul(root_ul, "ul")
