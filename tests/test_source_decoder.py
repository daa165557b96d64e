"""Unit tests for the source decoder.

Both JSON shapes (category forest, location single root) and the rendered
location list.
"""

import sys
from pathlib import Path

import pytest

# Add src to path
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from kijiji_taxonomy.exceptions import DecodeError, PayloadNotFoundError
from kijiji_taxonomy.extract.source_decoder import (
    decode,
    decode_forest,
    decode_location_list,
    decode_single_root,
)
from kijiji_taxonomy.models import CATEGORY, LOCATION

LOCATION_SELECTOR = "div[class*=locationListContainer] > ul[class*=locationList]"


@pytest.fixture
def location_list_html():
    """
    Rendered location list as the homepage shows it.
    """
    return """
    <html><body>
      <div class="locationListContainer-3kx">
        <ul class="locationList-1ab">
          <li id="group-9004"><a title="Ontario" href="#">Ontario</a>
            <ul>
              <li id="group-1700273"><a title="Toronto (GTA)" href="#">Toronto</a></li>
              <li id="1700185"><a title="Ottawa / Gatineau Area" href="#">Ottawa</a></li>
            </ul>
          </li>
          <li id="group-9001"><a title="Quebec" href="#">Quebec</a></li>
        </ul>
      </div>
    </body></html>
    """


def test_decode_forest_site_keys():
    payload = """[
        {"categoryId": 10, "categoryName": "Buy & Sell", "children": [
            {"categoryId": 12, "categoryName": "Arts & Collectibles", "children": []}
        ]},
        {"categoryId": 27, "categoryName": "Cars & Vehicles"}
    ]"""

    nodes = decode_forest(payload, CATEGORY)

    assert [node.id for node in nodes] == [10, 27]
    assert nodes[0].name == "Buy & Sell"
    assert [child.id for child in nodes[0].children] == [12]
    assert nodes[1].children == [], "Missing children means a leaf"


def test_decode_forest_generic_keys():
    nodes = decode(
        '[{"id":1,"name":"Pets","children":[{"id":2,"name":"Dogs"}]}]', CATEGORY
    )

    assert nodes[0].id == 1
    assert nodes[0].children[0].name == "Dogs"


def test_decode_single_root_location():
    payload = """{"id": 0, "name": "Canada", "children": [
        {"id": 9004, "name": "Ontario", "children": [{"id": "1700273", "name": "Toronto"}]}
    ]}"""

    root = decode_single_root(payload, LOCATION)

    assert root.id == 0
    assert root.children[0].children[0].id == 1700273, "Numeric string ids are accepted"
    assert [node.id for node in root.walk()] == [0, 9004, 1700273]


def test_decode_dispatches_on_shape():
    nodes = decode('{"locationId": 0, "locationName": "Canada"}', LOCATION)

    assert len(nodes) == 1
    assert nodes[0].name == "Canada"


def test_decode_forest_rejects_object():
    with pytest.raises(DecodeError):
        decode_forest('{"id": 1, "name": "Pets"}', CATEGORY)


def test_decode_single_root_rejects_list():
    with pytest.raises(DecodeError):
        decode_single_root('[{"id": 1, "name": "Canada"}]', LOCATION)


def test_invalid_json():
    with pytest.raises(DecodeError) as exc_info:
        decode('[{"id": 1, "name": "Pets",]', CATEGORY)

    assert exc_info.value.original_error is not None


@pytest.mark.parametrize(
    "payload",
    [
        '[{"name": "Pets"}]',
        '[{"id": 1}]',
        '[{"id": -5, "name": "Pets"}]',
        '[{"id": true, "name": "Pets"}]',
        '[{"id": "abc", "name": "Pets"}]',
        '[{"id": 1, "name": 42}]',
        '[{"id": 1, "name": "Pets", "children": {"id": 2}}]',
        '[{"id": 1, "name": "Pets", "children": [{"id": 2}]}]',
    ],
)
def test_malformed_nodes_fail_whole_payload(payload):
    with pytest.raises(DecodeError):
        decode(payload, CATEGORY)


def test_error_path_points_at_bad_node():
    payload = '[{"id": 1, "name": "Pets", "children": [{"id": 2, "name": "Dogs"}, {"id": 3}]}]'

    with pytest.raises(DecodeError) as exc_info:
        decode(payload, CATEGORY)

    assert exc_info.value.context["path"] == "$[0].children[1]"


def test_decode_location_list(location_list_html):
    nodes = decode_location_list(location_list_html, LOCATION_SELECTOR)

    assert [node.id for node in nodes] == [9004, 9001]
    ontario = nodes[0]
    assert ontario.name == "Ontario"
    assert [(child.id, child.name) for child in ontario.children] == [
        (1700273, "Toronto (GTA)"),
        (1700185, "Ottawa / Gatineau Area"),
    ]
    assert nodes[1].children == []


def test_decode_location_list_selector_missing():
    with pytest.raises(PayloadNotFoundError):
        decode_location_list("<html><body><ul></ul></body></html>", LOCATION_SELECTOR)


def test_decode_location_list_missing_id():
    html = """
    <div class="locationListContainer"><ul class="locationList">
      <li><a title="Ontario">Ontario</a></li>
    </ul></div>
    """

    with pytest.raises(DecodeError):
        decode_location_list(html, LOCATION_SELECTOR)


def test_decode_location_list_missing_title():
    html = """
    <div class="locationListContainer"><ul class="locationList">
      <li id="group-9004"><a>Ontario</a></li>
    </ul></div>
    """

    with pytest.raises(DecodeError):
        decode_location_list(html, LOCATION_SELECTOR)
