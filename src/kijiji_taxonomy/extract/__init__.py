"""
Extract stage: locate and decode taxonomy payloads.
"""

from .payload_locator import closing_char_index, extract_payload, locate
from .source_decoder import (
    decode,
    decode_forest,
    decode_location_list,
    decode_single_root,
)

__all__ = [
    "closing_char_index",
    "decode",
    "decode_forest",
    "decode_location_list",
    "decode_single_root",
    "extract_payload",
    "locate",
]
