"""
Load stage: export merged taxonomies.
"""

from .json_writer import save_entities_json

__all__ = ["save_entities_json"]
