"""
Transform stage: merge locale passes and render the hierarchy.
"""

from .merger import MergeStats, merge, merge_nodes, validate_entities
from .tree_renderer import get_tree_stats, render, render_lines

__all__ = [
    "MergeStats",
    "get_tree_stats",
    "merge",
    "merge_nodes",
    "render",
    "render_lines",
    "validate_entities",
]
