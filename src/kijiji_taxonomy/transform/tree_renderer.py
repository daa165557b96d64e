"""
Render an entity set as an ASCII tree.

Roots are printed flush left, children below their parent with ``├──`` /
``└──`` connectors. Siblings are ordered by ascending id, so the same set
always renders to the same string.
"""

from collections import defaultdict

from ..exceptions import InvariantViolation
from ..models import Entity, EntitySet

BRANCH = "├── "
LAST_BRANCH = "└── "
PIPE = "│   "
SPACE = "    "


def _children_index(entities: EntitySet) -> dict[int | None, list[Entity]]:
    """Children per parent id (None holds the roots), each list ascending by id"""
    index: dict[int | None, list[Entity]] = defaultdict(list)
    for entity in entities.sorted():
        index[entity.parent_id].append(entity)
    return index


def render_lines(entities: EntitySet) -> list[str]:
    """
    One line per entity, depth-first

    Raises:
        InvariantViolation: an entity is unreachable from the roots
            (dangling parent or cycle)
    """
    index = _children_index(entities)
    lines: list[str] = []
    visited: set[int] = set()

    def walk(entity: Entity, prefix: str, connector: str, child_prefix: str) -> None:
        visited.add(entity.id)
        lines.append(f"{prefix}{connector}{entity}")

        children = index.get(entity.id, [])
        for i, child in enumerate(children):
            is_last = i == len(children) - 1
            walk(
                child,
                child_prefix,
                LAST_BRANCH if is_last else BRANCH,
                child_prefix + (SPACE if is_last else PIPE),
            )

    for root in index.get(None, []):
        walk(root, "", "", "")

    if len(visited) != len(entities):
        unreachable = sorted(entity.id for entity in entities if entity.id not in visited)
        raise InvariantViolation(
            f"{len(unreachable)} {entities.kind} entities unreachable from the roots",
            entity_id=unreachable[0],
        )
    return lines


def render(entities: EntitySet) -> str:
    """Format ``entities`` as an ASCII tree (no trailing newline)."""
    return "\n".join(render_lines(entities))


def get_tree_stats(entities: EntitySet) -> dict:
    """
    Basic statistics of a merged hierarchy

    Returns:
        dict: root_count, total_nodes, max_depth (roots are depth 0), level_counts
    """
    index = _children_index(entities)
    level_counts: dict[int, int] = {}

    def count_by_level(entity: Entity, level: int) -> None:
        level_counts[level] = level_counts.get(level, 0) + 1
        for child in index.get(entity.id, []):
            count_by_level(child, level + 1)

    roots = index.get(None, [])
    for root in roots:
        count_by_level(root, 0)

    return {
        "root_count": len(roots),
        "total_nodes": len(entities),
        "max_depth": max(level_counts) if level_counts else 0,
        "level_counts": level_counts,
    }
