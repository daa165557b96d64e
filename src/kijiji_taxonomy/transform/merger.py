"""
Fold locale-scoped source trees into one entity set.

Locale passes run strictly one after another. The first pass that introduces
an id fixes its parent link; later passes only fill locale name slots that
are still empty.
"""

import logging
from dataclasses import dataclass, field

from ..exceptions import InvariantViolation
from ..models import Entity, EntitySet, Locale, LocalizedName, SourceNode

logger = logging.getLogger(__name__)


@dataclass
class MergeStats:
    """Counters for one locale pass"""

    nodes_seen: int = 0
    entities_created: int = 0
    names_filled: int = 0
    # (entity id, kept parent, rejected parent)
    parent_conflicts: list[tuple[int, int | None, int | None]] = field(default_factory=list)


def merge(
    entities: EntitySet,
    node: SourceNode,
    locale: Locale,
    parent_id: int | None = None,
    stats: MergeStats | None = None,
) -> None:
    """
    Merge ``node`` and its subtree into ``entities`` in place

    Args:
        entities: Entity set owned by the current run
        node: Decoded source node
        locale: Locale the node was fetched in
        parent_id: Id of the enclosing node, None for a top-level node
        stats: Optional counters updated along the way
    """
    if stats is not None:
        stats.nodes_seen += 1

    entity = entities.get(node.id)
    if entity is None:
        # First sighting: parent link is fixed here
        name = LocalizedName()
        name.set_if_missing(locale, node.name)
        entities.add(Entity(id=node.id, name=name, parent_id=parent_id))
        if stats is not None:
            stats.entities_created += 1
    else:
        filled = entity.name.set_if_missing(locale, node.name)
        if stats is not None:
            if filled:
                stats.names_filled += 1
            if entity.parent_id != parent_id:
                stats.parent_conflicts.append((node.id, entity.parent_id, parent_id))

    for child in node.children:
        merge(entities, child, locale, node.id, stats)


def merge_nodes(
    entities: EntitySet, nodes: list[SourceNode], locale: Locale
) -> MergeStats:
    """Merge every top-level node of one locale pass."""
    stats = MergeStats()
    for node in nodes:
        merge(entities, node, locale, None, stats)

    for entity_id, kept, rejected in stats.parent_conflicts:
        logger.warning(
            f"⚠️  [{locale.value}] {entities.kind} {entity_id}: parent {rejected} "
            f"ignored, keeping {kept}"
        )
    logger.info(
        f"✓ [{locale.value}] merged {stats.nodes_seen} nodes: "
        f"{stats.entities_created} new, {stats.names_filled} names filled, "
        f"{len(entities)} {entities.kind} entities total"
    )
    return stats


def validate_entities(entities: EntitySet) -> None:
    """
    Check that the merged set is a forest

    Raises:
        InvariantViolation: a parent id is not in the set, or an entity is its own ancestor
    """
    for entity in entities.sorted():
        if entity.parent_id is not None and entity.parent_id not in entities:
            logger.error(f"❌ {entities.kind} {entity.id} references missing parent {entity.parent_id}")
            raise InvariantViolation(
                f"Parent {entity.parent_id} not found",
                entity_id=entity.id,
                context={"parent_id": entity.parent_id},
            )

    # Walk each chain up to a root or an already checked entity
    resolved: set[int] = set()
    for entity in entities.sorted():
        chain: set[int] = set()
        current = entity
        while current.parent_id is not None and current.id not in resolved:
            if current.id in chain:
                logger.error(f"❌ {entities.kind} cycle through {current.id}")
                raise InvariantViolation("Cycle in parent links", entity_id=current.id)
            chain.add(current.id)
            current = entities[current.parent_id]
        resolved.update(chain)
