"""Data model shared by the category and location hierarchies.

Both hierarchies use the same ``Entity`` type. ``TaxonomyKind`` only describes
where a hierarchy comes from (source shape, field names, payload anchor).
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator


class Locale(str, Enum):
    """Site locales. Closed set: adding one means adding a ``LocalizedName`` field."""

    EN = "en_CA"
    FR = "fr_CA"


ALL_LOCALES = (Locale.EN, Locale.FR)


@dataclass
class LocalizedName:
    """Display name in every supported locale; a slot stays None until seen."""

    en: str | None = None
    fr: str | None = None

    def get(self, locale: Locale) -> str | None:
        if locale == Locale.EN:
            return self.en
        return self.fr

    def set_if_missing(self, locale: Locale, value: str) -> bool:
        """Fill the locale slot unless it already holds a value.

        Returns:
            True if the slot was filled by this call
        """
        if self.get(locale) is not None:
            return False
        if locale == Locale.EN:
            self.en = value
        else:
            self.fr = value
        return True

    def to_dict(self) -> dict[str, str | None]:
        return {Locale.EN.value: self.en, Locale.FR.value: self.fr}


@dataclass
class Entity:
    """A category or a location. ``parent_id`` is None for a top-level entity."""

    id: int
    name: LocalizedName
    parent_id: int | None = None

    @property
    def is_root(self) -> bool:
        return self.parent_id is None

    def __str__(self) -> str:
        return f"{self.name.en or ''} ({self.name.fr or ''}, {self.id})"

    def to_dict(self) -> dict:
        return {"id": self.id, "parent_id": self.parent_id, "name": self.name.to_dict()}


class EntitySet:
    """Entities of one hierarchy keyed by id.

    Map order carries no meaning; ``sorted()`` gives the deterministic order
    used for rendering and export.
    """

    def __init__(self, kind: str = "category"):
        self.kind = kind
        self._entities: dict[int, Entity] = {}

    def __len__(self) -> int:
        return len(self._entities)

    def __contains__(self, entity_id: object) -> bool:
        return entity_id in self._entities

    def __getitem__(self, entity_id: int) -> Entity:
        return self._entities[entity_id]

    def __iter__(self) -> Iterator[Entity]:
        return iter(self._entities.values())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, EntitySet):
            return NotImplemented
        return self.kind == other.kind and self._entities == other._entities

    def get(self, entity_id: int) -> Entity | None:
        return self._entities.get(entity_id)

    def add(self, entity: Entity) -> None:
        self._entities[entity.id] = entity

    def sorted(self) -> list[Entity]:
        """All entities ascending by id."""
        return sorted(self._entities.values(), key=lambda entity: entity.id)

    def roots(self) -> list[Entity]:
        return [entity for entity in self.sorted() if entity.is_root]

    def to_records(self) -> list[dict]:
        return [entity.to_dict() for entity in self.sorted()]


@dataclass
class SourceNode:
    """One node of a decoded source tree, scoped to the locale it was fetched in."""

    id: int
    name: str
    children: list["SourceNode"] = field(default_factory=list)

    def walk(self) -> Iterator["SourceNode"]:
        yield self
        for child in self.children:
            yield from child.walk()


class SourceShape(str, Enum):
    # list of top-level nodes, each with nested children (category menu)
    FOREST = "forest"
    # one root node covering the whole hierarchy (location menu)
    SINGLE_ROOT = "single_root"


@dataclass(frozen=True)
class TaxonomyKind:
    """How one kind of hierarchy is published by the site."""

    label: str
    shape: SourceShape
    id_keys: tuple[str, ...]
    name_keys: tuple[str, ...]
    children_keys: tuple[str, ...] = ("children",)


CATEGORY = TaxonomyKind(
    label="category",
    shape=SourceShape.FOREST,
    id_keys=("categoryId", "id"),
    name_keys=("categoryName", "name"),
)

LOCATION = TaxonomyKind(
    label="location",
    shape=SourceShape.SINGLE_ROOT,
    id_keys=("locationId", "id"),
    name_keys=("locationName", "name"),
)
