"""
Scrape one taxonomy in every locale and merge the passes.

Locales are processed strictly in order: fetch, locate, decode, merge, then
the next locale. Any failure aborts the whole run; a set missing a locale is
never returned.
"""

import logging
from typing import Any, Iterable

from ..config import get_config
from ..exceptions import ScrapeError
from ..extract import decode, decode_location_list, extract_payload
from ..models import ALL_LOCALES, CATEGORY, LOCATION, EntitySet, Locale, SourceNode, TaxonomyKind
from ..transform import merge_nodes, validate_entities
from .fetcher import fetch_document

logger = logging.getLogger(__name__)


def extract_nodes(
    document: str, kind: TaxonomyKind, payload_config: dict[str, Any]
) -> list[SourceNode]:
    """Top-level source nodes of ``kind`` found in a homepage document."""
    if kind == LOCATION:
        if payload_config["location_source"] == "dom":
            return decode_location_list(document, payload_config["location_selector"])
        payload = extract_payload(document, payload_config["location_anchor"])
    else:
        payload = extract_payload(document, payload_config["category_anchor"])

    logger.debug(f"Located {kind.label} payload of {len(payload)} chars")
    return decode(payload, kind)


def scrape_taxonomy(
    kind: TaxonomyKind,
    locales: Iterable[Locale] = ALL_LOCALES,
    config: dict[str, Any] | None = None,
) -> EntitySet:
    """
    Build the merged entity set of ``kind``

    Args:
        kind: CATEGORY or LOCATION
        locales: Locales in merge order; the first one fixes parent links
        config: Full config (default: ``get_config()``)

    Returns:
        EntitySet validated as a forest

    Raises:
        ScrapeError: any fetch, locate, decode or invariant failure
    """
    config = config or get_config()
    fetcher = config["fetch"][f"{kind.label}_fetcher"]
    entities = EntitySet(kind=kind.label)

    for locale in locales:
        try:
            document = fetch_document(locale, config["fetch"], fetcher)
            nodes = extract_nodes(document, kind, config["payload"])
        except ScrapeError as e:
            e.context.setdefault("locale", locale.value)
            logger.error(f"❌ [{locale.value}] {kind.label} scrape aborted: {e}")
            raise
        merge_nodes(entities, nodes, locale)

    validate_entities(entities)
    logger.info(f"✅ {len(entities)} {kind.label} entities merged")
    return entities


def scrape_categories(
    locales: Iterable[Locale] = ALL_LOCALES, config: dict[str, Any] | None = None
) -> EntitySet:
    return scrape_taxonomy(CATEGORY, locales, config)


def scrape_locations(
    locales: Iterable[Locale] = ALL_LOCALES, config: dict[str, Any] | None = None
) -> EntitySet:
    return scrape_taxonomy(LOCATION, locales, config)
