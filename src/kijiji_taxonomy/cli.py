"""
Command-line entry points.

``kijiji-scrape-categories`` and ``kijiji-scrape-locations`` take no
arguments: they scrape every locale, print the merged tree on stdout and exit
non-zero on the first failure. Logs go to stderr.
"""

import logging
import sys

from .config import get_config
from .crawl import scrape_taxonomy
from .exceptions import ScrapeError
from .load import save_entities_json
from .models import ALL_LOCALES, CATEGORY, LOCATION, TaxonomyKind
from .transform import get_tree_stats, render

logger = logging.getLogger(__name__)


def setup_logging(logging_config: dict) -> None:
    logging.basicConfig(
        level=logging_config["level"],
        format=logging_config["format"],
        stream=sys.stderr,
    )


def run(kind: TaxonomyKind) -> int:
    """Scrape ``kind``, print its tree. Returns the process exit status."""
    try:
        config = get_config()
    except ScrapeError as e:
        print(f"fatal: {e}", file=sys.stderr)
        return 1
    setup_logging(config["logging"])

    try:
        entities = scrape_taxonomy(kind, ALL_LOCALES, config)
        tree = render(entities)
        if config["output"]["json_path"]:
            save_entities_json(entities, config["output"]["json_path"])
    except ScrapeError as e:
        logger.error(f"❌ {e.to_dict()}")
        print(f"fatal: {e}", file=sys.stderr)
        return 1

    stats = get_tree_stats(entities)
    logger.info(
        f"🌳 {stats['root_count']} roots, {stats['total_nodes']} {kind.label} entities, "
        f"max depth {stats['max_depth']}"
    )
    print(tree)
    return 0


def scrape_categories_main() -> None:
    sys.exit(run(CATEGORY))


def scrape_locations_main() -> None:
    sys.exit(run(LOCATION))
