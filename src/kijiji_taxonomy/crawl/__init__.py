"""
Crawl stage: fetch the homepage per locale and drive the merge.
"""

from .fetcher import fetch_document, fetch_html, fetch_rendered_html, homepage_url
from .scraper import extract_nodes, scrape_categories, scrape_locations, scrape_taxonomy

__all__ = [
    "extract_nodes",
    "fetch_document",
    "fetch_html",
    "fetch_rendered_html",
    "homepage_url",
    "scrape_categories",
    "scrape_locations",
    "scrape_taxonomy",
]
