"""
Kijiji taxonomy scraper: category and location hierarchies in English and
French, merged by id and printed as an ASCII tree.
"""

from .exceptions import (
    ConfigurationError,
    DecodeError,
    InvariantViolation,
    MalformedPayloadError,
    NetworkError,
    PayloadNotFoundError,
    ScrapeError,
    SeleniumError,
    StorageError,
)
from .models import (
    ALL_LOCALES,
    CATEGORY,
    LOCATION,
    Entity,
    EntitySet,
    Locale,
    LocalizedName,
    SourceNode,
    SourceShape,
    TaxonomyKind,
)

__version__ = "0.1.0"

__all__ = [
    # Exceptions
    "ScrapeError",
    "NetworkError",
    "SeleniumError",
    "PayloadNotFoundError",
    "MalformedPayloadError",
    "DecodeError",
    "InvariantViolation",
    "ConfigurationError",
    "StorageError",
    # Model
    "ALL_LOCALES",
    "CATEGORY",
    "LOCATION",
    "Entity",
    "EntitySet",
    "Locale",
    "LocalizedName",
    "SourceNode",
    "SourceShape",
    "TaxonomyKind",
]
