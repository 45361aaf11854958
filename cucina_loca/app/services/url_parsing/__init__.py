"""URL recipe parsing package.

This package provides functionality for extracting recipes from URLs using
three strategies in order of trust: schema.org JSON-LD, schema.org microdata,
and heuristic HTML parsing.
"""

from cucina_loca.app.services.url_parsing.errors import (
    FetchFailed,
    FetchTimeout,
    InvalidInput,
    MalformedUpstreamData,
    NoRecipeFound,
    RecipeParseError,
)
from cucina_loca.app.services.url_parsing.html_fetcher import (
    fetch_html,
    is_private_host,
    validate_url,
)
from cucina_loca.app.services.url_parsing.models import ParseResult, Recipe
from cucina_loca.app.services.url_parsing.parsing_utils import (
    clean_text,
    coerce_ingredients,
    coerce_instructions,
    coerce_servings,
    extract_image,
    format_duration,
    load_document,
)

__all__ = [
    # Errors
    "FetchFailed",
    "FetchTimeout",
    "InvalidInput",
    "MalformedUpstreamData",
    "NoRecipeFound",
    "RecipeParseError",
    # Models
    "ParseResult",
    "Recipe",
    # HTML fetching
    "fetch_html",
    "is_private_host",
    "validate_url",
    # Parsing utilities
    "clean_text",
    "coerce_ingredients",
    "coerce_instructions",
    "coerce_servings",
    "extract_image",
    "format_duration",
    "load_document",
]
