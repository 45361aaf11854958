import logging
from typing import Callable, Optional, Sequence, Tuple

import httpx
from bs4 import BeautifulSoup

from cucina_loca.app.services.recipe_cache import LRUCache, normalize_cache_key
from cucina_loca.app.services.url_parsing.errors import NoRecipeFound
from cucina_loca.app.services.url_parsing.extractors import (
    extract_recipe_from_microdata,
    extract_recipe_from_schema_org,
    extract_recipe_heuristic,
)
from cucina_loca.app.services.url_parsing.html_fetcher import fetch_html, validate_url
from cucina_loca.app.services.url_parsing.models import ParseResult, Recipe
from cucina_loca.app.services.url_parsing.parsing_utils import load_document

logger = logging.getLogger(__name__)

Extractor = Callable[[BeautifulSoup], Optional[Recipe]]

STRATEGY_SCHEMA_ORG = "schema_org_json_ld"
STRATEGY_MICRODATA = "microdata"
STRATEGY_HEURISTIC = "heuristic"


def extraction_tiers() -> Sequence[Tuple[str, Extractor]]:
    """Extractors in order of trust; looked up at call time so tests can swap them."""
    return (
        (STRATEGY_SCHEMA_ORG, extract_recipe_from_schema_org),
        (STRATEGY_MICRODATA, extract_recipe_from_microdata),
        (STRATEGY_HEURISTIC, extract_recipe_heuristic),
    )


def extract_recipe(html: str) -> Optional[Tuple[str, Recipe]]:
    """Run the tiers against one parsed document; the first hit wins."""
    soup = load_document(html)
    for strategy, extractor in extraction_tiers():
        recipe = extractor(soup)
        if recipe is not None:
            logger.info("Recipe extracted via %s", strategy)
            return strategy, recipe
        logger.debug("Strategy %s found nothing", strategy)
    return None


async def parse_recipe_from_url(
    url: Optional[str],
    cache: Optional[LRUCache[ParseResult]] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> ParseResult:
    """Fetch ``url`` and extract a recipe, raising a ``RecipeParseError`` on failure."""
    url = validate_url(url)
    cache_key = normalize_cache_key(url)

    if cache is not None:
        cached = cache.get(cache_key)
        if cached is not None:
            logger.info("Serving recipe from cache: %s", cache_key)
            return cached.model_copy(
                update={"cached": True, "recipe": cached.recipe.model_copy(update={"url": url})}
            )

    html = await fetch_html(url, transport=transport)

    extracted = extract_recipe(html)
    if extracted is None:
        logger.info("No extraction strategy matched %s", url)
        raise NoRecipeFound()

    strategy, recipe = extracted
    result = ParseResult(
        recipe=recipe.model_copy(update={"url": url}),
        parser_strategy=strategy,
    )
    if cache is not None:
        cache.set(cache_key, result)
    return result
