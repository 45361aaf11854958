"""Schema.org JSON-LD recipe extraction."""

import json
import logging
from typing import Any, Iterator, Optional

from bs4 import BeautifulSoup

from cucina_loca.app.services.url_parsing.models import Recipe
from cucina_loca.app.services.url_parsing.parsing_utils import (
    clean_text,
    coerce_ingredients,
    coerce_instructions,
    coerce_servings,
    extract_image,
    format_duration,
)

logger = logging.getLogger(__name__)

UNTITLED_RECIPE = "Untitled Recipe"


def _is_recipe_node(obj: Any) -> bool:
    if not isinstance(obj, dict):
        return False
    obj_type = obj.get("@type")
    if not obj_type:
        return False
    types = [obj_type] if isinstance(obj_type, str) else obj_type
    if not isinstance(types, list):
        return False
    return any(str(t).lower() == "recipe" for t in types)


def _iter_recipe_nodes(data: Any) -> Iterator[dict]:
    """Yield recipe nodes from a parsed block: object, list, or one @graph level."""
    items = data if isinstance(data, list) else [data]
    for item in items:
        if not isinstance(item, dict):
            continue
        if _is_recipe_node(item):
            yield item
            continue
        graph = item.get("@graph")
        if isinstance(graph, list):
            for node in graph:
                if _is_recipe_node(node):
                    yield node


def parse_json_ld_recipe(obj: dict) -> Recipe:
    """Map a schema.org Recipe node onto the canonical record."""
    name = obj.get("name")
    name = clean_text(name) if isinstance(name, str) else ""
    description = obj.get("description")

    return Recipe(
        name=name or UNTITLED_RECIPE,
        description=(description.strip() or None) if isinstance(description, str) else None,
        prep_time=format_duration(obj.get("prepTime")),
        cook_time=format_duration(obj.get("cookTime")),
        total_time=format_duration(obj.get("totalTime")),
        servings=coerce_servings(obj.get("recipeYield")),
        ingredients=coerce_ingredients(obj.get("recipeIngredient")),
        instructions=coerce_instructions(obj.get("recipeInstructions")),
        image=extract_image(obj.get("image")),
    )


def extract_recipe_from_schema_org(soup: BeautifulSoup) -> Optional[Recipe]:
    """Extract recipe from schema.org JSON-LD data embedded in HTML."""
    scripts = soup.find_all("script", attrs={"type": "application/ld+json"})
    logger.debug("Found %d JSON-LD script blocks", len(scripts))

    for idx, script in enumerate(scripts):
        raw_json = script.string or script.get_text()
        if not raw_json or not raw_json.strip():
            logger.debug("JSON-LD block %d is empty", idx)
            continue
        try:
            data = json.loads(raw_json)
        except json.JSONDecodeError as exc:
            logger.warning(
                "JSON-LD block %d failed to parse: %s (first 200 chars: %s)",
                idx,
                exc,
                raw_json[:200],
            )
            continue

        for node in _iter_recipe_nodes(data):
            recipe = parse_json_ld_recipe(node)
            logger.info(
                "JSON-LD block %d: title=%s, ingredients=%d, steps=%d",
                idx,
                recipe.name[:50],
                len(recipe.ingredients),
                len(recipe.instructions),
            )
            return recipe
    return None
