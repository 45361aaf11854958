"""Schema.org microdata (itemprop attribute) recipe extraction."""

import logging
from typing import List, Optional

from bs4 import BeautifulSoup, Tag

from cucina_loca.app.services.url_parsing.models import Recipe
from cucina_loca.app.services.url_parsing.parsing_utils import clean_text, format_duration

logger = logging.getLogger(__name__)

RECIPE_SCOPE_SELECTOR = '[itemtype*="Recipe"]'
INGREDIENT_PROPS = '[itemprop~="recipeIngredient"], [itemprop~="ingredients"]'


def _first_prop(scope: Tag, prop: str) -> Optional[Tag]:
    return scope.select_one(f'[itemprop~="{prop}"]')


def _prop_text(scope: Tag, prop: str) -> Optional[str]:
    el = _first_prop(scope, prop)
    if el is None:
        return None
    return clean_text(el.get_text(" ")) or None


def _prop_value(scope: Tag, prop: str, *attrs: str) -> Optional[str]:
    """Read the first matching element, preferring attributes over visible text."""
    el = _first_prop(scope, prop)
    if el is None:
        return None
    for attr in attrs:
        value = el.get(attr)
        if isinstance(value, str) and value.strip():
            return value.strip()
    return clean_text(el.get_text(" ")) or None


def _collect_texts(scope: Tag, selector: str) -> List[str]:
    texts: List[str] = []
    for el in scope.select(selector):
        text = clean_text(el.get_text(" "))
        if text:
            texts.append(text)
    return texts


def extract_recipe_from_microdata(soup: BeautifulSoup) -> Optional[Recipe]:
    """Extract a recipe from itemprop annotations inside the first Recipe item.

    Sparse markup still counts: a named recipe scope is returned even when no
    ingredients or instructions are annotated.
    """
    scope = soup.select_one(RECIPE_SCOPE_SELECTOR)
    if scope is None:
        return None

    name = _prop_text(scope, "name")
    if not name:
        logger.debug("Microdata recipe scope has no name")
        return None

    image_el = _first_prop(scope, "image")
    image = None
    if image_el is not None:
        for attr in ("src", "content", "href"):
            value = image_el.get(attr)
            if isinstance(value, str) and value.strip():
                image = value.strip()
                break

    recipe = Recipe(
        name=name,
        description=_prop_text(scope, "description"),
        prep_time=format_duration(_prop_value(scope, "prepTime", "datetime", "content")),
        cook_time=format_duration(_prop_value(scope, "cookTime", "datetime", "content")),
        total_time=format_duration(_prop_value(scope, "totalTime", "datetime", "content")),
        servings=_prop_value(scope, "recipeYield", "content"),
        ingredients=_collect_texts(scope, INGREDIENT_PROPS),
        instructions=_collect_texts(scope, '[itemprop~="recipeInstructions"]'),
        image=image,
    )
    logger.info(
        "Microdata recipe: title=%s, ingredients=%d, steps=%d",
        recipe.name[:50],
        len(recipe.ingredients),
        len(recipe.instructions),
    )
    return recipe
