"""Heuristic recipe extraction from HTML structure.

Each field is found by walking an ordered selector list and keeping the
results of the first selector that matches anything usable. The lists are
defaults and can be overridden per call when a site family needs tuning.
"""

import logging
from typing import List, Optional, Sequence

from bs4 import BeautifulSoup

from cucina_loca.app.services.url_parsing.models import Recipe
from cucina_loca.app.services.url_parsing.parsing_utils import clean_text

logger = logging.getLogger(__name__)

TITLE_SELECTORS = (
    "h1.recipe-title",
    "h1.entry-title",
    ".recipe-header h1",
    ".recipe-title",
    "h1",
)

INGREDIENT_SELECTORS = (
    ".recipe-ingredients li",
    ".ingredients li",
    ".recipe-ingredient",
    '[class*="ingredient"] li',
    'ul li:-soup-contains("cup"):not(:has(*))',
    'ul li:-soup-contains("tsp"):not(:has(*))',
    'ul li:-soup-contains("tbsp"):not(:has(*))',
)

INSTRUCTION_SELECTORS = (
    ".recipe-instructions li",
    ".instructions li",
    ".recipe-instruction",
    ".directions li",
    '[class*="instruction"] li',
    ".recipe-method li",
    "ol li",
)

MIN_TITLE_LENGTH = 3
MIN_INGREDIENT_LENGTH = 2
MIN_INSTRUCTION_LENGTH = 10


def find_title(soup: BeautifulSoup, selectors: Sequence[str] = TITLE_SELECTORS) -> Optional[str]:
    for selector in selectors:
        el = soup.select_one(selector)
        if el is None:
            continue
        title = clean_text(el.get_text(" "))
        if len(title) > MIN_TITLE_LENGTH:
            return title
    return None


def collect_first_match(soup: BeautifulSoup, selectors: Sequence[str], min_length: int) -> List[str]:
    """Return de-duplicated texts from the first selector that yields any."""
    for selector in selectors:
        found: List[str] = []
        for el in soup.select(selector):
            text = clean_text(el.get_text(" "))
            if len(text) > min_length and text not in found:
                found.append(text)
        if found:
            logger.debug("Selector %r matched %d items", selector, len(found))
            return found
    return []


def extract_recipe_heuristic(
    soup: BeautifulSoup,
    *,
    title_selectors: Sequence[str] = TITLE_SELECTORS,
    ingredient_selectors: Sequence[str] = INGREDIENT_SELECTORS,
    instruction_selectors: Sequence[str] = INSTRUCTION_SELECTORS,
) -> Optional[Recipe]:
    """Extract recipe using heuristic HTML analysis.

    Returns None unless a title, ingredients and instructions were all found.
    """
    title = find_title(soup, title_selectors)
    if not title:
        return None

    ingredients = collect_first_match(soup, ingredient_selectors, MIN_INGREDIENT_LENGTH)
    instructions = collect_first_match(soup, instruction_selectors, MIN_INSTRUCTION_LENGTH)

    if not ingredients or not instructions:
        logger.info(
            "Heuristic parse incomplete: title=%s, ingredients=%d, steps=%d",
            title[:50],
            len(ingredients),
            len(instructions),
        )
        return None

    return Recipe(name=title, ingredients=ingredients, instructions=instructions)
