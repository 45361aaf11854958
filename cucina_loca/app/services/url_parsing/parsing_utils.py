"""General parsing utilities for recipe extraction."""

import re
from typing import Any, List, Optional

from bs4 import BeautifulSoup

ISO_DURATION_RE = re.compile(r"PT(?:(\d+)H)?(?:(\d+)M)?(?:\d+(?:\.\d+)?S)?", re.I)


def load_document(html: str) -> BeautifulSoup:
    """Parse markup once so every extraction tier works on the same tree."""
    return BeautifulSoup(html or "", "lxml")


def clean_text(text: str) -> str:
    """Normalize whitespace in text."""
    return re.sub(r"\s+", " ", text or "").strip()


def format_duration(value: Any) -> Optional[str]:
    """Render an ISO-8601 ``PT#H#M`` duration as ``"1h 30m"``.

    Strings that are not machine durations (``"45 minutes"``) are returned
    unchanged, as is anything that matches but carries no hours or minutes.
    """
    if not value or not isinstance(value, str):
        return None
    duration = value.strip()
    match = ISO_DURATION_RE.fullmatch(duration)
    if not match:
        return value
    hours = int(match.group(1) or 0)
    minutes = int(match.group(2) or 0)
    if hours and minutes:
        return f"{hours}h {minutes}m"
    if hours:
        return f"{hours}h"
    if minutes:
        return f"{minutes}m"
    return value


def _instruction_item_text(item: Any) -> List[str]:
    if isinstance(item, str):
        cleaned = clean_text(item)
        return [cleaned] if cleaned else []
    if isinstance(item, dict):
        for key in ("text", "name"):
            val = item.get(key)
            if isinstance(val, str) and clean_text(val):
                return [clean_text(val)]
        # HowToSection groups its steps under itemListElement
        nested = item.get("itemListElement")
        if isinstance(nested, (list, dict)):
            return coerce_instructions(nested)
    return []


def coerce_instructions(value: Any) -> List[str]:
    """Flatten the many shapes of ``recipeInstructions`` into step strings."""
    if value is None:
        return []
    if isinstance(value, list):
        steps: List[str] = []
        for entry in value:
            steps.extend(_instruction_item_text(entry))
        return steps
    return _instruction_item_text(value)


def coerce_ingredients(value: Any) -> List[str]:
    """Accept a single string or a list; non-string entries are dropped."""
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, list):
        return []
    ingredients: List[str] = []
    for entry in value:
        if not isinstance(entry, str):
            continue
        cleaned = clean_text(entry)
        if cleaned:
            ingredients.append(cleaned)
    return ingredients


def coerce_servings(value: Any) -> Optional[str]:
    """Stringify a recipe yield given as a number, string or list."""
    if isinstance(value, list):
        for item in value:
            servings = coerce_servings(item)
            if servings:
                return servings
        return None
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return str(int(value)) if value.is_integer() else str(value)
    if isinstance(value, str):
        return clean_text(value) or None
    return None


def extract_image(value: Any) -> Optional[str]:
    """Extract image URL from various schema.org image formats."""
    if isinstance(value, str):
        return value.strip() or None
    if isinstance(value, dict):
        url = value.get("url")
        return (url.strip() or None) if isinstance(url, str) else None
    if isinstance(value, list):
        for item in value:
            image = extract_image(item)
            if image:
                return image
    return None
