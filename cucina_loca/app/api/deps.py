from typing import Optional

from fastapi import Request

from cucina_loca.app.services.recipe_cache import LRUCache
from cucina_loca.app.services.url_parsing.models import ParseResult


def get_recipe_cache(request: Request) -> Optional[LRUCache[ParseResult]]:
    return getattr(request.app.state, "recipe_cache", None)
