import logging
from typing import Optional

from fastapi import APIRouter, Depends, Response
from pydantic import BaseModel

from cucina_loca.app.api.deps import get_recipe_cache
from cucina_loca.app.services import url_recipe_parser
from cucina_loca.app.services.recipe_cache import LRUCache
from cucina_loca.app.services.url_parsing.models import ParseResult, Recipe

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["recipes"])


class ParseRecipeRequest(BaseModel):
    url: Optional[str] = None


class ParseRecipeResponse(BaseModel):
    recipe: Recipe


@router.post("/parse-recipe", response_model=ParseRecipeResponse)
async def parse_recipe_endpoint(
    payload: ParseRecipeRequest,
    response: Response,
    cache: Optional[LRUCache[ParseResult]] = Depends(get_recipe_cache),
):
    result = await url_recipe_parser.parse_recipe_from_url(payload.url, cache=cache)
    response.headers["X-Cache"] = "HIT" if result.cached else "MISS"
    response.headers["X-Parser-Strategy"] = result.parser_strategy
    return ParseRecipeResponse(recipe=result.recipe)
