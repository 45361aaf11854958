#!/usr/bin/env python
"""
Extract a recipe from a single URL and print it as JSON.

Run manually:
    python scripts/extract_recipe.py https://example.com/some-recipe
"""
import argparse
import asyncio
import logging
import sys

from cucina_loca.app.services import url_recipe_parser
from cucina_loca.app.services.url_parsing.errors import RecipeParseError

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("extract_recipe")


async def run(url: str) -> int:
    try:
        result = await url_recipe_parser.parse_recipe_from_url(url)
    except RecipeParseError as exc:
        logger.error("%s (%s)", exc.message, exc.error_code)
        return 1
    logger.info("Parsed with strategy %s", result.parser_strategy)
    print(result.recipe.model_dump_json(by_alias=True, indent=2))
    return 0


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__.strip().splitlines()[0])
    parser.add_argument("url", help="Recipe page address")
    args = parser.parse_args()
    sys.exit(asyncio.run(run(args.url)))


if __name__ == "__main__":
    main()
