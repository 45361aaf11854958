"""Recipe extractors for different parsing strategies."""

from cucina_loca.app.services.url_parsing.extractors.heuristic import (
    extract_recipe_heuristic,
)
from cucina_loca.app.services.url_parsing.extractors.microdata import (
    extract_recipe_from_microdata,
)
from cucina_loca.app.services.url_parsing.extractors.schema_org import (
    extract_recipe_from_schema_org,
)

__all__ = [
    "extract_recipe_from_microdata",
    "extract_recipe_from_schema_org",
    "extract_recipe_heuristic",
]
