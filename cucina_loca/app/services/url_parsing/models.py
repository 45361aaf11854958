"""Pydantic models for URL recipe parsing."""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class Recipe(BaseModel):
    """A recipe extracted from a page; serialized with camelCase keys."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str = Field(min_length=1)
    description: Optional[str] = None
    prep_time: Optional[str] = Field(None, alias="prepTime")
    cook_time: Optional[str] = Field(None, alias="cookTime")
    total_time: Optional[str] = Field(None, alias="totalTime")
    servings: Optional[str] = None
    ingredients: List[str] = Field(default_factory=list)
    instructions: List[str] = Field(default_factory=list)
    image: Optional[str] = None
    url: str = ""


class ParseResult(BaseModel):
    """Result of a successful parse: the recipe and the tier that produced it."""

    model_config = ConfigDict(frozen=True)

    recipe: Recipe
    parser_strategy: str
    cached: bool = False
