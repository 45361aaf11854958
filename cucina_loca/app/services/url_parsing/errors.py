"""Typed failures raised by the URL recipe parsing pipeline.

Every error carries a stable ``error_code``, the HTTP status it maps to and a
message that is safe to show to the person who submitted the URL.
"""

from typing import Optional


class RecipeParseError(Exception):
    """Base class for caller-visible parsing failures."""

    error_code = "parse_failed"
    status_code = 400
    default_message = "Failed to parse recipe. Please check the URL and try again."

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidInput(RecipeParseError):
    error_code = "invalid_input"
    default_message = "Invalid URL format. Please check the URL and try again."


class FetchTimeout(RecipeParseError):
    error_code = "fetch_timeout"
    status_code = 408
    default_message = "Request timeout - the recipe page took too long to load."


class FetchFailed(RecipeParseError):
    """The page could not be retrieved; ``upstream_status`` is set for HTTP errors."""

    error_code = "fetch_failed"
    default_message = "Failed to fetch recipe page. Please check the URL and try again."

    def __init__(
        self,
        upstream_status: Optional[int] = None,
        reason: Optional[str] = None,
        message: Optional[str] = None,
    ):
        self.upstream_status = upstream_status
        self.reason = reason
        if message is None and upstream_status is not None:
            message = f"Failed to fetch recipe page: {upstream_status} {reason or ''}".rstrip()
        super().__init__(message)


class NoRecipeFound(RecipeParseError):
    error_code = "no_recipe_found"
    default_message = "Could not extract recipe from this URL. Make sure it's a valid recipe page."


class MalformedUpstreamData(RecipeParseError):
    error_code = "malformed_upstream_data"
    default_message = "The page did not return a readable recipe document. Please check the URL."
