import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette import status

from cucina_loca.app.api.routes import api_router
from cucina_loca.app.core.config import get_settings
from cucina_loca.app.services.recipe_cache import LRUCache
from cucina_loca.app.services.url_parsing.errors import InvalidInput, RecipeParseError

logger = logging.getLogger(__name__)


async def recipe_parse_exception_handler(request: Request, exc: RecipeParseError):
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.message, "error_code": exc.error_code},
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    details = []
    for err in exc.errors():
        loc = ".".join(str(part) for part in err.get("loc", []) if part is not None)
        msg = err.get("msg", "Invalid value")
        details.append({"field": loc or None, "message": msg})
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "error": "Invalid request payload. Send JSON with a 'url' field.",
            "error_code": InvalidInput.error_code,
            "details": details,
        },
    )


async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Recipe parsing error on %s", request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "Failed to parse recipe. Please check the URL and try again.",
            "error_code": "internal_error",
        },
    )


def create_app() -> FastAPI:
    settings = get_settings()
    logging.getLogger("cucina_loca").setLevel(settings.log_level.upper())

    app = FastAPI(title="Cucina Loca", version="0.1.0")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["POST", "OPTIONS"],
        allow_headers=["Content-Type"],
        expose_headers=["X-Cache", "X-Parser-Strategy"],
    )
    app.add_exception_handler(RecipeParseError, recipe_parse_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
    app.include_router(api_router)

    app.state.recipe_cache = (
        LRUCache(settings.recipe_cache_max_entries) if settings.recipe_cache_enabled else None
    )

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    return app


app = create_app()
