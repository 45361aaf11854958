from fastapi import APIRouter

from cucina_loca.app.api.routes import recipes

api_router = APIRouter()
api_router.include_router(recipes.router)
