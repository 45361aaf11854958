import pytest
from fastapi.testclient import TestClient

from cucina_loca.app.api.deps import get_recipe_cache
from cucina_loca.app.core.config import get_settings
from cucina_loca.app.main import create_app
from cucina_loca.app.services.recipe_cache import LRUCache


@pytest.fixture
def recipe_cache():
    return LRUCache(max_entries=100)


@pytest.fixture
def app(recipe_cache):
    app = create_app()

    def override_cache():
        return recipe_cache

    app.dependency_overrides[get_recipe_cache] = override_cache
    return app


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def settings():
    return get_settings()


@pytest.fixture
def fetch_calls():
    return []


@pytest.fixture
def fake_fetch(fetch_calls):
    """Build a stand-in for fetch_html that serves fixed markup and records calls."""

    def factory(html: str):
        async def _fetch(url: str, **kwargs):
            fetch_calls.append(url)
            return html

        return _fetch

    return factory
