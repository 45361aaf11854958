from fastapi.testclient import TestClient

from cucina_loca.app.services import url_recipe_parser
from cucina_loca.app.services.url_parsing.errors import FetchFailed, FetchTimeout

RECIPE_HTML = """
<script type="application/ld+json">
  {"@type": "Recipe", "name": "Endpoint Curry", "prepTime": "PT20M", "cookTime": "PT1H5M",
   "recipeYield": 4, "recipeIngredient": ["2 onions", "1 tbsp curry powder"],
   "recipeInstructions": [{"@type": "HowToStep", "text": "Fry the onions."}, "Add the spices."],
   "image": "https://example.com/curry.jpg"}
</script>
"""


def test_parse_recipe_returns_camel_case_recipe(monkeypatch, client, fake_fetch):
    monkeypatch.setattr(url_recipe_parser, "fetch_html", fake_fetch(RECIPE_HTML))

    response = client.post("/api/parse-recipe", json={"url": "https://example.com/curry"})
    assert response.status_code == 200
    assert response.headers["x-cache"] == "MISS"
    assert response.headers["x-parser-strategy"] == "schema_org_json_ld"
    recipe = response.json()["recipe"]
    assert recipe["name"] == "Endpoint Curry"
    assert recipe["prepTime"] == "20m"
    assert recipe["cookTime"] == "1h 5m"
    assert recipe["totalTime"] is None
    assert recipe["servings"] == "4"
    assert recipe["ingredients"] == ["2 onions", "1 tbsp curry powder"]
    assert recipe["instructions"] == ["Fry the onions.", "Add the spices."]
    assert recipe["image"] == "https://example.com/curry.jpg"
    assert recipe["url"] == "https://example.com/curry"


def test_repeat_request_is_served_from_cache(monkeypatch, client, fake_fetch, fetch_calls, recipe_cache):
    monkeypatch.setattr(url_recipe_parser, "fetch_html", fake_fetch(RECIPE_HTML))

    first = client.post("/api/parse-recipe", json={"url": "https://example.com/curry"})
    second = client.post("/api/parse-recipe", json={"url": "https://example.com/curry/"})
    assert first.status_code == second.status_code == 200
    assert second.headers["x-cache"] == "HIT"
    assert second.json()["recipe"]["url"] == "https://example.com/curry/"
    assert len(fetch_calls) == 1
    assert len(recipe_cache) == 1


def test_missing_url_is_bad_request(client):
    response = client.post("/api/parse-recipe", json={})
    assert response.status_code == 400
    body = response.json()
    assert body["error_code"] == "invalid_input"
    assert body["error"] == "URL is required"


def test_unparsable_body_is_bad_request(client):
    response = client.post(
        "/api/parse-recipe", content="not json", headers={"Content-Type": "application/json"}
    )
    assert response.status_code == 400
    assert response.json()["error_code"] == "invalid_input"


def test_malformed_url_is_bad_request(client):
    response = client.post("/api/parse-recipe", json={"url": "not-a-url"})
    assert response.status_code == 400
    assert response.json()["error_code"] == "invalid_input"


def test_timeout_maps_to_408(monkeypatch, client):
    async def slow_fetch(url, **kwargs):
        raise FetchTimeout()

    monkeypatch.setattr(url_recipe_parser, "fetch_html", slow_fetch)
    response = client.post("/api/parse-recipe", json={"url": "https://example.com/slow"})
    assert response.status_code == 408
    body = response.json()
    assert body["error_code"] == "fetch_timeout"
    assert "took too long" in body["error"]


def test_upstream_error_includes_status(monkeypatch, client):
    async def failing_fetch(url, **kwargs):
        raise FetchFailed(503, "Service Unavailable")

    monkeypatch.setattr(url_recipe_parser, "fetch_html", failing_fetch)
    response = client.post("/api/parse-recipe", json={"url": "https://example.com/down"})
    assert response.status_code == 400
    body = response.json()
    assert body["error_code"] == "fetch_failed"
    assert "503" in body["error"]


def test_no_recipe_found(monkeypatch, client, fake_fetch):
    monkeypatch.setattr(url_recipe_parser, "fetch_html", fake_fetch("<html><body><h1>Blog Post</h1></body></html>"))
    response = client.post("/api/parse-recipe", json={"url": "https://example.com/blog"})
    assert response.status_code == 400
    body = response.json()
    assert body["error_code"] == "no_recipe_found"
    assert "Could not extract recipe" in body["error"]


def test_unexpected_error_is_500(monkeypatch, app):
    async def broken_parse(url, cache=None, transport=None):
        raise RuntimeError("boom")

    monkeypatch.setattr(url_recipe_parser, "parse_recipe_from_url", broken_parse)
    client = TestClient(app, raise_server_exceptions=False)
    response = client.post("/api/parse-recipe", json={"url": "https://example.com/x"})
    assert response.status_code == 500
    body = response.json()
    assert body["error_code"] == "internal_error"
    assert "boom" not in body["error"]


def test_cors_preflight(client):
    response = client.options(
        "/api/parse-recipe",
        headers={
            "Origin": "https://app.example.org",
            "Access-Control-Request-Method": "POST",
            "Access-Control-Request-Headers": "Content-Type",
        },
    )
    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == "*"
    assert "POST" in response.headers["access-control-allow-methods"]


def test_cors_header_on_post(monkeypatch, client, fake_fetch):
    monkeypatch.setattr(url_recipe_parser, "fetch_html", fake_fetch(RECIPE_HTML))
    response = client.post(
        "/api/parse-recipe",
        json={"url": "https://example.com/curry"},
        headers={"Origin": "https://app.example.org"},
    )
    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == "*"


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}
