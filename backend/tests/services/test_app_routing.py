"""App Routing — 404 fallback, variant isolation and health probes."""

from app.core.domain_types import AuthMode
from app.infrastructure import database
from app.main import create_app
from tests.services.api_helpers import make_settings


async def test_unknown_route_is_404(header_client):
    res = await header_client.get("/api/v1/nothing-here")
    assert res.status_code == 404
    assert res.json() == {"msg": "Resource not found"}


async def test_unsupported_method_is_404(header_client):
    res = await header_client.delete("/api/v1/users")
    assert res.status_code == 404
    assert res.json() == {"msg": "Resource not found"}


async def test_path_routes_are_not_mounted_in_header_mode(header_client):
    res = await header_client.get("/api/v1/users/1/exercises")
    assert res.status_code == 404


async def test_liveness_probe(header_client):
    res = await header_client.get("/api/v1/health/")
    assert res.status_code == 200
    assert res.json()["status"] == "healthy"


async def test_readiness_without_database_is_503(header_client, monkeypatch):
    monkeypatch.setattr(database, "db_manager", None)
    res = await header_client.get("/api/v1/health/ready")
    assert res.status_code == 503


def test_create_app_keeps_settings_on_state():
    settings = make_settings(AuthMode.PATH, api_prefix="/api/v2")
    app = create_app(settings)
    assert app.state.settings is settings
    paths = {route.path for route in app.routes}
    assert "/api/v2/users/{user_id}/exercises" in paths
    assert "/api/v2/users/exercises" not in paths
