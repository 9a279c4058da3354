from doccrawl import __version__
from doccrawl.api.routers.systems import create_systems_router
from doccrawl.domain.settings import CrawlerSettings, Settings


def _get_endpoint(router, path: str, method: str):
    for route in router.routes:
        if getattr(route, "path", None) != path:
            continue
        methods = getattr(route, "methods", set())
        if method.upper() in methods:
            return route.endpoint
    raise AssertionError(f"No route found for {method} {path}")


def _settings():
    return Settings(
        docs_base_path="/srv/docs",
        crawler=CrawlerSettings(
            default_max_depth=3,
            default_rate_limit=2,
            page_timeout_ms=30000,
            user_agent="TestBot/1.0",
            fetch_mode="http",
        ),
    )


def test_health():
    router = create_systems_router({}, _settings)
    assert _get_endpoint(router, "/systems/health", "GET")() == {"status": "ok", "version": __version__}


def test_config_reports_environment_and_settings():
    env = {"DOCCRAWL_PORT": 8000, "DOCCRAWL_SETTINGS_FILE": None, "FETCH_MODE": "http"}
    router = create_systems_router(env, _settings)

    resp = _get_endpoint(router, "/systems/config", "GET")()

    assert resp["environment"] == {
        "DOCCRAWL_PORT": "8000",
        "DOCCRAWL_SETTINGS_FILE": None,
        "FETCH_MODE": "http",
    }
    assert resp["settings"]["docs_base_path"] == "/srv/docs"
    assert resp["settings"]["crawler"]["user_agent"] == "TestBot/1.0"
