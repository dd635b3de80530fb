"""Tests for logging configuration and the demo entrypoint."""

from __future__ import annotations

import pytest
import structlog

from query_resolver import main as main_module
from query_resolver.config import CatalogSettings, ResolverSettings
from query_resolver.logging import configure_logging
from query_resolver.services.catalog import InMemoryCatalog
from query_resolver.services.resolver import QueryResolver


def test_configure_logging_outputs_json(capsys):
    configure_logging("debug")
    logger = structlog.get_logger()
    logger.info("unit-test", foo="bar")
    out = capsys.readouterr().out
    assert "unit-test" in out
    assert "foo" in out
    structlog.reset_defaults()


def test_configure_logging_accepts_level_names(capsys):
    configure_logging("warning")
    logger = structlog.get_logger()
    logger.info("hidden-event")
    logger.warning("shown-event")
    out = capsys.readouterr().out
    assert "hidden-event" not in out
    assert "shown-event" in out
    structlog.reset_defaults()


def _instant_settings(**overrides) -> ResolverSettings:
    values = {
        "debounce_ms": 100,
        "catalog": CatalogSettings(latency_min_ms=0, latency_max_ms=0),
    }
    values.update(overrides)
    return ResolverSettings(**values)


@pytest.mark.asyncio
async def test_run_demo_settles_typed_query():
    settings = _instant_settings()
    catalog = InMemoryCatalog(settings=settings.catalog)

    async with QueryResolver(catalog.search, settings) as resolver:
        await main_module.run_demo(resolver, ["react"], keystroke_interval_ms=5)

        assert resolver.query == "react"
        assert [item.title for item in resolver.results] == ["React Hooks Guide", "Vue.js vs React"]
        assert resolver.is_loading is False
        assert "react" in resolver.history


@pytest.mark.asyncio
async def test_main_bootstrap(monkeypatch):
    settings = _instant_settings()
    calls = {}

    async def fake_run_demo(resolver, queries):
        calls["resolver"] = resolver
        calls["queries"] = tuple(queries)

    monkeypatch.setattr(main_module, "get_settings", lambda: settings)
    monkeypatch.setattr(main_module, "configure_logging", lambda level: calls.setdefault("level", level))
    monkeypatch.setattr(main_module, "run_demo", fake_run_demo)

    await main_module.main()

    assert calls["level"] == "INFO"
    assert calls["queries"] == main_module.DEMO_QUERIES
    assert calls["resolver"].closed is True
    assert calls["resolver"].settings is settings

    calls.clear()
    await main_module.main(["docker"])
    assert calls["queries"] == ("docker",)
