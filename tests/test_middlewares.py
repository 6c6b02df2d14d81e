import asyncio
from unittest.mock import AsyncMock, MagicMock

from desk_planner.api.context import ApiContext
from desk_planner.api.schema import build_registry
from desk_planner.bot.middlewares.context import ContextMiddleware
from desk_planner.bot.middlewares.whitelist import WhitelistMiddleware
from desk_planner.config import Settings


def run_middleware(middleware, data):
    handler = AsyncMock(return_value="handled")
    result = asyncio.run(middleware(handler, MagicMock(), data))
    handler.assert_awaited_once()
    return result


class TestWhitelistMiddleware:
    def test_empty_whitelist_allows_everyone(self, monkeypatch):
        monkeypatch.setattr(Settings(), "whitelist", set())
        data = {"event_from_user": None}
        assert run_middleware(WhitelistMiddleware(), data) == "handled"
        assert data["is_whitelisted"] is True

    def test_listed_username(self, monkeypatch):
        monkeypatch.setattr(Settings(), "whitelist", {"alice"})
        user = MagicMock()
        user.username = "alice"
        data = {"event_from_user": user}
        run_middleware(WhitelistMiddleware(), data)
        assert data["is_whitelisted"] is True

    def test_unlisted_or_anonymous(self, monkeypatch):
        monkeypatch.setattr(Settings(), "whitelist", {"alice"})
        user = MagicMock()
        user.username = "mallory"
        data = {"event_from_user": user}
        run_middleware(WhitelistMiddleware(), data)
        assert data["is_whitelisted"] is False

        data = {"event_from_user": None}
        run_middleware(WhitelistMiddleware(), data)
        assert data["is_whitelisted"] is False


def test_context_middleware_injects_context():
    database = MagicMock()
    registry = build_registry()
    data = {}
    run_middleware(ContextMiddleware(database, registry), data)
    assert data["api_context"] == ApiContext(database=database)
    assert data["registry"] is registry
