"""
Shared test fixtures.

Environment variables are set BEFORE any desk_planner imports so the
Settings singleton never points at a real database or bot.
"""

import asyncio
import os

os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["BOT_TOKEN"] = "123456:test-token"
os.environ["WHITELIST"] = ""
os.environ["DEFAULT_LANGUAGE"] = "english"

import pytest  # noqa: E402

from desk_planner.api.context import ApiContext  # noqa: E402
from desk_planner.db.database import DataBase  # noqa: E402


@pytest.fixture
def database_url(tmp_path):
    """A fresh SQLite file per test."""
    return f"sqlite+aiosqlite:///{tmp_path / 'desks.db'}"


@pytest.fixture
def run_with_context(database_url):
    """
    Run ``scenario(context)`` on a freshly created schema inside one event loop.

    Engines are bound to the loop that opened them, so the database is created
    and disposed within the same ``asyncio.run`` call.
    """

    def runner(scenario):
        async def main():
            database = DataBase(database_url)
            await database.create_all()
            try:
                return await scenario(ApiContext(database=database))
            finally:
                await database.dispose()

        return asyncio.run(main())

    return runner
