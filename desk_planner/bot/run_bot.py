import asyncio
import logging

from aiogram.client.session.aiohttp import AiohttpSession
from aiogram.client.telegram import TelegramAPIServer
from aiogram import Bot, Dispatcher
from aiogram.enums import ParseMode
from aiogram.client.default import DefaultBotProperties

from desk_planner.config import Settings
from desk_planner.api.registry import OperationRegistry
from desk_planner.api.schema import build_registry
from desk_planner.bot.middlewares.context import ContextMiddleware
from desk_planner.bot.middlewares.whitelist import WhitelistMiddleware
from desk_planner.bot.routers.teams import router as TeamRouter
from desk_planner.bot.routers.people import router as PeopleRouter
from desk_planner.db.database import DataBase

logging.basicConfig(level=Settings().log_level)
logger = logging.getLogger(__name__)


def setup_dispatcher(dp: Dispatcher, database: DataBase, registry: OperationRegistry) -> None:
    dp.update.outer_middleware(ContextMiddleware(database, registry))
    dp.update.outer_middleware(WhitelistMiddleware())

def setup_routers(dp: Dispatcher) -> None:
    dp.include_router(TeamRouter)
    dp.include_router(PeopleRouter)

async def main() -> None:
    settings = Settings()
    BOT_TOKEN = settings.bot_token

    if not BOT_TOKEN:
        raise RuntimeError("Bot token is not set.")

    session = None
    if settings.telegram_api_server:
        session = AiohttpSession(api=TelegramAPIServer.from_base(settings.telegram_api_server, is_local=True))
    bot = Bot(
        BOT_TOKEN,
        session=session,
        default=DefaultBotProperties(parse_mode=ParseMode.HTML),
    )

    database = DataBase()
    await database.create_all()
    registry = build_registry()
    logger.info("Registered %d operations", len(registry.operations()))

    dp = Dispatcher()
    setup_dispatcher(dp, database, registry)
    setup_routers(dp)

    try:
        await dp.start_polling(bot, allowed_updates=dp.resolve_used_update_types())
    finally:
        await database.dispose()


if __name__ == "__main__":
    asyncio.run(main())
