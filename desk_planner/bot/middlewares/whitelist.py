# bot/middlewares/whitelist
from typing import Callable, Awaitable, Any, Dict, Optional
from aiogram import BaseMiddleware
from aiogram.types import User as TgUser
from desk_planner.config import Settings

class WhitelistMiddleware(BaseMiddleware):
	async def __call__(self, 
		handler: Callable[[Any, Dict[str, Any]], Awaitable[Any]],
		event: Any,
		data: Dict[str, Any]) -> Any:

		whitelist = Settings().whitelist
		tg_user: Optional[TgUser] = data.get("event_from_user")
		if not whitelist:
			data["is_whitelisted"] = True
		else:
			data["is_whitelisted"] = bool(tg_user and tg_user.username and tg_user.username in whitelist)

		return await handler(event, data)
