# bot/middlewares/context.py
from typing import Callable, Awaitable, Any, Dict
from aiogram import BaseMiddleware
from desk_planner.api.context import ApiContext
from desk_planner.api.registry import OperationRegistry
from desk_planner.db.database import DataBase

class ContextMiddleware(BaseMiddleware):
	"""Hands every update a fresh ApiContext plus the shared operation registry."""

	def __init__(self, database: DataBase, registry: OperationRegistry) -> None:
		self._database = database
		self._registry = registry

	async def __call__(self,
		handler: Callable[[Any, Dict[str, Any]], Awaitable[Any]],
		event: Any,
		data: Dict[str, Any]) -> Any:
		data["api_context"] = ApiContext(database=self._database)
		data["registry"] = self._registry
		return await handler(event, data)
