# api/registry.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, List, Optional, Tuple

from pydantic import BaseModel

from desk_planner.api.context import ApiContext
from desk_planner.db.enums import OperationKind
from desk_planner.db.schemas._base import Entity

logger = logging.getLogger(__name__)

Handler = Callable[..., Awaitable[Any]]


@dataclass(frozen=True)
class Operation:
	kind: OperationKind
	name: str
	handler: Handler
	arguments: Optional[type[BaseModel]] = None
	parent: Optional[type[Entity]] = None

	@property
	def key(self) -> Tuple[str, str]:
		return (str(self.kind), self.name)


class OperationRegistry:
	"""
	Explicit table of exposed operations.

	Queries and mutations are keyed by their name (``teams``, ``putTeam``),
	field resolvers by ``<Parent>.<field>`` (``Team.members``).
	"""

	def __init__(self) -> None:
		self._store: Dict[Tuple[str, str], Operation] = dict()

	@staticmethod
	def _field_name(parent: type[Entity], name: str) -> str:
		return f"{parent.record_type()}.{name}"

	def _add(self, operation: Operation) -> Operation:
		if operation.key in self._store:
			raise ValueError(f"{operation.kind} '{operation.name}' is already registered.")
		self._store[operation.key] = operation
		return operation

	def query(self, name: str, handler: Handler, arguments: Optional[type[BaseModel]] = None) -> Operation:
		return self._add(Operation(OperationKind.QUERY, name, handler, arguments))

	def mutation(self, name: str, handler: Handler, arguments: Optional[type[BaseModel]] = None) -> Operation:
		return self._add(Operation(OperationKind.MUTATION, name, handler, arguments))

	def field(self, parent: type[Entity], name: str, handler: Handler) -> Operation:
		return self._add(Operation(OperationKind.FIELD, self._field_name(parent, name), handler, parent=parent))

	def resolve(self, kind: OperationKind, name: str) -> Operation:
		operation = self._store.get((str(kind), name))
		if operation is None:
			raise LookupError(f"Unknown {kind} '{name}'.")
		return operation

	def operations(self, kind: Optional[OperationKind] = None) -> List[Operation]:
		return [op for op in self._store.values() if kind is None or op.kind == kind]

	def __contains__(self, key: Tuple[str, str]) -> bool:
		return (str(key[0]), key[1]) in self._store

	@staticmethod
	def _bind(operation: Operation, raw: Dict[str, Any]) -> Dict[str, Any]:
		if operation.arguments is None:
			if raw:
				raise TypeError(f"{operation.kind} '{operation.name}' takes no arguments.")
			return {}
		args = operation.arguments.model_validate(raw)
		# attribute access keeps sentinels such as MISSING intact
		return {name: getattr(args, name) for name in type(args).model_fields}

	async def execute(self, context: ApiContext, kind: OperationKind, name: str, /, **raw: Any) -> Any:
		"""
		Validate ``raw`` against the operation's arguments model and run it.

		Invalid arguments raise pydantic's ValidationError before the handler
		runs. Handler errors are logged and re-raised unchanged.
		"""
		operation = self.resolve(kind, name)
		kwargs = self._bind(operation, raw)
		logger.info("operation kind=%s name=%s", operation.kind, operation.name)
		try:
			return await operation.handler(context, **kwargs)
		except Exception:
			logger.exception("operation kind=%s name=%s failed", operation.kind, operation.name)
			raise

	async def resolve_field(self, context: ApiContext, source: Entity, name: str) -> Any:
		operation = self.resolve(OperationKind.FIELD, self._field_name(type(source), name))
		logger.info("operation kind=%s name=%s", operation.kind, operation.name)
		try:
			return await operation.handler(context, source)
		except Exception:
			logger.exception("operation kind=%s name=%s failed", operation.kind, operation.name)
			raise
