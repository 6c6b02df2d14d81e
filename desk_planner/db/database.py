# db/database.py
import logging
import uuid
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional, Any, List, TypeVar

from sqlalchemy import select, delete, and_, or_
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from desk_planner.config import Settings
from desk_planner.db.models._base import Base
from desk_planner.db.models.record import Record
from desk_planner.db.models.link import Link
from desk_planner.db.schemas._base import Entity

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=Entity)


class DataBase():
    """
    Async SQLAlchemy record/link store.

    Every entity type shares the ``record`` table, keyed by (type, id); links
    between any two records live in ``link`` and can be read from either side.

    Usage:
        db = DataBase()
        await db.create_all()
        team = await db.get(Team, "team-id")
    """

    def __init__(self, url: Optional[str] = None, echo: bool = False) -> None:
        url = url or Settings().database_url
        self._engine: AsyncEngine = create_async_engine(url, echo=echo, pool_pre_ping=True)
        self._sessionmaker: async_sessionmaker[AsyncSession] = async_sessionmaker(
            bind=self._engine,
            expire_on_commit=False,
            autoflush=False,
        )

    @property
    def engine(self) -> AsyncEngine:
        return self._engine

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """
        Provides an AsyncSession with safe commit/rollback semantics.
        """
        session: AsyncSession = self._sessionmaker()
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()

    # --- schema management helpers ---

    async def create_all(self) -> None:
        """
        Create tables based on Base metadata.
        """
        async with self._engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def drop_all(self) -> None:
        async with self._engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)

    async def dispose(self) -> None:
        await self._engine.dispose()

    # --- records ---

    def new_id(self) -> str:
        return str(uuid.uuid4())

    @staticmethod
    def _to_entity(entity_type: type[E], row: Record) -> E:
        return entity_type.model_validate({**row.item, "id": row.id})

    async def get(self, entity_type: type[E], record_id: Optional[str]) -> Optional[E]:
        """
        Point lookup by id.

        Returns:
            Optional[E]: The record if it exists; otherwise None. A missing
            record is not an error.
        """
        if record_id is None:
            return None

        async with self.session() as s:
            row = await s.get(Record, (entity_type.record_type(), record_id))

        return self._to_entity(entity_type, row) if row is not None else None

    async def put(self, record: E) -> E:
        """
        Insert or overwrite a record keyed by its id.

        Returns:
            E: A fresh copy of what was stored.

        Raises:
            ValueError: If the record has no id yet.
        """
        if record.id is None:
            raise ValueError(f"{record.record_type()} must have an id before it is stored.")

        async with self.session() as s:
            row = await self._store(s, record)

        logger.debug("put %s %s", record.record_type(), record.id)
        return self._to_entity(type(record), row)

    async def put_linked(self, record: E, target_type: type[Entity], target_id: Optional[str]) -> E:
        """
        ``put`` followed by ``replace_link`` in a single session, so the record
        and its link are committed or rolled back together.
        """
        if record.id is None:
            raise ValueError(f"{record.record_type()} must have an id before it is stored.")

        async with self.session() as s:
            row = await self._store(s, record)
            await self._relink(s, record.record_type(), record.id, target_type.record_type(), target_id)

        logger.debug("put %s %s linked to %s %s", record.record_type(), record.id, target_type.record_type(), target_id)
        return self._to_entity(type(record), row)

    @staticmethod
    async def _store(s: AsyncSession, record: Entity) -> Record:
        item = record.model_dump(mode="json", exclude={"id"})
        row = await s.get(Record, (record.record_type(), record.id))
        if row is None:
            row = Record(type=record.record_type(), id=record.id, item=item)
            s.add(row)
        else:
            row.item = item
        await s.flush()
        return row

    async def query(self, entity_type: type[E]) -> List[E]:
        """All records of a type, ordered by id."""
        async with self.session() as s:
            stmt = select(Record).where(Record.type == entity_type.record_type()).order_by(Record.id.asc())
            rows = (await s.execute(stmt)).scalars().all()

        return [self._to_entity(entity_type, r) for r in rows]

    # --- links ---

    @staticmethod
    def _require_id(record: Entity) -> str:
        if record.id is None:
            raise ValueError(f"{record.record_type()} must be stored before it can be linked.")
        return record.id

    @staticmethod
    def _pair_clause(source_type: str, source_id: str, target_type: str, target_id: str) -> Any:
        forward = and_(
            Link.source_type == source_type,
            Link.source_id == source_id,
            Link.target_type == target_type,
            Link.target_id == target_id,
        )
        backward = and_(
            Link.source_type == target_type,
            Link.source_id == target_id,
            Link.target_type == source_type,
            Link.target_id == source_id,
        )
        return or_(forward, backward)

    async def get_links(self, source: Entity, target_type: type[E]) -> List[E]:
        """
        All records of ``target_type`` linked to ``source``, in either direction.

        Returns:
            list[E]: Linked records ordered by id (possibly empty).
        """
        if source.id is None:
            return []

        source_type = source.record_type()
        wanted = target_type.record_type()
        async with self.session() as s:
            outgoing = select(Link.target_id).where(
                Link.source_type == source_type,
                Link.source_id == source.id,
                Link.target_type == wanted,
            )
            incoming = select(Link.source_id).where(
                Link.target_type == source_type,
                Link.target_id == source.id,
                Link.source_type == wanted,
            )
            ids = set((await s.execute(outgoing)).scalars().all())
            ids.update((await s.execute(incoming)).scalars().all())
            if not ids:
                return []

            stmt = (
                select(Record)
                .where(Record.type == wanted, Record.id.in_(ids))
                .order_by(Record.id.asc())
            )
            rows = (await s.execute(stmt)).scalars().all()

        return [self._to_entity(target_type, r) for r in rows]

    async def link(self, source: Entity, target: Entity) -> None:
        """Connect two stored records. Linking an already linked pair is a no-op."""
        source_id = self._require_id(source)
        target_id = self._require_id(target)
        clause = self._pair_clause(source.record_type(), source_id, target.record_type(), target_id)

        async with self.session() as s:
            existing = (await s.execute(select(Link.id).where(clause))).first()
            if existing is not None:
                return
            s.add(Link(
                source_type=source.record_type(),
                source_id=source_id,
                target_type=target.record_type(),
                target_id=target_id,
            ))
            await s.flush()

    async def unlink(self, source: Entity, target: Entity) -> None:
        source_id = self._require_id(source)
        target_id = self._require_id(target)
        clause = self._pair_clause(source.record_type(), source_id, target.record_type(), target_id)

        async with self.session() as s:
            await s.execute(delete(Link).where(clause))

    async def replace_link(self, source: Entity, target_type: type[Entity], target_id: Optional[str]) -> None:
        """
        Drop every link between ``source`` and records of ``target_type``, then
        link ``source`` to ``target_id`` when one is given. Runs in one session.
        """
        source_id = self._require_id(source)

        async with self.session() as s:
            await self._relink(s, source.record_type(), source_id, target_type.record_type(), target_id)

    @staticmethod
    async def _relink(
        s: AsyncSession,
        source_type: str,
        source_id: str,
        other_type: str,
        target_id: Optional[str],
    ) -> None:
        await s.execute(
            delete(Link).where(
                or_(
                    and_(
                        Link.source_type == source_type,
                        Link.source_id == source_id,
                        Link.target_type == other_type,
                    ),
                    and_(
                        Link.target_type == source_type,
                        Link.target_id == source_id,
                        Link.source_type == other_type,
                    ),
                )
            )
        )
        if target_id is not None:
            s.add(Link(
                source_type=source_type,
                source_id=source_id,
                target_type=other_type,
                target_id=target_id,
            ))
        await s.flush()
