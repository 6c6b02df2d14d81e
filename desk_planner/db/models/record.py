from typing import Any, Dict
from sqlalchemy import JSON, String
from sqlalchemy.orm import Mapped, mapped_column
from desk_planner.db.models._base import Base

class Record(Base):
    """One stored entity. ``item`` keeps every field except the id."""
    __tablename__ = "record"

    type: Mapped[str] = mapped_column(String(64), primary_key=True)
    id: Mapped[str] = mapped_column(String(128), primary_key=True)
    item: Mapped[Dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)
