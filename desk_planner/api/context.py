from dataclasses import dataclass
from desk_planner.db.database import DataBase

@dataclass(frozen=True)
class ApiContext:
    """Request-scoped handle passed to every operation."""
    database: DataBase
