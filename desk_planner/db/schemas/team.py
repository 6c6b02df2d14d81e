from typing import Optional
from desk_planner.db.schemas._base import Entity, OrmModel

class Team(Entity):
    name: str

    def __hash__(self) -> int:
        return hash((self.id, self.name))

class TeamPut(OrmModel):
    id: Optional[str] = None
    name: str
