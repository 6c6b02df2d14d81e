from typing import Optional
from desk_planner.db.schemas._base import OrmModel
from desk_planner.db.schemas.person import Person
from desk_planner.db.schemas.team import Team

class Desk(OrmModel):
    position: int
    person: Person
    team: Optional[Team] = None
