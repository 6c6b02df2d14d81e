from typing import Optional
from pydantic import ConfigDict, Field
from desk_planner.db.schemas._base import Entity, OrmModel
from desk_planner.db.enums import DogStatus
from desk_planner.utils.sentinels import Missing

class Person(Entity):
    name: str
    dog_status: DogStatus

    def __hash__(self) -> int:
        return hash((self.id, self.name, self.dog_status))

class PersonPut(OrmModel):
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: Optional[str] = None
    name: str
    dog_status: DogStatus = Field(alias="dogStatus")
    # Missing leaves the team link alone, None removes it.
    team_id: str | None | Missing = Field(default=Missing(), alias="teamId")
