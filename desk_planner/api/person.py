# api/person.py
import logging
from typing import List, Optional

from desk_planner.api.context import ApiContext
from desk_planner.db.enums import DogStatus
from desk_planner.db.schemas.person import Person
from desk_planner.db.schemas.team import Team
from desk_planner.utils.sentinels import MISSING, Missing, provided

logger = logging.getLogger(__name__)


async def people(context: ApiContext) -> List[Person]:
    return await context.database.query(Person)


async def get_team(context: ApiContext, person: Person) -> Optional[Team]:
    linked = await context.database.get_links(person, Team)
    return linked[0] if linked else None


async def put_person(
    context: ApiContext,
    id: Optional[str],
    name: str,
    dog_status: DogStatus,
    team_id: str | None | Missing = MISSING,
) -> Person:
    """
    Upsert a person the same way ``put_team`` upserts a team, then settle the
    team link: MISSING leaves it alone, None clears it, an id replaces it.

    Raises:
        LookupError: If ``team_id`` names a team that does not exist. Nothing
            is written in that case.
    """
    database = context.database
    if provided(team_id) and team_id is not None:
        if await database.get(Team, team_id) is None:
            raise LookupError(f"Team {team_id} not found.")

    existing = await database.get(Person, id)
    if existing is None:
        person = Person(name=name, dog_status=dog_status)
        person.id = id if id is not None else database.new_id()
        logger.info("Creating person %s", person.id)
    else:
        person = existing
        person.name = name
        person.dog_status = dog_status

    if provided(team_id):
        return await database.put_linked(person, Team, team_id)
    return await database.put(person)
