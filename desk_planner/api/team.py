# api/team.py
import logging
from typing import List, Optional

from desk_planner.api.context import ApiContext
from desk_planner.db.schemas.person import Person
from desk_planner.db.schemas.team import Team

logger = logging.getLogger(__name__)


async def teams(context: ApiContext) -> List[Team]:
    return await context.database.query(Team)


async def get_members(context: ApiContext, team: Team) -> List[Person]:
    return await context.database.get_links(team, Person)


async def put_team(context: ApiContext, id: Optional[str], name: str) -> Team:
    """
    Create or rename a team.

    Branches, in order:
        - no id: create with a freshly generated id;
        - id not stored yet: create under the caller's id;
        - id stored: overwrite the name of the existing team.

    Exactly one record is written per call. Database errors propagate.
    """
    database = context.database
    if id is None:
        team = Team(name=name)
        team.id = database.new_id()
        logger.info("Creating team %s", team.id)
        return await database.put(team)

    existing = await database.get(Team, id)
    if existing is None:
        # TODO: decide whether client-chosen ids should stay accepted here or be rejected.
        team = Team(name=name)
        team.id = id
        logger.info("Creating team %s under a client-supplied id", id)
        return await database.put(team)

    existing.name = name
    return await database.put(existing)
