from typing import List

from desk_planner.api.context import ApiContext
from desk_planner.api.person import people, get_team
from desk_planner.db.schemas.desk import Desk
from desk_planner.services.desk_layout import calculate_desk_layout


async def desk_layout(context: ApiContext) -> List[Desk]:
    seats = [(person, await get_team(context, person)) for person in await people(context)]
    return [
        Desk(position=position, person=person, team=team)
        for position, (person, team) in enumerate(calculate_desk_layout(seats), start=1)
    ]
