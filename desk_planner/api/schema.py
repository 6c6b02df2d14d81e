from desk_planner.api import layout, person, team
from desk_planner.api.registry import OperationRegistry
from desk_planner.db.schemas.person import Person, PersonPut
from desk_planner.db.schemas.team import Team, TeamPut


def build_registry() -> OperationRegistry:
    registry = OperationRegistry()

    registry.query("teams", team.teams)
    registry.mutation("putTeam", team.put_team, TeamPut)
    registry.field(Team, "members", team.get_members)

    registry.query("people", person.people)
    registry.mutation("putPerson", person.put_person, PersonPut)
    registry.field(Person, "team", person.get_team)

    registry.query("deskLayout", layout.desk_layout)

    return registry
