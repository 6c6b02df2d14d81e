# bot/routers/people.py
from typing import Any, Dict, List

from aiogram import Router, html
from aiogram.filters import Command, CommandObject
from aiogram.types import Message

from desk_planner.api.context import ApiContext
from desk_planner.api.registry import OperationRegistry
from desk_planner.bot.routers.utils import get_localizer, parse_pairs, safe_call
from desk_planner.db.enums import OperationKind
from desk_planner.db.schemas.desk import Desk
from desk_planner.i18n import Localizer
from desk_planner.utils.sentinels import MISSING

router = Router(name="people")

# command key -> putPerson argument
PUT_PERSON_KEYS = {"id": "id", "name": "name", "dog": "dogStatus", "team": "teamId"}


def put_person_arguments(pairs: Dict[str, str]) -> Dict[str, Any]:
    """Map command pairs onto putPerson arguments; ``team=`` with no value clears the team."""
    raw: Dict[str, Any] = {PUT_PERSON_KEYS[key]: value for key, value in pairs.items()}
    if "dogStatus" in raw:
        raw["dogStatus"] = raw["dogStatus"].upper()
    if raw.get("teamId") == "":
        raw["teamId"] = None
    return raw


def render_layout(desks: List[Desk], lz: Localizer) -> str:
    lines = [lz.get("layout.header")]
    current: Any = MISSING
    for desk in desks:
        team_id = desk.team.id if desk.team else None
        if team_id != current:
            current = team_id
            lines.append(
                lz.get("layout.team", name=html.quote(desk.team.name)) if desk.team else lz.get("layout.no_team")
            )
        lines.append(lz.get(
            "layout.desk",
            position=desk.position,
            name=html.quote(desk.person.name),
            dog_status=desk.person.dog_status.value,
        ))
    return "\n".join(lines)


@router.message(Command("people"))
async def list_people(message: Message, api_context: ApiContext, registry: OperationRegistry) -> None:
    lz = get_localizer(message)
    items = await safe_call(message, lz, registry.execute(api_context, OperationKind.QUERY, "people"))
    if items is MISSING:
        return
    if not items:
        await message.answer(lz.get("people.list.empty"))
        return

    lines = [lz.get("people.list.header")]
    for person in items:
        team = await safe_call(message, lz, registry.resolve_field(api_context, person, "team"))
        if team is MISSING:
            return
        lines.append(lz.get(
            "people.list.item",
            name=html.quote(person.name),
            dog_status=person.dog_status.value,
            team=html.quote(team.name) if team else lz.get("people.list.no_team"),
            id=html.quote(person.id),
        ))
    await message.answer("\n".join(lines))


@router.message(Command("put_person"))
async def put_person(
    message: Message,
    command: CommandObject,
    api_context: ApiContext,
    registry: OperationRegistry,
    is_whitelisted: bool,
) -> None:
    lz = get_localizer(message)
    if not is_whitelisted:
        await message.answer(lz.get("errors.forbidden"))
        return

    try:
        pairs = parse_pairs(command.args, PUT_PERSON_KEYS)
    except ValueError:
        await message.answer(lz.get("people.put.usage"))
        return
    if "name" not in pairs or "dog" not in pairs:
        await message.answer(lz.get("people.put.usage"))
        return

    raw = put_person_arguments(pairs)
    person = await safe_call(message, lz, registry.execute(api_context, OperationKind.MUTATION, "putPerson", **raw))
    if person is MISSING:
        return
    await message.answer(lz.get("people.put.saved", name=html.quote(person.name), id=html.quote(person.id)))


@router.message(Command("layout"))
async def show_layout(message: Message, api_context: ApiContext, registry: OperationRegistry) -> None:
    lz = get_localizer(message)
    desks = await safe_call(message, lz, registry.execute(api_context, OperationKind.QUERY, "deskLayout"))
    if desks is MISSING:
        return
    if not desks:
        await message.answer(lz.get("layout.empty"))
        return
    await message.answer(render_layout(desks, lz))
