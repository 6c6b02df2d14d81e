# bot/routers/teams.py
from aiogram import Router, html
from aiogram.filters import Command, CommandObject
from aiogram.types import Message

from desk_planner.api.context import ApiContext
from desk_planner.api.registry import OperationRegistry
from desk_planner.bot.routers.utils import get_localizer, parse_pairs, safe_call
from desk_planner.db.enums import OperationKind
from desk_planner.db.schemas.team import Team
from desk_planner.utils.sentinels import MISSING

router = Router(name="teams")


@router.message(Command("teams"))
async def list_teams(message: Message, api_context: ApiContext, registry: OperationRegistry) -> None:
    lz = get_localizer(message)
    items = await safe_call(message, lz, registry.execute(api_context, OperationKind.QUERY, "teams"))
    if items is MISSING:
        return
    if not items:
        await message.answer(lz.get("teams.list.empty"))
        return

    lines = [lz.get("teams.list.header")]
    lines.extend(lz.get("teams.list.item", name=html.quote(t.name), id=html.quote(t.id)) for t in items)
    await message.answer("\n".join(lines))


@router.message(Command("put_team"))
async def put_team(
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
        pairs = parse_pairs(command.args, ("id", "name"))
    except ValueError:
        await message.answer(lz.get("teams.put.usage"))
        return
    if "name" not in pairs:
        await message.answer(lz.get("teams.put.usage"))
        return

    team = await safe_call(message, lz, registry.execute(api_context, OperationKind.MUTATION, "putTeam", **pairs))
    if team is MISSING:
        return
    await message.answer(lz.get("teams.put.saved", name=html.quote(team.name), id=html.quote(team.id)))


@router.message(Command("members"))
async def list_members(
    message: Message,
    command: CommandObject,
    api_context: ApiContext,
    registry: OperationRegistry,
) -> None:
    lz = get_localizer(message)
    team_id = (command.args or "").strip()
    if not team_id:
        await message.answer(lz.get("teams.members.usage"))
        return

    team = await safe_call(message, lz, api_context.database.get(Team, team_id))
    if team is MISSING:
        return
    if team is None:
        await message.answer(lz.get("errors.not_found", details=html.quote(team_id)))
        return

    members = await safe_call(message, lz, registry.resolve_field(api_context, team, "members"))
    if members is MISSING:
        return
    if not members:
        await message.answer(lz.get("teams.members.empty", name=html.quote(team.name)))
        return

    lines = [lz.get("teams.members.header", name=html.quote(team.name))]
    lines.extend(
        lz.get("teams.members.item", name=html.quote(p.name), dog_status=p.dog_status.value)
        for p in members
    )
    await message.answer("\n".join(lines))
