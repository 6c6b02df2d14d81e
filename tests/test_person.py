"""Tests for people and their team links."""

import pytest
from sqlalchemy.exc import SQLAlchemyError

from desk_planner.api.person import get_team, people, put_person
from desk_planner.api.team import get_members, put_team
from desk_planner.db.database import DataBase
from desk_planner.db.enums import DogStatus
from desk_planner.db.schemas.person import Person


class TestPutPerson:
    def test_create_without_team(self, run_with_context):
        async def scenario(ctx):
            person = await put_person(ctx, None, "Alice", DogStatus.LIKE)
            return person, await get_team(ctx, person)

        person, team = run_with_context(scenario)
        assert person.id
        assert person.dog_status == DogStatus.LIKE
        assert team is None

    def test_join_team_shows_up_as_member(self, run_with_context):
        async def scenario(ctx):
            team = await put_team(ctx, None, "Eng")
            alice = await put_person(ctx, None, "Alice", DogStatus.HAVE, team_id=team.id)
            return team, alice, await get_members(ctx, team), await get_team(ctx, alice)

        team, alice, members, linked = run_with_context(scenario)
        assert members == [alice]
        assert linked == team

    def test_switch_team_replaces_link(self, run_with_context):
        async def scenario(ctx):
            eng = await put_team(ctx, "eng", "Eng")
            ops = await put_team(ctx, "ops", "Ops")
            bob = await put_person(ctx, "bob", "Bob", DogStatus.AVOID, team_id=eng.id)
            await put_person(ctx, bob.id, "Bob", DogStatus.AVOID, team_id=ops.id)
            return await get_members(ctx, eng), await get_members(ctx, ops)

        eng_members, ops_members = run_with_context(scenario)
        assert eng_members == []
        assert [p.id for p in ops_members] == ["bob"]

    def test_none_clears_team(self, run_with_context):
        async def scenario(ctx):
            eng = await put_team(ctx, "eng", "Eng")
            bob = await put_person(ctx, "bob", "Bob", DogStatus.LIKE, team_id=eng.id)
            bob = await put_person(ctx, bob.id, "Bob", DogStatus.LIKE, team_id=None)
            return await get_team(ctx, bob)

        assert run_with_context(scenario) is None

    def test_missing_team_leaves_link(self, run_with_context):
        async def scenario(ctx):
            eng = await put_team(ctx, "eng", "Eng")
            bob = await put_person(ctx, "bob", "Bob", DogStatus.LIKE, team_id=eng.id)
            bob = await put_person(ctx, bob.id, "Robert", DogStatus.HAVE)
            return bob, await get_team(ctx, bob)

        bob, team = run_with_context(scenario)
        assert bob.name == "Robert"
        assert bob.dog_status == DogStatus.HAVE
        assert team.id == "eng"

    def test_unknown_team_writes_nothing(self, run_with_context):
        async def scenario(ctx):
            with pytest.raises(LookupError):
                await put_person(ctx, "carol", "Carol", DogStatus.LIKE, team_id="nope")
            return await people(ctx)

        assert run_with_context(scenario) == []

    def test_failed_link_rolls_back_person(self, run_with_context, monkeypatch):
        async def broken_relink(*args, **kwargs):
            raise SQLAlchemyError("link write failed")

        async def scenario(ctx):
            await put_team(ctx, "eng", "Eng")
            monkeypatch.setattr(DataBase, "_relink", staticmethod(broken_relink))
            with pytest.raises(SQLAlchemyError):
                await put_person(ctx, "dan", "Dan", DogStatus.LIKE, team_id="eng")
            return await ctx.database.get(Person, "dan")

        assert run_with_context(scenario) is None


def test_person_equality():
    assert Person(id="p", name="A", dog_status=DogStatus.LIKE) == Person(id="p", name="A", dog_status="LIKE")
    assert Person(id="p", name="A", dog_status=DogStatus.LIKE) != Person(id="p", name="A", dog_status=DogStatus.HAVE)
