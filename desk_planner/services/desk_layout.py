# services/desk_layout.py
"""
Seating for a single row of adjacent desks.

Rules, strongest first:
    * members of a team sit next to each other;
    * people avoiding dogs sit as far as possible from dog owners;
    * dog owners sit as far apart from each other as possible.

Example, one team of five:
    Alice (LIKE), Bob (LIKE), Charlie (AVOID), David (HAVE), Eve (HAVE)
    -> Charlie, Alice, David, Bob, Eve
Without Bob:
    -> Charlie, Alice, David, Eve
"""
from typing import Dict, List, Optional, Sequence, Tuple

from desk_planner.db.enums import DogStatus
from desk_planner.db.schemas.person import Person
from desk_planner.db.schemas.team import Team

Seat = Tuple[Person, Optional[Team]]

AVOID_GROUP = "avoid"
HAVE_GROUP = "have"
MIXED_GROUP = "mixed"
NEUTRAL_GROUP = "neutral"


def _classify(members: Sequence[Seat]) -> str:
	statuses = {person.dog_status for person, _team in members}
	has_avoid = DogStatus.AVOID in statuses
	has_have = DogStatus.HAVE in statuses
	if has_avoid and has_have:
		return MIXED_GROUP
	if has_avoid:
		return AVOID_GROUP
	if has_have:
		return HAVE_GROUP
	return NEUTRAL_GROUP


def order_group(members: Sequence[Seat]) -> List[Seat]:
	"""
	Order one team: AVOID first, then a LIKE buffer, then dog owners with the
	remaining LIKE members spread between them.
	"""
	avoid = [m for m in members if m[0].dog_status == DogStatus.AVOID]
	like = [m for m in members if m[0].dog_status == DogStatus.LIKE]
	have = [m for m in members if m[0].dog_status == DogStatus.HAVE]

	if not have:
		return avoid + like

	buffer: List[Seat] = []
	if avoid and like:
		buffer.append(like.pop(0))

	gaps = len(have) - 1
	spread, leftover = like[:gaps], like[gaps:]
	# leftovers widen the avoid/have distance rather than the owner gaps
	buffer.extend(leftover)

	ordered = avoid + buffer
	for idx, owner in enumerate(have):
		ordered.append(owner)
		if idx < len(spread):
			ordered.append(spread[idx])
	return ordered


def _conflicts(left: Sequence[Seat], right: Sequence[Seat]) -> bool:
	edge = {left[-1][0].dog_status, right[0][0].dog_status}
	return edge == {DogStatus.AVOID, DogStatus.HAVE}


def calculate_desk_layout(seats: Sequence[Seat]) -> List[Seat]:
	groups: Dict[Optional[str], List[Seat]] = {}
	for person, team in seats:
		key = team.id if team is not None else None
		groups.setdefault(key, []).append((person, team))

	by_kind: Dict[str, List[List[Seat]]] = {
		AVOID_GROUP: [],
		MIXED_GROUP: [],
		HAVE_GROUP: [],
		NEUTRAL_GROUP: [],
	}
	for members in groups.values():
		by_kind[_classify(members)].append(order_group(members))

	arranged: List[List[Seat]] = list(by_kind[AVOID_GROUP])
	for idx, members in enumerate(by_kind[MIXED_GROUP]):
		# alternate so neighbouring mixed teams meet avoid-to-avoid and have-to-have
		arranged.append(members if idx % 2 == 0 else members[::-1])
	arranged.extend(by_kind[HAVE_GROUP])

	neutral = list(by_kind[NEUTRAL_GROUP])
	idx = 0
	while idx < len(arranged) - 1 and neutral:
		if _conflicts(arranged[idx], arranged[idx + 1]):
			arranged.insert(idx + 1, neutral.pop(0))
		idx += 1
	arranged.extend(neutral)

	return [seat for members in arranged for seat in members]
