import logging
import shlex
from typing import Any, Awaitable, Dict, Iterable, Optional

from aiogram import html
from aiogram.types import Message
from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError

from desk_planner.i18n import Localizer
from desk_planner.utils.sentinels import MISSING

logger = logging.getLogger(__name__)


def get_localizer(message: Message) -> Localizer:
    # replies always use DEFAULT_LANGUAGE
    return Localizer()


def parse_pairs(args: Optional[str], allowed: Iterable[str]) -> Dict[str, str]:
    """
    Parse ``key=value`` command arguments. Values may be quoted:
    ``/put_team name="Platform Eng" id=abc``.

    Raises:
        ValueError: On a token without ``=`` or an unknown key.
    """
    allowed = set(allowed)
    pairs: Dict[str, str] = {}
    for token in shlex.split(args or ""):
        key, sep, value = token.partition("=")
        key = key.strip().lower()
        if not sep or key not in allowed:
            raise ValueError(f"Unexpected argument: {token}")
        pairs[key] = value
    return pairs


def _validation_details(exc: ValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(p) for p in err['loc']) or 'input'}: {err['msg']}"
        for err in exc.errors()
    )


async def safe_call(message: Message, lz: Localizer, operation: Awaitable[Any]) -> Any:
    """
    Await an api operation and turn its failures into replies.

    Returns:
        The operation result, or MISSING when a reply about the failure was sent.
    """
    try:
        return await operation
    except ValidationError as exc:
        await message.answer(lz.get("errors.invalid", details=html.quote(_validation_details(exc))))
    except LookupError as exc:
        await message.answer(lz.get("errors.not_found", details=html.quote(str(exc))))
    except SQLAlchemyError:
        logger.exception("Storage failure while handling %r", message.text)
        await message.answer(lz.get("errors.storage"))
    return MISSING
