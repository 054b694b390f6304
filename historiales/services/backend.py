"""
Helpers shared by the data access functions.

``translate_db_errors`` turns any :class:`django.db.DatabaseError` into a
:class:`historiales.exceptions.BackendError` carrying the driver's
message, so callers only ever see one tagged failure type.
``fetch_all`` evaluates several independent querysets concurrently and
returns once every one of them has finished.
"""
from __future__ import annotations

import asyncio
import functools
import logging
from typing import Any, Callable, Iterable, List, TypeVar

from asgiref.sync import async_to_sync, sync_to_async
from django.db import DatabaseError

from historiales.exceptions import BackendError

logger = logging.getLogger(__name__)

F = TypeVar('F', bound=Callable[..., Any])

# Membership filters never receive an empty id list: this id never exists.
EMPTY_MEMBERSHIP_SENTINEL = -1


def membership_ids(ids: Iterable[int]) -> List[int]:
    """Return ``ids`` as a list, or the sentinel list when it is empty."""
    ids = list(ids)
    return ids or [EMPTY_MEMBERSHIP_SENTINEL]


def translate_db_errors(func: F) -> F:
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except DatabaseError as e:
            logger.error('%s failed: %s', func.__name__, e)
            raise BackendError(str(e) or None) from e
    return wrapper  # type: ignore[return-value]


def _evaluate(qs) -> list:
    try:
        return list(qs)
    except DatabaseError as e:
        logger.error('query failed: %s', e)
        raise BackendError(str(e) or None) from e


async def _gather(querysets):
    return await asyncio.gather(*(sync_to_async(_evaluate)(qs) for qs in querysets))


def fetch_all(*querysets) -> List[list]:
    """Evaluate the querysets concurrently; fail if any of them fails."""
    return list(async_to_sync(_gather)(querysets))
