"""Translation of driver integrity errors into domain exceptions."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from sqlalchemy.exc import IntegrityError

from core.exceptions import DuplicateEntryError


def is_unique_violation(exc: IntegrityError) -> bool:
    """Check whether an IntegrityError came from a unique constraint or index."""
    detail = str(exc.orig).lower()
    return "unique" in detail or "duplicate" in detail


@asynccontextmanager
async def unique_violation_guard(entity: str) -> AsyncIterator[None]:
    """Re-raise unique violations inside the block as DuplicateEntryError.

    Other integrity errors (foreign keys, checks) propagate unchanged.
    """
    try:
        yield
    except IntegrityError as exc:
        if is_unique_violation(exc):
            raise DuplicateEntryError(entity, str(exc.orig)) from exc
        raise
