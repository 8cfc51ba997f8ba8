"""SQLAlchemy implementation of the page visit counter."""

from datetime import datetime

from sqlalchemy import select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncSession

from infrastructure.database.models import PageVisitModel

COUNTER_ROW_ID = 1

# Dialects with INSERT ... ON CONFLICT DO UPDATE
_UPSERT_INSERTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


class SQLAlchemyPageVisitRepository:
    """SQLAlchemy implementation of IPageVisitRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def increment(self) -> None:
        """Add one to the counter, creating the row on first use, in one statement."""
        insert = _UPSERT_INSERTS[self._session.get_bind().dialect.name]
        stmt = (
            insert(PageVisitModel)
            .values(id=COUNTER_ROW_ID, count=1)
            .on_conflict_do_update(
                index_elements=[PageVisitModel.id],
                set_={
                    "count": PageVisitModel.count + 1,
                    "updated_at": datetime.utcnow(),
                },
            )
        )
        await self._session.execute(stmt)

    async def get_count(self) -> int:
        """Current counter value."""
        stmt = select(PageVisitModel.count).where(PageVisitModel.id == COUNTER_ROW_ID)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none() or 0
