"""Key/value settings persisted in the settings table."""

from typing import Any

from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from journey_planner.models.setting import Setting
from journey_planner.models.types import utc_now
from journey_planner.services.exceptions import StorageUnavailable, storage_errors


class SettingsStore:
    """Upsert-by-key JSON settings. Last writer wins."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get(self, key: str) -> Any | None:
        """Return the stored value, or None when the key is absent."""
        with storage_errors("settings read"):
            result = await self.session.execute(select(Setting.value).where(Setting.key == key))
            return result.scalar_one_or_none()

    async def put(self, key: str, value: Any) -> None:
        """Insert or overwrite the value stored under key, and commit."""
        insert = pg_insert if self.session.get_bind().dialect.name == "postgresql" else sqlite_insert
        statement = insert(Setting).values(key=key, value=value, updated_at=utc_now())
        statement = statement.on_conflict_do_update(
            index_elements=["key"],
            set_={"value": statement.excluded["value"], "updated_at": statement.excluded["updated_at"]},
        )
        try:
            with storage_errors("settings write"):
                await self.session.execute(statement)
                await self.session.commit()
        except StorageUnavailable:
            await self.session.rollback()
            raise
