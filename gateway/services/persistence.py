"""
gateway/services/persistence.py

Persistent Reminder Store.
Serializes the reminder list as one JSON array under a fixed storage key.
Loading validates every element; malformed data is discarded wholesale.
Uses SQLAlchemy 2.0 async sessions.
"""

from typing import Callable

import structlog
from pydantic import TypeAdapter, ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from db.models import AsyncSessionLocal, StoredValue
from gateway.constants import REMINDER_STORAGE_KEY
from gateway.schemas import Reminder

logger = structlog.get_logger(__name__)

_REMINDER_LIST = TypeAdapter(list[Reminder])


class ReminderStore:
    """Load/save checkpoints for the in-memory reminder list."""

    def __init__(
        self,
        session_factory: Callable[[], AsyncSession] = AsyncSessionLocal,
        key: str = REMINDER_STORAGE_KEY,
    ) -> None:
        self._session_factory = session_factory
        self._key = key

    async def load(self) -> list[Reminder]:
        """Return the persisted reminders, or an empty list on any failure."""
        try:
            async with self._session_factory() as session:
                row = await session.get(StoredValue, self._key)
        except Exception as exc:
            logger.warning("reminder_store_load_failed", key=self._key, error=str(exc))
            return []

        if row is None:
            return []

        try:
            reminders = _REMINDER_LIST.validate_json(row.value)
        except ValidationError as exc:
            logger.warning(
                "reminder_store_discarded",
                key=self._key,
                error_count=exc.error_count(),
            )
            return []

        logger.info("reminder_store_loaded", key=self._key, count=len(reminders))
        return reminders

    async def save(self, reminders: list[Reminder]) -> bool:
        """Persist the full reminder list. Failures are logged, never raised."""
        payload = _REMINDER_LIST.dump_json(reminders, by_alias=True).decode("utf-8")
        try:
            async with self._session_factory() as session:
                row = await session.get(StoredValue, self._key)
                if row is None:
                    session.add(StoredValue(key=self._key, value=payload))
                else:
                    row.value = payload
                await session.commit()
        except Exception as exc:
            logger.error(
                "reminder_store_save_failed",
                key=self._key,
                count=len(reminders),
                error=str(exc),
            )
            return False
        return True
