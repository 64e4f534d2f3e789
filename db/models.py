"""
db/models.py

SQLAlchemy 2.0 async ORM model definitions.
The service keeps client-style key/value storage in a single table:
each row holds one serialized document under a fixed key.
"""

from datetime import datetime

from sqlalchemy import DateTime, String, Text
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, sessionmaker

from config import settings

engine = create_async_engine(settings.database_url, pool_pre_ping=True)

AsyncSessionLocal = sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    pass


class StoredValue(Base):
    """A serialized document stored under a fixed key."""

    __tablename__ = "local_storage"

    key: Mapped[str] = mapped_column(String(100), primary_key=True)
    value: Mapped[str] = mapped_column(Text, nullable=False)
    updated_at: Mapped[datetime | None] = mapped_column(
        DateTime, default=datetime.utcnow, onupdate=datetime.utcnow
    )


async def init_models(bind=None) -> None:
    """Create missing tables on the given engine (defaults to the app engine)."""
    async with (bind or engine).begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
