"""Async engine, session factory and the declarative base shared by all models."""

import uuid
from collections.abc import AsyncIterator
from datetime import datetime
from typing import Any

from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from alloggiati.config import settings


def _engine_options() -> dict[str, Any]:
    options: dict[str, Any] = {"echo": settings.database_echo or settings.debug}
    if not settings.is_sqlite:
        options.update(pool_pre_ping=True, pool_size=settings.database_pool_size)
    return options


engine = create_async_engine(settings.async_database_url, **_engine_options())

# Objects stay readable after commit; responses are built from them.
async_session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


class Base(DeclarativeBase):
    """Declarative base for the profiles, bookings and guests tables."""


class UUIDPrimaryKeyMixin:
    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)


class TimestampMixin:
    """``created_at`` / ``updated_at`` maintained by the database."""

    created_at: Mapped[datetime] = mapped_column(server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(server_default=func.now(), onupdate=func.now())


async def get_db() -> AsyncIterator[AsyncSession]:
    """Request-scoped session dependency.

    The request is one unit of work: committed when the handler returns and
    rolled back if anything raises, so a failed finalize leaves no trace.
    """
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
