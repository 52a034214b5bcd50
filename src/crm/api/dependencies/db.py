"""Database session dependency."""

from collections.abc import AsyncGenerator
from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from src.crm.core.db import get_session


async def get_db_session() -> AsyncGenerator[AsyncSession]:
    """One session per request; tenant filtering happens in the repositories."""
    async with get_session() as session:
        yield session


DBSession = Annotated[AsyncSession, Depends(get_db_session)]
