"""FastAPI dependency injection helpers."""

from typing import Optional

from fastapi import Header
from sqlalchemy.ext.asyncio import AsyncSession

from src.infrastructure.database import async_session_factory


async def get_db() -> AsyncSession:  # type: ignore[misc]
    """Yield an async DB session; commit on success, rollback on error."""
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def get_requester_id(
    x_user_id: Optional[str] = Header(None, alias="X-User-Id"),
) -> Optional[str]:
    """
    Identity of the caller as forwarded by the auth gateway.

    The header is trusted as-is; an unknown id surfaces later as
    ``NotAuthenticated`` when the profile lookup finds nothing.
    """
    return x_user_id or None
