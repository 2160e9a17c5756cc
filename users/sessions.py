"""
Server-side login sessions.

The signed cookie managed by Starlette's ``SessionMiddleware`` only carries an
opaque session id (``sid``); the id -> user mapping lives in the ``sessions``
table so a logout really ends the session.
"""

import secrets
from datetime import timedelta

from fastapi import Depends, Request
from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from core.config import Settings
from core.database import get_db, utcnow
from core.exceptions import AuthenticationError
from .models import User, UserSession

SESSION_KEY = "sid"


async def login(request: Request, db: AsyncSession, user: User, settings: Settings) -> UserSession:
    previous = request.session.get(SESSION_KEY)
    if previous:
        await db.execute(delete(UserSession).where(UserSession.sid == previous))

    session = UserSession(
        sid=secrets.token_urlsafe(32),
        user_id=user.id,
        expires_at=utcnow() + timedelta(seconds=settings.session_max_age),
    )
    db.add(session)
    await db.commit()
    request.session[SESSION_KEY] = session.sid
    return session


async def logout(request: Request, db: AsyncSession) -> None:
    sid = request.session.get(SESSION_KEY)
    if sid:
        await db.execute(delete(UserSession).where(UserSession.sid == sid))
        await db.commit()
    request.session.clear()


async def require_user_id(
    request: Request,
    db: AsyncSession = Depends(get_db),
) -> int:
    """FastAPI dependency resolving the session cookie to a user id."""
    sid = request.session.get(SESSION_KEY)
    if not sid:
        raise AuthenticationError()

    result = await db.execute(select(UserSession).where(UserSession.sid == sid))
    session = result.scalar_one_or_none()
    if session is None:
        request.session.clear()
        raise AuthenticationError()
    if session.expires_at <= utcnow():
        await db.delete(session)
        await db.commit()
        request.session.clear()
        raise AuthenticationError()
    return session.user_id
