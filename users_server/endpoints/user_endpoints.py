"""
User listing endpoint.

Every path and method is answered by the same handler, which lists all stored
users as plain text, one ``User: <name>`` line per row.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Request
from fastapi.responses import PlainTextResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from users_server.db import get_async_db_session, list_user_names

logger = logging.getLogger(__name__)

# Router configuration
user_router = APIRouter(tags=["Users"])
ALL_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS", "TRACE", "CONNECT"]


def format_user_lines(names: list[str | None]) -> str:
    """Render one line per user; a NULL name renders as an empty string."""
    return "".join(f"User: {name or ''}\n" for name in names)


@user_router.api_route("/{path:path}", methods=ALL_METHODS, response_class=PlainTextResponse)
async def list_users(path: str, db: Annotated[AsyncSession, Depends(get_async_db_session)]) -> PlainTextResponse:
    """List every user, whatever path was requested."""
    names = await list_user_names(db)
    return PlainTextResponse(format_user_lines(names))


async def database_error_handler(request: Request, exc: SQLAlchemyError) -> PlainTextResponse:
    """Turn a failed query into a 500 for this request only."""
    logger.error("Query failed for %s %s: %s", request.method, request.url.path, exc)
    return PlainTextResponse("Internal Server Error\n", status_code=500)
