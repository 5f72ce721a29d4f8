# almoxarifado/api/deps.py
from typing import AsyncIterator

from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncSession

from almoxarifado.database import ConnectionManager


def get_connection_manager(request: Request) -> ConnectionManager:
    return request.app.state.connection_manager


async def get_db(request: Request) -> AsyncIterator[AsyncSession]:
    # A conexão volta ao pool assim que a requisição termina
    async with get_connection_manager(request).acquire() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
