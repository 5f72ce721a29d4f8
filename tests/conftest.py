"""
Configuração do pytest.

Os testes usam SQLite (aiosqlite) em um arquivo temporário no lugar do
Postgres: mais rápido e sem dependência de um servidor de banco.
"""
import pytest
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import create_async_engine

from almoxarifado.client import InventoryApi
from almoxarifado.database import ConnectionManager
from almoxarifado.main import create_app


@pytest.fixture
def database_url(tmp_path):
    return f"sqlite+aiosqlite:///{tmp_path / 'almoxarifado.db'}"


@pytest.fixture
def make_manager(database_url):
    def _make(**kwargs):
        opcoes = dict(
            max_retries=3,
            retry_delay=0,
            heartbeat_interval=3600,
            engine_factory=lambda: create_async_engine(database_url),
        )
        opcoes.update(kwargs)
        return ConnectionManager(database_url, **opcoes)

    return _make


@pytest.fixture
def manager(make_manager):
    return make_manager()


@pytest.fixture
def client(manager):
    with TestClient(create_app(manager)) as c:
        yield c


@pytest.fixture
def api(client):
    return InventoryApi(client=client)
