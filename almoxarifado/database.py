# almoxarifado/database.py
import asyncio
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Awaitable, Callable, Optional

from sqlalchemy import event, text
from sqlalchemy.engine import ExceptionContext
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker

from almoxarifado.db.base_class import Base
from almoxarifado.db import models  # noqa: F401  registra as tabelas no metadata

logger = logging.getLogger(__name__)

# Falhas de conectividade: o driver pode levantar OSError cru (conexão recusada)
# ou timeout antes que o SQLAlchemy consiga embrulhar o erro.
CONNECTION_ERRORS = (OSError, asyncio.TimeoutError, SQLAlchemyError)


class BancoIndisponivelError(RuntimeError):
    """Não há pool de conexões ativo (tentativas de conexão esgotadas)."""


class ConnectionManager:
    """
    Mantém o pool de conexões com o Postgres e o recupera sozinho.

    - ``init`` tenta conectar com número fixo de tentativas e intervalo fixo,
      cria as tabelas e inicia o heartbeat.
    - O heartbeat executa ``SELECT 1`` periodicamente; se falhar, reconecta.
    - Erros de desconexão detectados pelo SQLAlchemy chamam ``on_fatal_error``,
      que agenda a reconexão em segundo plano sem bloquear as requisições.

    Falhas de consulta comuns (ex.: violação de restrição) não passam por aqui:
    elas chegam à requisição como erro.
    """

    def __init__(
        self,
        database_url: str,
        *,
        pool_size: int = 10,
        max_overflow: int = 0,
        pool_timeout: float = 10.0,
        max_retries: int = 5,
        retry_delay: float = 5.0,
        heartbeat_interval: float = 300.0,
        ssl_mode: Optional[str] = None,
        echo: bool = False,
        engine_factory: Optional[Callable[[], AsyncEngine]] = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self.database_url = database_url
        self.pool_size = pool_size
        self.max_overflow = max_overflow
        self.pool_timeout = pool_timeout
        self.max_retries = max_retries
        self.retry_delay = retry_delay
        self.heartbeat_interval = heartbeat_interval
        self.ssl_mode = ssl_mode
        self.echo = echo
        self._engine_factory = engine_factory or self._default_engine
        self._sleep = sleep

        self.engine: Optional[AsyncEngine] = None
        # Engine ainda sem conexão confirmada; reaproveitado entre procedimentos de tentativa
        self._engine_pendente: Optional[AsyncEngine] = None
        self.healthy = False
        self._session_factory: Optional[sessionmaker] = None
        self._schema_pronto = False
        self._conectando = False
        self._heartbeat_task: Optional[asyncio.Task] = None
        self._reconnect_task: Optional[asyncio.Task] = None
        self._reconnect_lock = asyncio.Lock()

    @classmethod
    def from_settings(cls, settings) -> "ConnectionManager":
        return cls(
            settings.DATABASE_URL,
            pool_size=settings.DB_POOL_SIZE,
            max_overflow=settings.DB_MAX_OVERFLOW,
            pool_timeout=settings.DB_POOL_TIMEOUT,
            max_retries=settings.DB_MAX_RETRIES,
            retry_delay=settings.DB_RETRY_DELAY,
            heartbeat_interval=settings.DB_HEARTBEAT_INTERVAL,
            ssl_mode=settings.DB_SSL_MODE,
            echo=settings.ENVIRONMENT == "development",
        )

    def _default_engine(self) -> AsyncEngine:
        connect_args = {}
        if self.ssl_mode:
            connect_args["ssl"] = self.ssl_mode
        return create_async_engine(
            self.database_url,
            echo=self.echo,
            pool_size=self.pool_size,
            max_overflow=self.max_overflow,
            pool_timeout=self.pool_timeout,
            connect_args=connect_args,
        )

    def _create_engine(self) -> AsyncEngine:
        engine = self._engine_factory()
        event.listen(engine.sync_engine, "handle_error", self._handle_error)
        return engine

    # ------------------------------------------------------------------
    # Ciclo de vida
    # ------------------------------------------------------------------
    async def init(self) -> bool:
        """Conecta, garante o esquema e inicia o heartbeat. Nunca derruba o processo."""
        if await self.connect():
            await self.ensure_schema()
        else:
            logger.error("Serviço iniciado sem conexão com o banco; o heartbeat seguirá tentando.")
        if self._heartbeat_task is None:
            self._heartbeat_task = asyncio.get_running_loop().create_task(self._heartbeat_loop())
        return self.healthy

    async def close(self) -> None:
        for task in (self._heartbeat_task, self._reconnect_task):
            if task is not None and not task.done():
                task.cancel()
                try:
                    await task
                except asyncio.CancelledError:
                    pass
        self._heartbeat_task = None
        self._reconnect_task = None
        for engine in (self.engine, self._engine_pendente):
            if engine is not None:
                await engine.dispose()
        self._engine_pendente = None
        self.healthy = False
        logger.info("Pool de conexões encerrado.")

    # ------------------------------------------------------------------
    # Conexão com tentativas
    # ------------------------------------------------------------------
    async def _probe(self, engine: AsyncEngine) -> None:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))

    async def connect(self) -> bool:
        """
        Tenta obter uma conexão até ``max_retries`` vezes, aguardando
        ``retry_delay`` segundos (fixo) entre as tentativas.
        """
        self._conectando = True
        try:
            return await self._connect_with_retry()
        finally:
            self._conectando = False

    async def _connect_with_retry(self) -> bool:
        engine = self.engine or self._engine_pendente or self._create_engine()
        for tentativa in range(1, self.max_retries + 1):
            try:
                await self._probe(engine)
            except CONNECTION_ERRORS as exc:
                logger.warning(
                    "Falha ao conectar ao banco (tentativa %d/%d): %s",
                    tentativa, self.max_retries, exc,
                )
                await engine.dispose()
                if tentativa < self.max_retries:
                    await self._sleep(self.retry_delay)
                continue

            if engine is not self.engine:
                self.engine = engine
                self._engine_pendente = None
                self._session_factory = sessionmaker(
                    bind=engine,
                    class_=AsyncSession,
                    autoflush=False,
                    expire_on_commit=False,
                )
            self.healthy = True
            logger.info("Conectado ao banco de dados (tentativa %d).", tentativa)
            return True

        if engine is not self.engine:
            self._engine_pendente = engine
        self.healthy = False
        logger.error("Tentativas de conexão esgotadas (%d).", self.max_retries)
        return False

    async def ensure_schema(self) -> bool:
        """
        Cria as tabelas que ainda não existem (idempotente).

        Enquanto o esquema não existir o serviço não é considerado saudável;
        o heartbeat volta a tentar.
        """
        if self.engine is None:
            raise BancoIndisponivelError("Banco de dados indisponível")
        try:
            async with self.engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
        except CONNECTION_ERRORS:
            logger.exception("Erro ao criar tabelas")
            self.healthy = False
            return False
        self._schema_pronto = True
        self.healthy = True
        logger.info("Tabelas verificadas/criadas com sucesso.")
        return True

    async def reconnect(self) -> bool:
        async with self._reconnect_lock:
            if self.engine is not None:
                await self.engine.dispose()
            conectado = await self.connect()
            if conectado and not self._schema_pronto:
                return await self.ensure_schema()
            return conectado

    # ------------------------------------------------------------------
    # Erros fatais e heartbeat
    # ------------------------------------------------------------------
    def _handle_error(self, context: ExceptionContext) -> None:
        if context.is_disconnect:
            self.on_fatal_error(context.original_exception)

    def on_fatal_error(self, exc: BaseException) -> None:
        """Agenda a reconexão em segundo plano; no máximo uma pendente."""
        logger.error("Erro fatal no pool de conexões: %s", exc)
        self.healthy = False
        if self._conectando:
            # O procedimento de tentativas em andamento já cobre esta falha
            return
        if self._reconnect_task is not None and not self._reconnect_task.done():
            return
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.warning("Sem event loop ativo; a reconexão ficará para o heartbeat.")
            return
        self._reconnect_task = loop.create_task(self.reconnect())

    async def heartbeat_once(self) -> bool:
        if self.engine is None:
            return await self.reconnect()
        try:
            await self._probe(self.engine)
        except CONNECTION_ERRORS as exc:
            logger.warning("Heartbeat falhou: %s", exc)
            if self._reconnect_task is not None and not self._reconnect_task.done():
                return await self._reconnect_task
            return await self.reconnect()
        if not self._schema_pronto:
            return await self.ensure_schema()
        self.healthy = True
        return True

    async def _heartbeat_loop(self) -> None:
        while True:
            await self._sleep(self.heartbeat_interval)
            await self.heartbeat_once()

    # ------------------------------------------------------------------
    # Sessões
    # ------------------------------------------------------------------
    @asynccontextmanager
    async def acquire(self) -> AsyncIterator[AsyncSession]:
        if self._session_factory is None:
            raise BancoIndisponivelError("Banco de dados indisponível")
        async with self._session_factory() as session:
            yield session
