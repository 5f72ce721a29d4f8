import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.exc import TimeoutError as PoolTimeoutError

from almoxarifado.api.v1.router import api_router_v1
from almoxarifado.core.config import settings
from almoxarifado.database import BancoIndisponivelError, ConnectionManager

# Configuração básica de logging
logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger(__name__)


async def banco_indisponivel_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.warning("Requisição %s %s sem banco disponível: %s", request.method, request.url.path, exc)
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"error": "Banco de dados indisponível"},
    )


async def erro_banco_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.exception("Erro de banco em %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Erro interno no banco de dados"},
    )


def create_app(manager: Optional[ConnectionManager] = None) -> FastAPI:
    manager = manager or ConnectionManager.from_settings(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        await manager.init()
        yield
        await manager.close()

    app = FastAPI(
        title=settings.PROJECT_NAME,
        description="API do almoxarifado - cadastro de produtos e categorias",
        openapi_url=f"{settings.API_V1_STR}/openapi.json",
        version=settings.PROJECT_VERSION,
        lifespan=lifespan,
    )
    app.state.connection_manager = manager

    # Configuração de CORS
    if settings.BACKEND_CORS_ORIGINS:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=[str(origin) for origin in settings.BACKEND_CORS_ORIGINS],
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    app.add_exception_handler(BancoIndisponivelError, banco_indisponivel_handler)
    app.add_exception_handler(PoolTimeoutError, banco_indisponivel_handler)
    app.add_exception_handler(SQLAlchemyError, erro_banco_handler)

    # Inclui todas as rotas da API
    app.include_router(api_router_v1, prefix=settings.API_V1_STR)

    @app.get("/", tags=["Root"])
    async def read_root():
        return {
            "message": f"Bem-vindo à {settings.PROJECT_NAME} v{settings.PROJECT_VERSION}",
            "docs": "/docs",
            "status": "operacional",
            "environment": settings.ENVIRONMENT,
        }

    @app.get("/health", tags=["Health Check"])
    async def health_check():
        """Endpoint para verificação de saúde da API"""
        saudavel = manager.healthy
        return JSONResponse(
            status_code=status.HTTP_200_OK if saudavel else status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "status": "healthy" if saudavel else "unhealthy",
                "database": "connected" if saudavel else "disconnected",
                "environment": settings.ENVIRONMENT,
            },
        )

    return app


app = create_app()


def run() -> None:
    import uvicorn

    uvicorn.run("almoxarifado.main:app", host=settings.HOST, port=settings.PORT, log_level=settings.LOG_LEVEL.lower())
