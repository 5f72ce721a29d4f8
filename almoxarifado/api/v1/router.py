from fastapi import APIRouter

from almoxarifado.api.v1.endpoints import categorias, produtos

api_router_v1 = APIRouter()

api_router_v1.include_router(produtos.router, prefix="/products", tags=["Produtos"])
api_router_v1.include_router(categorias.router, prefix="/categories", tags=["Categorias"])
