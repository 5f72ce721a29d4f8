# almoxarifado/api/v1/endpoints/produtos.py
from typing import Any, List

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from almoxarifado import crud, schemas
from almoxarifado.api import deps

router = APIRouter()


@router.get("", response_model=List[schemas.Produto])
async def read_produtos(db: AsyncSession = Depends(deps.get_db)) -> Any:
    """
    Recupera todos os produtos, ordenados pelo id.
    """
    return await crud.produto.get_multi(db)


@router.post("", response_model=schemas.Produto)
async def create_produto(
    *,
    db: AsyncSession = Depends(deps.get_db),
    produto_in: schemas.ProdutoCreate,
) -> Any:
    """
    Cria um novo produto.
    A validação dos campos é feita no cliente; aqui todos são opcionais.
    """
    return await crud.produto.create(db=db, obj_in=produto_in)


@router.put("/{produto_id}", response_model=schemas.Produto)
async def update_produto(
    *,
    db: AsyncSession = Depends(deps.get_db),
    produto_id: int,
    produto_in: schemas.ProdutoUpdate,
) -> Any:
    """
    Substitui o registro inteiro do produto.
    """
    produto = await crud.produto.update(db=db, id=produto_id, obj_in=produto_in)
    if not produto:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Produto não encontrado")
    return produto


@router.delete("/{produto_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
async def delete_produto(
    *,
    db: AsyncSession = Depends(deps.get_db),
    produto_id: int,
) -> Response:
    # Idempotente: excluir um id inexistente também responde 204
    await crud.produto.remove(db=db, id=produto_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
