# almoxarifado/api/v1/endpoints/categorias.py
from typing import Any, List

from fastapi import APIRouter, Depends, Response, status
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from almoxarifado import crud, schemas
from almoxarifado.api import deps

router = APIRouter()


@router.get("", response_model=List[schemas.Categoria])
async def read_categorias(db: AsyncSession = Depends(deps.get_db)) -> Any:
    """
    Recupera todas as categorias, ordenadas pelo id.
    """
    return await crud.categoria.get_multi(db)


@router.post(
    "",
    response_model=schemas.Categoria,
    responses={status.HTTP_400_BAD_REQUEST: {"model": schemas.ErroResposta}},
)
async def create_categoria(
    *,
    db: AsyncSession = Depends(deps.get_db),
    categoria_in: schemas.CategoriaCreate,
) -> Any:
    """
    Cria uma nova categoria. O nome é único.
    """
    try:
        return await crud.categoria.create(db=db, obj_in=categoria_in)
    except crud.CategoriaJaExisteError as e:
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": str(e)})


@router.delete("/{categoria_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
async def delete_categoria(
    *,
    db: AsyncSession = Depends(deps.get_db),
    categoria_id: int,
) -> Response:
    await crud.categoria.remove(db=db, id=categoria_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
