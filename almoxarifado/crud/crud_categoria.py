# almoxarifado/crud/crud_categoria.py
from typing import List

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from almoxarifado.db.models.categoria import Categoria
from almoxarifado.schemas.categoria_schemas import CategoriaCreate


class CategoriaJaExisteError(ValueError):
    pass


class CRUDCategoria:
    async def get_multi(self, db: AsyncSession) -> List[Categoria]:
        result = await db.execute(select(Categoria).order_by(Categoria.id))
        return list(result.scalars().all())

    async def create(self, db: AsyncSession, *, obj_in: CategoriaCreate) -> Categoria:
        db_obj = Categoria(name=obj_in.name)
        db.add(db_obj)
        try:
            await db.commit()
        except IntegrityError as e:
            await db.rollback()
            raise CategoriaJaExisteError("Categoria já existe") from e
        return db_obj

    async def remove(self, db: AsyncSession, *, id: int) -> None:
        # Produtos que citam a categoria pelo nome não são afetados
        await db.execute(delete(Categoria).where(Categoria.id == id))
        await db.commit()


categoria = CRUDCategoria()
