# almoxarifado/crud/crud_produto.py
from typing import List, Optional

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from almoxarifado.db.models.produto import Produto
from almoxarifado.schemas.produto_schemas import ProdutoCreate, ProdutoUpdate


class CRUDProduto:
    async def get_multi(self, db: AsyncSession) -> List[Produto]:
        result = await db.execute(select(Produto).order_by(Produto.id))
        return list(result.scalars().all())

    async def create(self, db: AsyncSession, *, obj_in: ProdutoCreate) -> Produto:
        db_obj = Produto(**obj_in.model_dump())
        db.add(db_obj)
        await db.commit()
        return db_obj

    async def update(self, db: AsyncSession, *, id: int, obj_in: ProdutoUpdate) -> Optional[Produto]:
        # Substituição completa: campos não enviados são gravados como nulo
        valores = {getattr(Produto, campo): valor for campo, valor in obj_in.model_dump().items()}
        result = await db.execute(
            update(Produto).where(Produto.id == id).values(valores).returning(Produto)
        )
        db_obj = result.scalar_one_or_none()
        await db.commit()
        return db_obj

    async def remove(self, db: AsyncSession, *, id: int) -> None:
        await db.execute(delete(Produto).where(Produto.id == id))
        await db.commit()


produto = CRUDProduto()
