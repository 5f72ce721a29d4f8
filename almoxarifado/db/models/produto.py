# almoxarifado/db/models/produto.py
from sqlalchemy import Column, Integer, Text

from almoxarifado.db.base_class import Base


class Produto(Base):
    __tablename__ = "products"

    name = Column(Text)
    quantity = Column(Integer)
    # Categoria desnormalizada: texto livre, sem chave estrangeira
    category = Column(Text)
    unit = Column(Text)
    # O Postgres dobra o identificador não citado minStock para minstock
    min_stock = Column("minstock", Integer)
