# almoxarifado/db/models/categoria.py
from sqlalchemy import Column, Text

from almoxarifado.db.base_class import Base


class Categoria(Base):
    __tablename__ = "categories"

    name = Column(Text, unique=True)
