from sqlalchemy import Column, Integer
from sqlalchemy.orm import as_declarative


@as_declarative()
class Base:
    """
    Base class which provides the surrogate primary key column.

    As tabelas seguem o esquema já existente no Postgres gerenciado
    (id SERIAL), por isso cada modelo declara o próprio __tablename__.
    """

    id = Column(Integer, primary_key=True)
