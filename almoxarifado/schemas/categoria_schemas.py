# almoxarifado/schemas/categoria_schemas.py
from typing import Optional

from pydantic import BaseModel, Field


class CategoriaBase(BaseModel):
    name: Optional[str] = Field(None, examples=["Ferramentas"])


class CategoriaCreate(CategoriaBase):
    pass


class Categoria(CategoriaBase):
    id: int

    class Config:
        from_attributes = True


class ErroResposta(BaseModel):
    error: str
