# almoxarifado/schemas/produto_schemas.py
from typing import Optional

from pydantic import AliasChoices, BaseModel, Field, field_validator


class ProdutoBase(BaseModel):
    name: Optional[str] = Field(None, examples=["Parafuso"])
    quantity: Optional[int] = Field(None, examples=[5])
    category: Optional[str] = Field(None, examples=["Ferramentas"])
    unit: Optional[str] = Field(None, examples=["Caixa"])
    # Nome canônico no fio é minStock; minstock (nome da coluna) também é aceito
    min_stock: Optional[int] = Field(
        None,
        validation_alias=AliasChoices("minStock", "minstock", "min_stock"),
        serialization_alias="minStock",
        examples=[10],
    )

    @field_validator("quantity", "min_stock", mode="before")
    @classmethod
    def vazio_como_nulo(cls, v):
        # Formulários em edição enviam "" para campos numéricos ainda não preenchidos
        if isinstance(v, str) and not v.strip():
            return None
        return v

    class Config:
        populate_by_name = True


class ProdutoCreate(ProdutoBase):
    pass


class ProdutoUpdate(ProdutoBase):
    """Substituição completa do registro: campos omitidos viram nulo."""


class Produto(ProdutoBase):
    id: int

    @property
    def estoque_baixo(self) -> bool:
        """Produto está em alerta quando quantity <= minStock."""
        if self.quantity is None or self.min_stock is None:
            return False
        return self.quantity <= self.min_stock

    class Config:
        from_attributes = True
        populate_by_name = True
