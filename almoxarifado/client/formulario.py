# almoxarifado/client/formulario.py
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Union

from almoxarifado.schemas import Produto

UNIDADES = ("Unidade", "Caixa", "Pacote", "Litro", "Kilo")

Campo = Union[str, int, None]


def _inteiro(valor: Campo) -> Optional[int]:
    if valor is None or (isinstance(valor, str) and not valor.strip()):
        return None
    try:
        return int(str(valor).strip())
    except ValueError:
        return None


@dataclass
class FormularioProduto:
    """Estado bruto do formulário de produto, como digitado pelo usuário."""

    id: Optional[int] = None
    name: str = ""
    quantity: Campo = ""
    category: str = ""
    unit: str = ""
    min_stock: Campo = ""
    erros: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def de_produto(cls, produto: Produto) -> "FormularioProduto":
        return cls(
            id=produto.id,
            name=produto.name or "",
            quantity="" if produto.quantity is None else produto.quantity,
            category=produto.category or "",
            unit=produto.unit or "",
            min_stock="" if produto.min_stock is None else produto.min_stock,
        )

    def atualizar(self, campo: str, valor: Campo) -> None:
        setattr(self, campo, valor)
        self.erros.pop(campo, None)

    def validar(self) -> bool:
        erros = {}
        if not (self.name or "").strip():
            erros["name"] = "O nome é obrigatório"
        if not (self.category or "").strip():
            erros["category"] = "A categoria é obrigatória"
        if not (self.unit or "").strip():
            erros["unit"] = "A unidade é obrigatória"
        elif self.unit not in UNIDADES:
            erros["unit"] = "Unidade inválida"

        if self.quantity is None or str(self.quantity).strip() == "":
            erros["quantity"] = "A quantidade é obrigatória"
        else:
            quantidade = _inteiro(self.quantity)
            if quantidade is None or quantidade < 0:
                erros["quantity"] = "A quantidade deve ser >= 0"

        if self.min_stock is None or str(self.min_stock).strip() == "":
            erros["min_stock"] = "O estoque mínimo é obrigatório"
        else:
            minimo = _inteiro(self.min_stock)
            if minimo is None or minimo < 0:
                erros["min_stock"] = "O estoque mínimo deve ser >= 0"

        self.erros = erros
        return not erros

    def payload(self) -> Dict[str, Any]:
        return {
            "name": self.name.strip(),
            "quantity": _inteiro(self.quantity),
            "category": self.category.strip(),
            "unit": self.unit,
            "minStock": _inteiro(self.min_stock),
        }

    def limpar(self) -> None:
        self.id = None
        self.name = ""
        self.quantity = ""
        self.category = ""
        self.unit = ""
        self.min_stock = ""
        self.erros = {}
