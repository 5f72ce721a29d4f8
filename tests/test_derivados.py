# tests/test_derivados.py
from almoxarifado.client.derivados import (
    SEM_CATEGORIA,
    dados_grafico,
    distribuicao_por_categoria,
    em_estoque_baixo,
    filtrar_produtos,
    resumo_estoque,
)
from almoxarifado.schemas import Produto


def produto(id, name, quantity=None, min_stock=None, category=None, unit=None):
    return Produto(id=id, name=name, quantity=quantity, min_stock=min_stock, category=category, unit=unit)


def test_estoque_baixo_inclui_igualdade():
    assert produto(1, "A", quantity=5, min_stock=10).estoque_baixo is True
    assert produto(2, "B", quantity=10, min_stock=10).estoque_baixo is True
    assert produto(3, "C", quantity=11, min_stock=10).estoque_baixo is False


def test_estoque_baixo_ignora_valores_ausentes():
    assert produto(1, "A", quantity=None, min_stock=10).estoque_baixo is False
    assert produto(2, "B", quantity=0, min_stock=None).estoque_baixo is False


def test_resumo_estoque():
    produtos = [
        produto(1, "A", quantity=5, min_stock=10),
        produto(2, "B", quantity=40, min_stock=10),
        produto(3, "C", quantity=1, min_stock=2),
    ]
    assert resumo_estoque(produtos) == {"total": 3, "estoque_baixo": 2, "percentual_estoque_baixo": 66.67}
    assert resumo_estoque([]) == {"total": 0, "estoque_baixo": 0, "percentual_estoque_baixo": 0.0}
    assert [p.name for p in em_estoque_baixo(produtos)] == ["A", "C"]


def test_distribuicao_por_categoria_conta_pelo_texto():
    produtos = [
        produto(1, "A", category="Limpeza"),
        produto(2, "B", category="Ferramentas"),
        produto(3, "C", category="Ferramentas"),
        produto(4, "D"),
    ]
    distribuicao = distribuicao_por_categoria(produtos)
    assert distribuicao == {"Ferramentas": 2, "Limpeza": 1, SEM_CATEGORIA: 1}
    assert next(iter(distribuicao)) == "Ferramentas"


def test_dados_grafico():
    dados = dados_grafico([produto(1, "A", quantity=5, min_stock=10), produto(2, "B", quantity=3)])
    assert dados == {
        "labels": ["A", "B"],
        "quantidade": [5, 3],
        "estoque_minimo": [10, None],
        "estoque_baixo": [True, False],
    }


def test_filtrar_produtos_em_qualquer_campo():
    produtos = [
        produto(1, "Parafuso", quantity=120, category="Ferramentas", unit="Caixa"),
        produto(2, "Detergente", quantity=8, category="Limpeza", unit="Litro"),
    ]
    assert [p.id for p in filtrar_produtos(produtos, "  LIMP ")] == [2]
    assert [p.id for p in filtrar_produtos(produtos, "12")] == [1]
    assert [p.id for p in filtrar_produtos(produtos, "caixa")] == [1]
    assert len(filtrar_produtos(produtos, "")) == 2
    assert filtrar_produtos(produtos, "xyz") == []
