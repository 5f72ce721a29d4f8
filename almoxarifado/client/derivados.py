# almoxarifado/client/derivados.py
"""Estado derivado da lista de produtos em memória; nada aqui é persistido."""
from collections import Counter
from typing import Any, Dict, Iterable, List

from almoxarifado.schemas import Produto

SEM_CATEGORIA = "Sem categoria"


def em_estoque_baixo(produtos: Iterable[Produto]) -> List[Produto]:
    return [p for p in produtos if p.estoque_baixo]


def resumo_estoque(produtos: Iterable[Produto]) -> Dict[str, Any]:
    produtos = list(produtos)
    total = len(produtos)
    baixo = len(em_estoque_baixo(produtos))
    return {
        "total": total,
        "estoque_baixo": baixo,
        "percentual_estoque_baixo": round(baixo * 100 / total, 2) if total else 0.0,
    }


def distribuicao_por_categoria(produtos: Iterable[Produto]) -> Dict[str, int]:
    """
    Conta produtos pelo texto da categoria, não pelo id: categorias sem
    produtos não aparecem e categorias inexistentes também são contadas.
    """
    contagem = Counter(p.category if p.category is not None else SEM_CATEGORIA for p in produtos)
    return dict(contagem.most_common())


def dados_grafico(produtos: Iterable[Produto]) -> Dict[str, List[Any]]:
    produtos = list(produtos)
    return {
        "labels": [p.name or "" for p in produtos],
        "quantidade": [p.quantity for p in produtos],
        "estoque_minimo": [p.min_stock for p in produtos],
        "estoque_baixo": [p.estoque_baixo for p in produtos],
    }


def filtrar_produtos(produtos: Iterable[Produto], termo: str) -> List[Produto]:
    q = (termo or "").strip().lower()
    if not q:
        return list(produtos)

    def casa(p: Produto) -> bool:
        campos = (
            p.name or "",
            "" if p.quantity is None else str(p.quantity),
            p.category or "",
            p.unit or "",
        )
        return any(q in campo.lower() for campo in campos)

    return [p for p in produtos if casa(p)]
