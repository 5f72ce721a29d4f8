# tests/test_lista.py
from almoxarifado.client import ListaOrdenada
from almoxarifado.schemas import Produto


def produto(id, nome="P", **kwargs):
    return Produto(id=id, name=nome, **kwargs)


def ids(lista):
    return [p.id for p in lista]


def test_inserir_no_inicio():
    lista = ListaOrdenada([produto(1), produto(2)])
    lista.inserir_no_inicio(produto(3))
    assert ids(lista) == [3, 1, 2]


def test_substituir_por_id_move_o_item_para_o_topo():
    lista = ListaOrdenada([produto(1, "A"), produto(2, "B"), produto(3, "C")])
    lista.substituir_por_id(produto(2, "B editado"))
    assert ids(lista) == [2, 1, 3]
    assert lista.get(2).name == "B editado"
    assert len(lista) == 3


def test_remover_por_id():
    lista = ListaOrdenada([produto(1), produto(2)])
    assert lista.remover_por_id(1).id == 1
    assert ids(lista) == [2]
    assert lista.remover_por_id(99) is None
    assert 1 not in lista


def test_adicionar_no_fim_e_substituir_tudo():
    lista = ListaOrdenada([produto(1)])
    lista.adicionar_no_fim(produto(5))
    assert ids(lista) == [1, 5]
    lista.substituir_tudo([produto(7), produto(8)])
    assert ids(lista) == [7, 8]
