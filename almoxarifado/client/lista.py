# almoxarifado/client/lista.py
from collections import OrderedDict
from typing import Generic, Iterable, Iterator, List, Optional, TypeVar

T = TypeVar("T")


class ListaOrdenada(Generic[T]):
    """
    Projeção local de uma lista do servidor, ordenada e indexada pelo id.

    As mutações espelham o resultado confirmado pelo servidor sem novo GET:
    inserir no início, substituir por id (o item vai para o topo) e remover
    por id.
    """

    def __init__(self, itens: Iterable[T] = ()):
        self._itens: "OrderedDict[int, T]" = OrderedDict()
        self.substituir_tudo(itens)

    def substituir_tudo(self, itens: Iterable[T]) -> None:
        self._itens = OrderedDict((item.id, item) for item in itens)

    def inserir_no_inicio(self, item: T) -> None:
        self._itens[item.id] = item
        self._itens.move_to_end(item.id, last=False)

    def adicionar_no_fim(self, item: T) -> None:
        self._itens[item.id] = item
        self._itens.move_to_end(item.id)

    def substituir_por_id(self, item: T) -> None:
        # Remove a versão anterior e coloca a nova no topo da lista
        self._itens.pop(item.id, None)
        self.inserir_no_inicio(item)

    def remover_por_id(self, item_id: int) -> Optional[T]:
        return self._itens.pop(item_id, None)

    def get(self, item_id: int) -> Optional[T]:
        return self._itens.get(item_id)

    def itens(self) -> List[T]:
        return list(self._itens.values())

    def __iter__(self) -> Iterator[T]:
        return iter(list(self._itens.values()))

    def __len__(self) -> int:
        return len(self._itens)

    def __contains__(self, item_id: object) -> bool:
        return item_id in self._itens
