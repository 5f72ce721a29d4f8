# almoxarifado/client/stores.py
import logging
from typing import List, Optional

from almoxarifado.client.api import ApiError, InventoryApi
from almoxarifado.client.derivados import filtrar_produtos
from almoxarifado.client.formulario import FormularioProduto
from almoxarifado.client.lista import ListaOrdenada
from almoxarifado.client.notificacoes import Notificador
from almoxarifado.schemas import Categoria, Produto

logger = logging.getLogger(__name__)


class ProdutoStore:
    """
    Lista de produtos mantida em memória.

    Depois de cada mutação confirmada a lista é reconciliada localmente,
    sem novo GET. Uma mutação que falha deixa a lista e o formulário intactos.
    Só é correta com um único cliente ativo; ``carregar`` refaz a busca.
    """

    def __init__(self, api: InventoryApi, notificador: Optional[Notificador] = None):
        self.api = api
        self.notificador = notificador or Notificador()
        self.lista: ListaOrdenada[Produto] = ListaOrdenada()

    @property
    def produtos(self) -> List[Produto]:
        return self.lista.itens()

    def carregar(self) -> bool:
        try:
            produtos = self.api.list_products()
        except ApiError as e:
            logger.debug("Falha ao listar produtos: %s", e.mensagem)
            self.notificador.erro("Erro ao carregar produtos.")
            return False
        self.lista.substituir_tudo(produtos)
        return True

    def salvar(self, formulario: FormularioProduto) -> Optional[Produto]:
        if not formulario.validar():
            self.notificador.aviso("Preencha todos os campos obrigatórios corretamente.")
            return None
        try:
            if formulario.id:
                produto = self.api.update_product(formulario.id, formulario.payload())
                self.lista.substituir_por_id(produto)
                self.notificador.sucesso("Produto atualizado com sucesso!")
            else:
                produto = self.api.create_product(formulario.payload())
                self.lista.inserir_no_inicio(produto)
                self.notificador.sucesso("Produto cadastrado com sucesso!")
        except ApiError as e:
            logger.debug("Falha ao salvar produto: %s", e.mensagem)
            self.notificador.erro("Erro ao salvar o produto.")
            return None
        formulario.limpar()
        return produto

    def remover(self, produto_id: int) -> bool:
        try:
            self.api.delete_product(produto_id)
        except ApiError as e:
            logger.debug("Falha ao excluir produto %s: %s", produto_id, e.mensagem)
            self.notificador.erro("Erro ao excluir o produto.")
            return False
        self.lista.remover_por_id(produto_id)
        self.notificador.info("Produto excluído com sucesso!")
        return True

    def buscar(self, termo: str) -> List[Produto]:
        return filtrar_produtos(self.produtos, termo)


class CategoriaStore:
    def __init__(self, api: InventoryApi, notificador: Optional[Notificador] = None):
        self.api = api
        self.notificador = notificador or Notificador()
        self.lista: ListaOrdenada[Categoria] = ListaOrdenada()

    @property
    def categorias(self) -> List[Categoria]:
        return self.lista.itens()

    def carregar(self) -> bool:
        try:
            categorias = self.api.list_categories()
        except ApiError as e:
            logger.debug("Falha ao listar categorias: %s", e.mensagem)
            self.notificador.erro("Erro ao carregar categorias.")
            return False
        self.lista.substituir_tudo(categorias)
        return True

    def adicionar(self, nome: str) -> Optional[Categoria]:
        if not (nome or "").strip():
            return None
        try:
            categoria = self.api.create_category(nome)
        except ApiError as e:
            # Nome duplicado chega com a mensagem do servidor ("Categoria já existe")
            mensagem = e.mensagem if e.status_code == 400 else "Erro ao criar categoria"
            self.notificador.erro(mensagem)
            return None
        # Categorias novas entram no fim da lista
        self.lista.adicionar_no_fim(categoria)
        self.notificador.sucesso("Categoria criada com sucesso!")
        return categoria

    def remover(self, categoria_id: int) -> bool:
        try:
            self.api.delete_category(categoria_id)
        except ApiError as e:
            logger.debug("Falha ao excluir categoria %s: %s", categoria_id, e.mensagem)
            self.notificador.erro("Erro ao excluir categoria.")
            return False
        self.lista.remover_por_id(categoria_id)
        self.notificador.info("Categoria excluída com sucesso!")
        return True
