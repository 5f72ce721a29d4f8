from .acesso import PortaoAcesso
from .api import ApiError, InventoryApi
from .formulario import UNIDADES, FormularioProduto
from .lista import ListaOrdenada
from .notificacoes import Nivel, Notificacao, Notificador
from .stores import CategoriaStore, ProdutoStore
