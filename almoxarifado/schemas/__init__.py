# almoxarifado/schemas/__init__.py
from .categoria_schemas import Categoria, CategoriaCreate, ErroResposta
from .produto_schemas import Produto, ProdutoCreate, ProdutoUpdate
