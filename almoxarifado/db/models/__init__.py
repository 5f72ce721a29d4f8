from .categoria import Categoria
from .produto import Produto
