from .crud_categoria import CategoriaJaExisteError, categoria
from .crud_produto import produto
