# almoxarifado/client/api.py
import logging
from typing import Any, Dict, List, Optional

import httpx

from almoxarifado.schemas import Categoria, Produto

logger = logging.getLogger(__name__)


class ApiError(Exception):
    def __init__(self, status_code: Optional[int], mensagem: str):
        super().__init__(mensagem)
        self.status_code = status_code
        self.mensagem = mensagem


class InventoryApi:
    """Cliente HTTP das rotas /products e /categories."""

    def __init__(self, base_url: str = "http://localhost:3001", timeout: float = 10.0,
                 client: Optional[httpx.Client] = None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.client = client or httpx.Client(base_url=self.base_url, timeout=timeout)

    @classmethod
    def from_settings(cls, settings) -> "InventoryApi":
        return cls(base_url=settings.API_URL, timeout=settings.TIMEOUT)

    def close(self) -> None:
        self.client.close()

    def _request(self, method: str, path: str, **kwargs) -> httpx.Response:
        try:
            r = self.client.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            logger.warning("Falha de comunicação em %s %s: %s", method, path, e)
            raise ApiError(None, "Não foi possível se comunicar com o servidor") from e
        if r.is_error:
            raise ApiError(r.status_code, self._mensagem_erro(r))
        return r

    @staticmethod
    def _mensagem_erro(r: httpx.Response) -> str:
        try:
            body = r.json()
        except ValueError:
            return f"HTTP {r.status_code}: {r.text}"
        if isinstance(body, dict):
            for chave in ("error", "detail"):
                if isinstance(body.get(chave), str):
                    return body[chave]
        return f"HTTP {r.status_code}"

    # Produtos
    def list_products(self) -> List[Produto]:
        r = self._request("GET", "/products")
        return [Produto.model_validate(p) for p in r.json()]

    def create_product(self, payload: Dict[str, Any]) -> Produto:
        r = self._request("POST", "/products", json=payload)
        return Produto.model_validate(r.json())

    def update_product(self, produto_id: int, payload: Dict[str, Any]) -> Produto:
        r = self._request("PUT", f"/products/{produto_id}", json=payload)
        return Produto.model_validate(r.json())

    def delete_product(self, produto_id: int) -> None:
        self._request("DELETE", f"/products/{produto_id}")

    # Categorias
    def list_categories(self) -> List[Categoria]:
        r = self._request("GET", "/categories")
        return [Categoria.model_validate(c) for c in r.json()]

    def create_category(self, name: str) -> Categoria:
        r = self._request("POST", "/categories", json={"name": name})
        return Categoria.model_validate(r.json())

    def delete_category(self, categoria_id: int) -> None:
        self._request("DELETE", f"/categories/{categoria_id}")
