# almoxarifado/client/acesso.py
import json
import logging
from pathlib import Path
from typing import Optional, Union

from passlib.context import CryptContext

logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


class PortaoAcesso:
    """
    Tela de senha do cliente. Guarda apenas um indicador booleano em um
    arquivo local para pular a senha nas próximas execuções.

    Não é um mecanismo de segurança: qualquer um com acesso ao arquivo ou à
    API contorna o portão.
    """

    def __init__(self, estado_path: Union[str, Path], senha: Optional[str] = None,
                 senha_hash: Optional[str] = None):
        if not senha_hash and not senha:
            raise ValueError("Informe a senha ou o hash da senha")
        self.estado_path = Path(estado_path)
        self._senha_hash = senha_hash or pwd_context.hash(senha)

    @classmethod
    def from_settings(cls, settings) -> "PortaoAcesso":
        return cls(settings.ESTADO_PATH, senha=settings.SENHA_ACESSO, senha_hash=settings.SENHA_ACESSO_HASH)

    def _ler_estado(self) -> dict:
        try:
            return json.loads(self.estado_path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return {}
        except (ValueError, OSError) as e:
            logger.warning("Estado local ilegível em %s: %s", self.estado_path, e)
            return {}

    def _gravar_estado(self, estado: dict) -> None:
        self.estado_path.parent.mkdir(parents=True, exist_ok=True)
        self.estado_path.write_text(json.dumps(estado), encoding="utf-8")

    @property
    def autenticado(self) -> bool:
        return self._ler_estado().get("auth") is True

    def entrar(self, senha: str) -> bool:
        if not pwd_context.verify(senha, self._senha_hash):
            return False
        estado = self._ler_estado()
        estado["auth"] = True
        self._gravar_estado(estado)
        return True

    def sair(self) -> None:
        estado = self._ler_estado()
        estado.pop("auth", None)
        self._gravar_estado(estado)
