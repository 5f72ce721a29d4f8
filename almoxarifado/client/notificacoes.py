# almoxarifado/client/notificacoes.py
import logging
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from itertools import count
from typing import Callable, List

logger = logging.getLogger(__name__)


class Nivel(str, Enum):
    SUCESSO = "sucesso"
    INFO = "info"
    AVISO = "aviso"
    ERRO = "erro"


_NIVEIS_LOG = {
    Nivel.SUCESSO: logging.INFO,
    Nivel.INFO: logging.INFO,
    Nivel.AVISO: logging.WARNING,
    Nivel.ERRO: logging.ERROR,
}

_ids = count(1)


@dataclass
class Notificacao:
    nivel: Nivel
    mensagem: str
    id: int = field(default_factory=lambda: next(_ids))
    criada_em: datetime = field(default_factory=datetime.now)


class Notificador:
    """Avisos transitórios e dispensáveis; nunca interrompem o fluxo."""

    def __init__(self):
        self.ativas: List[Notificacao] = []
        self._ouvintes: List[Callable[[Notificacao], None]] = []

    def inscrever(self, ouvinte: Callable[[Notificacao], None]) -> None:
        self._ouvintes.append(ouvinte)

    def notificar(self, nivel: Nivel, mensagem: str) -> Notificacao:
        notificacao = Notificacao(nivel=nivel, mensagem=mensagem)
        logger.log(_NIVEIS_LOG[nivel], mensagem)
        self.ativas.append(notificacao)
        for ouvinte in self._ouvintes:
            ouvinte(notificacao)
        return notificacao

    def sucesso(self, mensagem: str) -> Notificacao:
        return self.notificar(Nivel.SUCESSO, mensagem)

    def info(self, mensagem: str) -> Notificacao:
        return self.notificar(Nivel.INFO, mensagem)

    def aviso(self, mensagem: str) -> Notificacao:
        return self.notificar(Nivel.AVISO, mensagem)

    def erro(self, mensagem: str) -> Notificacao:
        return self.notificar(Nivel.ERRO, mensagem)

    def dispensar(self, notificacao_id: int) -> None:
        self.ativas = [n for n in self.ativas if n.id != notificacao_id]

    def limpar(self) -> None:
        self.ativas.clear()
