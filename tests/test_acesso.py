# tests/test_acesso.py
import pytest

from almoxarifado.client import PortaoAcesso
from almoxarifado.client.acesso import pwd_context


@pytest.fixture
def estado(tmp_path):
    return tmp_path / "estado" / "estado.json"


def test_senha_errada_nao_libera(estado):
    portao = PortaoAcesso(estado, senha="Almo123.")
    assert portao.entrar("errada") is False
    assert portao.autenticado is False
    assert not estado.exists()


def test_senha_certa_persiste_entre_execucoes(estado):
    assert PortaoAcesso(estado, senha="Almo123.").entrar("Almo123.") is True
    assert PortaoAcesso(estado, senha="Almo123.").autenticado is True


def test_sair(estado):
    portao = PortaoAcesso(estado, senha="Almo123.")
    portao.entrar("Almo123.")
    portao.sair()
    assert portao.autenticado is False


def test_hash_configurado(estado):
    portao = PortaoAcesso(estado, senha_hash=pwd_context.hash("segredo"))
    assert portao.entrar("Almo123.") is False
    assert portao.entrar("segredo") is True


def test_estado_corrompido_exige_senha(estado):
    estado.parent.mkdir(parents=True)
    estado.write_text("{nao e json", encoding="utf-8")
    assert PortaoAcesso(estado, senha="x").autenticado is False


def test_sem_senha():
    with pytest.raises(ValueError):
        PortaoAcesso("estado.json")
