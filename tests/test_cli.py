# tests/test_cli.py
import io

import pytest
from rich.console import Console

from almoxarifado import cli
from almoxarifado.client import PortaoAcesso
from almoxarifado.client.config import ClientSettings
from almoxarifado.schemas import Categoria, Produto


@pytest.fixture
def portao(tmp_path):
    return PortaoAcesso(tmp_path / "estado.json", senha="Almo123.")


@pytest.fixture
def executar(api, portao):
    def _executar(*argv):
        console = Console(file=io.StringIO(), width=200)
        codigo = cli.main(list(argv), api=api, portao=portao, console=console, settings=ClientSettings())
        return codigo, console.file.getvalue()

    return _executar


@pytest.fixture
def autenticado(portao):
    portao.entrar("Almo123.")
    return portao


def test_exige_senha(executar):
    codigo, saida = executar("produtos")
    assert codigo == 2
    assert "Acesso Restrito" in saida


def test_entrar(executar, portao):
    assert executar("entrar", "--senha", "nada")[0] == 1
    codigo, saida = executar("entrar", "--senha", "Almo123.")
    assert codigo == 0
    assert portao.autenticado is True


def test_cadastrar_e_listar(executar, autenticado):
    codigo, saida = executar(
        "novo-produto", "--nome", "Parafuso", "--quantidade", "5",
        "--categoria", "Ferramentas", "--unidade", "Caixa", "--estoque-minimo", "10",
    )
    assert codigo == 0
    assert "Produto cadastrado com sucesso!" in saida

    codigo, saida = executar("produtos", "--busca", "para")
    assert codigo == 0
    assert "Parafuso" in saida


def test_cadastro_invalido_mostra_erros(executar, autenticado):
    codigo, saida = executar("novo-produto", "--nome", "Parafuso")
    assert codigo == 1
    assert "A categoria é obrigatória" in saida


def test_dashboard_mostra_alerta(executar, autenticado, api):
    api.create_product({"name": "Parafuso", "quantity": 5, "category": "Ferramentas", "unit": "Caixa", "minStock": 10})
    codigo, saida = executar("dashboard")
    assert codigo == 0
    assert "Atenção: Produtos com estoque baixo" in saida
    assert "Parafuso (Qtd: 5 / Min: 10)" in saida


def test_editar_e_remover(executar, autenticado, api):
    criado = api.create_product({"name": "Cola", "quantity": 2, "category": "Escritório", "unit": "Unidade", "minStock": 1})

    codigo, saida = executar("editar-produto", str(criado.id), "--quantidade", "9")
    assert codigo == 0
    assert api.list_products()[0].quantity == 9

    assert executar("editar-produto", "9999", "--quantidade", "1")[0] == 1

    codigo, saida = executar("remover-produto", str(criado.id), "--sim")
    assert codigo == 0
    assert api.list_products() == []


def test_categoria_duplicada(executar, autenticado):
    assert executar("nova-categoria", "Ferramentas")[0] == 0
    codigo, saida = executar("nova-categoria", "Ferramentas")
    assert codigo == 1
    assert "Categoria já existe" in saida


def test_exportar_csv(executar, autenticado, api, tmp_path):
    api.create_product({"name": "Parafuso", "quantity": 1500, "category": "Ferramentas", "unit": "Caixa", "minStock": 10})
    saida_csv = tmp_path / "produtos.csv"

    codigo, _ = executar("exportar-csv", "--saida", str(saida_csv))
    assert codigo == 0
    assert "1.500" in saida_csv.read_text(encoding="utf-8")

    codigo, saida = executar("exportar-csv", "--saida", str(saida_csv), "--colunas", "name,preco")
    assert codigo == 1
    assert "Coluna desconhecida" in saida


def test_servidor_fora_do_ar(portao, tmp_path):
    from almoxarifado.client import InventoryApi

    portao.entrar("Almo123.")
    console = Console(file=io.StringIO(), width=200)
    api = InventoryApi(base_url="http://127.0.0.1:9", timeout=0.5)
    codigo = cli.main(["produtos"], api=api, portao=portao, console=console, settings=ClientSettings())
    assert codigo == 1
    assert "Erro ao carregar produtos." in console.file.getvalue()


def renderizar(funcao, *args):
    console = Console(file=io.StringIO(), width=200)
    funcao(console, *args)
    return console.file.getvalue()


def test_colchetes_em_texto_livre_nao_viram_markup():
    produtos = [
        Produto(id=1, name="Cabo [/x]", quantity=1, min_stock=0, category="[bold]Elétrica", unit="Unidade"),
    ]
    saida = renderizar(cli.show_produtos, produtos)
    assert "Cabo [/x]" in saida
    assert "[bold]Elétrica" in saida

    # O destaque da busca também preserva os colchetes
    assert "Cabo [/x]" in renderizar(cli.show_produtos, produtos, "cabo")
    assert "Cabo [/x]" in renderizar(cli.show_produtos, produtos, "[/x")


def test_dashboard_e_categorias_com_colchetes():
    produtos = [Produto(id=1, name="Cabo [/x]", quantity=1, min_stock=5, category="[red]Fios")]
    saida = renderizar(cli.show_dashboard, produtos)
    assert "Cabo [/x] (Qtd: 1 / Min: 5)" in saida
    assert "[red]Fios" in saida

    assert "[/categoria]" in renderizar(cli.show_categorias, [Categoria(id=1, name="[/categoria]")])


def test_produto_com_colchetes_pela_linha_de_comando(executar, autenticado, api):
    api.create_product({"name": "Cabo [/x]", "quantity": 1, "category": "Elétrica", "unit": "Unidade", "minStock": 5})
    codigo, saida = executar("produtos")
    assert codigo == 0
    assert "Cabo [/x]" in saida
    assert executar("dashboard")[0] == 0
