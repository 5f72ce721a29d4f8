# almoxarifado/cli.py
import argparse
import logging
import sys
from typing import List, Optional, Sequence

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.prompt import Confirm, Prompt
from rich.table import Table

from almoxarifado.client import (
    UNIDADES,
    CategoriaStore,
    FormularioProduto,
    InventoryApi,
    Nivel,
    Notificacao,
    Notificador,
    PortaoAcesso,
    ProdutoStore,
)
from almoxarifado.client.config import ClientSettings
from almoxarifado.client.derivados import (
    dados_grafico,
    distribuicao_por_categoria,
    em_estoque_baixo,
    resumo_estoque,
)
from almoxarifado.client.exportacao import salvar_csv, salvar_pdf
from almoxarifado.schemas import Categoria, Produto

logger = logging.getLogger(__name__)

_ESTILOS = {
    Nivel.SUCESSO: ("green", "✅"),
    Nivel.INFO: ("cyan", "ℹ️"),
    Nivel.AVISO: ("yellow", "⚠️"),
    Nivel.ERRO: ("red", "❌"),
}


# ---------------------------
# Display helpers
# ---------------------------
def show_notificacao(console: Console, notificacao: Notificacao) -> None:
    cor, icone = _ESTILOS[notificacao.nivel]
    console.print(f"{icone} [{cor}]{escape(notificacao.mensagem)}[/{cor}]")


def show_produtos(console: Console, produtos: List[Produto], busca: str = "") -> None:
    if not produtos:
        console.print("[italic yellow]Nenhum produto encontrado[/italic yellow]")
        return

    table = Table(
        title="📦 Produtos do Almoxarifado",
        box=box.ROUNDED,
        header_style="bold cyan",
        title_style="bold magenta",
    )
    table.add_column("ID", style="dim", justify="right")
    table.add_column("Nome", style="bold")
    table.add_column("Unidade")
    table.add_column("Categoria")
    table.add_column("Quantidade", justify="right")
    table.add_column("Estoque mínimo", justify="right")

    for p in produtos:
        quantidade = "" if p.quantity is None else str(p.quantity)
        if p.estoque_baixo:
            quantidade = f"[bold red]{quantidade}[/bold red]"
        table.add_row(
            str(p.id),
            _destacar(p.name or "", busca),
            _destacar(p.unit or "", busca),
            _destacar(p.category or "", busca),
            quantidade,
            "" if p.min_stock is None else str(p.min_stock),
        )
    console.print(table)


def _destacar(texto: str, busca: str) -> str:
    # Texto do usuário nunca é interpretado como markup do rich
    termo = (busca or "").strip()
    inicio = texto.lower().find(termo.lower()) if termo else -1
    if inicio < 0:
        return escape(texto)
    fim = inicio + len(termo)
    return f"{escape(texto[:inicio])}[bold #32dac3]{escape(texto[inicio:fim])}[/bold #32dac3]{escape(texto[fim:])}"


def show_categorias(console: Console, categorias: List[Categoria]) -> None:
    if not categorias:
        console.print("[italic yellow]Nenhuma categoria cadastrada.[/italic yellow]")
        return
    table = Table(title=f"🗂️ Categorias ({len(categorias)})", box=box.ROUNDED, header_style="bold blue")
    table.add_column("ID", style="dim", justify="right")
    table.add_column("Nome", style="bold")
    for c in categorias:
        table.add_row(str(c.id), escape(c.name or ""))
    console.print(table)


def show_dashboard(console: Console, produtos: List[Produto]) -> None:
    resumo = resumo_estoque(produtos)
    console.print(Panel.fit(
        f"Total de produtos: [bold]{resumo['total']}[/bold]\n"
        f"Abaixo do estoque mínimo: [bold red]{resumo['estoque_baixo']}[/bold red] "
        f"({resumo['percentual_estoque_baixo']}%)",
        title="📊 Dashboard Produtos",
        border_style="cyan",
    ))

    baixo = em_estoque_baixo(produtos)
    if baixo:
        linhas = "\n".join(f"{escape(p.name or '')} (Qtd: {p.quantity} / Min: {p.min_stock})" for p in baixo)
        console.print(Panel(linhas, title="Atenção: Produtos com estoque baixo", border_style="red", style="red"))

    distribuicao = distribuicao_por_categoria(produtos)
    if distribuicao:
        table = Table(title="Produtos por categoria", box=box.SIMPLE, header_style="bold")
        table.add_column("Categoria")
        table.add_column("Produtos", justify="right")
        for categoria, total in distribuicao.items():
            table.add_row(escape(categoria), str(total))
        console.print(table)

    grafico = dados_grafico(produtos)
    maior = max([q for q in grafico["quantidade"] + grafico["estoque_minimo"] if q is not None] or [0])
    if maior > 0:
        table = Table(title="Quantidade x Estoque mínimo", box=box.SIMPLE, show_header=False)
        table.add_column("Produto")
        table.add_column("Barras")
        for nome, qtd, minimo, alerta in zip(*grafico.values()):
            cor = "red" if alerta else "#3c8a7f"
            barra_qtd = "█" * round(30 * (qtd or 0) / maior)
            barra_min = "█" * round(30 * (minimo or 0) / maior)
            table.add_row(escape(nome), f"[{cor}]{barra_qtd}[/{cor}] {qtd}\n[#32dac3]{barra_min}[/#32dac3] {minimo}")
        console.print(table)


# ---------------------------
# Argumentos
# ---------------------------
def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="almoxarifado", description="Almoxarifado PIBLS")
    subparsers = parser.add_subparsers(dest="command", required=True)

    en = subparsers.add_parser("entrar", help="Libera o uso do cliente neste computador")
    en.add_argument("--senha", help="Senha de acesso (perguntada se omitida)")
    subparsers.add_parser("sair", help="Volta a exigir a senha")

    lp = subparsers.add_parser("produtos", help="Lista os produtos")
    lp.add_argument("--busca", default="", help="Filtra por nome, quantidade, categoria ou unidade")
    lp.add_argument("--estoque-baixo", action="store_true", help="Somente produtos em alerta")

    for nome, ajuda in (("novo-produto", "Cadastra um produto"), ("editar-produto", "Substitui um produto")):
        p = subparsers.add_parser(nome, help=ajuda)
        if nome == "editar-produto":
            p.add_argument("id", type=int, help="ID do produto")
        p.add_argument("--nome")
        p.add_argument("--quantidade")
        p.add_argument("--categoria")
        p.add_argument("--unidade", choices=UNIDADES)
        p.add_argument("--estoque-minimo")

    rp = subparsers.add_parser("remover-produto", help="Exclui um produto")
    rp.add_argument("id", type=int)
    rp.add_argument("--sim", action="store_true", help="Não pede confirmação")

    subparsers.add_parser("categorias", help="Lista as categorias")
    nc = subparsers.add_parser("nova-categoria", help="Cria uma categoria")
    nc.add_argument("nome")
    rc = subparsers.add_parser("remover-categoria", help="Exclui uma categoria")
    rc.add_argument("id", type=int)
    rc.add_argument("--sim", action="store_true", help="Não pede confirmação")

    subparsers.add_parser("dashboard", help="Resumo do estoque")

    ec = subparsers.add_parser("exportar-csv", help="Exporta os produtos em CSV")
    ec.add_argument("--saida", default="produtos.csv")
    ec.add_argument("--colunas", help="Atributos separados por vírgula (ex.: name,quantity)")
    ec.add_argument("--delimitador", help="Delimitador de campos")
    ep = subparsers.add_parser("exportar-pdf", help="Exporta os produtos em PDF")
    ep.add_argument("--saida", default="produtos.pdf")
    return parser


def _preencher_formulario(form: FormularioProduto, args: argparse.Namespace) -> None:
    campos = {
        "name": args.nome,
        "quantity": args.quantidade,
        "category": args.categoria,
        "unit": args.unidade,
        "min_stock": args.estoque_minimo,
    }
    for campo, valor in campos.items():
        if valor is not None:
            form.atualizar(campo, valor)


def _mostrar_erros(console: Console, form: FormularioProduto) -> None:
    for campo, mensagem in form.erros.items():
        console.print(f"  [red]• {campo}: {mensagem}[/red]")


# ---------------------------
# Entrada
# ---------------------------
def main(
    argv: Optional[Sequence[str]] = None,
    *,
    api: Optional[InventoryApi] = None,
    portao: Optional[PortaoAcesso] = None,
    console: Optional[Console] = None,
    settings: Optional[ClientSettings] = None,
) -> int:
    args = build_parser().parse_args(argv)
    settings = settings or ClientSettings()
    console = console or Console()
    portao = portao or PortaoAcesso.from_settings(settings)

    if args.command == "entrar":
        senha = args.senha if args.senha is not None else Prompt.ask("Digite a senha", password=True)
        if portao.entrar(senha):
            console.print("[green]Acesso liberado.[/green]")
            return 0
        console.print("[red]Senha incorreta. Tente novamente![/red]")
        return 1
    if args.command == "sair":
        portao.sair()
        console.print("Sessão encerrada.")
        return 0
    if not portao.autenticado:
        console.print("[red]Acesso Restrito:[/red] execute [bold]almoxarifado entrar[/bold] primeiro.")
        return 2

    api = api or InventoryApi.from_settings(settings)
    notificador = Notificador()
    notificador.inscrever(lambda n: show_notificacao(console, n))
    produtos = ProdutoStore(api, notificador)
    categorias = CategoriaStore(api, notificador)

    if args.command in ("categorias", "nova-categoria", "remover-categoria"):
        if not categorias.carregar():
            return 1
        if args.command == "nova-categoria":
            if categorias.adicionar(args.nome) is None:
                return 1
        elif args.command == "remover-categoria":
            if not args.sim and not Confirm.ask("Deseja realmente excluir esta categoria?", console=console):
                return 0
            if not categorias.remover(args.id):
                return 1
        show_categorias(console, categorias.categorias)
        return 0

    if not produtos.carregar():
        return 1

    if args.command == "produtos":
        lista = produtos.buscar(args.busca)
        if args.estoque_baixo:
            lista = em_estoque_baixo(lista)
        show_produtos(console, lista, args.busca)
    elif args.command in ("novo-produto", "editar-produto"):
        if args.command == "editar-produto":
            atual = produtos.lista.get(args.id)
            if atual is None:
                notificador.erro("Produto não encontrado.")
                return 1
            form = FormularioProduto.de_produto(atual)
        else:
            form = FormularioProduto()
        _preencher_formulario(form, args)
        if produtos.salvar(form) is None:
            _mostrar_erros(console, form)
            return 1
        show_produtos(console, produtos.produtos)
    elif args.command == "remover-produto":
        if not args.sim and not Confirm.ask("Deseja realmente excluir este produto?", console=console):
            return 0
        if not produtos.remover(args.id):
            return 1
        show_produtos(console, produtos.produtos)
    elif args.command == "dashboard":
        show_dashboard(console, produtos.produtos)
    elif args.command == "exportar-csv":
        colunas = [c.strip() for c in args.colunas.split(",")] if args.colunas else None
        try:
            caminho = salvar_csv(
                args.saida,
                produtos.produtos,
                colunas=colunas,
                delimitador=args.delimitador or settings.CSV_DELIMITER,
                locale=settings.LOCALE,
            )
        except ValueError as e:
            console.print(f"[red]{escape(str(e))}[/red]")
            return 1
        console.print(f"CSV salvo em [bold]{escape(str(caminho))}[/bold]")
    elif args.command == "exportar-pdf":
        caminho = salvar_pdf(args.saida, produtos.produtos, locale=settings.LOCALE)
        console.print(f"PDF salvo em [bold]{escape(str(caminho))}[/bold]")
    return 0


def run() -> None:
    logging.basicConfig(level=logging.WARNING)
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        Console().print("\n[bold red]Interrompido pelo usuário[/bold red]")
        sys.exit(1)


if __name__ == "__main__":
    run()
