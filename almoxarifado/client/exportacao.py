# almoxarifado/client/exportacao.py
"""
Exportação da lista de produtos que está em memória no cliente.

Nada aqui busca dados no servidor: o CSV e o PDF refletem a última
sincronização, inclusive as reconciliações locais feitas após mutações.
"""
import csv
import io
from datetime import date, datetime
from decimal import Decimal
from functools import partial
from pathlib import Path
from typing import Any, Dict, Iterable, List, NamedTuple, Optional, Sequence, Union
from xml.sax.saxutils import escape

from babel.dates import format_date, format_datetime
from babel.numbers import NumberFormatError, format_decimal, parse_decimal
from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.pdfgen import canvas
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from almoxarifado.schemas import Produto

TITULO_PDF = "Relatório de Produtos do Almoxarifado PIBLS"
COR_CABECALHO = colors.Color(89 / 255, 172 / 255, 191 / 255)
COR_ALERTA = colors.Color(211 / 255, 40 / 255, 40 / 255)


class Coluna(NamedTuple):
    titulo: str
    atributo: str
    numerica: bool = False


COLUNAS_PADRAO = (
    Coluna("ID", "id"),
    Coluna("Nome", "name"),
    Coluna("Unidade", "unit"),
    Coluna("Categoria", "category"),
    Coluna("Quantidade", "quantity", numerica=True),
    Coluna("Estoque mínimo", "min_stock", numerica=True),
)

_POR_ATRIBUTO = {c.atributo: c for c in COLUNAS_PADRAO}

ColunaSpec = Union[str, Coluna]


def resolver_colunas(colunas: Optional[Sequence[ColunaSpec]] = None) -> List[Coluna]:
    """Aceita nomes de atributo (ex.: "name") ou objetos Coluna."""
    if not colunas:
        return list(COLUNAS_PADRAO)
    resolvidas = []
    for c in colunas:
        if isinstance(c, Coluna):
            resolvidas.append(c)
        elif c in _POR_ATRIBUTO:
            resolvidas.append(_POR_ATRIBUTO[c])
        else:
            raise ValueError(f"Coluna desconhecida: {c}")
    return resolvidas


def formatar_valor(valor: Any, coluna: Coluna, locale: str = "pt_BR") -> str:
    if valor is None:
        return ""
    if isinstance(valor, bool):
        return "Sim" if valor else "Não"
    if coluna.numerica and isinstance(valor, (int, float, Decimal)):
        return format_decimal(valor, locale=locale)
    if isinstance(valor, datetime):
        return format_datetime(valor, format="short", locale=locale)
    if isinstance(valor, date):
        return format_date(valor, format="short", locale=locale)
    return str(valor)


def _linhas(produtos: Iterable[Produto], colunas: List[Coluna], locale: str) -> List[List[str]]:
    return [
        [formatar_valor(getattr(p, c.atributo, None), c, locale) for c in colunas]
        for p in produtos
    ]


# ----------------------------------------------------------------------
# CSV
# ----------------------------------------------------------------------
def exportar_csv(
    produtos: Iterable[Produto],
    colunas: Optional[Sequence[ColunaSpec]] = None,
    delimitador: str = ";",
    locale: str = "pt_BR",
) -> str:
    colunas = resolver_colunas(colunas)
    saida = io.StringIO(newline="")
    # QUOTE_MINIMAL cita campos com delimitador, aspas ou quebra de linha
    writer = csv.writer(saida, delimiter=delimitador, quoting=csv.QUOTE_MINIMAL, lineterminator="\n")
    writer.writerow([c.titulo for c in colunas])
    writer.writerows(_linhas(produtos, colunas, locale))
    return saida.getvalue()


def ler_csv(
    texto: str,
    colunas: Optional[Sequence[ColunaSpec]] = None,
    delimitador: str = ";",
    locale: str = "pt_BR",
) -> List[Dict[str, Any]]:
    """Lê um CSV gerado por ``exportar_csv`` de volta para dicionários por atributo."""
    colunas = resolver_colunas(colunas)
    por_titulo = {c.titulo: c for c in colunas}
    reader = csv.reader(io.StringIO(texto, newline=""), delimiter=delimitador)
    try:
        cabecalho = next(reader)
    except StopIteration:
        return []
    faltando = [t for t in cabecalho if t not in por_titulo]
    if faltando:
        raise ValueError(f"Cabeçalho desconhecido: {', '.join(faltando)}")

    registros = []
    for linha in reader:
        registro = {}
        for titulo, bruto in zip(cabecalho, linha):
            coluna = por_titulo[titulo]
            registro[coluna.atributo] = _interpretar(bruto, coluna, locale)
        registros.append(registro)
    return registros


def _interpretar(bruto: str, coluna: Coluna, locale: str) -> Any:
    if bruto == "":
        return None
    if coluna.numerica:
        try:
            numero = parse_decimal(bruto, locale=locale)
        except NumberFormatError as e:
            raise ValueError(f"Valor numérico inválido em {coluna.titulo}: {bruto!r}") from e
        return int(numero) if numero == numero.to_integral_value() else numero
    if coluna.atributo == "id":
        return int(bruto)
    return bruto


def salvar_csv(caminho: Union[str, Path], produtos: Iterable[Produto], **kwargs) -> Path:
    caminho = Path(caminho)
    caminho.write_text(exportar_csv(produtos, **kwargs), encoding="utf-8", newline="")
    return caminho


# ----------------------------------------------------------------------
# PDF
# ----------------------------------------------------------------------
class _CanvasNumerado(canvas.Canvas):
    """Adia o desenho do rodapé até saber o total de páginas."""

    def __init__(self, *args, rodape: str = "", **kwargs):
        super().__init__(*args, **kwargs)
        self._rodape = rodape
        self._paginas = []

    def showPage(self):
        self._paginas.append(dict(self.__dict__))
        self._startPage()

    def save(self):
        total = len(self._paginas)
        for estado in self._paginas:
            self.__dict__.update(estado)
            self._desenhar_rodape(total)
            super().showPage()
        super().save()

    def _desenhar_rodape(self, total: int) -> None:
        largura = self._pagesize[0]
        self.saveState()
        self.setFont("Helvetica", 8)
        self.setFillColor(colors.grey)
        self.drawString(14 * mm, 10 * mm, self._rodape)
        self.drawRightString(largura - 14 * mm, 10 * mm, f"Página {self._pageNumber} de {total}")
        self.restoreState()


def exportar_pdf(
    produtos: Iterable[Produto],
    colunas: Optional[Sequence[ColunaSpec]] = None,
    titulo: str = TITULO_PDF,
    gerado_em: Optional[datetime] = None,
    locale: str = "pt_BR",
) -> bytes:
    produtos = list(produtos)
    colunas = resolver_colunas(colunas)
    carimbo = format_datetime(gerado_em or datetime.now(), format="short", locale=locale)

    buffer = io.BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=A4,
        title=titulo,
        leftMargin=14 * mm,
        rightMargin=14 * mm,
        topMargin=20 * mm,
        bottomMargin=20 * mm,
    )
    estilos = getSampleStyleSheet()
    story = [
        Paragraph(escape(titulo), estilos["Title"]),
        Paragraph(f"Gerado em {escape(carimbo)}", estilos["Normal"]),
        Spacer(1, 6 * mm),
    ]

    dados = [[c.titulo for c in colunas]] + _linhas(produtos, colunas, locale)
    estilo = [
        ("BACKGROUND", (0, 0), (-1, 0), COR_CABECALHO),
        ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
        ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
        ("FONTSIZE", (0, 0), (-1, -1), 9),
        ("GRID", (0, 0), (-1, -1), 0.25, colors.lightgrey),
        ("ROWBACKGROUNDS", (0, 1), (-1, -1), [colors.white, colors.whitesmoke]),
    ]
    for linha, produto in enumerate(produtos, start=1):
        if produto.estoque_baixo:
            estilo.append(("TEXTCOLOR", (0, linha), (-1, linha), COR_ALERTA))
    tabela = Table(dados, repeatRows=1)
    tabela.setStyle(TableStyle(estilo))
    story.append(tabela)

    doc.build(story, canvasmaker=partial(_CanvasNumerado, rodape=f"Gerado em {carimbo}"))
    return buffer.getvalue()


def salvar_pdf(caminho: Union[str, Path], produtos: Iterable[Produto], **kwargs) -> Path:
    caminho = Path(caminho)
    caminho.write_bytes(exportar_pdf(produtos, **kwargs))
    return caminho
