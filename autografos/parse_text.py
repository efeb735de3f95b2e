"""Parser hierárquico: texto normalizado de um ato → árvore Act/Artigo/§/Inciso/Alínea/Item."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Optional

from .headers import (
    RE_AUTOGRAFO_HEADER, TitleInfo, extract_autografo_header,
    extract_title_and_number, parse_date,
)
from .models import (
    Act, ActType, Article, Chapter, Clause, Item, Paragraph, Subsection,
    NUMBER_NOT_IDENTIFIED,
)

# ── Regex de classificação ──────────────────────────────────────────────
RE_CAPITULO = re.compile(
    r"^cap[íi]tulo\s+([IVXLCDM]+|\d+)\b\.?\s*(?:[-–—:]?\s*(.*))?$", re.IGNORECASE
)
# Matches: Art. 1º, Artigo 2, Art. 183-A, Art. 4ºA.
# Group 1 = number, Group 2 = ordinal mark, Group 3/4 = optional letter suffix
RE_ARTIGO = re.compile(
    r"^(?:Art\.?\s*|Artigo\s+)(\d+)([º°ª])?"
    r"(?:[-–]([A-Z])(?=[.\s]|$)|([A-Z])(?=\s*[-–—.]))?"
    r"\s*[-–—.:]?\s*(.*)$",
    re.IGNORECASE,
)
RE_PARAGRAFO = re.compile(
    r"^(?:§\s*(\d+)\s*([º°ª])?|(Par[áa]grafo\s+[úu]nico))\s*[-–—.:]?\s*(.*)$",
    re.IGNORECASE,
)
# Separador após o rótulo: ")", "-" ou "."; dígito logo após impede ler "1.000" como item
_SEP = r"(?:\)|\s*[-–—.](?!\d))\s*(.*)$"
RE_INCISO = re.compile(
    r"^((?=[IVXLCDM])M{0,4}(?:CM|CD|D?C{0,3})(?:XC|XL|L?X{0,3})(?:IX|IV|V?I{0,3}))" + _SEP
)
RE_ALINEA = re.compile(r"^([a-z])" + _SEP)
RE_ITEM = re.compile(r"^(\d+)" + _SEP)


class LineType(str, Enum):
    CHAPTER = "CHAPTER"
    ARTICLE = "ARTICLE"
    PARAGRAPH = "PARAGRAPH"
    SUBSECTION = "SUBSECTION"
    CLAUSE = "CLAUSE"
    ITEM = "ITEM"
    TEXT = "TEXT"


# Profundidade de cada nível; um marcador fecha tudo que estiver abaixo dele.
_DEPTH = {
    LineType.CHAPTER: 0,
    LineType.ARTICLE: 1,
    LineType.PARAGRAPH: 2,
    LineType.SUBSECTION: 3,
    LineType.CLAUSE: 4,
    LineType.ITEM: 5,
}
_POINTERS = ("chapter", "article", "paragraph", "subsection", "clause")


@dataclass
class _ClassifiedLine:
    line_type: LineType
    label: str
    text: str  # conteúdo após o rótulo (ou a linha inteira, para TEXT)
    name: str = ""  # nome do capítulo


@dataclass
class _ParserState:
    """Ponteiros para os dispositivos abertos durante a varredura."""
    chapter: Optional[Chapter] = None
    article: Optional[Article] = None
    paragraph: Optional[Paragraph] = None
    subsection: Optional[Subsection] = None
    clause: Optional[Clause] = None
    chapter_count: int = 0
    chapter_awaiting_name: bool = False

    def reset_below(self, line_type: LineType) -> None:
        for attr in _POINTERS[_DEPTH[line_type] + 1:]:
            setattr(self, attr, None)


@dataclass
class _ActHeader:
    info: Optional[TitleInfo] = None
    provisional: bool = False  # título veio do cabeçalho de autógrafo
    enacted_date: Optional[date] = None
    summary_parts: list[str] = field(default_factory=list)


# ── Classificação de linhas ─────────────────────────────────────────────

def _classify_line(line: str) -> _ClassifiedLine:
    m = RE_CAPITULO.match(line)
    if m:
        return _ClassifiedLine(LineType.CHAPTER, m.group(1), "", name=(m.group(2) or "").strip())

    m = RE_ARTIGO.match(line)
    if m:
        ordinal = "º" if m.group(2) else ""
        letter = m.group(3) or m.group(4)
        label = f"{m.group(1)}{ordinal}"
        if letter:
            label += f"-{letter.upper()}"
        return _ClassifiedLine(LineType.ARTICLE, label, m.group(5).strip())

    m = RE_PARAGRAFO.match(line)
    if m:
        if m.group(3):
            label = "Parágrafo único"
        else:
            label = f"§{m.group(1)}{'º' if m.group(2) else ''}"
        return _ClassifiedLine(LineType.PARAGRAPH, label, m.group(4).strip())

    for line_type, regex in (
        (LineType.SUBSECTION, RE_INCISO),
        (LineType.CLAUSE, RE_ALINEA),
        (LineType.ITEM, RE_ITEM),
    ):
        m = regex.match(line)
        if m:
            return _ClassifiedLine(line_type, m.group(1), m.group(2).strip())

    return _ClassifiedLine(LineType.TEXT, "", line)


def is_structural(line: str) -> bool:
    """True se a linha é um marcador de capítulo/artigo/§/inciso/alínea/item."""
    return _classify_line(line.strip()).line_type != LineType.TEXT


# ── Construção da árvore ────────────────────────────────────────────────

def _append_text(node, text: str) -> None:
    node.text = f"{node.text} {text}" if node.text else text


def _open_node(state: _ParserState, act: Act, cl: _ClassifiedLine) -> bool:
    """Abre o dispositivo correspondente à linha; False se não há pai aberto."""
    lt = cl.line_type

    if lt == LineType.CHAPTER:
        state.chapter_count += 1
        state.chapter = Chapter(
            sequence_index=state.chapter_count,
            ordinal_label=cl.label,
            name=cl.name or None,
        )
        state.chapter_awaiting_name = not cl.name

    elif lt == LineType.ARTICLE:
        art = Article(
            ordinal_label=cl.label,
            text=cl.text,
            sequence_index=len(act.articles) + 1,
            chapter=state.chapter,
        )
        act.articles.append(art)
        state.article = art

    elif lt == LineType.PARAGRAPH:
        if state.article is None:
            return False
        para = Paragraph(
            ordinal_label=cl.label,
            text=cl.text,
            sequence_index=len(state.article.paragraphs) + 1,
        )
        state.article.paragraphs.append(para)
        state.paragraph = para

    elif lt == LineType.SUBSECTION:
        parent = state.paragraph or state.article
        if parent is None:
            return False
        inc = Subsection(
            ordinal_label=cl.label,
            text=cl.text,
            sequence_index=len(parent.subsections) + 1,
        )
        parent.subsections.append(inc)
        state.subsection = inc

    elif lt == LineType.CLAUSE:
        if state.subsection is None:
            return False
        al = Clause(
            ordinal_label=cl.label,
            text=cl.text,
            sequence_index=len(state.subsection.clauses) + 1,
        )
        state.subsection.clauses.append(al)
        state.clause = al

    elif lt == LineType.ITEM:
        if state.clause is None:
            return False
        state.clause.items.append(Item(
            ordinal_label=cl.label,
            text=cl.text,
            sequence_index=len(state.clause.items) + 1,
        ))

    state.reset_below(lt)
    return True


def _deepest_open(state: _ParserState):
    return state.clause or state.subsection or state.paragraph or state.article


def _build_act(
    lines: list[str],
    source_identifier: str,
    full_text: str,
    header_re: Optional[re.Pattern[str]] = None,
) -> Act:
    act = Act(title=source_identifier, full_text=full_text)
    header = _ActHeader()
    state = _ParserState()

    for line in lines:
        # Título (ou título provisório do autógrafo)
        if header.info is None:
            info = extract_title_and_number(line)
            provisional = False
            if info is None:
                info = extract_autografo_header(line)
                provisional = info is not None
            if info is not None:
                header.info = info
                header.provisional = provisional
                header.enacted_date = parse_date(line)
                continue

        # Título formal depois do cabeçalho de autógrafo substitui o provisório
        if header.provisional and not header.summary_parts and not act.articles:
            info = extract_title_and_number(line)
            if info is not None:
                header.info = info
                header.provisional = False
                header.enacted_date = parse_date(line) or header.enacted_date
                continue

        # Cabeçalho (de autógrafo ou do padrão de segmentação) repetido por página
        if RE_AUTOGRAFO_HEADER.match(line) or (header_re and header_re.search(line)):
            continue

        cl = _classify_line(line)

        # "CAPÍTULO I" seguido de "DAS DISPOSIÇÕES GERAIS" na linha de baixo
        if state.chapter_awaiting_name:
            state.chapter_awaiting_name = False
            if cl.line_type == LineType.TEXT and line.isupper() and state.chapter is not None:
                state.chapter.name = line
                continue

        # Ementa: primeira linha não estrutural após o título
        if header.info is not None and not header.summary_parts and cl.line_type == LineType.TEXT:
            header.summary_parts.append(line)
            continue

        if cl.line_type != LineType.TEXT and _open_node(state, act, cl):
            continue

        # Continuação do dispositivo mais profundo aberto
        node = _deepest_open(state)
        if node is not None:
            _append_text(node, line)
        else:
            header.summary_parts.append(line)

    if header.info is not None:
        act.title = header.info.title
        act.number = header.info.number
        act.act_type = header.info.act_type
    else:
        act.number = NUMBER_NOT_IDENTIFIED
        act.act_type = ActType.ORDINARY
    act.enacted_date = header.enacted_date
    act.summary = " ".join(header.summary_parts) or None
    return act


def parse_hierarchical_text(
    text: str,
    source_identifier: str,
    header_re: Optional[re.Pattern[str]] = None,
) -> Act:
    """Converte o texto (já normalizado) de um único ato em Act.

    Nunca levanta exceção: sem título, o ``source_identifier`` vira título e o
    número fica como "Número não identificado"; sem marcadores, o Act sai sem
    artigos e com o texto completo preservado. Linhas que casam com
    ``header_re`` (o padrão de segmentação) depois do título são descartadas
    como cabeçalho de página, além do cabeçalho de autógrafo padrão.
    """
    lines = [ln.strip() for ln in text.split("\n")]
    lines = [ln for ln in lines if ln]
    return _build_act(lines, source_identifier, text, header_re)
