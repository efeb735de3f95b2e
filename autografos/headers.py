"""Extração de título, número, tipo e data do ato a partir de uma linha."""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date
from typing import Optional

from .models import ActType, NUMBER_NOT_IDENTIFIED

# ── Regex de títulos ────────────────────────────────────────────────────
# "nº" opcional + número; o lookahead impede casar "Lei nos termos..."
_NUM = r"\s+n[º°.]?(?![A-Za-zÀ-ÿ])\s*(?P<number>\d[\d.,/\-]*)?"
# ", de 19 de setembro de 1990"
_TAIL = r"(?P<tail>\s*,?\s*de\s+\d{1,2}º?\s+de\s+[A-Za-zÀ-ÿ]+\s+de\s+\d{4})?"


def _title_re(kind: str) -> re.Pattern[str]:
    return re.compile(rf"^\s*(?P<kind>{kind}){_NUM}{_TAIL}", re.IGNORECASE)


RE_LEI_COMPLEMENTAR = _title_re(r"Lei\s+Complementar")
RE_RESOLUCAO = _title_re(r"Resolu[çc][ãa]o")
RE_DECRETO_LEGISLATIVO = _title_re(r"Decreto\s+Legislativo")
RE_PROJETO_LEI_COMPLEMENTAR = _title_re(r"Projeto\s+de\s+Lei\s+Complementar")
RE_PROJETO_EMENDA_LC = _title_re(r"Projeto\s+de\s+Emenda\s+[àa]\s+Lei\s+Complementar")
RE_EMENDA_LC = _title_re(r"Emenda\s+[àa]\s+Lei\s+Complementar")
RE_LEI = _title_re(r"Lei|Decreto|Medida\s+Provis[óo]ria|Emenda\s+Constitucional")

# "Autógrafo de Lei n 2992", "Autógrafos de Lei Complementar nº 123"
RE_AUTOGRAFO_HEADER = re.compile(
    r"^\s*aut[óo]grafos?\s+de\s+lei(?P<complementar>\s+complementar)?"
    r"\s*(?:n\s*[^\d]{0,6}\s*)?(?P<number>[\d.,/\-]+)",
    re.IGNORECASE,
)

MESES = {
    "janeiro": 1, "fevereiro": 2, "março": 3, "abril": 4,
    "maio": 5, "junho": 6, "julho": 7, "agosto": 8,
    "setembro": 9, "outubro": 10, "novembro": 11, "dezembro": 12,
}
RE_DATA = re.compile(
    r"de\s+(\d{1,2})º?\s+de\s+([A-Za-zÀ-ÿ]+)\s+de\s+(\d{4})", re.IGNORECASE
)

_LOWER_WORDS = {"de", "da", "do", "a", "à"}


@dataclass
class TitleInfo:
    title: str
    number: str
    act_type: ActType


@dataclass(frozen=True)
class _TitleTemplate:
    pattern: re.Pattern[str]
    act_type: ActType
    number_prefix: str = ""


# Ordem importa: títulos amplos ("Lei") são prefixos dos específicos
# ("Lei Complementar"), então o primeiro que casar vence.
TITLE_TEMPLATES: tuple[_TitleTemplate, ...] = (
    _TitleTemplate(RE_LEI_COMPLEMENTAR, ActType.COMPLEMENTARY, "LC"),
    _TitleTemplate(RE_RESOLUCAO, ActType.RESOLUTION, "RES"),
    _TitleTemplate(RE_DECRETO_LEGISLATIVO, ActType.ORDINARY),
    _TitleTemplate(RE_PROJETO_LEI_COMPLEMENTAR, ActType.COMPLEMENTARY, "LC"),
    _TitleTemplate(RE_PROJETO_EMENDA_LC, ActType.COMPLEMENTARY, "LC"),
    _TitleTemplate(RE_EMENDA_LC, ActType.COMPLEMENTARY, "LC"),
    _TitleTemplate(RE_LEI, ActType.ORDINARY),
)


def _clean_number(raw: str | None) -> str:
    return (raw or "").strip().rstrip(".,/-")


def _canonical_kind(kind: str) -> str:
    """"LEI COMPLEMENTAR" → "Lei Complementar"; "EMENDA À LEI" → "Emenda à Lei"."""
    words = kind.split()
    out = []
    for i, w in enumerate(words):
        low = w.lower()
        out.append(low if i > 0 and low in _LOWER_WORDS else low.capitalize())
    return " ".join(out)


def _canonical_tail(tail: str | None) -> str:
    if not tail:
        return ""
    body = " ".join(tail.strip().lstrip(",").split()).lower()
    return f", {body}"


def _prefixed(prefix: str, number: str) -> str:
    if number == NUMBER_NOT_IDENTIFIED or not prefix:
        return number
    return f"{prefix} {number}"


def extract_title_and_number(line: str) -> Optional[TitleInfo]:
    """Reconhece o título formal do ato (Lei, Lei Complementar, Resolução...).

    Retorna None se a linha não começa com nenhum dos modelos de título.
    """
    for tpl in TITLE_TEMPLATES:
        m = tpl.pattern.match(line)
        if not m:
            continue
        number = _clean_number(m.group("number"))
        kind = _canonical_kind(m.group("kind"))
        tail = _canonical_tail(m.group("tail"))
        if number:
            title = f"{kind} nº {number}{tail}"
        else:
            title = f"{kind} nº{tail}"
            number = NUMBER_NOT_IDENTIFIED
        return TitleInfo(
            title=title,
            number=_prefixed(tpl.number_prefix, number),
            act_type=tpl.act_type,
        )
    return None


def extract_autografo_header(line: str) -> Optional[TitleInfo]:
    """Título provisório a partir do cabeçalho "Autógrafo de Lei nº N"."""
    m = RE_AUTOGRAFO_HEADER.match(line)
    if not m:
        return None
    is_complementar = bool(m.group("complementar"))
    number = _clean_number(m.group("number")) or NUMBER_NOT_IDENTIFIED
    label = "Autógrafo de Lei Complementar" if is_complementar else "Autógrafo de Lei"
    return TitleInfo(
        title=f"{label} nº {number}",
        number=_prefixed("LC", number) if is_complementar else number,
        act_type=ActType.COMPLEMENTARY if is_complementar else ActType.ORDINARY,
    )


def is_title_line(line: str) -> bool:
    return any(tpl.pattern.match(line) for tpl in TITLE_TEMPLATES)


def parse_date(line: str) -> Optional[date]:
    """Extrai "de <dia> de <mês> de <ano>"; mês desconhecido → None."""
    m = RE_DATA.search(line)
    if not m:
        return None
    month = MESES.get(m.group(2).lower())
    if month is None:
        return None
    try:
        return date(int(m.group(3)), month, int(m.group(1)))
    except ValueError:
        return None


def generate_header_pattern(sample: str) -> str:
    """Gera um padrão de cabeçalho de autógrafo a partir de uma linha de exemplo.

    O número fica no grupo 1, como espera o segmentador.
    """
    s = (sample or "").lower()
    base = r"^\s*aut[óo]grafos?\s+de\s+lei"
    if "complementar" in s:
        base += r"\s+complementar"
    base += r".*?"
    if re.search(r"n[º°]?\s*\d", s):
        return base + r"n\s*[^\d]{0,6}\s*([\d.,/\-]+)"
    return base + r"([\d.,/\-]+)"
