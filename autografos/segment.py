"""Divide um documento com vários autógrafos/leis em um bloco de texto por ato."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum

from .headers import RE_AUTOGRAFO_HEADER, is_title_line


class SegmentStrategy(str, Enum):
    HEADER = "HEADER"  # cabeçalho de autógrafo (ou padrão customizado)
    TITLE = "TITLE"  # títulos formais de lei repetidos
    WHOLE = "WHOLE"  # documento inteiro = um ato


@dataclass
class Segmentation:
    strategy: SegmentStrategy
    blocks: list[str] = field(default_factory=list)


def compile_header_pattern(pattern: str | None) -> re.Pattern[str]:
    """Compila o padrão customizado; inválido ou vazio → cabeçalho de autógrafo."""
    if not pattern:
        return RE_AUTOGRAFO_HEADER
    try:
        return re.compile(pattern, re.IGNORECASE)
    except re.error:
        return RE_AUTOGRAFO_HEADER


def _header_number(m: re.Match[str]) -> str:
    """Número embutido no cabeçalho, só dígitos.

    Usa o grupo nomeado ``number`` se existir, senão o grupo 1, senão o
    casamento inteiro.
    """
    if "number" in m.re.groupindex:
        raw = m.group("number")
    elif m.re.groups:
        raw = m.group(1)
    else:
        raw = m.group(0)
    return re.sub(r"\D", "", raw or "")


def split_by_header(text: str, pattern: re.Pattern[str] = RE_AUTOGRAFO_HEADER) -> list[str]:
    """Abre um bloco novo a cada cabeçalho cujo número difere do bloco atual.

    Cabeçalho com o mesmo número (não vazio) do bloco aberto é repetição de
    página e continua no mesmo bloco; cabeçalho sem dígitos sempre abre bloco.
    Linhas antes do primeiro cabeçalho vão para o primeiro bloco.
    """
    blocks: list[str] = []
    current: list[str] = []
    current_number = ""
    seen_header = False

    for line in text.split("\n"):
        m = pattern.search(line)
        if m:
            number = _header_number(m)
            if not seen_header:
                seen_header = True
                current_number = number
            elif not (number and number == current_number):
                blocks.append("\n".join(current).strip())
                current = []
                current_number = number
        current.append(line)

    if current:
        blocks.append("\n".join(current).strip())
    return [b for b in blocks if b]


def split_by_titles(text: str) -> list[str]:
    """Abre um bloco novo a cada linha de título formal (Lei, LC, Resolução...)."""
    blocks: list[str] = []
    current: list[str] = []
    started = False

    for line in text.split("\n"):
        if is_title_line(line):
            if started:
                blocks.append("\n".join(current).strip())
                current = []
            started = True
        current.append(line)

    if current:
        blocks.append("\n".join(current).strip())
    return [b for b in blocks if b]


def segment_document(text: str, header_pattern: str | None = None) -> Segmentation:
    """Segmenta por cabeçalho; se render 0 ou 1 bloco, tenta por títulos."""
    by_header = split_by_header(text, compile_header_pattern(header_pattern))
    if len(by_header) > 1:
        return Segmentation(SegmentStrategy.HEADER, by_header)

    by_title = split_by_titles(text)
    if len(by_title) > 1:
        return Segmentation(SegmentStrategy.TITLE, by_title)

    stripped = text.strip()
    return Segmentation(SegmentStrategy.WHOLE, [stripped] if stripped else [])
