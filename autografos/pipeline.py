"""Pontos de entrada: texto bruto → lista de Act (normaliza, segmenta, parseia, deduplica)."""

from __future__ import annotations

from pathlib import Path

from .dedupe import dedupe_acts
from .extract_text import read_source
from .models import Act
from .normalize import clean_text
from .parse_text import parse_hierarchical_text
from .segment import compile_header_pattern, segment_document


def parse_document(
    raw_text: str,
    source_identifier: str,
    header_pattern: str | None = None,
) -> list[Act]:
    """Parseia um documento que pode conter vários atos concatenados.

    Texto vazio após a normalização → lista vazia ("sem conteúdo"); cabe ao
    chamador decidir se isso é erro.
    """
    cleaned = clean_text(raw_text)
    if not cleaned:
        return []

    segmentation = segment_document(cleaned, header_pattern)
    header_re = compile_header_pattern(header_pattern)
    acts = [
        parse_hierarchical_text(block, source_identifier, header_re)
        for block in segmentation.blocks
    ]
    return dedupe_acts(acts)


def parse_single_act(raw_text: str, source_identifier: str) -> Act:
    """Parseia o texto como um único ato, sem segmentação."""
    return parse_hierarchical_text(clean_text(raw_text), source_identifier)


def parse_file(path: str | Path, header_pattern: str | None = None) -> list[Act]:
    """Extrai o texto do arquivo e parseia; o nome do arquivo é o identificador."""
    path = Path(path)
    return parse_document(read_source(path), path.name, header_pattern)
