"""Limpeza do texto bruto extraído de DOCX/HTML antes da segmentação."""

from __future__ import annotations

import re

# ── Regex de limpeza ────────────────────────────────────────────────────
# Espaço horizontal (sem quebra de linha)
_HS = r"[^\S\n]*"

RE_CR_TAB = re.compile(r"[\r\t]+")
# "n.", "n°", "n º", "Nº º", "N.º" antes de número → "nº "
RE_NUMBER_MARKER = re.compile(rf"\b[nN](?:{_HS}[º°.])*{_HS}(?=\d)")
# "1 °", "1°°" → "1º"
RE_DIGIT_ORDINAL = re.compile(rf"(\d){_HS}[º°]+")
# "nº ordeste" → "nordeste" (glifo ordinal inserido no meio de palavra)
RE_GLYPH_IN_WORD = re.compile(rf"(?<=[A-Za-zÀ-ÿ]){_HS}[º°]+{_HS}(?=[A-Za-zÀ-ÿ])")
RE_TRAILING_SPACE = re.compile(r"[^\S\n]+\n")
RE_BLANK_RUN = re.compile(r"\n{3,}")


def clean_text(text: str) -> str:
    """Normaliza espaços e variações do marcador ordinal.

    A reescrita é idempotente: ``clean_text(clean_text(x)) == clean_text(x)``.
    """
    text = RE_CR_TAB.sub(" ", text)
    text = RE_NUMBER_MARKER.sub("nº ", text)
    text = RE_DIGIT_ORDINAL.sub(r"\1º", text)
    text = RE_GLYPH_IN_WORD.sub("", text)
    text = RE_TRAILING_SPACE.sub("\n", text)
    text = RE_BLANK_RUN.sub("\n\n", text)
    return text.strip()
