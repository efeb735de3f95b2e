"""Levanta desvios estruturais nos atos parseados.

Checks implementados:
  NUMBER_MISSING          – número do ato não identificado
  TITLE_FALLBACK          – título não encontrado, usado o identificador da fonte
  NO_ARTICLES             – nenhum artigo reconhecido
  NO_DATE                 – ato com título mas sem data
  ART_OUT_OF_ORDER        – número do artigo não é maior que o do anterior
  SUBSECTION_OUT_OF_ORDER – inciso com numeral romano fora de sequência
"""

from __future__ import annotations

import re

from .models import Act, Subsection, NUMBER_NOT_IDENTIFIED

CODES_ORDER = [
    "NUMBER_MISSING",
    "TITLE_FALLBACK",
    "NO_ARTICLES",
    "NO_DATE",
    "ART_OUT_OF_ORDER",
    "SUBSECTION_OUT_OF_ORDER",
]

CODE_LABELS = {
    "NUMBER_MISSING":          "Número do ato não identificado",
    "TITLE_FALLBACK":          "Título ausente (usado o nome do arquivo)",
    "NO_ARTICLES":             "Ato sem artigos reconhecidos",
    "NO_DATE":                 "Ato sem data de promulgação",
    "ART_OUT_OF_ORDER":        "Artigo fora de ordem",
    "SUBSECTION_OUT_OF_ORDER": "Inciso fora de ordem",
}

_ROMAN = {"I": 1, "V": 5, "X": 10, "L": 50, "C": 100, "D": 500, "M": 1000}


def roman_to_int(roman: str) -> int:
    total = 0
    prev = 0
    for ch in reversed(roman.upper()):
        val = _ROMAN.get(ch, 0)
        if val < prev:
            total -= val
        else:
            total += val
            prev = val
    return total


def _article_number(label: str) -> int | None:
    m = re.match(r"\d+", label)
    return int(m.group(0)) if m else None


def _check_subsections(
    issues: list[dict], subsections: list[Subsection], context: str
) -> None:
    prev = 0
    for inc in subsections:
        val = roman_to_int(inc.ordinal_label)
        if val <= prev:
            issues.append(_issue(
                "SUBSECTION_OUT_OF_ORDER",
                f"Inciso {inc.ordinal_label} após inciso de valor {prev}",
                context, inc.text,
            ))
        prev = val


def run_checks(acts: list[Act], source_identifier: str = "") -> list[dict]:
    issues: list[dict] = []

    for act in acts:
        ctx = act.title

        if act.number == NUMBER_NOT_IDENTIFIED:
            issues.append(_issue("NUMBER_MISSING", "Número não encontrado no título", ctx, act.title))

        titled = not (source_identifier and act.title == source_identifier)
        if not titled:
            issues.append(_issue(
                "TITLE_FALLBACK",
                "Nenhuma linha de título reconhecida",
                ctx, act.full_text,
            ))

        if not act.articles:
            issues.append(_issue("NO_ARTICLES", "Nenhum artigo reconhecido", ctx, act.full_text))

        if titled and act.enacted_date is None:
            issues.append(_issue("NO_DATE", "Data não encontrada no título", ctx, act.title))

        prev_num = 0
        for art in act.articles:
            num = _article_number(art.ordinal_label)
            art_ctx = f"{ctx} · Art. {art.ordinal_label}"
            # Artigos letrados (4-A) repetem o número do anterior
            if num is not None and "-" not in art.ordinal_label:
                if num <= prev_num:
                    issues.append(_issue(
                        "ART_OUT_OF_ORDER",
                        f"Art. {art.ordinal_label} após Art. {prev_num}",
                        art_ctx, art.text,
                    ))
                prev_num = num
            _check_subsections(issues, art.subsections, art_ctx)
            for para in art.paragraphs:
                _check_subsections(issues, para.subsections, f"{art_ctx} · {para.ordinal_label}")

    return issues


def _issue(code: str, desc: str, context: str, text: str) -> dict:
    return {
        "code":    code,
        "desc":    desc,
        "context": context,
        "text":    (text or "")[:100],
    }
