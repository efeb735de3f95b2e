"""Representação intermediária de um ato normativo (lei, decreto, resolução)."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Optional

NUMBER_NOT_IDENTIFIED = "Número não identificado"


class ActType(str, Enum):
    ORDINARY = "ORDINARY"
    COMPLEMENTARY = "COMPLEMENTARY"
    RESOLUTION = "RESOLUTION"


@dataclass
class Chapter:
    """Capítulo (ex: "CAPÍTULO I - DISPOSIÇÕES GERAIS")."""
    sequence_index: int
    ordinal_label: Optional[str] = None  # ex: "I", "2"
    name: Optional[str] = None  # ex: "DISPOSIÇÕES GERAIS"

    @property
    def key(self) -> tuple[int, str, str]:
        return (self.sequence_index, self.ordinal_label or "", (self.name or "").upper())


@dataclass
class Item:
    ordinal_label: str  # ex: "1"
    text: str
    sequence_index: int


@dataclass
class Clause:
    """Alínea."""
    ordinal_label: str  # ex: "a"
    text: str
    sequence_index: int
    items: list[Item] = field(default_factory=list)


@dataclass
class Subsection:
    """Inciso."""
    ordinal_label: str  # ex: "IV"
    text: str
    sequence_index: int
    clauses: list[Clause] = field(default_factory=list)


@dataclass
class Paragraph:
    ordinal_label: str  # ex: "§1º", "Parágrafo único"
    text: str
    sequence_index: int
    subsections: list[Subsection] = field(default_factory=list)


@dataclass
class Article:
    ordinal_label: str  # ex: "1º"
    text: str
    sequence_index: int
    paragraphs: list[Paragraph] = field(default_factory=list)
    subsections: list[Subsection] = field(default_factory=list)  # incisos direto no caput
    chapter: Chapter | None = None


@dataclass
class Act:
    """Ato normativo completo, produzido a cada chamada de parse."""
    title: str
    number: str = NUMBER_NOT_IDENTIFIED
    act_type: ActType = ActType.ORDINARY
    enacted_date: Optional[date] = None
    summary: Optional[str] = None  # ementa
    full_text: str = ""
    articles: list[Article] = field(default_factory=list)

    @property
    def chapters(self) -> list[Chapter]:
        """Capítulos referenciados pelos artigos, na ordem de aparição e sem repetição."""
        seen: set[tuple[int, str, str]] = set()
        result: list[Chapter] = []
        for art in self.articles:
            cap = art.chapter
            if cap is None or cap.key in seen:
                continue
            seen.add(cap.key)
            result.append(cap)
        return result

    def to_dict(self) -> dict:
        """Serializa para JSON-friendly dict."""
        return {
            "title": self.title,
            "number": self.number,
            "act_type": self.act_type.value,
            "enacted_date": self.enacted_date.isoformat() if self.enacted_date else None,
            "summary": self.summary,
            "full_text": self.full_text,
            "chapters": [_chapter_to_dict(c) for c in self.chapters],
            "articles": [_article_to_dict(a) for a in self.articles],
        }


def _chapter_to_dict(c: Chapter) -> dict:
    return {
        "sequence_index": c.sequence_index,
        "ordinal_label": c.ordinal_label,
        "name": c.name,
    }


def _article_to_dict(a: Article) -> dict:
    return {
        "ordinal_label": a.ordinal_label,
        "text": a.text,
        "sequence_index": a.sequence_index,
        "chapter": a.chapter.sequence_index if a.chapter else None,
        "paragraphs": [_paragraph_to_dict(p) for p in a.paragraphs],
        "subsections": [_subsection_to_dict(s) for s in a.subsections],
    }


def _paragraph_to_dict(p: Paragraph) -> dict:
    return {
        "ordinal_label": p.ordinal_label,
        "text": p.text,
        "sequence_index": p.sequence_index,
        "subsections": [_subsection_to_dict(s) for s in p.subsections],
    }


def _subsection_to_dict(s: Subsection) -> dict:
    return {
        "ordinal_label": s.ordinal_label,
        "text": s.text,
        "sequence_index": s.sequence_index,
        "clauses": [_clause_to_dict(c) for c in s.clauses],
    }


def _clause_to_dict(c: Clause) -> dict:
    return {
        "ordinal_label": c.ordinal_label,
        "text": c.text,
        "sequence_index": c.sequence_index,
        "items": [
            {"ordinal_label": i.ordinal_label, "text": i.text, "sequence_index": i.sequence_index}
            for i in c.items
        ],
    }
