"""Fixtures compartilhadas para os testes do parser de autógrafos."""

from __future__ import annotations

import json
import sys
import zipfile
from datetime import date
from pathlib import Path

import pytest

# Garante que o diretório raiz do projeto esteja no sys.path
ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from autografos.models import (
    Act, ActType, Article, Chapter, Clause, Item, Paragraph, Subsection,
)

SNAPSHOTS_DIR = Path(__file__).resolve().parent / "snapshots"

W = "http://schemas.openxmlformats.org/wordprocessingml/2006/main"


# ── CLI flag ────────────────────────────────────────────────────────────

def pytest_addoption(parser: pytest.Parser) -> None:
    parser.addoption(
        "--update-snapshots",
        action="store_true",
        default=False,
        help="Regenera os golden files de snapshot.",
    )


@pytest.fixture(scope="session")
def update_snapshots(request: pytest.FixtureRequest) -> bool:
    return bool(request.config.getoption("--update-snapshots"))


# ── Textos de exemplo ───────────────────────────────────────────────────

CANONICAL_TEXT = (
    "LEI Nº 8.080, DE 19 DE SETEMBRO DE 1990\n"
    "Dispõe sobre saúde.\n"
    "Art. 1º Esta lei regula ações de saúde.\n"
    "§ 1º Entende-se por saúde o bem-estar.\n"
    "I - a promoção;\n"
    "a) ações de vigilância;\n"
    "1. controle de vetores;\n"
    "Art. 2º A saúde é direito fundamental."
)

# Três autógrafos num só arquivo; o de nº 10 ocupa duas páginas e o
# nº 12 é uma cópia do nº 10 com outro cabeçalho (mesma lei e data).
BATCH_TEXT = """\
Autógrafo de Lei nº 10
LEI Nº 1.000, DE 5 DE MARÇO DE 2021
Institui o programa municipal de hortas comunitárias.
CAPÍTULO I
DAS DISPOSIÇÕES GERAIS
Art. 1º Fica instituído o programa de hortas comunitárias.
Art. 2º São objetivos do programa:
I - incentivar a agricultura urbana;
II - promover a educação ambiental.
Autógrafo de Lei nº 10
CAPÍTULO II - DA EXECUÇÃO
Art. 3º O Poder Executivo regulamentará esta Lei.
Parágrafo único. O regulamento definirá:
I - os critérios de seleção das áreas;
a) em terrenos públicos;
b) em terrenos particulares cedidos.
Autógrafo de Lei Complementar nº 11
LEI COMPLEMENTAR Nº 45, DE 1º DE JULHO DE 2021
Altera o Código Tributário Municipal.
Art. 1º O art. 10 passa a vigorar com a seguinte redação.
Art. 2º Esta Lei Complementar entra em vigor na data de sua publicação.
Autógrafo de Lei nº 12
LEI Nº 1.000, DE 5 DE MARÇO DE 2021
Institui o programa municipal de hortas comunitárias.
Art. 1º Fica instituído o programa de hortas comunitárias.
"""


@pytest.fixture
def canonical_text() -> str:
    return CANONICAL_TEXT


@pytest.fixture
def batch_text() -> str:
    return BATCH_TEXT


# ── Factories ───────────────────────────────────────────────────────────

@pytest.fixture
def make_act():
    """Factory para Act com defaults sensatos."""

    def _factory(
        title: str = "Lei nº 1",
        *,
        number: str = "1",
        act_type: ActType = ActType.ORDINARY,
        enacted_date=None,
        summary: str | None = None,
        articles: list[Article] | None = None,
    ) -> Act:
        return Act(
            title=title,
            number=number,
            act_type=act_type,
            enacted_date=enacted_date,
            summary=summary,
            articles=articles or [],
        )

    return _factory


@pytest.fixture
def make_article():
    """Factory para Article; ``subsections`` aceita rótulos romanos."""

    def _factory(
        label: str,
        seq: int,
        *,
        text: str = "Texto do artigo.",
        subsections: list[str] | None = None,
        chapter: Chapter | None = None,
    ) -> Article:
        return Article(
            ordinal_label=label,
            text=text,
            sequence_index=seq,
            chapter=chapter,
            subsections=[
                Subsection(ordinal_label=r, text=f"inciso {r}", sequence_index=i)
                for i, r in enumerate(subsections or [], start=1)
            ],
        )

    return _factory


@pytest.fixture
def full_tree_act() -> Act:
    """Ato com todos os níveis: capítulo, artigo, §, inciso, alínea e item."""
    cap = Chapter(sequence_index=1, ordinal_label="I", name="DISPOSIÇÕES GERAIS")
    item = Item(ordinal_label="1", text="controle de vetores;", sequence_index=1)
    clause = Clause(ordinal_label="a", text="ações de vigilância;", sequence_index=1, items=[item])
    inc = Subsection(ordinal_label="I", text="a promoção;", sequence_index=1, clauses=[clause])
    para = Paragraph(ordinal_label="§1º", text="Entende-se por saúde o bem-estar.",
                     sequence_index=1, subsections=[inc])
    art = Article(ordinal_label="1º", text="Esta lei regula ações de saúde.",
                  sequence_index=1, paragraphs=[para], chapter=cap)
    return Act(
        title="Lei nº 8.080, de 19 de setembro de 1990",
        number="8.080",
        enacted_date=date(1990, 9, 19),
        summary="Dispõe sobre saúde.",
        full_text="",
        articles=[art],
    )


# ── DOCX mínimo (integration) ───────────────────────────────────────────

_CONTENT_TYPES = (
    '<?xml version="1.0" encoding="UTF-8" standalone="yes"?>'
    '<Types xmlns="http://schemas.openxmlformats.org/package/2006/content-types">'
    '<Default Extension="xml" ContentType="application/xml"/>'
    '<Override PartName="/word/document.xml" ContentType='
    '"application/vnd.openxmlformats-officedocument.wordprocessingml.document.main+xml"/>'
    "</Types>"
)


def _xml_escape(text: str) -> str:
    return text.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")


def build_docx_bytes(paragraphs: list[str]) -> bytes:
    """Monta um .docx mínimo em memória (um w:p por item da lista)."""
    import io

    body = "".join(
        f'<w:p><w:r><w:t xml:space="preserve">{_xml_escape(p)}</w:t></w:r></w:p>'
        for p in paragraphs
    )
    document = (
        '<?xml version="1.0" encoding="UTF-8" standalone="yes"?>'
        f'<w:document xmlns:w="{W}"><w:body>{body}</w:body></w:document>'
    )
    buf = io.BytesIO()
    with zipfile.ZipFile(buf, "w", zipfile.ZIP_DEFLATED) as zf:
        zf.writestr("[Content_Types].xml", _CONTENT_TYPES)
        zf.writestr("word/document.xml", document)
    return buf.getvalue()


@pytest.fixture
def make_docx(tmp_path: Path):
    """Factory que grava um .docx mínimo em tmp_path e devolve o caminho."""

    def _factory(paragraphs: list[str], name: str = "autografos.docx") -> Path:
        p = tmp_path / name
        p.write_bytes(build_docx_bytes(paragraphs))
        return p

    return _factory


# ── Helpers de snapshot ─────────────────────────────────────────────────

def load_golden(name: str) -> dict | None:
    """Carrega golden file JSON; retorna None se não existir."""
    p = SNAPSHOTS_DIR / f"{name}.json"
    if not p.exists():
        return None
    return json.loads(p.read_text(encoding="utf-8"))


def save_golden(name: str, data: dict) -> Path:
    """Salva golden file JSON."""
    SNAPSHOTS_DIR.mkdir(parents=True, exist_ok=True)
    p = SNAPSHOTS_DIR / f"{name}.json"
    p.write_text(json.dumps(data, ensure_ascii=False, indent=2) + "\n", encoding="utf-8")
    return p
