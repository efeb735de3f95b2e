"""Extração de texto bruto de DOCX (stdlib zipfile + xml.etree), PDF e TXT."""

from __future__ import annotations

import io
import zipfile
import xml.etree.ElementTree as ET
from enum import Enum
from pathlib import Path

W = "http://schemas.openxmlformats.org/wordprocessingml/2006/main"

ZIP_MAGIC = b"PK\x03\x04"
OLE_MAGIC = b"\xd0\xcf\x11\xe0\xa1\xb1\x1a\xe1"
PDF_MAGIC = b"%PDF"

TEXT_SUFFIXES = {".txt", ".md"}


class DocumentType(str, Enum):
    DOCX = "DOCX"
    DOC = "DOC"
    PDF = "PDF"
    UNKNOWN = "UNKNOWN"


class ExtractionError(ValueError):
    """Falha ao obter texto de um arquivo de entrada."""


class UnsupportedDocumentError(ExtractionError):
    pass


class EmptyDocumentError(ExtractionError):
    pass


def detect_document_type(data: bytes) -> DocumentType:
    """Detecta o formato pela assinatura binária (não pela extensão)."""
    if data.startswith(ZIP_MAGIC):
        return DocumentType.DOCX
    if data.startswith(OLE_MAGIC):
        return DocumentType.DOC
    if data.startswith(PDF_MAGIC):
        return DocumentType.PDF
    return DocumentType.UNKNOWN


def is_temporary_office_file(name: str) -> bool:
    base = Path(name).name.lower()
    return (
        base.startswith("~$")
        or base.startswith(".~lock")
        or base.endswith(".docx#")
        or base.endswith(".doc#")
    )


# ── DOCX ────────────────────────────────────────────────────────────────

def _paragraph_text(p_el: ET.Element) -> str:
    parts: list[str] = []
    for r in p_el.iter(f"{{{W}}}r"):
        for child in r:
            if child.tag == f"{{{W}}}t":
                parts.append(child.text or "")
            elif child.tag == f"{{{W}}}tab":
                parts.append("\t")
            elif child.tag == f"{{{W}}}br":
                parts.append("\n")
    return "".join(parts)


def extract_docx_text(source: str | Path | bytes) -> str:
    """Lê word/document.xml e devolve um parágrafo por linha.

    Tabelas entram na ordem do documento (cada célula é um parágrafo).
    """
    fp = io.BytesIO(source) if isinstance(source, bytes) else Path(source)
    try:
        with zipfile.ZipFile(fp, "r") as zf:
            data = zf.read("word/document.xml")
    except (zipfile.BadZipFile, KeyError) as exc:
        raise UnsupportedDocumentError(f"DOCX inválido: {exc}") from exc

    try:
        root = ET.fromstring(data)
    except ET.ParseError as exc:
        raise UnsupportedDocumentError(f"word/document.xml malformado: {exc}") from exc
    body = root.find(f"{{{W}}}body")
    if body is None:
        return ""
    return "\n".join(_paragraph_text(p) for p in body.iter(f"{{{W}}}p"))


# ── PDF ─────────────────────────────────────────────────────────────────

def extract_pdf_text(path: str | Path) -> str:
    """Concatena o texto de todas as páginas do PDF."""
    import pdfplumber

    pages: list[str] = []
    with pdfplumber.open(str(path)) as pdf:
        for page in pdf.pages:
            text = page.extract_text()
            if text:
                pages.append(text)
    return "\n".join(pages)


# ── Dispatch ────────────────────────────────────────────────────────────

def read_source(path: str | Path) -> str:
    """Extrai texto de um arquivo de entrada conforme sua assinatura.

    Raises:
        UnsupportedDocumentError: arquivo temporário do Office, .doc legado ou
            formato desconhecido.
        EmptyDocumentError: nenhum texto extraído.
    """
    path = Path(path)
    if is_temporary_office_file(path.name):
        raise UnsupportedDocumentError(
            f"Arquivo temporário do Office/LibreOffice não é processável: {path.name}"
        )

    data = path.read_bytes()
    doc_type = detect_document_type(data)

    if doc_type == DocumentType.DOCX:
        text = extract_docx_text(data)
    elif doc_type == DocumentType.PDF:
        text = extract_pdf_text(path)
    elif doc_type == DocumentType.DOC:
        raise UnsupportedDocumentError(
            f"Formato .doc (OLE) não suportado, converta para .docx: {path.name}"
        )
    elif path.suffix.lower() in TEXT_SUFFIXES:
        text = data.decode("utf-8-sig", errors="replace")
    else:
        raise UnsupportedDocumentError(f"Tipo de arquivo não suportado: {path.name}")

    if not text.strip():
        raise EmptyDocumentError(f"Não foi possível extrair texto do documento: {path.name}")
    return text
