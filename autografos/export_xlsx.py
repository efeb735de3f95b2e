"""Planilha de conferência dos atos parseados (inventario.xlsx)."""

from __future__ import annotations

from pathlib import Path

from .models import Act, Clause, Subsection

ACTS_SHEET = "Atos"
NODES_SHEET = "Dispositivos"

ACTS_HEADER = ("Número", "Tipo", "Data", "Título", "Ementa", "Artigos", "Capítulos")
NODES_HEADER = ("Ato", "Caminho", "Dispositivo", "Ordem", "Texto")


def _subsection_rows(number: str, path: str, inc: Subsection) -> list[tuple]:
    inc_path = f"{path} > {inc.ordinal_label}"
    rows: list[tuple] = [(number, inc_path, "Inciso", inc.sequence_index, inc.text)]
    for al in inc.clauses:
        rows.extend(_clause_rows(number, inc_path, al))
    return rows


def _clause_rows(number: str, path: str, al: Clause) -> list[tuple]:
    al_path = f"{path} > {al.ordinal_label})"
    rows: list[tuple] = [(number, al_path, "Alínea", al.sequence_index, al.text)]
    for item in al.items:
        rows.append((number, f"{al_path} > {item.ordinal_label}", "Item", item.sequence_index, item.text))
    return rows


def _node_rows(act: Act) -> list[tuple]:
    rows: list[tuple] = []
    for art in act.articles:
        art_path = f"Art. {art.ordinal_label}"
        rows.append((act.number, art_path, "Artigo", art.sequence_index, art.text))
        for inc in art.subsections:
            rows.extend(_subsection_rows(act.number, art_path, inc))
        for para in art.paragraphs:
            para_path = f"{art_path} > {para.ordinal_label}"
            rows.append((act.number, para_path, "Parágrafo", para.sequence_index, para.text))
            for inc in para.subsections:
                rows.extend(_subsection_rows(act.number, para_path, inc))
    return rows


def export_inventory(acts: list[Act], path: str | Path) -> Path:
    """Grava as abas 'Atos' (uma linha por ato) e 'Dispositivos' (uma por nó)."""
    import openpyxl
    from openpyxl.styles import Font

    path = Path(path)
    wb = openpyxl.Workbook()
    ws = wb.active
    ws.title = ACTS_SHEET
    ws.append(ACTS_HEADER)
    for act in acts:
        ws.append((
            act.number,
            act.act_type.value,
            act.enacted_date,
            act.title,
            act.summary or "",
            len(act.articles),
            len(act.chapters),
        ))

    ws_nodes = wb.create_sheet(NODES_SHEET)
    ws_nodes.append(NODES_HEADER)
    for act in acts:
        for row in _node_rows(act):
            ws_nodes.append(row)

    for sheet in (ws, ws_nodes):
        for cell in sheet[1]:
            cell.font = Font(bold=True)
        sheet.freeze_panes = "A2"

    path.parent.mkdir(parents=True, exist_ok=True)
    wb.save(path)
    return path


def read_inventory(path: str | Path) -> list[dict]:
    """Lê a aba 'Atos' de volta como lista de dicts (chaves = cabeçalho)."""
    import openpyxl

    path = Path(path)
    wb = openpyxl.load_workbook(path, read_only=True, data_only=True)
    if ACTS_SHEET not in wb.sheetnames:
        wb.close()
        return []
    rows = list(wb[ACTS_SHEET].iter_rows(min_row=2, values_only=True))
    wb.close()

    result: list[dict] = []
    for row in rows:
        if not row or row[0] is None:
            continue
        result.append(dict(zip(ACTS_HEADER, row)))
    return result
