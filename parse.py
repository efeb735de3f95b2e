#!/usr/bin/env python3
"""Pipeline: DOCX/PDF/TXT de autógrafos → JSON (+ Markdown e inventário XLSX)."""

from __future__ import annotations

import argparse
import io
import json
import sys
import time
from dataclasses import dataclass, field
from pathlib import Path

# Fix Windows console encoding
if sys.stdout.encoding != "utf-8":
    sys.stdout = io.TextIOWrapper(
        sys.stdout.buffer, encoding="utf-8", errors="replace"
    )

BASE_DIR = Path(__file__).parent


# ── Relatório por arquivo ────────────────────────────────────────────────

_CATEGORY_LABELS = {
    "extracao": "Extração",
    "estrutura": "Estrutura",
}


@dataclass
class ValidationIssue:
    source: str     # nome do arquivo de entrada
    category: str   # "extracao", "estrutura"
    severity: str   # "erro", "aviso"
    message: str
    context: str = ""


@dataclass
class ValidationReport:
    issues: list[ValidationIssue] = field(default_factory=list)

    def add(
        self, source: str, category: str, severity: str, message: str, context: str = ""
    ) -> None:
        self.issues.append(ValidationIssue(source, category, severity, message, context))

    @property
    def errors(self) -> list[ValidationIssue]:
        return [i for i in self.issues if i.severity == "erro"]

    @property
    def warnings(self) -> list[ValidationIssue]:
        return [i for i in self.issues if i.severity == "aviso"]

    def by_source(self) -> dict[str, list[ValidationIssue]]:
        """Problemas agrupados por arquivo, na ordem em que os arquivos apareceram."""
        grouped: dict[str, list[ValidationIssue]] = {}
        for issue in self.issues:
            grouped.setdefault(issue.source, []).append(issue)
        return grouped

    def print_report(self) -> None:
        if not self.issues:
            print("\n✓ Nenhum problema nos arquivos processados")
            return

        grouped = self.by_source()
        print(f"\n{'─' * 60}")
        print("  Problemas por arquivo")
        print(f"{'─' * 60}")
        for source, items in grouped.items():
            print(f"\n  {source}")
            for item in items:
                icon = "✗" if item.severity == "erro" else "·"
                label = _CATEGORY_LABELS.get(item.category, item.category)
                line = f"    {icon} [{label}] {item.message}"
                if item.context:
                    line += f"  ({item.context})"
                print(line)

        print(
            f"\n  Total: {len(self.errors)} erro(s), {len(self.warnings)} aviso(s)"
            f" em {len(grouped)} arquivo(s)"
        )
        print(f"{'─' * 60}")

    def to_json(self) -> dict[str, list[dict]]:
        return {
            source: [
                {
                    "category": i.category,
                    "severity": i.severity,
                    "message": i.message,
                    **({"context": i.context} if i.context else {}),
                }
                for i in items
            ]
            for source, items in self.by_source().items()
        }


def _load_config(path: Path | None = None) -> dict:
    """Lê config.local.toml (se existir) e devolve só os padrões da CLI.

    Chaves reconhecidas: ``[sources] input``, ``[parser] header_pattern`` e
    ``[output] dir``. Valores vazios são ignorados.
    """
    config_path = path or BASE_DIR / "config.local.toml"
    if not config_path.exists():
        return {}
    try:
        import tomllib
    except ModuleNotFoundError:
        import tomli as tomllib  # type: ignore[no-redef]
    with open(config_path, "rb") as f:
        raw = tomllib.load(f)

    defaults = {
        "input": raw.get("sources", {}).get("input"),
        "header_pattern": raw.get("parser", {}).get("header_pattern"),
        "output_dir": raw.get("output", {}).get("dir"),
    }
    return {k: v for k, v in defaults.items() if v}


def _parse_input(
    path: Path,
    *,
    args: argparse.Namespace,
    output_dir: Path,
    report: ValidationReport,
) -> list:
    """Processa um arquivo de entrada; devolve os atos (vazio se falhar)."""
    from autografos.extract_text import ExtractionError, read_source
    from autografos.pipeline import parse_document, parse_single_act
    from autografos.validate_acts import run_checks

    print(f"\n{'═' * 60}")
    print(f"  Entrada: {path.name}")
    print(f"{'═' * 60}")

    # ── 1. Extração ────────────────────────────────────────────────────
    print("[1/4] Extraindo texto...")
    try:
        raw = read_source(path)
    except PermissionError:
        print(f"      ⚠ Não foi possível abrir {path.name} (arquivo em uso pelo Word?)")
        report.add(path.name, "extracao", "erro", "Arquivo inacessível")
        return []
    except FileNotFoundError:
        print(f"      ⚠ Arquivo não encontrado: {path}")
        report.add(path.name, "extracao", "erro", "Arquivo não encontrado", str(path))
        return []
    except ExtractionError as exc:
        print(f"      ⚠ {exc}")
        report.add(path.name, "extracao", "erro", str(exc))
        return []
    print(f"      → {len(raw)} caracteres")

    # ── 2. Parse ───────────────────────────────────────────────────────
    print("[2/4] Parseando atos...")
    if args.single:
        acts = [parse_single_act(raw, path.name)]
    else:
        acts = parse_document(raw, path.name, args.header_pattern)
    n_arts = sum(len(a.articles) for a in acts)
    print(f"      → {len(acts)} ato(s), {n_arts} artigos")
    if not acts:
        report.add(path.name, "extracao", "erro", "Documento sem conteúdo")
        return []

    # ── 3. Validação estrutural ────────────────────────────────────────
    print("[3/4] Validando estrutura...")
    issues = run_checks(acts, path.name)
    for iss in issues:
        report.add(
            path.name, "estrutura", "aviso", f"[{iss['code']}] {iss['desc']}", iss["context"]
        )
    if issues:
        print(f"      → {len(issues)} aviso(s) de estrutura")
    else:
        print("      → atos sem problemas de estrutura")

    # ── 4. Saída ───────────────────────────────────────────────────────
    print("[4/4] Gravando saída...")
    output_dir.mkdir(parents=True, exist_ok=True)
    json_path = output_dir / f"{path.stem}.json"
    json_path.write_text(
        json.dumps([a.to_dict() for a in acts], ensure_ascii=False, indent=2),
        encoding="utf-8",
    )
    print(f"      → {json_path}")

    if args.markdown:
        from autografos.render_markdown import MarkdownRenderer

        md_path = output_dir / f"{path.stem}.md"
        md_path.write_text(MarkdownRenderer().render_acts(acts), encoding="utf-8")
        print(f"      → {md_path}")

    return acts


def main(argv: list[str] | None = None) -> int:
    # Defaults: config.local.toml → fallback local
    config = _load_config()
    default_input = config.get("input")
    default_pattern = config.get("header_pattern")
    default_output = config.get("output_dir", str(BASE_DIR / "output"))

    parser = argparse.ArgumentParser(
        description="Estrutura autógrafos e leis (DOCX/PDF/TXT) em JSON hierárquico"
    )
    parser.add_argument(
        "inputs", nargs="*", default=[default_input] if default_input else [],
        help="Arquivos de entrada (padrão: [sources] input do config.local.toml)",
    )
    parser.add_argument(
        "--header-pattern", default=default_pattern,
        help="Regex do cabeçalho que separa os atos (grupo 1 = número)",
    )
    parser.add_argument(
        "--single", action="store_true",
        help="Trata cada arquivo como um único ato (sem segmentação)",
    )
    parser.add_argument(
        "--output-dir", default=default_output,
        help="Diretório de saída (padrão: output/)",
    )
    parser.add_argument(
        "--markdown", action="store_true",
        help="Gera também <arquivo>.md",
    )
    parser.add_argument(
        "--xlsx", action="store_true",
        help="Gera inventario.xlsx com todos os atos",
    )
    parser.add_argument(
        "--strict", action="store_true",
        help="Trata avisos como erros (exit code 1 se houver qualquer problema)",
    )
    parser.add_argument(
        "--debug", action="store_true",
        help="Salva o relatório de validação em JSON no diretório de saída",
    )
    args = parser.parse_args(argv)

    if not args.inputs:
        print("Nada a fazer. Informe arquivos ou configure [sources] em config.local.toml.")
        return 1

    t_total = time.time()
    report = ValidationReport()
    output_dir = Path(args.output_dir)
    all_acts: list = []

    for raw_path in args.inputs:
        all_acts.extend(
            _parse_input(Path(raw_path), args=args, output_dir=output_dir, report=report)
        )

    if args.xlsx and all_acts:
        from autografos.export_xlsx import export_inventory

        xlsx_path = export_inventory(all_acts, output_dir / "inventario.xlsx")
        print(f"\n✓ Inventário: {xlsx_path} ({len(all_acts)} atos)")

    elapsed_total = time.time() - t_total
    print(f"\n{'═' * 60}")
    print(f"  Total: {len(all_acts)} ato(s) em {elapsed_total:.1f}s")
    print(f"{'═' * 60}")

    report.print_report()

    # ── Debug output ───────────────────────────────────────────────────
    if args.debug and report.issues:
        output_dir.mkdir(parents=True, exist_ok=True)
        debug_path = output_dir / "validation_report.json"
        debug_path.write_text(
            json.dumps(report.to_json(), ensure_ascii=False, indent=2),
            encoding="utf-8",
        )
        print(f"  → {debug_path}")

    # Exit code based on validation results
    if report.errors or (args.strict and report.warnings):
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
