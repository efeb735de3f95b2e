"""Renderização Markdown dos atos parseados (conferência e exportação LLM)."""

from __future__ import annotations

from .models import Act, Article, Chapter, Clause, Paragraph, Subsection


class MarkdownRenderer:
    """Gera Markdown com um bloco por ato e um dispositivo por linha."""

    # ── Documento ─────────────────────────────────────────────────────

    def render_acts(self, acts: list[Act]) -> str:
        return "\n\n---\n\n".join(self.render_act(a).rstrip("\n") for a in acts) + "\n"

    def render_act(self, act: Act) -> str:
        """Renderiza um ato completo em Markdown."""
        parts: list[str] = [f"# {act.title}"]
        parts.append(self._render_metadata(act))
        if act.summary:
            parts.append(f"*{act.summary}*")

        current_chapter: Chapter | None = None
        for art in act.articles:
            if art.chapter is not None and art.chapter is not current_chapter:
                current_chapter = art.chapter
                parts.append(self._render_chapter(art.chapter))
            parts.append(self._render_article(art))

        return "\n\n".join(parts) + "\n"

    @staticmethod
    def _render_metadata(act: Act) -> str:
        line = f"**Número:** {act.number} · **Tipo:** {act.act_type.value}"
        if act.enacted_date:
            line += f" · **Data:** {act.enacted_date.strftime('%d/%m/%Y')}"
        return line

    @staticmethod
    def _render_chapter(cap: Chapter) -> str:
        text = f"Capítulo {cap.ordinal_label}" if cap.ordinal_label else "Capítulo"
        if cap.name:
            text += " — " + cap.name
        return f"## {text}"

    # ── Dispositivos ──────────────────────────────────────────────────

    def _render_article(self, art: Article) -> str:
        lines: list[str] = [f"**Art. {art.ordinal_label}** {art.text}".rstrip()]
        for inc in art.subsections:
            lines.extend(self._render_subsection(inc, depth=1))
        for para in art.paragraphs:
            lines.extend(self._render_paragraph(para))
        return "\n".join(lines)

    def _render_paragraph(self, para: Paragraph) -> list[str]:
        lines = [self._line(0, para.ordinal_label, para.text)]
        for inc in para.subsections:
            lines.extend(self._render_subsection(inc, depth=1))
        return lines

    def _render_subsection(self, inc: Subsection, depth: int) -> list[str]:
        lines = [self._line(depth, inc.ordinal_label, inc.text)]
        for al in inc.clauses:
            lines.extend(self._render_clause(al, depth + 1))
        return lines

    def _render_clause(self, al: Clause, depth: int) -> list[str]:
        lines = [self._line(depth, f"{al.ordinal_label})", al.text)]
        for item in al.items:
            lines.append(self._line(depth + 1, f"{item.ordinal_label}.", item.text))
        return lines

    @staticmethod
    def _line(depth: int, identifier: str, body: str) -> str:
        indent = "  " * depth
        if not body:
            return f"{indent}- **{identifier}**"
        return f"{indent}- **{identifier}** — {body}"
