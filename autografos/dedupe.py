"""Remove atos repetidos depois da segmentação (mesmo número + data, ou mesmo título)."""

from __future__ import annotations

import re

from .models import Act


def act_key(act: Act) -> str:
    digits = re.sub(r"\D", "", act.number or "")
    if digits:
        date_key = act.enacted_date.isoformat() if act.enacted_date else ""
        return f"{digits}|{date_key}"
    return f"no-number|{(act.title or '').strip().upper()}"


def dedupe_acts(acts: list[Act]) -> list[Act]:
    """Mantém a primeira ocorrência de cada chave, na ordem original."""
    seen: set[str] = set()
    result: list[Act] = []
    for act in acts:
        key = act_key(act)
        if key in seen:
            continue
        seen.add(key)
        result.append(act)
    return result
