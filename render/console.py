from typing import Dict, List, Sequence

from engine.classification import summarize
from engine.models import RecordKind
from engine.views import ViewRow
from render.badges import format_due_date, priority_text, urgency_badge


def _linha(row: ViewRow) -> str:
    r = row.record
    badge = urgency_badge(row.label)
    status = f" | {r.status}" if r.status else ""
    return (
        f"{badge.icon} [{r.id}] {r.title or '(sem título)'} | {priority_text(r.priority)}"
        f" | {format_due_date(r.due_date)} ({badge.text}) | {r.assignee_label}{status}"
    )


def empty_message(kind: RecordKind, filtered: bool) -> str:
    plural = f"{kind.value}s"
    if filtered:
        return f"No {plural} match your filters"
    return f"No {plural} found"


def format_summary(counts: Dict[str, int]) -> str:
    return (
        f"Overdue: {counts['overdue']} | Due today: {counts['due_today']} | "
        f"Due soon: {counts['due_soon']} | Upcoming: {counts['upcoming']} | "
        f"No due date: {counts['no_due_date']}"
    )


def format_rows(rows: Sequence[ViewRow], kind: RecordKind, detail_limit: int = 50,
                active_filters: Sequence[str] = ()) -> str:
    """
    Texto da listagem. Regra:
      - até ``detail_limit`` linhas: lista completa
      - acima disso: primeiras ``detail_limit`` + contador do restante
    """
    partes: List[str] = []
    if active_filters:
        partes.append("Filters: " + " · ".join(active_filters))

    if not rows:
        partes.append(empty_message(kind, bool(active_filters)))
        return "\n".join(partes)

    partes.append(f"{kind.value.capitalize()}s ({len(rows)})")
    for row in rows[:detail_limit]:
        partes.append(_linha(row))
    restante = len(rows) - detail_limit
    if restante > 0:
        partes.append(f"... +{restante} more")
    partes.append(format_summary(summarize(rows)))
    return "\n".join(partes)
