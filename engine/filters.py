"""
Filtros da lista de tarefas/tickets (busca, prioridade, status, responsável, vencimento).

Os filtros rodam antes da ordenação e preservam a ordem de entrada.
"""
from __future__ import annotations
from dataclasses import dataclass, field, replace
from datetime import date, timedelta
from typing import Iterable, List, Optional, Sequence

from engine.models import ABSENT, UNASSIGNED, Priority, Record

DUE_BUCKET_LABELS = {
    "overdue": "Overdue",
    "today": "Today",
    "week": "This week",
    "month": "This month",
    "none": "No due date",
}

TASK_STATUSES = ("Not Started", "In Progress", "Under Review", "Completed")


@dataclass(frozen=True)
class RecordFilter:
    search: str = ""
    priorities: Sequence[str] = field(default_factory=tuple)
    statuses: Sequence[str] = field(default_factory=tuple)
    assignee: Optional[str] = None
    due_bucket: Optional[str] = None

    def __post_init__(self):
        if self.due_bucket is not None and self.due_bucket not in DUE_BUCKET_LABELS:
            raise ValueError(f"due_bucket inválido: {self.due_bucket!r} (use {', '.join(DUE_BUCKET_LABELS)})")

    @property
    def is_empty(self) -> bool:
        return not (self.search.strip() or self.priorities or self.statuses
                    or self.assignee or self.due_bucket)


def _week_bounds(today: date):
    # Semana começando no domingo; fim inclusivo em domingo + 7 dias
    start = today - timedelta(days=(today.weekday() + 1) % 7)
    return start, start + timedelta(days=7)


def _month_bounds(today: date):
    start = today.replace(day=1)
    if start.month == 12:
        nxt = start.replace(year=start.year + 1, month=1)
    else:
        nxt = start.replace(month=start.month + 1)
    return start, nxt


def in_due_bucket(record: Record, bucket: str, today: date) -> bool:
    due = record.due_date
    if bucket == "none":
        return due is ABSENT
    if due is ABSENT:
        return False
    if bucket == "overdue":
        return due < today
    if bucket == "today":
        return due == today
    if bucket == "week":
        start, end = _week_bounds(today)
        return start <= due <= end
    if bucket == "month":
        start, nxt = _month_bounds(today)
        return start <= due < nxt
    return True


def matches_search(record: Record, query: str) -> bool:
    q = query.strip().lower()
    if not q:
        return True
    haystacks = (record.title, record.description, record.assigned_user or "")
    return any(q in h.lower() for h in haystacks)


def _priority_names(values: Iterable[str]) -> set:
    names = set()
    for v in values:
        p = Priority.parse(v)
        names.add(p.value if p else str(v))
    return names


def matches(record: Record, flt: RecordFilter, today: date) -> bool:
    if not matches_search(record, flt.search):
        return False
    if flt.priorities:
        if record.priority is None or record.priority.value not in _priority_names(flt.priorities):
            return False
    if flt.statuses and record.status not in flt.statuses:
        return False
    if flt.assignee:
        if flt.assignee == UNASSIGNED:
            if record.assigned_user:
                return False
        elif record.assigned_user != flt.assignee:
            return False
    if flt.due_bucket and not in_due_bucket(record, flt.due_bucket, today):
        return False
    return True


def apply_filters(records: Iterable[Record], flt: Optional[RecordFilter], today: date) -> List[Record]:
    items = list(records)
    if flt is None or flt.is_empty:
        return items
    return [r for r in items if matches(r, flt, today)]


def active_filter_labels(flt: RecordFilter) -> List[str]:
    """Rótulos exibidos como 'chips' dos filtros ativos, na ordem em que são aplicados."""
    labels: List[str] = []
    if flt.search.strip():
        labels.append(f'Search: "{flt.search}"')
    if flt.priorities:
        labels.append(f"Priority: {', '.join(flt.priorities)}")
    if flt.statuses:
        labels.append(f"Status: {', '.join(flt.statuses)}")
    if flt.due_bucket:
        labels.append(f"Due: {DUE_BUCKET_LABELS[flt.due_bucket]}")
    if flt.assignee:
        labels.append(f"Assignee: {flt.assignee}")
    return labels


def remove_filter(flt: RecordFilter, label: str) -> RecordFilter:
    """Remove o filtro identificado pelo chip (prefixo do rótulo)."""
    if label.startswith("Priority"):
        return replace(flt, priorities=())
    if label.startswith("Status"):
        return replace(flt, statuses=())
    if label.startswith("Due"):
        return replace(flt, due_bucket=None)
    if label.startswith("Assignee"):
        return replace(flt, assignee=None)
    if label.startswith("Search"):
        return replace(flt, search="")
    return flt


def unique_assignees(records: Iterable[Record]) -> List[str]:
    names = {r.assigned_user for r in records if r.assigned_user} - {UNASSIGNED}
    return [UNASSIGNED] + sorted(names, key=str.lower)
