from __future__ import annotations
from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, Optional, Protocol, Union


class _Absent:
    """Sentinela de vencimento ausente ou que não pôde ser interpretado."""

    _instance: Optional["_Absent"] = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "ABSENT"

    def __bool__(self) -> bool:
        return False

    def __reduce__(self):
        return (_Absent, ())


ABSENT = _Absent()

NormalizedDate = Union[date, _Absent]


class Priority(Enum):
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"

    @property
    def rank(self) -> int:
        return _PRIORITY_RANK[self]

    @classmethod
    def parse(cls, value: Any) -> Optional["Priority"]:
        """Aceita 'High', 'high', ' HIGH ' ou um Priority; qualquer outra coisa -> None."""
        if isinstance(value, Priority):
            return value
        if not isinstance(value, str):
            return None
        return _PRIORITY_BY_NAME.get(value.strip().lower())


_PRIORITY_RANK = {Priority.HIGH: 0, Priority.MEDIUM: 1, Priority.LOW: 2}
_PRIORITY_BY_NAME = {p.value.lower(): p for p in Priority}

# Rank de registro com prioridade ausente ou desconhecida
UNKNOWN_PRIORITY_RANK = len(_PRIORITY_RANK)


class UrgencyLabel(Enum):
    NO_DUE_DATE = "No due date"
    OVERDUE = "Overdue"
    DUE_TODAY = "Due today"
    DUE_SOON = "Due soon"
    UPCOMING = "Upcoming"


class RecordKind(Enum):
    TASK = "task"
    TICKET = "ticket"


class Sortable(Protocol):
    """Formato mínimo usado pelo comparador e pelo classificador."""

    @property
    def priority(self) -> Optional[Priority]: ...

    @property
    def due_date(self) -> NormalizedDate: ...


UNASSIGNED = "Unassigned"


@dataclass(frozen=True)
class Record:
    id: str
    title: str = ""
    priority: Optional[Priority] = None
    due_date: NormalizedDate = ABSENT
    assigned_user: Optional[str] = None
    status: Optional[str] = None
    kind: RecordKind = RecordKind.TASK
    description: str = ""
    created_at: Optional[datetime] = None
    raw: Dict[str, Any] = field(default_factory=dict, compare=False, repr=False)

    @property
    def assignee_label(self) -> str:
        return self.assigned_user or UNASSIGNED

    @property
    def has_due_date(self) -> bool:
        return self.due_date is not ABSENT


def _text(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


def _assigned_name(value: Any) -> Optional[str]:
    # A API manda {"name": ...} ou só a string
    if isinstance(value, dict):
        value = value.get("name")
    if value is None:
        return None
    name = str(value).strip()
    return name or None


def record_from_dict(payload: Dict[str, Any], kind: RecordKind = RecordKind.TASK) -> Record:
    """
    Monta um Record a partir do JSON devolvido pela API.

    Aceita chaves snake_case (``due_date``, ``assigned_user``) e camelCase
    (``dueDate``, ``assignedUser``). Campos ausentes ou com tipo errado viram
    defaults seguros; o payload é copiado e nunca alterado.
    """
    # Import local: dates depende de models (ABSENT)
    from engine.dates import normalize, normalize_timestamp

    raw = dict(payload)
    rid = raw.get("id")
    if rid is None:
        rid = raw.get("task_id") or raw.get("ticket_id")
    due_raw = raw.get("due_date", raw.get("dueDate"))
    assigned_raw = raw.get("assigned_user", raw.get("assignedUser"))

    return Record(
        id=_text(rid),
        title=_text(raw.get("title", raw.get("name"))),
        priority=Priority.parse(raw.get("priority")),
        due_date=normalize(due_raw),
        assigned_user=_assigned_name(assigned_raw),
        status=_text(raw.get("status")) or None,
        kind=kind,
        description=_text(raw.get("description")),
        created_at=normalize_timestamp(raw.get("created_at", raw.get("createdAt"))),
        raw=raw,
    )
