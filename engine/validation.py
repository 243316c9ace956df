"""
Validação dos formulários de criação de tarefa/ticket antes do envio à API.
"""
from datetime import date
from typing import Any, Dict

from engine.dates import normalize
from engine.models import ABSENT, Priority, RecordKind


def validate_payload(payload: Dict[str, Any], kind: RecordKind, today: date) -> Dict[str, str]:
    """
    Retorna {campo: mensagem}; dict vazio = payload válido.

    Regras:
      - title obrigatório (tarefa e ticket)
      - description obrigatória para ticket
      - priority, se informada, deve ser High/Medium/Low
      - due_date, se informada, deve ser uma data válida e não pode estar no passado
    """
    errors: Dict[str, str] = {}

    if not str(payload.get("title") or "").strip():
        errors["title"] = "Title is required"

    if kind is RecordKind.TICKET and not str(payload.get("description") or "").strip():
        errors["description"] = "Description is required"

    priority = payload.get("priority")
    if priority not in (None, "") and Priority.parse(priority) is None:
        errors["priority"] = "Priority must be High, Medium or Low"

    raw_due = payload.get("due_date")
    if raw_due not in (None, ""):
        due = normalize(raw_due)
        if due is ABSENT:
            errors["due_date"] = "Due date is not a valid date"
        elif due < today:
            errors["due_date"] = "Due date cannot be in the past"

    return errors
