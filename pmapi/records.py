import logging
from datetime import date
from typing import Any, Dict, List, Optional

from engine.models import Record, RecordKind, record_from_dict
from engine.validation import validate_payload
from .http import api_post

logger = logging.getLogger(__name__)

TASKS_PATH = "/api/tasks/gettasks"
TICKETS_PATH = "/api/ticket/gettickets"
CREATE_TASK_PATH = "/api/task/createtask"
CREATE_TICKET_PATH = "/api/ticket/createticket"

_LIST_ENDPOINTS = {
    RecordKind.TASK: (TASKS_PATH, "tasks"),
    RecordKind.TICKET: (TICKETS_PATH, "tickets"),
}


class InvalidPayloadError(ValueError):
    def __init__(self, errors: Dict[str, str]):
        super().__init__("; ".join(f"{k}: {v}" for k, v in errors.items()))
        self.errors = errors


def records_from_batch(items: Any, kind: RecordKind) -> List[Record]:
    """
    Converte o lote JSON em Records.
    Itens que não são objetos são descartados; ids repetidos: o último vence
    mas mantém a posição do primeiro.
    """
    if not isinstance(items, list):
        return []
    dedup: Dict[Any, Record] = {}
    for pos, item in enumerate(items):
        if not isinstance(item, dict):
            logger.warning("Item ignorado no lote de %s: %r", kind.value, item)
            continue
        rec = record_from_dict(item, kind)
        # sem id (rascunho): não deduplica, chave própria para não colidir com ids reais
        dedup[rec.id or (None, pos)] = rec
    return list(dedup.values())


def list_records(kind: RecordKind, project_id: str) -> List[Record]:
    path, key = _LIST_ENDPOINTS[kind]
    data = api_post(path, {"project_id": project_id})
    items = data.get(key) if isinstance(data, dict) else None
    records = records_from_batch(items or [], kind)
    logger.info("%d %ss carregados (projeto %s)", len(records), kind.value, project_id)
    return records


def list_tasks(project_id: str) -> List[Record]:
    return list_records(RecordKind.TASK, project_id)


def list_tickets(project_id: str) -> List[Record]:
    return list_records(RecordKind.TICKET, project_id)


def _create(kind: RecordKind, path: str, payload: Dict[str, Any], today: Optional[date]) -> Dict[str, Any]:
    if today is not None:
        errors = validate_payload(payload, kind, today)
        if errors:
            raise InvalidPayloadError(errors)
    data = api_post(path, payload)
    return data if isinstance(data, dict) else {"data": data}


def create_task(project_id: str, title: str, description: str = "", priority: Optional[str] = None,
                due_date: Optional[str] = None, assigned_by: Optional[str] = None,
                assigned_user: Optional[str] = None, team_id: Optional[str] = None,
                today: Optional[date] = None) -> Dict[str, Any]:
    """Cria tarefa. Com ``today`` informado o payload é validado antes do envio."""
    payload = {
        "project_id": project_id,
        "title": title,
        "description": description,
        "priority": priority,
        "due_date": due_date,
        "assigned_by": assigned_by,
        "assigned_user": assigned_user,
        "team_id": team_id,
    }
    return _create(RecordKind.TASK, CREATE_TASK_PATH, payload, today)


def create_ticket(project_id: str, title: str, description: str, priority: Optional[str] = None,
                  due_date: Optional[str] = None, assigned_user: Optional[str] = None,
                  today: Optional[date] = None) -> Dict[str, Any]:
    payload = {
        "project_id": project_id,
        "title": title,
        "description": description,
        "priority": priority,
        "due_date": due_date,
        "assigned_user": assigned_user,
    }
    return _create(RecordKind.TICKET, CREATE_TICKET_PATH, payload, today)
