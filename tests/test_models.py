from datetime import date, datetime

from engine.models import ABSENT, Priority, Record, RecordKind, record_from_dict


def test_priority_parse():
    assert Priority.parse("High") is Priority.HIGH
    assert Priority.parse(" medium ") is Priority.MEDIUM
    assert Priority.parse("LOW") is Priority.LOW
    assert Priority.parse(Priority.LOW) is Priority.LOW
    assert Priority.parse("Critical") is None
    assert Priority.parse(3) is None
    assert Priority.parse(None) is None
    assert [p.rank for p in Priority] == [0, 1, 2]


def test_record_from_dict_snake_case():
    payload = {
        "id": "t-1",
        "title": "Revisar contrato",
        "description": "cláusula 3",
        "priority": "high",
        "due_date": "2025-06-10T15:00:00Z",
        "assigned_user": {"name": "Ana", "id": "u1"},
        "status": "In Progress",
        "created_at": "2025-06-01T09:00:00Z",
    }
    rec = record_from_dict(payload)
    assert rec.id == "t-1"
    assert rec.priority is Priority.HIGH
    assert rec.due_date == date(2025, 6, 10)
    assert rec.assigned_user == "Ana"
    assert rec.assignee_label == "Ana"
    assert rec.status == "In Progress"
    assert rec.created_at == datetime(2025, 6, 1, 9, 0)
    assert rec.kind is RecordKind.TASK
    assert rec.raw == payload
    assert rec.raw is not payload


def test_record_from_dict_campos_faltando_ou_errados():
    payload = {"id": 42, "title": None, "priority": 5, "due_date": "31/31/2025",
               "assigned_user": None, "status": None}
    rec = record_from_dict(payload, RecordKind.TICKET)
    assert rec.id == "42"
    assert rec.title == ""
    assert rec.priority is None
    assert rec.due_date is ABSENT
    assert rec.has_due_date is False
    assert rec.assigned_user is None
    assert rec.assignee_label == "Unassigned"
    assert rec.status is None
    assert rec.created_at is None
    assert rec.kind is RecordKind.TICKET
    # payload original intacto
    assert payload["id"] == 42


def test_record_from_dict_camel_case_e_nome():
    rec = record_from_dict({"ticket_id": "k9", "name": "Sem título", "dueDate": "2025-06-12",
                            "assignedUser": "  Bia  "})
    assert rec.id == "k9"
    assert rec.title == "Sem título"
    assert rec.due_date == date(2025, 6, 12)
    assert rec.assigned_user == "Bia"


def test_record_imutavel_e_hashable():
    rec = Record(id="1", raw={"x": 1})
    assert hash(rec) == hash(Record(id="1", raw={"y": 2}))
    try:
        rec.id = "2"
    except AttributeError:
        pass
    else:
        raise AssertionError("Record deveria ser imutável")
