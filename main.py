#!/usr/bin/env python
"""
Lista tarefas ou tickets de um projeto já filtrados, ordenados e rotulados.

Uso típico (ordenação dos cards: vence hoje primeiro, depois prioridade):
    python main.py tasks --project 259624da-...

Página de lista com filtros e ordenação por coluna:
    python main.py tickets --priority High --due week --sort created_at --desc

Sem API (lote JSON local, data fixa):
    python main.py tasks --input exemplo.json --today 2025-06-10
"""
from __future__ import annotations
import argparse
import json
import logging
import sys
from datetime import date
from pathlib import Path
from typing import List, Optional

from config.loader import ConfigError, load_config
from config.logging_config import setup_logger
from engine.classification import current_date
from engine.filters import DUE_BUCKET_LABELS, TASK_STATUSES, RecordFilter, active_filter_labels
from engine.models import Record, RecordKind
from engine.views import ASC, DESC, SortOrder, build_view
from pmapi.auth import AuthError
from pmapi.http import ApiHTTPError
from pmapi.records import list_records, records_from_batch
from render.console import format_rows

logger = logging.getLogger("pm")


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        description="Lista tarefas/tickets ordenados e classificados por urgência."
    )
    p.add_argument("kind", choices=[k.value + "s" for k in RecordKind],
                   help="Tipo de registro (tasks ou tickets).")

    grp_fonte = p.add_argument_group("Fonte")
    grp_fonte.add_argument("--project", default=None,
                           help="ID do projeto (default: project.id da config / PM_PROJECT_ID).")
    grp_fonte.add_argument("--input", default=None,
                           help="Arquivo JSON com o lote (lista ou {'tasks': [...]}) em vez da API.")

    grp_filtro = p.add_argument_group("Filtros")
    grp_filtro.add_argument("--search", default="", help="Busca em título, descrição e responsável.")
    grp_filtro.add_argument("--priority", action="append", default=[],
                            help="Prioridade (High/Medium/Low). Pode repetir.")
    grp_filtro.add_argument("--status", action="append", default=[],
                            help=f"Status ({', '.join(TASK_STATUSES)}). Pode repetir.")
    grp_filtro.add_argument("--assignee", default=None, help="Responsável ou 'Unassigned'.")
    grp_filtro.add_argument("--due", choices=list(DUE_BUCKET_LABELS), default=None,
                            help="Faixa de vencimento.")

    grp_saida = p.add_argument_group("Ordenação / Saída")
    grp_saida.add_argument("--sort", default=None,
                           help="Campo da ordenação por coluna (due_date, priority, created_at, title...). "
                                "Sem --sort: ordenação dos cards.")
    grp_saida.add_argument("--desc", action="store_true", help="Ordem decrescente (com --sort).")
    grp_saida.add_argument("--today", default=None, help="Data de referência YYYY-MM-DD (default: hoje).")
    grp_saida.add_argument("--limit", type=int, default=None, help="Máx de linhas detalhadas.")
    grp_saida.add_argument("--verbose", action="store_true", help="Logs detalhados (debug).")
    return p


def parse_today(value: Optional[str], tz_name: Optional[str]) -> date:
    if not value:
        return current_date(tz_name or None)
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise ValueError(f"--today inválido: {value!r} (use YYYY-MM-DD)")


def load_input(path: str, kind: RecordKind) -> List[Record]:
    with open(Path(path), "r", encoding="utf-8") as f:
        data = json.load(f)
    if isinstance(data, dict):
        data = data.get(f"{kind.value}s", [])
    return records_from_batch(data, kind)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logger("pm", "DEBUG" if args.verbose else None)
    for pkg in ("engine", "pmapi", "render", "config"):
        setup_logger(pkg, "DEBUG" if args.verbose else None)

    try:
        cfg = load_config()
    except ConfigError as e:
        logger.error("%s", e)
        return 2

    kind = RecordKind(args.kind[:-1])
    try:
        today = parse_today(args.today, cfg["classification"].get("timezone"))
    except ValueError as e:
        print(f"[ERRO] {e}", file=sys.stderr)
        return 2

    try:
        flt = RecordFilter(
            search=args.search,
            priorities=tuple(args.priority),
            statuses=tuple(args.status),
            assignee=args.assignee,
            due_bucket=args.due,
        )
    except ValueError as e:
        print(f"[ERRO] {e}", file=sys.stderr)
        return 2

    view_cfg = cfg["view"]
    sort_field = args.sort or view_cfg.get("sort_field") or None
    sort = None
    if sort_field:
        direction = DESC if args.desc else (view_cfg.get("sort_direction") or ASC)
        try:
            sort = SortOrder(sort_field, direction)
        except ValueError as e:
            print(f"[ERRO] {e}", file=sys.stderr)
            return 2

    if args.input:
        try:
            records = load_input(args.input, kind)
        except (OSError, ValueError) as e:
            print(f"[ERRO] Não foi possível ler --input {args.input!r}: {e}", file=sys.stderr)
            return 2
    else:
        project_id = args.project or cfg["project"].get("id")
        if not project_id:
            print("[ERRO] Informe --project ou defina PM_PROJECT_ID.", file=sys.stderr)
            return 2
        try:
            records = list_records(kind, project_id)
        except (ApiHTTPError, AuthError) as e:
            logger.error("Falha ao carregar %ss: %s", kind.value, e)
            return 1

    rows = build_view(records, today, flt=flt, sort=sort,
                      soon_days=int(cfg["classification"].get("soon_days", 3)))
    limit = args.limit if args.limit is not None else int(view_cfg.get("detail_limit", 50))
    logger.debug("today=%s sort=%s filtros=%s", today, sort, active_filter_labels(flt))
    print(format_rows(rows, kind, detail_limit=limit, active_filters=active_filter_labels(flt)))
    return 0


if __name__ == "__main__":
    sys.exit(main())
