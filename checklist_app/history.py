from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Sequence

from checklist_app.errors import StoreError
from checklist_app.metrics import completion_stats
from checklist_app.models import Todo

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HistoryDay:
    date: str
    todos: Sequence[Todo]
    completed_count: int
    total_count: int
    percentage: int


def group_by_date(items, sort_within_day=True):
    """Group rows on their stored ``date`` string, newest day first.

    The key is the persisted calendar day, never re-derived from timestamps.
    """
    grouped: Dict[str, list] = {}
    for item in items:
        grouped.setdefault(item.date, []).append(item)
    days = sorted(grouped, reverse=True)
    if sort_within_day:
        return [(day, sorted(grouped[day], key=lambda item: item.created_at)) for day in days]
    return [(day, grouped[day]) for day in days]


def build_history(todos: Sequence[Todo]) -> List[HistoryDay]:
    history = []
    for day, day_todos in group_by_date(todos):
        completed, total, percentage = completion_stats(day_todos)
        history.append(
            HistoryDay(
                date=day,
                todos=tuple(day_todos),
                completed_count=completed,
                total_count=total,
                percentage=percentage,
            )
        )
    return history


def get_history(todo_repository, user_id: str) -> List[HistoryDay]:
    try:
        todos = todo_repository.list_todos(user_id)
    except StoreError as exc:
        logger.error("Error fetching history for %s: %s", user_id, exc)
        return []
    return build_history(todos)


def group_feed_by_date(items):
    """Feed rows arrive newest-completed first; keep that order inside a day."""
    return group_by_date(items, sort_within_day=False)
