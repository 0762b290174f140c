from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional

from checklist_app.constants import ALTERNATE_MATCHES, MANDATORY_CATALOG, CatalogEntry
from checklist_app.models import Todo


@dataclass(frozen=True)
class ChecklistItem:
    entry: CatalogEntry
    todo: Optional[Todo]
    is_completed: bool

    @property
    def can_toggle(self) -> bool:
        return self.todo is not None


def _text_matches(entry: CatalogEntry, todo: Todo) -> bool:
    text = todo.text.lower()
    if entry.key in text or todo.text == entry.text:
        return True
    alternate = ALTERNATE_MATCHES.get(entry.key)
    return bool(alternate and alternate in text)


def reconcile(todos: Iterable[Todo], catalog: Iterable[CatalogEntry] = MANDATORY_CATALOG) -> List[ChecklistItem]:
    """Pair each catalog entry with the stored mandatory row backing it.

    Rows written by generation carry ``catalog_key`` and join on it. Older rows
    without a key fall back to text matching. A row backs at most one entry:
    once claimed it is skipped by later entries, so one loosely worded row
    (e.g. "makan ... stres") cannot tick two checklist items at once.
    """
    mandatory = [todo for todo in todos if todo.is_mandatory]
    catalog = list(catalog)
    by_key = {}
    for todo in mandatory:
        if todo.catalog_key and todo.catalog_key not in by_key:
            by_key[todo.catalog_key] = todo
    claimed = {todo.id for todo in by_key.values()}

    items = []
    for entry in catalog:
        match = by_key.get(entry.key)
        if match is None:
            for todo in mandatory:
                if todo.catalog_key or todo.id in claimed:
                    continue
                if _text_matches(entry, todo):
                    match = todo
                    claimed.add(todo.id)
                    break
        items.append(ChecklistItem(entry=entry, todo=match, is_completed=bool(match and match.completed)))
    return items


def completed_count(items: Iterable[ChecklistItem]) -> int:
    return sum(1 for item in items if item.is_completed)
