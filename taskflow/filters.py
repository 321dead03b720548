from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional

from .constants import ALL, COLUMNS


def matches_search(task: Dict[str, Any], search: Optional[str]) -> bool:
    if not search:
        return True
    return search.lower() in (task.get("title") or "").lower()


def matches_priority(task: Dict[str, Any], priority: Optional[str]) -> bool:
    if priority is None or priority == ALL:
        return True
    return task.get("priority") == priority


def apply_filters(tasks: Iterable[Dict[str, Any]], search: Optional[str] = "",
                  priority: Optional[str] = ALL) -> List[Dict[str, Any]]:
    """Filter a task collection by title search and priority without reordering it."""
    return [t for t in tasks if matches_search(t, search) and matches_priority(t, priority)]


def column_tasks(tasks: Iterable[Dict[str, Any]], status: str) -> List[Dict[str, Any]]:
    # sorted() is stable: equal orders keep the incoming (created desc) sequence
    return sorted((t for t in tasks if t.get("status") == status), key=lambda t: t.get("order") or 0)


def partition_columns(tasks: Iterable[Dict[str, Any]]) -> Dict[str, List[Dict[str, Any]]]:
    tasks = list(tasks)
    return {status: column_tasks(tasks, status) for status in COLUMNS}
