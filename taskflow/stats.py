from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, Iterable, Optional

from .constants import DONE, HIGH, OVERDUE, PRIO_MAP, SOON, STATUS_MAP, TODAY
from .due_dates import classify


def progress_percent(done: int, total: int) -> int:
    return round(done / total * 100) if total > 0 else 0


@dataclass(frozen=True)
class BoardStats:
    total: int = 0
    done: int = 0
    overdue: int = 0

    @property
    def progress(self) -> int:
        return progress_percent(self.done, self.total)

    def to_dict(self) -> Dict[str, int]:
        return {"total": self.total, "done": self.done, "overdue": self.overdue, "progress": self.progress}


def _bucket(task: Dict[str, Any], today: date) -> Optional[str]:
    status = classify(task.get("due_date"), today)
    return status.bucket if status else None


def compute_stats(tasks: Iterable[Dict[str, Any]], today: Optional[date] = None) -> BoardStats:
    """Counts for an unfiltered, project-scoped task list. Done tasks are never overdue."""
    today = today or date.today()
    total = done = overdue = 0
    for t in tasks:
        total += 1
        if t.get("status") == DONE:
            done += 1
        elif _bucket(t, today) == OVERDUE:
            overdue += 1
    return BoardStats(total=total, done=done, overdue=overdue)


def project_counts(tasks: Iterable[Dict[str, Any]]) -> Dict[str, int]:
    task_count = done_count = 0
    for t in tasks:
        task_count += 1
        if t.get("status") == DONE:
            done_count += 1
    return {"task_count": task_count, "active_count": task_count - done_count, "done_count": done_count}


def board_metrics(tasks: Iterable[Dict[str, Any]], today: Optional[date] = None) -> Dict[str, Any]:
    today = today or date.today()
    tasks = list(tasks)
    stats = compute_stats(tasks, today)

    by_status = {s: 0 for s in STATUS_MAP}
    by_priority = {p: 0 for p in PRIO_MAP}
    due_today = due_soon = overdue_high = 0
    for t in tasks:
        if t.get("status") in by_status:
            by_status[t["status"]] += 1
        if t.get("priority") in by_priority:
            by_priority[t["priority"]] += 1
        if t.get("status") == DONE:
            continue
        bucket = _bucket(t, today)
        if bucket == TODAY:
            due_today += 1
        elif bucket == SOON:
            due_soon += 1
        elif bucket == OVERDUE and t.get("priority") == HIGH:
            overdue_high += 1

    return {
        **stats.to_dict(),
        "active": stats.total - stats.done,
        "by_status": by_status,
        "by_priority": by_priority,
        "due_date_insights": {
            "overdue": stats.overdue,
            "overdue_high_priority": overdue_high,
            "due_today": due_today,
            "due_soon": due_soon,
        },
    }
