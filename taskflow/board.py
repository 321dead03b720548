"""
Client-side board session.

Holds the loaded projects and tasks for one user session, the current
selection and filter state, and notifies subscribers whenever any of it
changes. Filtered columns and statistics are derived on read, so they are
always consistent with the state that triggered the notification.

Events:
  projects_changed  - project list reloaded
  tasks_changed     - task list replaced or optimistically patched
  filters_changed   - search text or priority filter changed
  selection_changed - a different project was selected
"""
from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Optional

from .constants import ALL, COLUMNS, PRIORITIES, TODO
from .due_dates import DueDateStatus, classify
from .errors import Result, ValidationError
from .filters import apply_filters, column_tasks
from .stats import BoardStats, compute_stats

logger = logging.getLogger(__name__)

EVENTS = ("projects_changed", "tasks_changed", "filters_changed", "selection_changed")


class BoardSession:
    """State container for one board view, backed by an ApiClient or MutationCoordinator."""

    def __init__(self, client):
        self.client = client
        self.projects: List[Dict[str, Any]] = []
        self.tasks: List[Dict[str, Any]] = []
        self.selected_project_id: Optional[str] = None
        self.search = ""
        self.priority_filter = ALL
        self.subscribers: Dict[str, list] = {}  # event -> list of callbacks

    # ---- observers ----
    def subscribe(self, event: str, callback: Callable) -> None:
        if event not in EVENTS:
            raise ValueError(f"Unknown event: {event}")
        self.subscribers.setdefault(event, []).append(callback)

    def _emit(self, event: str, **kwargs) -> None:
        for callback in self.subscribers.get(event, []):
            try:
                callback(self, **kwargs)
            except Exception:
                logger.exception(f"Error in {event} callback")

    # ---- derived views ----
    @property
    def current_project(self) -> Optional[Dict[str, Any]]:
        return next((p for p in self.projects if p["id"] == self.selected_project_id), None)

    @property
    def filtered_tasks(self) -> List[Dict[str, Any]]:
        return apply_filters(self.tasks, self.search, self.priority_filter)

    def column(self, status: str) -> List[Dict[str, Any]]:
        return column_tasks(self.filtered_tasks, status)

    @property
    def columns(self) -> Dict[str, List[Dict[str, Any]]]:
        filtered = self.filtered_tasks
        return {status: column_tasks(filtered, status) for status in COLUMNS}

    @property
    def stats(self) -> BoardStats:
        # always over the unfiltered project tasks
        return compute_stats(self.tasks)

    @property
    def progress(self) -> int:
        return self.stats.progress

    @staticmethod
    def due_status(task: Dict[str, Any]) -> Optional[DueDateStatus]:
        return classify(task.get("due_date"))

    # ---- loading ----
    def load_projects(self) -> Result:
        result = self.client.list_projects()
        if not result.ok:
            logger.error(f"Failed to load projects: {result.error.message}")
            return result
        self.projects = result.value
        self._emit("projects_changed")
        if not self.selected_project_id and self.projects:
            self.select_project(self.projects[0]["id"])
        return result

    def select_project(self, project_id: str) -> Result:
        self.selected_project_id = project_id
        self.search = ""
        self.priority_filter = ALL
        self._emit("selection_changed", project_id=project_id)
        self._emit("filters_changed")
        return self.load_tasks()

    def load_tasks(self) -> Result:
        """Fetch tasks for the selected project.

        A response for a project that is no longer selected is discarded and
        reported as success with value None.
        """
        requested = self.selected_project_id
        if not requested:
            return Result.success([])
        result = self.client.list_tasks(project_id=requested)
        if requested != self.selected_project_id:
            logger.debug(f"Discarding stale tasks for project {requested}")
            return Result.success(None)
        if not result.ok:
            logger.error(f"Failed to load tasks: {result.error.message}")
            return result
        self.tasks = result.value
        self._emit("tasks_changed")
        return result

    def _reload(self) -> None:
        self.load_tasks()
        self.load_projects()

    # ---- filters ----
    def set_search(self, query: str) -> None:
        self.search = query or ""
        self._emit("filters_changed")

    def set_priority_filter(self, priority: str) -> None:
        if priority != ALL and priority not in PRIORITIES:
            raise ValidationError(f"Invalid priority filter: {priority!r}")
        self.priority_filter = priority
        self._emit("filters_changed")

    # ---- mutations (wait for the server, then reload) ----
    def create_project(self, data: Dict[str, Any]) -> Result:
        result = self.client.create_project(data)
        if result.ok:
            self.load_projects()
            self.select_project(result.value["id"])
        return result

    def add_task(self, data: Dict[str, Any], status: str = TODO) -> Result:
        payload = {**data, "status": data.get("status") or status, "project_id": self.selected_project_id}
        result = self.client.create_task(payload)
        if result.ok:
            self._reload()
        return result

    def edit_task(self, task_id: str, data: Dict[str, Any]) -> Result:
        result = self.client.update_task(task_id, data)
        if result.ok:
            self._reload()
        return result

    def remove_task(self, task_id: str) -> Result:
        result = self.client.delete_task(task_id)
        if result.ok:
            self._reload()
        return result

    # ---- drag and drop ----
    def move_task(self, task_id: str, status: str, index: int) -> Result:
        """Drop a task into another column at `index`.

        The local status change is applied and published before the server
        call; on failure it is discarded by re-fetching the task list.
        """
        task = next((t for t in self.tasks if t["id"] == task_id), None)
        if task is None or task["status"] == status:
            return Result.success(task)

        self.tasks = [{**t, "status": status} if t["id"] == task_id else t for t in self.tasks]
        self._emit("tasks_changed")

        result = self.client.update_task(task_id, {"status": status, "order": index})
        if result.ok:
            self.load_projects()
        else:
            logger.warning(f"Move of task {task_id} failed, reverting: {result.error.message}")
            self.load_tasks()
        return result
