"""
Mutation coordinator: validates and normalizes incoming payloads, assigns
column order, and talks to the record stores.

Every public method returns a Result. Validation runs before any store call,
so a rejected payload never touches persistence.
"""
from __future__ import annotations

import logging
from collections import defaultdict
from functools import wraps
from typing import Any, Dict, Optional

from .constants import ALL, DEFAULT_PRIORITY, DEFAULT_PROJECT_COLOR, DEFAULT_STATUS, PRIORITIES, STATUSES
from .due_dates import to_local_date
from .errors import NotFoundError, Result, TaskflowError, ValidationError
from .ordering import TASK_ORDER_BY, order_for_new_task
from .stats import project_counts

logger = logging.getLogger(__name__)


def returns_result(op: str):
    """Run the wrapped call and fold taxonomy errors into a failed Result."""
    def decorator(f):
        @wraps(f)
        def wrapper(*args, **kwargs) -> Result:
            try:
                return Result.success(f(*args, **kwargs))
            except ValidationError as e:
                logger.info(f"{op} rejected: {e.message}")
                return Result.failure(e)
            except TaskflowError as e:
                logger.warning(f"{op} failed: {e.message}")
                return Result.failure(e)
        return wrapper
    return decorator


# Normalization helpers
# ────────────────────────────────────────────────────────────────────────────────
def _require_mapping(data) -> Dict[str, Any]:
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def _text(value, field: str) -> str:
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValidationError(f"{field} must be a string")
    return value.strip()


def _optional_text(value, field: str) -> Optional[str]:
    return _text(value, field) or None


def _check_enum(value, allowed, field: str) -> str:
    if value not in allowed:
        raise ValidationError(f"Invalid {field} value: {value!r} (expected one of {', '.join(allowed)})")
    return value


def _check_color(value) -> str:
    if not isinstance(value, str) or not value.startswith("#") or len(value) != 7:
        raise ValidationError("Color must be in hex format (#RRGGBB)")
    try:
        int(value[1:], 16)
    except ValueError:
        raise ValidationError("Color must be in hex format (#RRGGBB)") from None
    return value


def _check_order(value) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError("order must be an integer")
    return value


def _project_name(value) -> str:
    name = _text(value, "name")
    if not name:
        raise ValidationError("Project name is required")
    return name


def normalize_new_project(data) -> Dict[str, Any]:
    data = _require_mapping(data)
    color = data.get("color")
    return {
        "name": _project_name(data.get("name")),
        "description": _optional_text(data.get("description"), "description"),
        "color": _check_color(color) if color else DEFAULT_PROJECT_COLOR,
    }


def normalize_project_changes(data) -> Dict[str, Any]:
    data = _require_mapping(data)
    changes: Dict[str, Any] = {}
    if "name" in data:
        changes["name"] = _project_name(data["name"])
    if "description" in data:
        changes["description"] = _optional_text(data["description"], "description")
    if "color" in data:
        changes["color"] = _check_color(data["color"]) if data["color"] else DEFAULT_PROJECT_COLOR
    return changes


def normalize_new_task(data) -> Dict[str, Any]:
    data = _require_mapping(data)
    title = _text(data.get("title"), "title")
    project_id = _text(data.get("project_id"), "project_id")
    if not title or not project_id:
        raise ValidationError("Title and project_id required")
    status = data.get("status") or DEFAULT_STATUS
    priority = data.get("priority") or DEFAULT_PRIORITY
    return {
        "title": title,
        "description": _optional_text(data.get("description"), "description"),
        "status": _check_enum(status, STATUSES, "status"),
        "priority": _check_enum(priority, PRIORITIES, "priority"),
        "due_date": to_local_date(data.get("due_date")),
        "project_id": project_id,
    }


def normalize_task_changes(data) -> Dict[str, Any]:
    """Only keys present in the payload make it into the change set.

    An explicit empty description or due_date clears the field; an omitted
    key leaves it alone. Titles are trimmed but an empty title is accepted
    here (creation is the only place that rejects it). project_id is immutable.
    """
    data = _require_mapping(data)
    changes: Dict[str, Any] = {}
    if "title" in data:
        changes["title"] = _text(data["title"], "title")
    if "description" in data:
        changes["description"] = _optional_text(data["description"], "description")
    if "status" in data:
        changes["status"] = _check_enum(data["status"], STATUSES, "status")
    if "priority" in data:
        changes["priority"] = _check_enum(data["priority"], PRIORITIES, "priority")
    if "order" in data:
        changes["order"] = _check_order(data["order"])
    if "due_date" in data:
        changes["due_date"] = to_local_date(data["due_date"])
    return changes


# Coordinator
# ────────────────────────────────────────────────────────────────────────────────
class MutationCoordinator:
    """Project and task operations on top of two record stores."""

    def __init__(self, projects=None, tasks=None):
        if projects is None or tasks is None:
            from .models import Project, Task
            from .store import RecordStore
            projects = projects or RecordStore(Project)
            tasks = tasks or RecordStore(Task)
        self.projects = projects
        self.tasks = tasks

    def _require_project(self, project_id: str) -> Dict:
        project = self.projects.get(project_id)
        if project is None:
            raise NotFoundError(f"Project {project_id} not found")
        return project

    def _require_task(self, task_id: str) -> Dict:
        task = self.tasks.get(task_id)
        if task is None:
            raise NotFoundError(f"Task {task_id} not found")
        return task

    # ---- projects ----
    @returns_result("list projects")
    def list_projects(self):
        projects = self.projects.list(order_by=[("created_at", "asc")])
        by_project = defaultdict(list)
        for t in self.tasks.list():
            by_project[t["project_id"]].append(t)
        return [{**p, **project_counts(by_project[p["id"]])} for p in projects]

    @returns_result("get project")
    def get_project(self, project_id: str):
        project = self._require_project(project_id)
        tasks = self.tasks.list({"project_id": project_id}, TASK_ORDER_BY)
        return {**project, **project_counts(tasks), "tasks": tasks}

    @returns_result("create project")
    def create_project(self, data):
        project = self.projects.create(normalize_new_project(data))
        logger.info(f"Project '{project['name']}' created with id {project['id']}")
        return {**project, **project_counts([])}

    @returns_result("update project")
    def update_project(self, project_id: str, data):
        changes = normalize_project_changes(data)
        if not changes:
            return self._require_project(project_id)
        return self.projects.update(project_id, changes)

    @returns_result("delete project")
    def delete_project(self, project_id: str):
        if self.projects.delete(project_id):
            logger.info(f"Project {project_id} deleted")
        return None

    # ---- tasks ----
    @returns_result("list tasks")
    def list_tasks(self, project_id: Optional[str] = None, status: Optional[str] = None,
                   priority: Optional[str] = None, search: Optional[str] = None):
        filters: Dict[str, Any] = {}
        if project_id:
            filters["project_id"] = project_id
        if status:
            filters["status"] = _check_enum(status, STATUSES, "status")
        if priority and priority != ALL:
            filters["priority"] = _check_enum(priority, PRIORITIES, "priority")
        if search:
            filters["title__contains"] = search
        return self.tasks.list(filters, TASK_ORDER_BY)

    @returns_result("get task")
    def get_task(self, task_id: str):
        return self._require_task(task_id)

    @returns_result("create task")
    def create_task(self, data):
        fields = normalize_new_task(data)
        if self.projects.get(fields["project_id"]) is None:
            raise ValidationError(f"Project {fields['project_id']} does not exist")
        fields["order"] = order_for_new_task(self.tasks, fields["project_id"], fields["status"])
        task = self.tasks.create(fields)
        logger.info(f"Task '{task['title']}' created with id {task['id']} at {task['status']}/{task['order']}")
        return task

    @returns_result("update task")
    def update_task(self, task_id: str, data):
        changes = normalize_task_changes(data)
        if not changes:
            return self._require_task(task_id)
        return self.tasks.update(task_id, changes)

    def move_task(self, task_id: str, status: str, order: int) -> Result:
        """Drag a task to another column at the given position."""
        return self.update_task(task_id, {"status": status, "order": order})

    @returns_result("delete task")
    def delete_task(self, task_id: str):
        if self.tasks.delete(task_id):
            logger.info(f"Task {task_id} deleted")
        return None
