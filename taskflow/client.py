"""HTTP client for the TaskFlow JSON API.

Exposes the same operations as MutationCoordinator, each returning a Result,
so a BoardSession can run against a remote server or in-process.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import requests

from . import config
from .errors import PersistenceError, Result, error_for_status

logger = logging.getLogger(__name__)


class ApiClient:
    def __init__(self, base_url: str = config.API_URL, timeout: float = config.REQUEST_TIMEOUT):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = requests.Session()

    def _request(self, method: str, path: str, **kwargs) -> Result:
        url = f"{self.base_url}/api{path}"
        try:
            r = self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            logger.error(f"{method} {url} failed: {e}")
            return Result.failure(PersistenceError(f"Request failed: {e}"))
        if r.ok:
            return Result.success(r.json())
        try:
            message = r.json().get("error") or r.text
        except ValueError:
            message = r.text or r.reason
        logger.warning(f"{method} {url} -> {r.status_code}: {message}")
        return Result.failure(error_for_status(r.status_code, message))

    # ---------- projects ----------
    def list_projects(self) -> Result:
        return self._request("GET", "/projects")

    def get_project(self, project_id: str) -> Result:
        return self._request("GET", f"/projects/{project_id}")

    def create_project(self, data: Dict[str, Any]) -> Result:
        return self._request("POST", "/projects", json=data)

    def update_project(self, project_id: str, data: Dict[str, Any]) -> Result:
        return self._request("PATCH", f"/projects/{project_id}", json=data)

    def delete_project(self, project_id: str) -> Result:
        result = self._request("DELETE", f"/projects/{project_id}")
        return Result.success(None) if result.ok else result

    # ---------- tasks ----------
    def list_tasks(self, project_id: Optional[str] = None, status: Optional[str] = None,
                   priority: Optional[str] = None, search: Optional[str] = None) -> Result:
        params = {"project_id": project_id, "status": status, "priority": priority, "search": search}
        return self._request("GET", "/tasks", params={k: v for k, v in params.items() if v})

    def get_task(self, task_id: str) -> Result:
        return self._request("GET", f"/tasks/{task_id}")

    def create_task(self, data: Dict[str, Any]) -> Result:
        return self._request("POST", "/tasks", json=data)

    def update_task(self, task_id: str, data: Dict[str, Any]) -> Result:
        return self._request("PATCH", f"/tasks/{task_id}", json=data)

    def move_task(self, task_id: str, status: str, order: int) -> Result:
        return self.update_task(task_id, {"status": status, "order": order})

    def delete_task(self, task_id: str) -> Result:
        result = self._request("DELETE", f"/tasks/{task_id}")
        return Result.success(None) if result.ok else result
