"""
Tests for the Flask JSON API: status mapping, bodies, query constraints.
"""
from unittest.mock import patch

from taskflow.constants import DONE, HIGH, IN_PROGRESS, TODO
from taskflow.errors import PersistenceError, Result


def create_project(client, **body):
    resp = client.post("/api/projects", json={"name": "Board", **body})
    assert resp.status_code == 201
    return resp.get_json()


def create_task(client, project_id, **body):
    resp = client.post("/api/tasks", json={"title": "Task", "project_id": project_id, **body})
    assert resp.status_code == 201, resp.get_json()
    return resp.get_json()


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Projects
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━


def test_create_and_list_projects(client):
    project = create_project(client, name="  Trimmed  ", description=" Notes ")
    assert project["name"] == "Trimmed"
    assert project["description"] == "Notes"

    resp = client.get("/api/projects")
    assert resp.status_code == 200
    listed = resp.get_json()
    assert len(listed) == 1
    assert listed[0]["id"] == project["id"]
    assert listed[0]["task_count"] == 0


def test_create_project_validation_is_400(client):
    resp = client.post("/api/projects", json={"name": "   "})
    assert resp.status_code == 400
    assert "error" in resp.get_json()


def test_non_json_body_is_400(client):
    resp = client.post("/api/projects", data="name=Board", content_type="text/plain")
    assert resp.status_code == 400


def test_project_not_found_is_404(client):
    assert client.get("/api/projects/nope").status_code == 404
    assert client.put("/api/projects/nope", json={"name": "X"}).status_code == 404


def test_update_and_delete_project(client):
    project = create_project(client)
    resp = client.put(f"/api/projects/{project['id']}", json={"color": "#EC4899"})
    assert resp.status_code == 200
    assert resp.get_json()["color"] == "#EC4899"
    assert resp.get_json()["name"] == "Board"

    resp = client.delete(f"/api/projects/{project['id']}")
    assert resp.status_code == 200
    assert resp.get_json() == {"success": True}
    assert client.delete(f"/api/projects/{project['id']}").status_code == 200


def test_project_detail_includes_tasks(client):
    project = create_project(client)
    create_task(client, project["id"], title="First")
    create_task(client, project["id"], title="Done one", status=DONE)
    detail = client.get(f"/api/projects/{project['id']}").get_json()
    assert {t["title"] for t in detail["tasks"]} == {"First", "Done one"}
    assert detail["done_count"] == 1


def test_project_stats(client):
    project = create_project(client)
    for i in range(10):
        create_task(client, project["id"], title=f"t{i}", status=DONE if i < 4 else TODO)
    stats = client.get(f"/api/projects/{project['id']}/stats").get_json()
    assert stats["total"] == 10
    assert stats["done"] == 4
    assert stats["progress"] == 40
    assert stats["by_status"][TODO] == 6

    empty = create_project(client, name="Empty")
    stats = client.get(f"/api/projects/{empty['id']}/stats").get_json()
    assert stats["total"] == 0
    assert stats["progress"] == 0

    assert client.get("/api/projects/nope/stats").status_code == 404


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Tasks
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━


def test_create_task_assigns_order(client):
    project = create_project(client)
    assert create_task(client, project["id"])["order"] == 0
    assert create_task(client, project["id"])["order"] == 1
    assert create_task(client, project["id"], status=IN_PROGRESS)["order"] == 0


def test_create_task_invalid_status_is_400(client):
    project = create_project(client)
    resp = client.post("/api/tasks", json={"title": "T", "project_id": project["id"], "status": "INVALID"})
    assert resp.status_code == 400
    assert "status" in resp.get_json()["error"]


def test_create_task_requires_title_and_project(client):
    assert client.post("/api/tasks", json={"title": "T"}).status_code == 400
    assert client.post("/api/tasks", json={"title": " ", "project_id": "p"}).status_code == 400


def test_create_task_non_string_project_id_is_400(client):
    project = create_project(client)
    resp = client.post("/api/tasks", json={"title": "T", "project_id": [project["id"]]})
    assert resp.status_code == 400
    assert "project_id" in resp.get_json()["error"]


def test_list_tasks_query_constraints(client):
    project = create_project(client)
    create_task(client, project["id"], title="Fix bug", priority=HIGH)
    create_task(client, project["id"], title="Write docs")
    create_task(client, project["id"], title="Ship", status=DONE)

    def titles(query):
        resp = client.get(f"/api/tasks?{query}")
        assert resp.status_code == 200
        return [t["title"] for t in resp.get_json()]

    assert len(titles(f"project_id={project['id']}")) == 3
    assert titles(f"project_id={project['id']}&priority=HIGH") == ["Fix bug"]
    assert titles(f"project_id={project['id']}&status=DONE") == ["Ship"]
    assert titles("search=DOCS") == ["Write docs"]
    assert client.get("/api/tasks?status=BOGUS").status_code == 400


def test_update_task_partial_and_clear(client):
    project = create_project(client)
    task = create_task(client, project["id"], description="Keep", due_date="2026-02-09")

    resp = client.put(f"/api/tasks/{task['id']}", json={"priority": HIGH})
    assert resp.get_json()["description"] == "Keep"
    assert resp.get_json()["due_date"] == "2026-02-09"

    resp = client.patch(f"/api/tasks/{task['id']}", json={"description": "", "due_date": None})
    body = resp.get_json()
    assert body["description"] is None
    assert body["due_date"] is None
    assert body["priority"] == HIGH


def test_drag_update_moves_column(client):
    project = create_project(client)
    task = create_task(client, project["id"])
    resp = client.put(f"/api/tasks/{task['id']}", json={"status": DONE, "order": 3})
    assert resp.status_code == 200
    assert resp.get_json()["status"] == DONE
    assert resp.get_json()["order"] == 3


def test_task_not_found(client):
    assert client.get("/api/tasks/nope").status_code == 404
    assert client.put("/api/tasks/nope", json={"title": "x"}).status_code == 404


def test_delete_task(client):
    project = create_project(client)
    task = create_task(client, project["id"])
    assert client.delete(f"/api/tasks/{task['id']}").get_json() == {"success": True}
    assert client.get(f"/api/tasks/{task['id']}").status_code == 404


def test_persistence_failure_is_500(app, client):
    failing = Result.failure(PersistenceError("Failed to list project"))
    with patch.object(app.extensions["taskflow.coordinator"], "list_projects", return_value=failing):
        resp = client.get("/api/projects")
    assert resp.status_code == 500
    assert resp.get_json() == {"error": "Failed to list project"}


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.get_json() == {"status": "ok"}
