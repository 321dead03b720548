"""Tests for the requests-based API client, with the HTTP session mocked out."""
from unittest.mock import MagicMock

import pytest
import requests

from taskflow.client import ApiClient
from taskflow.errors import NotFoundError, PersistenceError, ValidationError


def response(status_code, body=None, text=""):
    r = MagicMock()
    r.status_code = status_code
    r.ok = 200 <= status_code < 400
    r.text = text
    r.reason = "reason"
    if body is None:
        r.json.side_effect = ValueError("no json")
    else:
        r.json.return_value = body
    return r


@pytest.fixture
def api():
    client = ApiClient("http://taskflow.test/", timeout=3)
    client.session = MagicMock()
    return client


def test_success_returns_body(api):
    api.session.request.return_value = response(200, [{"id": "p1"}])
    result = api.list_projects()
    assert result.ok
    assert result.value == [{"id": "p1"}]
    api.session.request.assert_called_once_with("GET", "http://taskflow.test/api/projects", timeout=3)


def test_list_tasks_drops_empty_params(api):
    api.session.request.return_value = response(200, [])
    api.list_tasks(project_id="p1", search="")
    _, kwargs = api.session.request.call_args
    assert kwargs["params"] == {"project_id": "p1"}


def test_move_task_patches_status_and_order(api):
    api.session.request.return_value = response(200, {"id": "t1", "status": "DONE", "order": 2})
    result = api.move_task("t1", "DONE", 2)
    assert result.value["order"] == 2
    args, kwargs = api.session.request.call_args
    assert args == ("PATCH", "http://taskflow.test/api/tasks/t1")
    assert kwargs["json"] == {"status": "DONE", "order": 2}


@pytest.mark.parametrize("status_code,error_type", [
    (400, ValidationError),
    (422, ValidationError),
    (404, NotFoundError),
    (500, PersistenceError),
    (503, PersistenceError),
])
def test_error_status_mapping(api, status_code, error_type):
    api.session.request.return_value = response(status_code, {"error": "boom"})
    result = api.create_task({"title": ""})
    assert not result.ok
    assert isinstance(result.error, error_type)
    assert result.error.message == "boom"


def test_error_without_json_body(api):
    api.session.request.return_value = response(502, text="Bad Gateway")
    result = api.get_task("t1")
    assert isinstance(result.error, PersistenceError)
    assert result.error.message == "Bad Gateway"


def test_transport_exception_is_persistence_error(api):
    api.session.request.side_effect = requests.ConnectionError("refused")
    result = api.update_task("t1", {"status": "DONE"})
    assert isinstance(result.error, PersistenceError)


def test_delete_returns_empty_success(api):
    api.session.request.return_value = response(200, {"success": True})
    result = api.delete_project("p1")
    assert result.ok
    assert result.value is None
