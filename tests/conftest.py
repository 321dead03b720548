"""Shared fixtures: an app on a throwaway SQLite file, its client and coordinator."""

import pytest

from taskflow.app import coordinator as current_coordinator
from taskflow.app import create_app


@pytest.fixture
def app(tmp_path):
    app = create_app({
        "TESTING": True,
        "SQLALCHEMY_DATABASE_URI": f"sqlite:///{tmp_path / 'taskflow_test.db'}",
        "LOG_LEVEL": "DEBUG",
    })
    yield app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def app_ctx(app):
    with app.app_context():
        yield app


@pytest.fixture
def coordinator(app_ctx):
    return current_coordinator()


@pytest.fixture
def project(coordinator):
    result = coordinator.create_project({"name": "Board", "color": "#10B981"})
    assert result.ok
    return result.value
