from __future__ import annotations

import logging
from typing import Any, Dict

from flask import Flask, current_app, jsonify, request

from . import config
from .coordinator import MutationCoordinator
from .errors import Result
from .models import db
from .stats import board_metrics

EXTENSION_KEY = "taskflow.coordinator"


def create_app(test_config: Dict[str, Any] | None = None) -> Flask:
    app = Flask(__name__)
    app.config.update(
        SQLALCHEMY_DATABASE_URI=config.DB_URI,
        SQLALCHEMY_TRACK_MODIFICATIONS=False,
        SQLALCHEMY_ECHO=False,  # Set to True for verbose SQL
        LOG_LEVEL=config.LOG_LEVEL,
    )
    if test_config:
        app.config.update(test_config)

    logging.basicConfig(level=app.config["LOG_LEVEL"])
    app.logger.setLevel(app.config["LOG_LEVEL"])

    db.init_app(app)
    with app.app_context():
        db.create_all()
        app.logger.info("db.create_all() completed.")

    app.extensions[EXTENSION_KEY] = MutationCoordinator()
    register_routes(app)

    from .seed import register_cli
    register_cli(app)
    return app


def coordinator() -> MutationCoordinator:
    return current_app.extensions[EXTENSION_KEY]


def respond(result: Result, status: int = 200):
    if result.ok:
        return jsonify(result.value), status
    error = result.error
    if error.status_code >= 500:
        current_app.logger.error(f"{request.method} {request.path} failed: {error.message}")
    else:
        current_app.logger.warning(f"{request.method} {request.path} -> {error.status_code}: {error.message}")
    return jsonify(error.to_dict()), error.status_code


def deleted(result: Result):
    if result.ok:
        return jsonify({"success": True})
    return respond(result)


def request_data():
    return request.get_json(silent=True)


# API routes
# ────────────────────────────────────────────────────────────────────────────────
def register_routes(app: Flask) -> None:

    @app.get("/api/projects")
    def api_projects():
        app.logger.debug("GET /api/projects called")
        return respond(coordinator().list_projects())

    @app.post("/api/projects")
    def api_create_project():
        data = request_data()
        app.logger.debug(f"POST /api/projects called with data: {data}")
        return respond(coordinator().create_project(data), 201)

    @app.get("/api/projects/<project_id>")
    def api_project(project_id):
        app.logger.debug(f"GET /api/projects/{project_id} called")
        return respond(coordinator().get_project(project_id))

    @app.put("/api/projects/<project_id>")
    @app.patch("/api/projects/<project_id>")
    def api_update_project(project_id):
        data = request_data()
        app.logger.debug(f"{request.method} /api/projects/{project_id} called with data: {data}")
        return respond(coordinator().update_project(project_id, data))

    @app.delete("/api/projects/<project_id>")
    def api_delete_project(project_id):
        app.logger.debug(f"DELETE /api/projects/{project_id} called")
        return deleted(coordinator().delete_project(project_id))

    @app.get("/api/projects/<project_id>/stats")
    def api_project_stats(project_id):
        app.logger.debug(f"GET /api/projects/{project_id}/stats called")
        result = coordinator().get_project(project_id)
        if not result.ok:
            return respond(result)
        return jsonify({"project_id": project_id, **board_metrics(result.value["tasks"])})

    @app.get("/api/tasks")
    def api_tasks():
        args = request.args
        app.logger.debug(f"GET /api/tasks called with {dict(args)}")
        return respond(coordinator().list_tasks(
            project_id=args.get("project_id"),
            status=args.get("status"),
            priority=args.get("priority"),
            search=args.get("search"),
        ))

    @app.post("/api/tasks")
    def api_create_task():
        data = request_data()
        app.logger.debug(f"POST /api/tasks called with data: {data}")
        return respond(coordinator().create_task(data), 201)

    @app.get("/api/tasks/<task_id>")
    def api_task(task_id):
        app.logger.debug(f"GET /api/tasks/{task_id} called")
        return respond(coordinator().get_task(task_id))

    @app.put("/api/tasks/<task_id>")
    @app.patch("/api/tasks/<task_id>")
    def api_update_task(task_id):
        data = request_data()
        app.logger.debug(f"{request.method} /api/tasks/{task_id} called with data: {data}")
        return respond(coordinator().update_task(task_id, data))

    @app.delete("/api/tasks/<task_id>")
    def api_delete_task(task_id):
        app.logger.debug(f"DELETE /api/tasks/{task_id} called")
        return deleted(coordinator().delete_task(task_id))

    @app.get("/health")
    def health():
        return jsonify({"status": "ok"})
