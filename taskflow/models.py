from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Dict

from flask_sqlalchemy import SQLAlchemy

from .constants import DEFAULT_PRIORITY, DEFAULT_PROJECT_COLOR, DEFAULT_STATUS, PRIO_MAP, STATUS_MAP

db = SQLAlchemy()


def new_id() -> str:
    return uuid.uuid4().hex


def utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


# ORM models
# ────────────────────────────────────────────────────────────────────────────────
class Project(db.Model):
    id = db.Column(db.String(32), primary_key=True, default=new_id)
    name = db.Column(db.String(128), nullable=False)
    description = db.Column(db.Text, nullable=True)
    color = db.Column(db.String(7), nullable=False, default=DEFAULT_PROJECT_COLOR)  # Hex color
    created_at = db.Column(db.DateTime, default=utcnow)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow)
    tasks = db.relationship("Task", backref="project", cascade="all, delete-orphan", order_by="Task.order")

    def to_dict(self) -> Dict:
        return project_to_dict(self)


class Task(db.Model):
    id = db.Column(db.String(32), primary_key=True, default=new_id)
    title = db.Column(db.String(256), nullable=False)
    description = db.Column(db.Text, nullable=True)
    status = db.Column(db.String(16), nullable=False, default=DEFAULT_STATUS, index=True)
    priority = db.Column(db.String(8), nullable=False, default=DEFAULT_PRIORITY)
    due_date = db.Column(db.Date)
    order = db.Column(db.Integer, nullable=False, default=0)
    project_id = db.Column(db.String(32), db.ForeignKey("project.id"), nullable=False, index=True)
    created_at = db.Column(db.DateTime, default=utcnow)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow)

    def to_dict(self) -> Dict:
        return task_to_dict(self)


# Serializers
# ────────────────────────────────────────────────────────────────────────────────
def project_to_dict(project: Project) -> Dict:
    return {
        "id": project.id,
        "name": project.name,
        "description": project.description,
        "color": project.color,
        "created_at": project.created_at.isoformat() if project.created_at else None,
        "updated_at": project.updated_at.isoformat() if project.updated_at else None,
    }


def task_to_dict(task: Task) -> Dict:
    return {
        "id": task.id, "title": task.title, "description": task.description,
        "status": task.status, "status_name": STATUS_MAP.get(task.status, "N/A"),
        "priority": task.priority, "priority_name": PRIO_MAP.get(task.priority, "N/A"),
        "due_date": task.due_date.isoformat() if task.due_date else None,
        "order": task.order, "project_id": task.project_id,
        "project": {"name": task.project.name, "color": task.project.color} if task.project else None,
        "created_at": task.created_at.isoformat() if task.created_at else None,
        "updated_at": task.updated_at.isoformat() if task.updated_at else None,
    }
