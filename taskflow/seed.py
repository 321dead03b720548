"""Demo data for a fresh board."""
from __future__ import annotations

import logging

import click

from .constants import DONE, HIGH, IN_PROGRESS, LOW, MEDIUM, TODO
from .errors import TaskflowError

logger = logging.getLogger(__name__)

DEMO_PROJECTS = [
    {
        "name": "TaskFlow MVP",
        "description": "Build the project management app",
        "color": "#6366F1",
        "tasks": [
            ("Write the PRD", "Finish the product requirements document", DONE, HIGH, "2026-02-07"),
            ("Define the design system", "Colors, typography, component guide", DONE, HIGH, "2026-02-08"),
            ("Wireframes", "Wireframes for the main screens", IN_PROGRESS, HIGH, "2026-02-08"),
            ("Design the DB schema", "Model definitions", TODO, HIGH, "2026-02-09"),
            ("Implement API routes", "CRUD endpoints", TODO, MEDIUM, "2026-02-10"),
            ("Kanban board", "Drag and drop between columns", TODO, MEDIUM, "2026-02-12"),
            ("Deploy", "Production deployment", TODO, LOW, "2026-02-14"),
        ],
    },
    {
        "name": "Blog redesign",
        "description": "Redesign the personal blog",
        "color": "#EC4899",
        "tasks": [
            ("Main page design", "Hero section, portfolio", IN_PROGRESS, MEDIUM, "2026-02-15"),
            ("Content migration", "Move the existing posts", TODO, LOW, "2026-02-20"),
        ],
    },
    {
        "name": "Reading challenge",
        "description": "2026 reading goals",
        "color": "#10B981",
        "tasks": [
            ("Pick February reading list", "Three books for this month", DONE, MEDIUM, "2026-02-05"),
            ("Write a book report", "Report on the first book", IN_PROGRESS, LOW, "2026-02-28"),
        ],
    },
]


def _unwrap(result):
    if not result.ok:
        raise result.error
    return result.value


def seed_demo_data(coordinator, reset: bool = False) -> int:
    """Load the demo projects. Returns the number of tasks created.

    Without reset, seeding is skipped when any project already exists.
    """
    existing = _unwrap(coordinator.list_projects())
    if existing and not reset:
        logger.info(f"{len(existing)} project(s) found, skipping seed.")
        return 0
    for project in existing:
        _unwrap(coordinator.delete_project(project["id"]))

    created = 0
    for entry in DEMO_PROJECTS:
        project = _unwrap(coordinator.create_project(
            {"name": entry["name"], "description": entry["description"], "color": entry["color"]}
        ))
        for title, description, status, priority, due_date in entry["tasks"]:
            _unwrap(coordinator.create_task({
                "title": title, "description": description, "status": status,
                "priority": priority, "due_date": due_date, "project_id": project["id"],
            }))
            created += 1
    logger.info(f"Seeded {len(DEMO_PROJECTS)} projects with {created} tasks.")
    return created


def register_cli(app) -> None:

    @app.cli.command("seed")
    @click.option("--reset", is_flag=True, help="Delete existing projects first.")
    def seed_command(reset):
        """Load demo projects and tasks."""
        from .app import coordinator
        try:
            created = seed_demo_data(coordinator(), reset=reset)
        except TaskflowError as e:
            raise click.ClickException(e.message) from e
        click.echo(f"Seed complete: {created} task(s) created.")
