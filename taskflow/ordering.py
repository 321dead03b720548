"""
Column ordering.

`order` only has meaning inside one (project_id, status) partition. New tasks
go to the end of their partition; a drag stores whatever order the caller
supplies and never renumbers siblings, so gaps and duplicates are allowed.
Readers sort by order ascending, then by creation time descending.
"""
from __future__ import annotations

from typing import Optional


def next_order(partition_max: Optional[int]) -> int:
    return 0 if partition_max is None else partition_max + 1


def order_for_new_task(task_store, project_id: str, status: str) -> int:
    partition_max = task_store.max_of("order", {"project_id": project_id, "status": status})
    return next_order(partition_max)


# (field, direction) pairs for reading a partition in board order
TASK_ORDER_BY = [("order", "asc"), ("created_at", "desc")]
