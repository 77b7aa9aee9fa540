# src/taskcli/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

# Serialized field order.
TASK_FIELDS: tuple[str, ...] = ("id", "description", "completed")


@dataclass(slots=True)
class Task:
    """
    A single tracked item.

    Only `completed` changes after creation; `id` is never reassigned.
    """

    id: int
    description: str
    completed: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "description": self.description,
            "completed": self.completed,
        }
