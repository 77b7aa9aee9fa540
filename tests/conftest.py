# tests/conftest.py

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path

import pytest

from taskcli.tasks.task_models import Task
from taskcli.tasks.task_store import TaskStore


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """
    Keep tests independent of the developer's environment.

    - no TASKCLI_* variables leak in
    - root logging handlers installed by the CLI are rolled back afterwards
    """
    for name in ("TASKCLI_DATA_FILE", "TASKCLI_DATA_DIR", "TASKCLI_LOG_LEVEL", "TASKCLI_LOG_FILE"):
        monkeypatch.delenv(name, raising=False)

    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    for h in list(root.handlers):
        if h not in handlers:
            root.removeHandler(h)
            h.close()
    for h in handlers:
        if h not in root.handlers:
            root.addHandler(h)
    root.setLevel(level)


@pytest.fixture()
def data_file(tmp_path: Path) -> Path:
    # Nested on purpose: saving must create missing parents.
    return tmp_path / "data" / "nested" / "tasks.json"


@pytest.fixture()
def store(data_file: Path) -> TaskStore:
    return TaskStore(data_file)


@pytest.fixture()
def sample_tasks() -> list[Task]:
    return [
        Task(id=1, description="a", completed=False),
        Task(id=2, description="b", completed=True),
    ]
