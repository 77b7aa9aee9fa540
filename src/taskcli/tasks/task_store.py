# src/taskcli/tasks/task_store.py

from __future__ import annotations

import contextlib
import json
import logging
import os
import stat
import tempfile
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from .task_errors import ParseError, ReadError, WriteError
from .task_models import TASK_FIELDS, Task

logger = logging.getLogger(__name__)


class _SchemaError(ValueError):
    """Raised while decoding when the JSON is valid but not a task sequence."""


def _reject_duplicate_keys(pairs: list[tuple[str, Any]]) -> dict[str, Any]:
    obj: dict[str, Any] = {}
    for key, value in pairs:
        if key in obj:
            raise _SchemaError(f"duplicate field {key!r}")
        obj[key] = value
    return obj


def _task_from_obj(obj: Any, index: int) -> Task:
    where = f"task #{index}"
    if not isinstance(obj, dict):
        raise _SchemaError(f"{where} is not an object")

    missing = [name for name in TASK_FIELDS if name not in obj]
    if missing:
        raise _SchemaError(f"{where} is missing field(s): {', '.join(missing)}")
    unknown = sorted(set(obj) - set(TASK_FIELDS))
    if unknown:
        raise _SchemaError(f"{where} has unknown field(s): {', '.join(unknown)}")

    task_id = obj["id"]
    # bool is an int subclass in Python; reject it explicitly.
    if isinstance(task_id, bool) or not isinstance(task_id, int) or task_id < 0:
        raise _SchemaError(f"{where} has an invalid id {task_id!r}")
    if not isinstance(obj["description"], str):
        raise _SchemaError(f"{where} has a non-string description")
    if not isinstance(obj["completed"], bool):
        raise _SchemaError(f"{where} has a non-boolean completed flag")

    return Task(id=task_id, description=obj["description"], completed=obj["completed"])


def decode_tasks(text: str) -> list[Task]:
    """
    Decode a JSON document into tasks.

    Field order and whitespace are irrelevant. Cross-record invariants
    (unique ids, non-blank descriptions) are NOT checked here: stored state is
    trusted as-is and only new writes are validated.
    """
    data = json.loads(text, object_pairs_hook=_reject_duplicate_keys)
    if not isinstance(data, list):
        raise _SchemaError("top-level value is not a list")
    return [_task_from_obj(obj, i) for i, obj in enumerate(data, start=1)]


def encode_tasks(tasks: Sequence[Task]) -> str:
    return json.dumps([t.to_dict() for t in tasks], ensure_ascii=False, indent=2) + "\n"


def _fsync_dir(directory: Path) -> None:
    """Best-effort: persist the rename itself (POSIX only)."""
    flags = getattr(os, "O_DIRECTORY", None)
    if flags is None:
        return
    with contextlib.suppress(OSError):
        fd = os.open(directory, os.O_RDONLY | flags)
        try:
            os.fsync(fd)
        finally:
            os.close(fd)


def _file_mode(path: Path) -> int:
    """Mode for the replacement file: keep the target's, else the umask default."""
    try:
        return stat.S_IMODE(os.stat(path).st_mode)
    except OSError:
        pass
    # os.umask can only be read by setting it.
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


class TaskStore:
    """
    JSON file task store.

    Every save rewrites the whole sequence:
    - encode everything up front
    - write to a uniquely named temp file in the target's directory
    - flush + fsync the temp file
    - os.replace() it over the target (atomic on the same filesystem)

    The target is never opened for writing, so a reader sees either the old
    file or the new one. There is no cross-process lock: two invocations
    that load, mutate and save concurrently race, and the last save wins.
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> list[Task]:
        """
        Return the stored tasks in file order.

        A missing file or one with blank content is an empty store, not an error.
        """
        path = self._path
        try:
            raw = path.read_bytes()
        except FileNotFoundError:
            logger.debug("No tasks file at %s; starting with an empty list", path)
            return []
        except OSError as exc:
            raise ReadError(path, exc.strerror or str(exc)) from exc

        try:
            text = raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise ParseError(path, "content is not valid UTF-8") from exc

        if not text.strip():
            logger.debug("Tasks file %s is blank; starting with an empty list", path)
            return []

        try:
            tasks = decode_tasks(text)
        except json.JSONDecodeError as exc:
            raise ParseError(
                path, f"invalid JSON ({exc.msg} at line {exc.lineno} column {exc.colno})"
            ) from exc
        except _SchemaError as exc:
            raise ParseError(path, str(exc)) from exc
        except RecursionError as exc:
            raise ParseError(path, "content is nested too deeply") from exc

        logger.debug("Loaded %d task(s) from %s", len(tasks), path)
        return tasks

    def save(self, tasks: Sequence[Task]) -> None:
        """Atomically replace the tasks file with `tasks`."""
        path = self._path
        parent = path.parent

        try:
            parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise WriteError(
                path, f"cannot create directory {parent} ({exc.strerror or exc})"
            ) from exc

        # Encode up front: an unencodable description must fail before any temp file exists.
        try:
            payload = encode_tasks(tasks).encode("utf-8")
        except UnicodeEncodeError as exc:
            raise WriteError(path, f"cannot encode tasks as UTF-8 ({exc.reason})") from exc

        mode = _file_mode(path)

        try:
            fd, tmp_name = tempfile.mkstemp(dir=parent, prefix=f".{path.name}.", suffix=".tmp")
        except OSError as exc:
            raise WriteError(
                path, f"cannot create temporary file in {parent} ({exc.strerror or exc})"
            ) from exc

        tmp_path = Path(tmp_name)
        step = "write"
        try:
            with os.fdopen(fd, "wb") as fh:
                fh.write(payload)
                fh.flush()
                step = "flush"
                os.fsync(fh.fileno())
            step = "set permissions on"
            os.chmod(tmp_path, mode)
            step = "replace"
            os.replace(tmp_path, path)
        except BaseException as exc:
            with contextlib.suppress(OSError):
                tmp_path.unlink()
            if not isinstance(exc, OSError):
                raise
            if step == "replace":
                reason = f"cannot replace it with {tmp_path} ({exc.strerror or exc})"
            else:
                reason = f"cannot {step} temporary file {tmp_path} ({exc.strerror or exc})"
            raise WriteError(path, reason) from exc

        _fsync_dir(parent)
        logger.debug("Saved %d task(s) to %s", len(tasks), path)
