"""
============================================================
TARJETA CRC - infrastructure/repositories/in_memory/task.py
============================================================
Class: InMemoryTaskRepository

Responsibilities:
  - Almacenar tareas en memoria (tests / APP_ENV=test|ci).
  - Filtrar por TaskFilter y por ventana de last_updated (reportes).
  - Ordering determinístico alineado con Postgres:
      ORDER BY last_updated DESC NULLS LAST, id ASC

Collaborators:
  - domain.entities.Task
  - domain.value_objects.TaskFilter
  - domain.repositories.TaskRepository

Constraints / Notes:
  - Thread-safe: acceso protegido por Lock.
  - Last-write-wins: update_task reemplaza la tarea completa.
============================================================
"""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timezone
from threading import Lock
from typing import Dict, Iterable, List, Optional
from uuid import UUID

from ....domain.entities import Task
from ....domain.repositories import TaskRepository
from ....domain.value_objects import TaskFilter

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


class InMemoryTaskRepository(TaskRepository):
    """Repositorio in-memory, thread-safe, para tareas."""

    def __init__(self) -> None:
        self._lock = Lock()
        self._tasks: Dict[UUID, Task] = {}

    @staticmethod
    def _sorted(items: Iterable[Task]) -> List[Task]:
        """R: last_updated DESC (None al final), luego id para estabilidad."""
        items = list(items)
        items.sort(key=lambda t: str(t.id))
        items.sort(key=lambda t: t.last_updated or _EPOCH, reverse=True)
        return items

    def _snapshot(self) -> List[Task]:
        with self._lock:
            return [replace(t) for t in self._tasks.values()]

    def get_task(self, task_id: UUID) -> Optional[Task]:
        with self._lock:
            task = self._tasks.get(task_id)
            return replace(task) if task else None

    def list_tasks(self, task_filter: TaskFilter | None = None) -> List[Task]:
        task_filter = task_filter or TaskFilter()
        return self._sorted(t for t in self._snapshot() if task_filter.matches(t))

    def list_tasks_updated_since(self, since: datetime) -> List[Task]:
        return self._sorted(
            t
            for t in self._snapshot()
            if t.last_updated is not None and t.last_updated >= since
        )

    def create_task(self, task: Task) -> Task:
        with self._lock:
            self._tasks[task.id] = replace(task)
            return replace(task)

    def update_task(self, task: Task) -> Optional[Task]:
        with self._lock:
            if task.id not in self._tasks:
                return None
            self._tasks[task.id] = replace(task)
            return replace(task)

    def delete_task(self, task_id: UUID) -> bool:
        with self._lock:
            return self._tasks.pop(task_id, None) is not None
