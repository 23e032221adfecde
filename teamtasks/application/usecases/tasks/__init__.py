"""
===============================================================================
TASK USE CASES PACKAGE (Public API / Exports)
===============================================================================

Business Goal:
    Punto único de importación para los casos de uso de tareas y el helper
    de resolución (tarea + snapshot del asignado).
===============================================================================
"""

from __future__ import annotations

from .create_task import CreateTaskInput, CreateTaskUseCase
from .delete_task import DeleteTaskUseCase
from .get_task import GetTaskPermissionsUseCase, GetTaskUseCase
from .list_tasks import ListTasksUseCase
from .task_access import resolve_task, task_refs, task_snapshot
from .update_task import UpdateTaskUseCase

__all__ = [
    "CreateTaskInput",
    "CreateTaskUseCase",
    "DeleteTaskUseCase",
    "GetTaskPermissionsUseCase",
    "GetTaskUseCase",
    "ListTasksUseCase",
    "UpdateTaskUseCase",
    "resolve_task",
    "task_refs",
    "task_snapshot",
]
