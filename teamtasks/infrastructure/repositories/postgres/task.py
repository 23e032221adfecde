"""
============================================================
TARJETA CRC - infrastructure/repositories/postgres/task.py
============================================================
Class: PostgresTaskRepository

Responsibilities:
- CRUD de tareas en PostgreSQL (SQL crudo).
- Filtros de listado (assignee/creator/status) y ventana por last_updated.

Collaborators:
- PostgresRepositoryBase
- domain.entities.Task / TaskStatus, domain.value_objects.TaskFilter
- Tabla: tasks

Constraints / Notes:
- update_task sobrescribe la fila completa (last-write-wins, sin locking).
- Orden: last_updated DESC NULLS LAST, id ASC.
============================================================
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from ....crosscutting.exceptions import DatabaseError
from ....domain.entities import Task, TaskStatus
from ....domain.value_objects import TaskFilter
from .base import PostgresRepositoryBase

_TASK_COLUMNS = """
    id, title, description, assignee_id, creator_id, status, remarks,
    assigned_date, target_date, last_updated, completed_date
"""

_TASK_ORDER_BY = "ORDER BY last_updated DESC NULLS LAST, id ASC"


class PostgresTaskRepository(PostgresRepositoryBase):
    """R: Implementación PostgreSQL del repositorio de tareas."""

    @staticmethod
    def _row_to_task(row: tuple) -> Task:
        (
            task_id,
            title,
            description,
            assignee_id,
            creator_id,
            status,
            remarks,
            assigned_date,
            target_date,
            last_updated,
            completed_date,
        ) = row

        try:
            parsed_status = TaskStatus(status)
        except ValueError as exc:
            raise DatabaseError(f"Invalid task status in database: {status}") from exc

        return Task(
            id=task_id,
            title=title,
            description=description,
            assignee_id=assignee_id,
            creator_id=creator_id,
            status=parsed_status,
            remarks=remarks,
            assigned_date=assigned_date,
            target_date=target_date,
            last_updated=last_updated,
            completed_date=completed_date,
        )

    def _select_tasks(self, *, where_sql: str, params: list[object]) -> List[Task]:
        """where_sql: "" o "WHERE ..." construido SOLO desde este repositorio."""
        rows = self._fetchall(
            query=f"SELECT {_TASK_COLUMNS} FROM tasks {where_sql} {_TASK_ORDER_BY}",
            params=params,
            context_msg="PostgresTaskRepository: Failed to select tasks",
            extra={"where_sql": where_sql},
        )
        return [self._row_to_task(r) for r in rows]

    def get_task(self, task_id: UUID) -> Optional[Task]:
        row = self._fetchone(
            query=f"SELECT {_TASK_COLUMNS} FROM tasks WHERE id = %s",
            params=[task_id],
            context_msg="PostgresTaskRepository: Failed to get task",
            extra={"task_id": str(task_id)},
        )
        return self._row_to_task(row) if row else None

    def list_tasks(self, task_filter: TaskFilter | None = None) -> List[Task]:
        task_filter = task_filter or TaskFilter()
        conditions: list[str] = []
        params: list[object] = []

        if task_filter.assignee_id is not None:
            conditions.append("assignee_id = %s")
            params.append(task_filter.assignee_id)
        if task_filter.creator_id is not None:
            conditions.append("creator_id = %s")
            params.append(task_filter.creator_id)
        if task_filter.status is not None:
            conditions.append("status = %s")
            params.append(task_filter.status.value)
        if task_filter.assignee_ids is not None:
            if not task_filter.assignee_ids:
                return []
            conditions.append("assignee_id = ANY(%s)")
            params.append(sorted(task_filter.assignee_ids, key=str))

        where_sql = f"WHERE {' AND '.join(conditions)}" if conditions else ""
        return self._select_tasks(where_sql=where_sql, params=params)

    def list_tasks_updated_since(self, since: datetime) -> List[Task]:
        return self._select_tasks(where_sql="WHERE last_updated >= %s", params=[since])

    def create_task(self, task: Task) -> Task:
        row = self._fetchone(
            query=f"""
                INSERT INTO tasks (
                    id, title, description, assignee_id, creator_id, status,
                    remarks, assigned_date, target_date, last_updated, completed_date
                )
                VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s)
                RETURNING {_TASK_COLUMNS}
            """,
            params=[
                task.id,
                task.title,
                task.description,
                task.assignee_id,
                task.creator_id,
                task.status.value,
                task.remarks,
                task.assigned_date,
                task.target_date,
                task.last_updated,
                task.completed_date,
            ],
            context_msg="PostgresTaskRepository: Failed to create task",
            extra={"task_id": str(task.id)},
        )
        if not row:
            raise DatabaseError(
                "PostgresTaskRepository: Failed to create task: no row returned"
            )
        return self._row_to_task(row)

    def update_task(self, task: Task) -> Optional[Task]:
        row = self._fetchone(
            query=f"""
                UPDATE tasks
                SET title = %s,
                    description = %s,
                    assignee_id = %s,
                    status = %s,
                    remarks = %s,
                    assigned_date = %s,
                    target_date = %s,
                    last_updated = %s,
                    completed_date = %s
                WHERE id = %s
                RETURNING {_TASK_COLUMNS}
            """,
            params=[
                task.title,
                task.description,
                task.assignee_id,
                task.status.value,
                task.remarks,
                task.assigned_date,
                task.target_date,
                task.last_updated,
                task.completed_date,
                task.id,
            ],
            context_msg="PostgresTaskRepository: Failed to update task",
            extra={"task_id": str(task.id)},
        )
        return self._row_to_task(row) if row else None

    def delete_task(self, task_id: UUID) -> bool:
        deleted = self._execute(
            query="DELETE FROM tasks WHERE id = %s",
            params=[task_id],
            context_msg="PostgresTaskRepository: Failed to delete task",
            extra={"task_id": str(task_id)},
        )
        return deleted > 0
