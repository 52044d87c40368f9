"""
Owner-scoped task persistence.

Every read and write is keyed on (task id, owner id) in a single SQL
statement, so a task owned by someone else is indistinguishable from a
task that does not exist.

Usage:
    from core.task_store import TaskStore

    store = TaskStore(DatabaseManager.get_instance())
    task = store.insert(user_id, title="Buy milk", priority="high")
    store.update_completion(user_id, task.id, True)
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from core.db import DatabaseManager, new_id
from core.errors import ValidationError
from core.timestamps import isonow, to_wire

logger = logging.getLogger(__name__)

PRIORITIES = ("low", "medium", "high")
DEFAULT_PRIORITY = "medium"
DEFAULT_SORT = "-createdAt"

# Client sort keys -> ORDER BY expressions
_SORT_COLUMNS = {
    "createdAt": "created_at",
    "completedAt": "completed_at",
    "dueDate": "due_date",
    "title": "title",
    "priority": "CASE priority WHEN 'low' THEN 0 WHEN 'medium' THEN 1 ELSE 2 END",
}


@dataclass(frozen=True)
class Task:
    """A stored task (immutable snapshot)."""
    id: str
    title: str
    description: str
    priority: str
    completed: bool
    due_date: Optional[str]
    user_id: str
    created_at: str
    completed_at: Optional[str]

    def to_dict(self) -> dict:
        """Serialize to the JSON shape the browser client consumes."""
        return {
            "_id": self.id,
            "title": self.title,
            "description": self.description,
            "priority": self.priority,
            "completed": self.completed,
            "dueDate": to_wire(self.due_date),
            "userId": self.user_id,
            "createdAt": to_wire(self.created_at),
            "completedAt": to_wire(self.completed_at),
        }


def _row_to_task(row) -> Task:
    return Task(
        id=row["id"],
        title=row["title"],
        description=row["description"],
        priority=row["priority"],
        completed=bool(row["completed"]),
        due_date=row["due_date"],
        user_id=row["user_id"],
        created_at=row["created_at"],
        completed_at=row["completed_at"],
    )


def _clean_fields(title, description, priority) -> tuple[str, str, str]:
    """Normalize and validate the user-editable text fields."""
    title = (title or "").strip()
    if not title:
        raise ValidationError("Task title is required")
    if priority not in PRIORITIES:
        raise ValidationError(f"Priority must be one of: {', '.join(PRIORITIES)}")
    return title, (description or "").strip(), priority


def order_by_clause(sort: str) -> str:
    """Translate a client sort key ("-createdAt", "title") to ORDER BY SQL.

    Raises:
        ValidationError: unknown sort field
    """
    descending = sort.startswith("-")
    field = sort[1:] if descending else sort
    expr = _SORT_COLUMNS.get(field)
    if expr is None:
        raise ValidationError(f"Cannot sort by '{field}'")
    direction = "DESC" if descending else "ASC"
    # rowid breaks ties between rows created in the same microsecond
    return f"{expr} {direction}, rowid {direction}"


def init_task_schema(db: DatabaseManager):
    """Create the tasks table. Requires the users table to exist."""
    with db.connect() as conn:
        conn.execute("""
            CREATE TABLE IF NOT EXISTS tasks (
                id TEXT PRIMARY KEY,
                title TEXT NOT NULL,
                description TEXT NOT NULL DEFAULT '',
                priority TEXT NOT NULL DEFAULT 'medium'
                    CHECK (priority IN ('low', 'medium', 'high')),
                completed INTEGER NOT NULL DEFAULT 0,
                due_date TEXT,
                user_id TEXT NOT NULL REFERENCES users(id),
                created_at TEXT NOT NULL,
                completed_at TEXT
            )
        """)
        conn.execute(
            "CREATE INDEX IF NOT EXISTS ix_tasks_user_created ON tasks (user_id, created_at)"
        )
    logger.info("Task schema initialized")


class TaskStore:
    """SQLite-backed task persistence with owner scoping."""

    def __init__(self, db: DatabaseManager):
        self._db = db

    def insert(
        self,
        user_id: str,
        title: str,
        description: str = "",
        priority: str = DEFAULT_PRIORITY,
        due_date: Optional[datetime] = None,
    ) -> Task:
        """Store a new task owned by user_id.

        Returns:
            The stored task with generated id and creation timestamp
        """
        title, description, priority = _clean_fields(title, description, priority)
        task = Task(
            id=new_id(),
            title=title,
            description=description,
            priority=priority,
            completed=False,
            due_date=due_date.isoformat() if due_date else None,
            user_id=user_id,
            created_at=isonow(),
            completed_at=None,
        )
        with self._db.connect() as conn:
            conn.execute(
                "INSERT INTO tasks (id, title, description, priority, completed, due_date, "
                "user_id, created_at, completed_at) VALUES (?, ?, ?, ?, 0, ?, ?, ?, NULL)",
                (task.id, task.title, task.description, task.priority, task.due_date,
                 task.user_id, task.created_at),
            )
        logger.debug(f"Task created: {task.id}", extra={'user': user_id})
        return task

    def find_many(
        self,
        user_id: str,
        completed: Optional[bool] = None,
        priority: Optional[str] = None,
        sort: str = DEFAULT_SORT,
    ) -> list[Task]:
        """List a user's tasks, newest first by default.

        completed and priority filters are ANDed when both are given.
        """
        clauses = ["user_id = ?"]
        params: list = [user_id]
        if completed is not None:
            clauses.append("completed = ?")
            params.append(1 if completed else 0)
        if priority is not None:
            clauses.append("priority = ?")
            params.append(priority)

        sql = (
            f"SELECT * FROM tasks WHERE {' AND '.join(clauses)} "
            f"ORDER BY {order_by_clause(sort)}"
        )
        with self._db.connect() as conn:
            rows = conn.execute(sql, params).fetchall()
        return [_row_to_task(r) for r in rows]

    def find_one(self, user_id: str, task_id: str) -> Optional[Task]:
        with self._db.connect() as conn:
            row = conn.execute(
                "SELECT * FROM tasks WHERE id = ? AND user_id = ?",
                (task_id, user_id),
            ).fetchone()
        return _row_to_task(row) if row else None

    def update_full(
        self,
        user_id: str,
        task_id: str,
        title: str,
        description: str = "",
        priority: str = DEFAULT_PRIORITY,
        due_date: Optional[datetime] = None,
    ) -> Optional[Task]:
        """Replace the editable fields of an owned task.

        Returns:
            The updated task, or None if not found / not owned
        """
        title, description, priority = _clean_fields(title, description, priority)
        with self._db.connect() as conn:
            rows = conn.execute(
                "UPDATE tasks SET title = ?, description = ?, priority = ?, due_date = ? "
                "WHERE id = ? AND user_id = ? RETURNING *",
                (title, description, priority,
                 due_date.isoformat() if due_date else None, task_id, user_id),
            ).fetchall()
        return _row_to_task(rows[0]) if rows else None

    def update_completion(self, user_id: str, task_id: str, completed: bool) -> Optional[Task]:
        """Set the completed flag; completing stamps completed_at, reopening clears it.

        Returns:
            The updated task, or None if not found / not owned
        """
        with self._db.connect() as conn:
            rows = conn.execute(
                "UPDATE tasks SET completed = ?, completed_at = ? "
                "WHERE id = ? AND user_id = ? RETURNING *",
                (1 if completed else 0, isonow() if completed else None, task_id, user_id),
            ).fetchall()
        return _row_to_task(rows[0]) if rows else None

    def delete(self, user_id: str, task_id: str) -> bool:
        """Delete an owned task. Returns True if a row was removed."""
        with self._db.connect() as conn:
            cursor = conn.execute(
                "DELETE FROM tasks WHERE id = ? AND user_id = ?",
                (task_id, user_id),
            )
            deleted = cursor.rowcount > 0
        return deleted
