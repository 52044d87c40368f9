"""
Task API Routes.

CRUD + filter endpoints over the caller's own tasks. Every handler is
@jwt_required and passes g.current_user_id into the store, which scopes
each query on (task id, owner id). A task owned by another user is
reported exactly like a missing one (404).
"""

import logging

from flask import Blueprint, current_app, g, jsonify

from core.errors import NotFoundError
from core.task_store import TaskStore
from tracker.auth import jwt_required
from tracker.schemas import (
    TaskCompletionRequest,
    TaskListQuery,
    TaskRequest,
    parse_json_body,
    parse_query,
)

logger = logging.getLogger(__name__)

tasks_bp = Blueprint('tasks', __name__, url_prefix='/api/tasks')

TASK_NOT_FOUND = "Task not found"


def get_task_store() -> TaskStore:
    """Return the TaskStore registered on the current app."""
    return current_app.extensions["task_store"]


@tasks_bp.route('', methods=['GET'])
@jwt_required
def list_tasks():
    """List tasks with optional completed/priority filters, newest first."""
    query = parse_query(TaskListQuery)
    tasks = get_task_store().find_many(
        g.current_user_id,
        completed=query.completed,
        priority=query.priority,
        sort=query.sort,
    )
    return jsonify([t.to_dict() for t in tasks])


@tasks_bp.route('/<task_id>', methods=['GET'])
@jwt_required
def get_task(task_id):
    """Get a single task by ID."""
    task = get_task_store().find_one(g.current_user_id, task_id)
    if task is None:
        raise NotFoundError(TASK_NOT_FOUND)
    return jsonify(task.to_dict())


@tasks_bp.route('', methods=['POST'])
@jwt_required
def create_task():
    """Create a task owned by the caller."""
    data = parse_json_body(TaskRequest)
    task = get_task_store().insert(
        g.current_user_id,
        title=data.title,
        description=data.description,
        priority=data.priority,
        due_date=data.due_date,
    )
    logger.info(f"Task created: {task.id}", extra={'user': g.current_user_id})
    return jsonify(task.to_dict()), 201


@tasks_bp.route('/<task_id>', methods=['PUT'])
@jwt_required
def update_task(task_id):
    """Replace a task's title, description, priority, and due date."""
    data = parse_json_body(TaskRequest)
    task = get_task_store().update_full(
        g.current_user_id,
        task_id,
        title=data.title,
        description=data.description,
        priority=data.priority,
        due_date=data.due_date,
    )
    if task is None:
        raise NotFoundError(TASK_NOT_FOUND)
    return jsonify(task.to_dict())


@tasks_bp.route('/<task_id>', methods=['PATCH'])
@jwt_required
def set_task_completion(task_id):
    """Mark a task completed or not completed."""
    data = parse_json_body(TaskCompletionRequest)
    task = get_task_store().update_completion(g.current_user_id, task_id, data.completed)
    if task is None:
        raise NotFoundError(TASK_NOT_FOUND)
    return jsonify(task.to_dict())


@tasks_bp.route('/<task_id>', methods=['DELETE'])
@jwt_required
def delete_task(task_id):
    """Delete a task."""
    if not get_task_store().delete(g.current_user_id, task_id):
        raise NotFoundError(TASK_NOT_FOUND)
    logger.info(f"Task deleted: {task_id}", extra={'user': g.current_user_id})
    return jsonify({"message": "Task deleted successfully"})
