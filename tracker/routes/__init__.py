"""
Route blueprints for the task tracker API.
"""

from .health import health_bp
from .auth_routes import auth_bp
from .tasks import tasks_bp

__all__ = ['health_bp', 'auth_bp', 'tasks_bp']
