"""
Core shared utilities for the task tracker.

- db: pooled SQLite connection manager
- errors: APIError hierarchy and Flask error handlers
- timestamps: UTC timestamp helpers
- task_store: owner-scoped task persistence
"""
