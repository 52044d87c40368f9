"""Personal task tracker: JSON API for accounts and owner-scoped tasks."""
