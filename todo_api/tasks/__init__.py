"""
Todo API - Tasks Module

Owner-scoped CRUD for to-do items.
"""

from todo_api.tasks.router import router as tasks_router

__all__ = ["tasks_router"]
