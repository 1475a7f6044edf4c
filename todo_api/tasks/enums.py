"""
Todo API - Task Enums
"""

from enum import Enum


class TaskPriority(str, Enum):
    """Task priority levels."""
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
