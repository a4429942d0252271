"""
Loaders turning roster files into entities.
"""

from .roster_loader import RosterLoader, StudentRecord, TeacherRecord, split_fields

__all__ = [
    "RosterLoader",
    "StudentRecord",
    "TeacherRecord",
    "split_fields",
]
