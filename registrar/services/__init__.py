"""
Services module: the registry and the components built around it.
"""

from .registry import EnrollmentResult, Registry, RegistrySnapshot
from .report_service import ReportGenerator, render_student_report
from .observers import ScoreChangeLogger, ScoreEventRecorder
from .simulation import WamSimulator

__all__ = [
    "Registry",
    "RegistrySnapshot",
    "EnrollmentResult",
    "ReportGenerator",
    "render_student_report",
    "ScoreChangeLogger",
    "ScoreEventRecorder",
    "WamSimulator",
]
