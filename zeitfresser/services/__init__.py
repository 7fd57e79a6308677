"""Services layer - Business logic"""

from .task_manager import TaskManager, create_task_manager
from .report_service import ReportService

__all__ = ["TaskManager", "create_task_manager", "ReportService"]
