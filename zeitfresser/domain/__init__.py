"""Domain layer - Pure business entities and logic"""

from .errors import InvalidArgument
from .models import ChartEntry, Task, TimeRecord

__all__ = ["ChartEntry", "InvalidArgument", "Task", "TimeRecord"]
