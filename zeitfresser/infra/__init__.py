"""Infrastructure layer - Configuration and task list sources"""

from .config import Settings, UserPreferences, get_settings, reload_settings
from .task_lists import fixed_task_list, task_list_from_settings, yaml_task_list

__all__ = [
    "Settings", "UserPreferences", "get_settings", "reload_settings",
    "fixed_task_list", "task_list_from_settings", "yaml_task_list",
]
