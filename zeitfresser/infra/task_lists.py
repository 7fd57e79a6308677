"""
Task list factories.

A factory is a zero-argument callable returning the initial ordered list of
tasks for a TaskManager. Each call builds fresh Task objects.
"""

from pathlib import Path
from typing import Callable, Iterable, List, Optional, Union
import yaml

from pydantic import BaseModel, Field, ValidationError, field_validator

from zeitfresser.domain.errors import InvalidArgument, require
from zeitfresser.domain.models import Task


class TaskFile(BaseModel):
    """Layout of a YAML task file: a top-level `tasks:` sequence"""
    tasks: List[Task] = Field(default_factory=list)

    @field_validator("tasks")
    @classmethod
    def _unique_ids(cls, tasks: List[Task]) -> List[Task]:
        seen = set()
        for task in tasks:
            if task.id in seen:
                raise ValueError(f"Duplicate task id {task.id}")
            seen.add(task.id)
        return tasks


def fixed_task_list(names: Optional[Iterable[str]]) -> Callable[[], List[Task]]:
    """
    Build a factory for stopped tasks with the given names.

    Tasks get ids 1..n in the order of `names`.
    """
    require(names, "names")
    names = list(names)
    if not names:
        raise InvalidArgument("Argument 'names' must not be empty!")

    def factory() -> List[Task]:
        try:
            return [Task(id=i, name=name) for i, name in enumerate(names, start=1)]
        except ValidationError as e:
            raise InvalidArgument(f"Invalid task name: {e}") from e

    return factory


def yaml_task_list(path: Union[str, Path, None]) -> Callable[[], List[Task]]:
    """
    Build a factory loading tasks from a YAML file.

    Example file:

        tasks:
          - id: 1
            name: Work
            records:
              - start_time: 2026-10-18 09:00:00
                end_time: 2026-10-18 12:30:00

    The file is read each time the factory is called.
    """
    require(path, "path")
    path = Path(path)

    def factory() -> List[Task]:
        if not path.exists():
            raise InvalidArgument(f"Task file '{path}' not found")

        with open(path, 'r', encoding='utf-8') as f:
            try:
                data = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise InvalidArgument(f"Task file '{path}' is not valid YAML: {e}") from e

        try:
            return TaskFile.model_validate(data or {}).tasks
        except ValidationError as e:
            raise InvalidArgument(f"Task file '{path}' is invalid: {e}") from e

    return factory


def task_list_from_settings(settings) -> Callable[[], List[Task]]:
    """Pick the YAML task file if configured, else the preferred task names"""
    require(settings, "settings")
    if settings.tasks_file:
        return yaml_task_list(settings.tasks_file)
    return fixed_task_list(settings.preferences.task_names)
