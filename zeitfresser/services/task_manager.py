"""
Task Manager - holds and administrates the list of tasks.

Architecture Decision: Strategy Pattern
The initial task list comes from an injected factory, so the manager does
not care whether tasks are hardcoded, loaded from YAML or built by a test.
The filtering primitives are plain module-level functions so they can be
reused and tested on their own.
"""

import logging
from datetime import datetime
from typing import Callable, Dict, List, Optional

from zeitfresser.domain.errors import InvalidArgument, require
from zeitfresser.domain.models import ChartEntry, Task
from zeitfresser.infra.config import Settings, get_settings
from zeitfresser.infra.task_lists import task_list_from_settings

logger = logging.getLogger(__name__)

TaskListFactory = Callable[[], List[Task]]

# Size of one duration unit in seconds
DURATION_UNITS: Dict[str, float] = {
    "seconds": 1.0,
    "minutes": 60.0,
    "hours": 3600.0,
}


def _check_filter_args(date: Optional[datetime], tasks: Optional[List[Task]]) -> None:
    require(date, "date")
    require(tasks, "tasks")


def tasks_with_records_earlier_than(date: datetime, tasks: List[Task]) -> List[Task]:
    """
    Select the tasks having at least one record that starts before `date`.

    Args:
        date: The lower bound to compare record start times with
        tasks: The tasks to inspect

    Returns:
        A new list with the matching tasks in their original order
    """
    _check_filter_args(date, tasks)
    return [task for task in tasks if task.has_records_before(date)]


def tasks_with_records_later_than(date: datetime, tasks: List[Task],
                                  now: Optional[datetime] = None) -> List[Task]:
    """
    Select the tasks having at least one record that ends after `date`.

    Open records are treated as ending at `now`.
    """
    _check_filter_args(date, tasks)
    return [task for task in tasks if task.has_records_after(date, now)]


def filter_tasks_started_before(tasks: List[Task], date: datetime) -> List[Task]:
    """Keep only tasks without any record starting before `date`"""
    _check_filter_args(date, tasks)
    return [task for task in tasks if not task.has_records_before(date)]


def filter_tasks_ended_after(tasks: List[Task], date: datetime,
                             now: Optional[datetime] = None) -> List[Task]:
    """Keep only tasks without any record ending after `date`"""
    _check_filter_args(date, tasks)
    return [task for task in tasks if not task.has_records_after(date, now)]


def filter_zero_duration_tasks(tasks: List[Task], now: Optional[datetime] = None) -> List[Task]:
    """Keep only tasks with a nonzero overall duration"""
    require(tasks, "tasks")
    return [task for task in tasks if task.get_overall_duration(now) > 0.0]


class TaskManager:
    """
    Holds the task list and delegates start/stop to the individual tasks.

    The list is produced once by `task_list_factory` and never replaced;
    `get_tasks()` hands out that same list object.
    """

    def __init__(self, task_list_factory: TaskListFactory,
                 clock: Callable[[], datetime] = datetime.now,
                 duration_unit: str = "seconds"):
        """
        Initialize the manager.

        Args:
            task_list_factory: Zero-argument callable producing the initial tasks
            clock: Source of the current instant
            duration_unit: Unit for reported durations ('seconds', 'minutes', 'hours')
        """
        require(task_list_factory, "task_list_factory")
        if duration_unit not in DURATION_UNITS:
            raise InvalidArgument(
                f"Argument 'duration_unit' must be one of {sorted(DURATION_UNITS)}, got {duration_unit!r}"
            )

        self.clock = clock
        self.duration_unit = duration_unit
        self._unit_seconds = DURATION_UNITS[duration_unit]

        tasks = task_list_factory()
        if tasks is None:
            raise InvalidArgument("Task list factory returned no list")
        self._tasks: List[Task] = tasks

    def get_tasks(self) -> List[Task]:
        """Return the current task list"""
        return self._tasks

    def find_task(self, task_id: int) -> Task:
        """Look up a task by id, e.g. to map a chart entry back to its task"""
        require(task_id, "task_id")
        for task in self._tasks:
            if task.id == task_id:
                return task
        raise InvalidArgument(f"No task with id {task_id}")

    def start_task(self, task: Optional[Task]) -> None:
        """
        Start a task by opening a new time record.

        Starting a task that is already active leaves it untouched.
        """
        require(task, "task")
        if task.start(self.clock()):
            logger.info(f"Task started: {task.id} ({task.name})")
        else:
            logger.warning(f"Task {task.id} ({task.name}) is already active, ignoring start")

    def stop_task(self, task: Optional[Task]) -> None:
        """
        Stop a task by closing its open time record.

        Stopping a task that is not active leaves it untouched.
        """
        require(task, "task")
        if task.stop(self.clock()):
            logger.info(f"Task stopped: {task.id} ({task.name})")
        else:
            logger.warning(f"Task {task.id} ({task.name}) is not active, ignoring stop")

    def is_task_active(self, task: Optional[Task]) -> bool:
        """Check if a task currently has an open record"""
        require(task, "task")
        return task.is_active

    def get_overall_duration(self, task: Optional[Task]) -> float:
        """
        Compute the total time recorded for a task.

        The open record, if any, counts up to the current instant.

        Returns:
            The total duration in the configured unit
        """
        require(task, "task")
        return task.get_overall_duration(self.clock()) / self._unit_seconds

    def get_filtered_tasks(self, from_date: Optional[datetime] = None,
                           to_date: Optional[datetime] = None) -> List[Task]:
        """
        Get the tasks recorded entirely within a date range.

        Args:
            from_date: Drop tasks with any record starting before this
            to_date: Drop tasks with any record ending after this

        Returns:
            The surviving tasks with nonzero duration, in list order
        """
        now = self.clock()
        tasks = list(self._tasks)

        if from_date is not None:
            tasks = filter_tasks_started_before(tasks, from_date)

        if to_date is not None:
            tasks = filter_tasks_ended_after(tasks, to_date, now)

        result = filter_zero_duration_tasks(tasks, now)
        logger.debug(f"Filtered {len(self._tasks)} tasks to {len(result)} "
                     f"(from={from_date}, to={to_date})")
        return result

    def task_list_to_entry_list(self, tasks: Optional[List[Task]]) -> List[ChartEntry]:
        """Convert tasks into (duration, id) pairs for chart plotting"""
        require(tasks, "tasks")
        return [ChartEntry(self.get_overall_duration(task), task.id) for task in tasks]

    def task_list_to_label_list(self, tasks: Optional[List[Task]]) -> List[str]:
        """Convert tasks into chart labels, parallel to task_list_to_entry_list()"""
        require(tasks, "tasks")
        return [task.name for task in tasks]


def create_task_manager(settings: Optional[Settings] = None,
                        clock: Callable[[], datetime] = datetime.now) -> TaskManager:
    """Build a TaskManager from the application settings"""
    if settings is None:
        settings = get_settings()
    return TaskManager(
        task_list_from_settings(settings),
        clock=clock,
        duration_unit=settings.preferences.duration_unit,
    )
