"""
Pytest configuration and fixtures.
"""

import sys
from datetime import datetime, timedelta
from pathlib import Path
import pytest

# Add project root
sys.path.insert(0, str(Path(__file__).parent.parent))

from zeitfresser.domain.models import Task, TimeRecord
from zeitfresser.services.task_manager import TaskManager

NOW = datetime(2026, 10, 19, 12, 0, 0)
TODAY = datetime(2026, 10, 19)
YESTERDAY = datetime(2026, 10, 18)


class FakeClock:
    """Clock returning a fixed instant that tests can move forward"""

    def __init__(self, now: datetime = NOW):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs):
        self.now += timedelta(**kwargs)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def scenario_tasks():
    """
    A: never tracked
    B: 5 seconds, recorded yesterday
    C: 3 seconds, recorded today
    """
    task_a = Task(id=1, name="Task A")
    task_b = Task(id=2, name="Task B", records=[
        TimeRecord(start_time=datetime(2026, 10, 18, 10, 0, 0),
                   end_time=datetime(2026, 10, 18, 10, 0, 5)),
    ])
    task_c = Task(id=3, name="Task C", records=[
        TimeRecord(start_time=datetime(2026, 10, 19, 9, 0, 0),
                   end_time=datetime(2026, 10, 19, 9, 0, 3)),
    ])
    return [task_a, task_b, task_c]


@pytest.fixture
def manager(scenario_tasks, clock):
    """TaskManager over the A/B/C tasks, reporting in seconds"""
    return TaskManager(lambda: scenario_tasks, clock=clock)
