"""
Tests for the TaskManager.
"""

import logging
from datetime import datetime

import pytest

from conftest import NOW, TODAY, YESTERDAY
from zeitfresser.domain.errors import InvalidArgument
from zeitfresser.domain.models import Task, TimeRecord
from zeitfresser.infra.config import Settings, UserPreferences
from zeitfresser.services.task_manager import TaskManager, create_task_manager


class TestConstruction:

    def test_factory_is_called_once(self):
        calls = []

        def factory():
            calls.append(1)
            return [Task(id=1, name="Work")]

        manager = TaskManager(factory)
        manager.get_tasks()
        manager.get_tasks()
        assert len(calls) == 1

    def test_get_tasks_returns_same_list(self, manager, scenario_tasks):
        assert manager.get_tasks() is scenario_tasks
        assert [t.name for t in manager.get_tasks()] == ["Task A", "Task B", "Task C"]

    def test_missing_factory_fails(self):
        with pytest.raises(InvalidArgument, match="task_list_factory"):
            TaskManager(None)

    def test_factory_returning_none_fails(self):
        with pytest.raises(InvalidArgument):
            TaskManager(lambda: None)

    def test_unknown_duration_unit_fails(self):
        with pytest.raises(InvalidArgument, match="duration_unit"):
            TaskManager(lambda: [], duration_unit="fortnights")


class TestNullTask:

    @pytest.mark.parametrize("operation", [
        "start_task", "stop_task", "is_task_active", "get_overall_duration",
    ])
    def test_absent_task_fails(self, manager, operation):
        with pytest.raises(InvalidArgument, match="Argument 'task' must not be null!"):
            getattr(manager, operation)(None)

    @pytest.mark.parametrize("operation", [
        "task_list_to_entry_list", "task_list_to_label_list",
    ])
    def test_absent_task_list_fails(self, manager, operation):
        with pytest.raises(InvalidArgument, match="tasks"):
            getattr(manager, operation)(None)


class TestStartStop:

    def test_start_then_stop(self, manager, clock):
        task = manager.get_tasks()[0]

        manager.start_task(task)
        assert manager.is_task_active(task)

        clock.advance(seconds=7)
        manager.stop_task(task)
        assert not manager.is_task_active(task)
        assert task.records[-1].start_time == NOW
        assert manager.get_overall_duration(task) == 7.0

    def test_running_task_counts_up_to_now(self, manager, clock):
        task = manager.get_tasks()[0]
        manager.start_task(task)
        clock.advance(seconds=4)
        assert manager.get_overall_duration(task) == 4.0

    def test_start_is_logged(self, manager, caplog):
        task = manager.get_tasks()[0]
        with caplog.at_level(logging.INFO, logger="zeitfresser.services.task_manager"):
            manager.start_task(task)
        assert "Task started: 1 (Task A)" in caplog.text

    def test_double_start_is_ignored_with_warning(self, manager, clock, caplog):
        task = manager.get_tasks()[0]
        manager.start_task(task)
        clock.advance(seconds=1)

        with caplog.at_level(logging.WARNING, logger="zeitfresser.services.task_manager"):
            manager.start_task(task)

        assert len(task.records) == 1
        assert "already active" in caplog.text

    def test_stop_without_start_is_ignored_with_warning(self, manager, caplog):
        task = manager.get_tasks()[0]
        with caplog.at_level(logging.WARNING, logger="zeitfresser.services.task_manager"):
            manager.stop_task(task)

        assert task.records == []
        assert "not active" in caplog.text


class TestDuration:

    def test_no_records_is_zero(self, manager):
        assert manager.get_overall_duration(manager.get_tasks()[0]) == 0.0

    def test_duration_in_minutes(self, scenario_tasks, clock):
        task = Task(id=9, name="Long", records=[
            TimeRecord(start_time=datetime(2026, 10, 19, 8, 0), end_time=datetime(2026, 10, 19, 8, 30)),
        ])
        manager = TaskManager(lambda: [task], clock=clock, duration_unit="minutes")
        assert manager.get_overall_duration(task) == 30.0

    def test_duration_in_hours(self, clock):
        task = Task(id=9, name="Long", records=[
            TimeRecord(start_time=datetime(2026, 10, 19, 8, 0), end_time=datetime(2026, 10, 19, 9, 30)),
        ])
        manager = TaskManager(lambda: [task], clock=clock, duration_unit="hours")
        assert manager.get_overall_duration(task) == 1.5


class TestFilteredTasks:

    def test_no_bounds_drops_zero_duration(self, manager):
        assert [t.name for t in manager.get_filtered_tasks()] == ["Task B", "Task C"]

    def test_from_today_drops_yesterday(self, manager):
        assert [t.name for t in manager.get_filtered_tasks(TODAY, None)] == ["Task C"]

    def test_from_yesterday_keeps_both(self, manager):
        assert [t.name for t in manager.get_filtered_tasks(YESTERDAY, None)] == ["Task B", "Task C"]

    def test_to_today_drops_today(self, manager):
        assert [t.name for t in manager.get_filtered_tasks(None, TODAY)] == ["Task B"]

    def test_to_excludes_records_ending_strictly_after(self, manager):
        # Task B ends at 10:00:05 yesterday
        to_date = datetime(2026, 10, 18, 10, 0, 5)
        assert [t.name for t in manager.get_filtered_tasks(None, to_date)] == ["Task B"]
        to_date = datetime(2026, 10, 18, 10, 0, 4)
        assert manager.get_filtered_tasks(None, to_date) == []

    def test_both_bounds(self, manager):
        assert [t.name for t in manager.get_filtered_tasks(TODAY, NOW)] == ["Task C"]
        assert manager.get_filtered_tasks(TODAY, datetime(2026, 10, 19, 9, 0, 1)) == []

    def test_filter_counts_are_logged(self, manager, caplog):
        with caplog.at_level(logging.DEBUG, logger="zeitfresser.services.task_manager"):
            manager.get_filtered_tasks()
        assert "Filtered 3 tasks to 2" in caplog.text

    def test_result_is_a_new_list(self, manager):
        result = manager.get_filtered_tasks()
        result.clear()
        assert len(manager.get_tasks()) == 3

    def test_running_task_is_bounded_by_now(self, manager, clock):
        task_a = manager.get_tasks()[0]
        manager.start_task(task_a)
        clock.advance(seconds=10)

        names = [t.name for t in manager.get_filtered_tasks(TODAY, None)]
        assert names == ["Task A", "Task C"]
        assert [t.name for t in manager.get_filtered_tasks(None, NOW)] == ["Task B", "Task C"]


class TestConversion:

    def test_scenario_entries_and_labels(self, manager):
        tasks = manager.get_filtered_tasks()

        assert manager.task_list_to_entry_list(tasks) == [(5.0, 2), (3.0, 3)]
        assert manager.task_list_to_label_list(tasks) == ["Task B", "Task C"]

    def test_empty_list(self, manager):
        assert manager.task_list_to_entry_list([]) == []
        assert manager.task_list_to_label_list([]) == []

    def test_entries_use_configured_unit(self, clock):
        task = Task(id=4, name="Reading", records=[
            TimeRecord(start_time=datetime(2026, 10, 19, 8, 0), end_time=datetime(2026, 10, 19, 8, 6)),
        ])
        manager = TaskManager(lambda: [task], clock=clock, duration_unit="minutes")
        entries = manager.task_list_to_entry_list([task])
        assert entries[0].duration == 6.0
        assert entries[0].task_id == 4

    def test_find_task_maps_entry_back(self, manager):
        entry = manager.task_list_to_entry_list(manager.get_filtered_tasks())[1]
        assert manager.find_task(entry.task_id).name == "Task C"

    def test_find_unknown_task_fails(self, manager):
        with pytest.raises(InvalidArgument, match="42"):
            manager.find_task(42)


def test_create_task_manager_from_settings(tmp_path, monkeypatch, clock):
    monkeypatch.chdir(tmp_path)
    settings = Settings(
        config_dir=tmp_path,
        preferences=UserPreferences(task_names=["Work", "Sleep"], duration_unit="hours"),
    )

    manager = create_task_manager(settings, clock=clock)

    assert [t.name for t in manager.get_tasks()] == ["Work", "Sleep"]
    assert manager.duration_unit == "hours"
    assert manager.clock is clock
