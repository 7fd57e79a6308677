"""
Domain Models using Pydantic for validation.

Architecture Decision: Why Pydantic?
Tasks can be loaded from YAML files written by hand, so every record is
validated on the way in. Closed time records are frozen; stopping a task
replaces its open record with a closed copy instead of mutating it.
Timezone-aware timestamps are stored as naive local time so they compare
with the naive values of datetime.now().
"""

from datetime import datetime
from typing import List, NamedTuple, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .errors import InvalidArgument, require


def as_local_naive(dt: Optional[datetime]) -> Optional[datetime]:
    """Convert a timezone-aware datetime to naive local time; naive values pass through"""
    if dt is None or dt.tzinfo is None:
        return dt
    return dt.astimezone().replace(tzinfo=None)


class TimeRecord(BaseModel):
    """
    A single start/end interval of activity for a task.

    A record is "open" while end_time is None.
    """
    model_config = ConfigDict(frozen=True)

    start_time: datetime
    end_time: Optional[datetime] = None

    @field_validator("start_time", "end_time")
    @classmethod
    def _to_local_naive(cls, value: Optional[datetime]) -> Optional[datetime]:
        return as_local_naive(value)

    @model_validator(mode="after")
    def _check_order(self):
        if self.end_time is not None and self.end_time < self.start_time:
            raise ValueError("end_time must not be earlier than start_time")
        return self

    @property
    def is_open(self) -> bool:
        return self.end_time is None

    def close(self, end_time: datetime) -> "TimeRecord":
        """Return a closed copy of this record ending at end_time."""
        require(end_time, "end_time")
        end_time = as_local_naive(end_time)
        if not self.is_open:
            raise InvalidArgument("Record is already closed")
        if end_time < self.start_time:
            raise InvalidArgument(
                f"Argument 'end_time' ({end_time}) is earlier than start_time ({self.start_time})"
            )
        return TimeRecord(start_time=self.start_time, end_time=end_time)

    def effective_end(self, now: datetime) -> datetime:
        """End of the record, where an open record ends at `now`"""
        now = as_local_naive(now)
        return self.end_time if self.end_time is not None else now

    def duration_seconds(self, now: Optional[datetime] = None) -> float:
        """
        Length of the record in seconds.

        Open records are measured up to `now` (defaults to the current time)
        and never count as negative.
        """
        if now is None:
            now = datetime.now()
        seconds = (self.effective_end(now) - self.start_time).total_seconds()
        return max(seconds, 0.0)


class Task(BaseModel):
    """
    Represents a trackable task.

    Examples: "Work", "Study", "Sleep"

    A task is active iff it has an open record. At most one record is open
    at a time, and it is always the last one.
    """

    id: int
    name: str = Field(..., min_length=1, max_length=200)
    records: List[TimeRecord] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_single_open_record(self):
        open_records = [r for r in self.records if r.is_open]
        if len(open_records) > 1:
            raise ValueError(f"Task {self.id} has more than one open record")
        if open_records and not self.records[-1].is_open:
            raise ValueError(f"Open record of task {self.id} must be the last one")
        return self

    @property
    def is_active(self) -> bool:
        return bool(self.records) and self.records[-1].is_open

    def start(self, now: Optional[datetime] = None) -> bool:
        """
        Open a new time record at `now`.

        Returns:
            True if a record was opened, False if the task was already active
        """
        if self.is_active:
            return False
        if now is None:
            now = datetime.now()
        self.records.append(TimeRecord(start_time=now))
        return True

    def stop(self, now: Optional[datetime] = None) -> bool:
        """
        Close the open time record at `now`.

        Returns:
            True if a record was closed, False if the task was not active
        """
        if not self.is_active:
            return False
        if now is None:
            now = datetime.now()
        self.records[-1] = self.records[-1].close(now)
        return True

    def get_overall_duration(self, now: Optional[datetime] = None) -> float:
        """Sum of all record durations in seconds, open record included"""
        if now is None:
            now = datetime.now()
        return sum((r.duration_seconds(now) for r in self.records), 0.0)

    def has_records_before(self, date: datetime) -> bool:
        """Check if any record starts strictly before `date`"""
        date = as_local_naive(date)
        return any(r.start_time < date for r in self.records)

    def has_records_after(self, date: datetime, now: Optional[datetime] = None) -> bool:
        """Check if any record ends strictly after `date` (open records end at `now`)"""
        if now is None:
            now = datetime.now()
        date = as_local_naive(date)
        return any(r.effective_end(now) > date for r in self.records)


class ChartEntry(NamedTuple):
    """A (duration, task id) pair for chart plotting."""
    duration: float
    task_id: int
