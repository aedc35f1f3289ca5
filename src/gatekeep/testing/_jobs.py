"""RecordingJob — a job that records how it was invoked."""

from __future__ import annotations

from typing import Any

__all__ = ["RecordingJob"]


class RecordingJob:
    """Callable job that records every Action it receives.

    Handy for checking that ``run`` invokes the job exactly once on a
    permit and never on a denial.

    Attributes:
        calls: The Actions passed to the job, in call order.
        result: The value returned from every call.

    Example::

        job = RecordingJob(result="done")
        assert action.run(job, "delete_post") == "done"
        assert job.call_count == 1
        assert job.last_action.authorized is True
    """

    def __init__(self, result: Any = None) -> None:
        self.result = result
        self.calls: list[Any] = []

    def __call__(self, action: Any) -> Any:
        self.calls.append(action)
        return self.result

    @property
    def call_count(self) -> int:
        return len(self.calls)

    @property
    def called(self) -> bool:
        return bool(self.calls)

    @property
    def last_action(self) -> Any:
        if not self.calls:
            raise AssertionError("job was never called")
        return self.calls[-1]

    def __repr__(self) -> str:
        return f"RecordingJob(call_count={self.call_count})"
