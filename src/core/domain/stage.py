"""Run stages for the challenge workflow.

The runner walks these states in order and jumps to ``FAILED`` on the
first error. Keeping them in the domain layer lets the CLI render the
final stage without importing the service module.
"""

from __future__ import annotations

from enum import Enum


class RunStage(str, Enum):
    """States of a single challenge run."""

    START = "start"
    WEBHOOK_GENERATED = "webhook_generated"
    QUERY_SELECTED = "query_selected"
    SUBMITTED = "submitted"
    DONE = "done"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (RunStage.DONE, RunStage.FAILED)

    def label(self) -> str:
        """Human readable label for tables and logging."""

        return self.value.replace("_", " ").capitalize()
