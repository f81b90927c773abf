"""
Typed payloads describing what a notification is about.

One dataclass per notification category; each sender accepts
exactly one of them.
"""

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal


@dataclass(frozen=True)
class TaskContext:
    id: int
    title: str
    due_date: datetime | None = None
    assignee_id: int | None = None

    @classmethod
    def from_task(cls, task):
        return cls(
            id=task.pk,
            title=task.title,
            due_date=task.due_date,
            assignee_id=task.assignee_id,
        )


@dataclass(frozen=True)
class RepaymentContext:
    id: int
    amount: Decimal
    due_date: date
    grant_id: int
    grant_title: str | None = None


@dataclass(frozen=True)
class GrantContext:
    id: int
    title: str
    status: str


@dataclass(frozen=True)
class ProgramContext:
    id: int
    name: str


@dataclass(frozen=True)
class SystemContext:
    message: str


NotificationContext = (
    TaskContext
    | RepaymentContext
    | GrantContext
    | ProgramContext
    | SystemContext
)
