"""
Task business rules

Resource-level checks layered on top of the role matrix. The task handlers
live outside this service; they call these after the role guard has passed.
"""

from enum import Enum

from src.libs.result import Error, ErrorKind, Result, Return

from .entities import UserRole
from .tenant_context import TenantContext


class TaskStatus(str, Enum):
    todo = "todo"
    in_progress = "in_progress"
    review = "review"
    done = "done"


def check_task_status_change(context: TenantContext, new_status: TaskStatus) -> Result[None]:
    """Only owners and admins may mark a task as done"""
    if new_status == TaskStatus.done and context.role not in (UserRole.owner, UserRole.admin):
        return Return.err(
            Error(
                "TASK_DONE_REQUIRES_ADMIN",
                "Only owners and admins can mark tasks as done",
                ErrorKind.forbidden,
            )
        )
    return Return.ok(None)
