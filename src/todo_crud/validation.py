from __future__ import annotations

from typing import List

from .models import Todo


class TodoValidationError(ValueError):
    """Raised when a todo is not fit to be written to the store."""

    def __init__(self, violations: List[str]) -> None:
        self.violations = list(violations)
        if len(self.violations) == 1:
            message = self.violations[0]
        else:
            message = "Invalid Todo: " + "; ".join(self.violations)
        super().__init__(message)


# PUBLIC_INTERFACE
def validate_todo(todo: Todo) -> None:
    """
    Check that `todo` carries every field required for persistence.

    All violations are collected before raising, so a todo missing both
    `task` and `description` reports both.

    Raises:
        TodoValidationError: if `task` or `description` is None.
    """
    violations: List[str] = []
    if todo.task is None:
        violations.append("task must not be null")
    if todo.description is None:
        violations.append("description must not be null")
    if violations:
        raise TodoValidationError(violations)
