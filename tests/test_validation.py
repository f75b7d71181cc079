import pytest

from todo_crud.models import Todo
from todo_crud.validation import TodoValidationError, validate_todo


def make_todo(task="Test task", description="Test description"):
    todo = Todo()
    todo.task = task
    todo.description = description
    todo.completed = False
    return todo


class TestValidateTodo:
    def test_valid_todo_passes(self):
        assert validate_todo(make_todo()) is None

    def test_empty_strings_count_as_present(self):
        validate_todo(make_todo(task="", description=""))

    def test_null_task(self):
        with pytest.raises(TodoValidationError, match="task must not be null") as exc_info:
            validate_todo(make_todo(task=None))
        assert exc_info.value.violations == ["task must not be null"]

    def test_null_description(self):
        with pytest.raises(TodoValidationError, match="description must not be null") as exc_info:
            validate_todo(make_todo(description=None))
        assert exc_info.value.violations == ["description must not be null"]

    def test_both_null_reports_every_violation(self):
        with pytest.raises(TodoValidationError) as exc_info:
            validate_todo(make_todo(task=None, description=None))
        message = str(exc_info.value)
        assert "Invalid Todo:" in message
        assert "task must not be null" in message
        assert "description must not be null" in message
        assert exc_info.value.violations == ["task must not be null", "description must not be null"]

    def test_is_a_value_error(self):
        with pytest.raises(ValueError):
            validate_todo(Todo())

    def test_does_not_mutate_input(self):
        todo = make_todo(task=None)
        before = todo.model_copy()
        with pytest.raises(TodoValidationError):
            validate_todo(todo)
        assert todo == before


class TestTodoModel:
    def test_empty_construction(self):
        todo = Todo()
        assert todo.id is None
        assert todo.created_at is None
        assert todo.task is None
        assert todo.description is None
        assert todo.completed is False

    def test_full_construction(self):
        todo = Todo(id="abc", created_at=1700000000, task="t", description="d", completed=True)
        assert (todo.id, todo.created_at, todo.task, todo.description, todo.completed) == (
            "abc",
            1700000000,
            "t",
            "d",
            True,
        )

    def test_accepts_wire_alias(self):
        assert Todo(createdAt=5).created_at == 5
        assert Todo(created_at=5).model_dump(by_alias=True)["createdAt"] == 5
