"""Tests for TaskManager validation rules and repository orchestration."""

from __future__ import annotations

import datetime
from unittest.mock import AsyncMock, Mock

import pytest

from todokit import Task, TaskIn, TaskManager, TaskNotFoundError, TaskRepository, TaskStatus, TaskValidationError

JAN_1 = datetime.date(2024, 1, 1)
JAN_2 = datetime.date(2024, 1, 2)


def make_task_in(**overrides: object) -> TaskIn:
    fields: dict[str, object] = {
        "text": "Buy milk",
        "created_date": JAN_1,
        "expected_date": JAN_2,
        "status": TaskStatus.IN_PROGRESS,
    }
    fields.update(overrides)
    return TaskIn(**fields)  # type: ignore[arg-type]


class TestValidate:
    """Tests for the fail-fast validation sequence."""

    def test_valid_payload_is_trimmed(self) -> None:
        result = TaskManager.validate(make_task_in(text="  Buy milk \n"))
        assert result.text == "Buy milk"

    @pytest.mark.parametrize("text", ["", "   ", "\t\n"])
    def test_empty_text_rejected(self, text: str) -> None:
        with pytest.raises(TaskValidationError, match="cannot be empty"):
            TaskManager.validate(make_task_in(text=text))

    def test_text_of_255_characters_accepted(self) -> None:
        result = TaskManager.validate(make_task_in(text="a" * 255))
        assert len(result.text) == 255

    def test_text_of_256_characters_rejected(self) -> None:
        with pytest.raises(TaskValidationError, match="cannot exceed 255 characters"):
            TaskManager.validate(make_task_in(text="a" * 256))

    def test_length_is_measured_after_trimming(self) -> None:
        result = TaskManager.validate(make_task_in(text="  " + "a" * 255 + "  "))
        assert len(result.text) == 255

    def test_expected_before_created_rejected(self) -> None:
        with pytest.raises(TaskValidationError, match="Expected date cannot be earlier"):
            TaskManager.validate(make_task_in(created_date=JAN_2, expected_date=JAN_1))

    def test_same_day_dates_accepted(self) -> None:
        TaskManager.validate(make_task_in(created_date=JAN_1, expected_date=JAN_1))

    @pytest.mark.parametrize("status", [-1, 4, 99])
    def test_invalid_status_rejected(self, status: int) -> None:
        with pytest.raises(TaskValidationError, match="Invalid task status"):
            TaskManager.validate(make_task_in(status=status))

    def test_missing_created_date_rejected(self) -> None:
        with pytest.raises(TaskValidationError, match="created date is required"):
            TaskManager.validate(make_task_in(created_date=None))

    def test_missing_expected_date_rejected(self) -> None:
        with pytest.raises(TaskValidationError, match="expected date is required"):
            TaskManager.validate(make_task_in(expected_date=None))

    def test_first_violation_wins(self) -> None:
        """Date order is reported before an invalid status."""
        with pytest.raises(TaskValidationError, match="Expected date cannot be earlier"):
            TaskManager.validate(make_task_in(created_date=JAN_2, expected_date=JAN_1, status=9))

    def test_empty_text_reported_before_missing_dates(self) -> None:
        with pytest.raises(TaskValidationError, match="cannot be empty"):
            TaskManager.validate(TaskIn())


async def test_create_inserts_and_commits() -> None:
    """create validates, inserts, commits and returns the assigned id."""
    mock_repo = Mock(spec=TaskRepository)
    mock_repo.create = AsyncMock(return_value=42)
    mock_repo.commit = AsyncMock()

    manager = TaskManager(mock_repo)
    out = await manager.create(make_task_in(text=" Buy milk "))

    assert out.id == 42
    assert out.text == "Buy milk"
    assert out.created_date == JAN_1
    assert out.expected_date == JAN_2
    assert out.status == TaskStatus.IN_PROGRESS
    mock_repo.create.assert_awaited_once()
    mock_repo.commit.assert_awaited_once()


async def test_create_invalid_payload_never_reaches_repository() -> None:
    """Validation failures stop before any store access."""
    mock_repo = Mock(spec=TaskRepository)
    mock_repo.create = AsyncMock()

    manager = TaskManager(mock_repo)
    with pytest.raises(TaskValidationError):
        await manager.create(make_task_in(text=""))

    mock_repo.create.assert_not_called()


def stored_task(id: int, **overrides: object) -> Task:
    fields: dict[str, object] = {
        "id": id,
        "text": "Buy milk",
        "created_date": JAN_1,
        "expected_date": JAN_2,
        "status": int(TaskStatus.IN_PROGRESS),
    }
    fields.update(overrides)
    return Task(**fields)


async def test_update_overrides_body_id() -> None:
    """update uses the id argument, not the id carried in the payload."""
    mock_repo = Mock(spec=TaskRepository)
    mock_repo.update = AsyncMock()
    mock_repo.commit = AsyncMock()
    mock_repo.find_by_id = AsyncMock(return_value=stored_task(5, status=int(TaskStatus.COMPLETED)))

    manager = TaskManager(mock_repo)
    out = await manager.update(5, make_task_in(id=99, status=TaskStatus.COMPLETED))

    assert out.id == 5
    assert out.status == TaskStatus.COMPLETED
    updated_task = mock_repo.update.await_args.args[0]
    assert updated_task.id == 5


async def test_update_returns_persisted_row() -> None:
    """update echoes the row read back after commit."""
    mock_repo = Mock(spec=TaskRepository)
    mock_repo.update = AsyncMock()
    mock_repo.commit = AsyncMock()
    mock_repo.find_by_id = AsyncMock(return_value=stored_task(7, text="as stored"))

    manager = TaskManager(mock_repo)
    out = await manager.update(7, make_task_in(text="as sent"))

    assert out.text == "as stored"
    mock_repo.find_by_id.assert_awaited_once_with(7)


async def test_update_row_gone_after_commit_raises_not_found() -> None:
    mock_repo = Mock(spec=TaskRepository)
    mock_repo.update = AsyncMock()
    mock_repo.commit = AsyncMock()
    mock_repo.find_by_id = AsyncMock(return_value=None)

    manager = TaskManager(mock_repo)
    with pytest.raises(TaskNotFoundError, match="Task 7 not found"):
        await manager.update(7, make_task_in())


async def test_update_not_found_propagates_without_commit() -> None:
    """A missing row surfaces as TaskNotFoundError and nothing is committed."""
    mock_repo = Mock(spec=TaskRepository)
    mock_repo.update = AsyncMock(side_effect=TaskNotFoundError(5))
    mock_repo.commit = AsyncMock()

    manager = TaskManager(mock_repo)
    with pytest.raises(TaskNotFoundError, match="Task 5 not found"):
        await manager.update(5, make_task_in())

    mock_repo.commit.assert_not_called()


async def test_find_all_forwards_options() -> None:
    """find_all passes filter and sort options through to the repository."""
    mock_repo = Mock(spec=TaskRepository)
    mock_repo.find_all = AsyncMock(return_value=[])

    manager = TaskManager(mock_repo)
    result = await manager.find_all(status=TaskStatus.TESTING, sort_order="desc", sort_field="id")

    assert result == []
    mock_repo.find_all.assert_awaited_once_with(status=TaskStatus.TESTING, sort_order="desc", sort_field="id")


async def test_delete_commits() -> None:
    """delete removes the row and commits."""
    mock_repo = Mock(spec=TaskRepository)
    mock_repo.delete_by_id = AsyncMock()
    mock_repo.commit = AsyncMock()

    manager = TaskManager(mock_repo)
    await manager.delete(3)

    mock_repo.delete_by_id.assert_awaited_once_with(3)
    mock_repo.commit.assert_awaited_once()
