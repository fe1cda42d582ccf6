"""Commands that operate on the task storage."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, replace
from datetime import datetime

from .args import parse_int
from .mark import ALLOWED_MARKS, Mark, from_string
from .storage import DataRow, Storage
from .validator import CountHandler, IntegerHandler, MarkHandler, TaskHandler, Validator

_TIME_FORMAT = "%Y-%m-%d %H:%M:%S"
_ZERO_TIME_TEXT = "0001-01-01 00:00:00"
_TOO_MANY_PARAMS = "not enough params, at least two require"


@dataclass(frozen=True)
class CommandInfo:
    """Name and descriptions of a command, shown by help."""

    name: str
    short: str
    long: str = ""


class Command(ABC):
    """A command the program can run."""

    @abstractmethod
    def handle(self, params: Sequence[str]) -> None:
        """Run the command with the given parameters."""

    @abstractmethod
    def info(self) -> CommandInfo:
        """Return data describing the command."""

    def validator(self, params: Sequence[str]) -> Validator:
        """Return the validator for the command's parameters."""
        return Validator(params)


class _StorageCommand(Command, ABC):
    """A command that works on a task storage."""

    def __init__(self, storage: Storage) -> None:
        self.storage = storage

    def _id_validator(self, params: Sequence[str], count: int) -> Validator:
        return Validator(
            params,
            [
                CountHandler(count, count),
                IntegerHandler(0),
                TaskHandler(self.storage, 0),
            ],
        )


class AddCommand(_StorageCommand):
    """Adds a new task."""

    def validator(self, params: Sequence[str]) -> Validator:
        return Validator(params, [CountHandler(1, 1)])

    def handle(self, params: Sequence[str]) -> None:
        task_id = self.storage.add(DataRow(description=params[0], status=Mark.TODO))
        print(f"Command added successfully (ID: {task_id})")
        self.storage.save()

    def info(self) -> CommandInfo:
        return CommandInfo("Add", "Adding a new command")


class DeleteCommand(_StorageCommand):
    """Deletes a task by ID."""

    def validator(self, params: Sequence[str]) -> Validator:
        return self._id_validator(params, 1)

    def handle(self, params: Sequence[str]) -> None:
        task_id = parse_int(params[0])
        self.storage.delete(task_id)
        print(f"Command deleted successfully (ID: {task_id})")
        self.storage.save()

    def info(self) -> CommandInfo:
        return CommandInfo("Delete", "Delete a command by ID")


class UpdateCommand(_StorageCommand):
    """Changes the description of a task."""

    def validator(self, params: Sequence[str]) -> Validator:
        return self._id_validator(params, 2)

    def handle(self, params: Sequence[str]) -> None:
        if len(params) > 2:
            raise ValueError(_TOO_MANY_PARAMS)
        task_id = parse_int(params[0])
        row = self.storage.get_by_id(task_id)
        self.storage.update(task_id, replace(row, description=params[1]))
        print(f"Command updated successfully (ID: {task_id})")
        self.storage.save()

    def info(self) -> CommandInfo:
        return CommandInfo("Update", "Updating a command by ID")


class MarkCommand(_StorageCommand):
    """Sets a fixed status on a task."""

    def __init__(self, storage: Storage, new_mark: Mark) -> None:
        super().__init__(storage)
        self.new_mark = new_mark

    def validator(self, params: Sequence[str]) -> Validator:
        return self._id_validator(params, 1)

    def handle(self, params: Sequence[str]) -> None:
        if len(params) > 2:
            raise ValueError(_TOO_MANY_PARAMS)
        task_id = parse_int(params[0])
        row = self.storage.get_by_id(task_id)
        self.storage.update(task_id, replace(row, status=self.new_mark))
        print(f"Command's mark updated successfully (ID: {task_id})")
        self.storage.save()

    def info(self) -> CommandInfo:
        return CommandInfo(
            "Mark",
            "Marking a command",
            'Pass new status with command separated with "-". '
            "For example, mark-in-progress change status to in-progress.",
        )


def _status_code(status: int) -> str:
    try:
        return Mark(status).to_string()
    except ValueError:
        return next(iter(ALLOWED_MARKS))


def _format_time(value: datetime | None) -> str:
    return _ZERO_TIME_TEXT if value is None else value.strftime(_TIME_FORMAT)


def _list_line(*cells: object) -> str:
    task_id, description, status, created, updated = (str(cell) for cell in cells)
    return f"{task_id:>5} | {description:>50} | {status:>15} | {created:>25} | {updated:>25} "


class ListCommand(_StorageCommand):
    """Prints all tasks, optionally only those with one status."""

    def validator(self, params: Sequence[str]) -> Validator:
        validator = Validator(params, [CountHandler(maximum=1)])
        if len(params) == 1:
            validator.add_handler(MarkHandler(0))
        return validator

    def handle(self, params: Sequence[str]) -> None:
        if params:
            rows = self.storage.get_by_status(from_string(params[0]))
        else:
            rows = self.storage.get_all()
        print(_list_line("ID", "Description", "Status", "CreatedAt", "UpdatedAt"))
        for row in rows:
            print(
                _list_line(
                    row.id,
                    row.description,
                    _status_code(row.status),
                    _format_time(row.created_at),
                    _format_time(row.updated_at),
                )
            )

    def info(self) -> CommandInfo:
        return CommandInfo("List", "Listing all tasks", "Listing all tasks with status filter")


class HelpCommand(Command):
    """Prints information about the available commands."""

    def __init__(self, commands: Mapping[str, Command] | None = None) -> None:
        self.commands: Mapping[str, Command] = commands if commands is not None else {}

    def validator(self, params: Sequence[str]) -> Validator:
        return Validator(params, [CountHandler(0, 1)])

    def handle(self, params: Sequence[str]) -> None:
        if len(params) == 1:
            code = params[0]
            info = self._by_code(code).info()
            print(
                f"Command: {code}\nName: {info.name}\nSummary: {info.short}\nDetails: {info.long}",
                end="",
            )
        elif not params:
            print(f"{'Command':>20} | {'Name':>10} | Summary")
            for code, command in self.commands.items():
                info = command.info()
                print(f"{code:>20} | {info.name:>10} | {info.short}")

    def info(self) -> CommandInfo:
        return CommandInfo("Help", "Print help info about available commands")

    def _by_code(self, code: str) -> Command:
        try:
            return self.commands[code]
        except KeyError:
            raise LookupError(f'cannot find command with code "{code}"') from None