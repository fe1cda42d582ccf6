"""Dispatching of command-line arguments to commands."""

from __future__ import annotations

import sys
from collections.abc import Sequence
from dataclasses import dataclass, field

from .args import Arguments, parse_args
from .commands import (
    AddCommand,
    Command,
    DeleteCommand,
    HelpCommand,
    ListCommand,
    MarkCommand,
    UpdateCommand,
)
from .mark import ALLOWED_MARKS
from .storage import Storage
from .validator import ValidationError

STORAGE_FILE = "todo-list.json"


class CommandNotFoundError(LookupError):
    """Raised when neither the requested command nor help is known."""


@dataclass
class Manager:
    """Holds the known commands and runs one of them."""

    commands: dict[str, Command] = field(default_factory=dict)

    def handle(self, arguments: Arguments) -> list[ValidationError]:
        """Validate and run the command; return the validation errors, if any.

        An unknown command falls back to help. When validation fails the
        errors are printed and the command is not run.
        """
        command = self.commands.get(arguments.cmd) or self.commands.get("help")
        if command is None:
            raise CommandNotFoundError(f'command "{arguments.cmd}" not found')
        errors = command.validator(arguments.params).run()
        if errors:
            print("Command not executed in case of validation errors:")
            for error in errors:
                print(error)
            return errors
        command.handle(arguments.params)
        return []


def build_manager(storage: Storage) -> Manager:
    """Create a manager with every command; help is added last."""
    commands: dict[str, Command] = {
        "add": AddCommand(storage),
        "update": UpdateCommand(storage),
        "delete": DeleteCommand(storage),
    }
    for code, mark in ALLOWED_MARKS.items():
        commands[f"mark-{code}"] = MarkCommand(storage, mark)
    commands["list"] = ListCommand(storage)
    commands["help"] = HelpCommand(commands)
    return Manager(commands)


def main(argv: Sequence[str] | None = None) -> int:
    """Run the task tracker on the given arguments (without program name)."""
    storage = Storage(STORAGE_FILE)
    try:
        storage.load()
    except (OSError, ValueError):
        pass
    full_argv = sys.argv if argv is None else ["task-cli", *argv]
    try:
        build_manager(storage).handle(parse_args(full_argv))
    except (LookupError, ValueError, OSError) as exc:
        print(exc, file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())