# tasktrack

A small command-line task tracker. Tasks are kept in `todo-list.json` in the
current directory. Each task has a numeric ID, a description, a status and
creation and update times.

## Installation

```
pip install .
```

This installs the `task-cli` command.

## Usage

```
task-cli add "Buy groceries"
task-cli update 1 "Buy groceries and cook dinner"
task-cli delete 1

task-cli mark-todo 1
task-cli mark-in-progress 1
task-cli mark-done 1
task-cli mark-canceled 1

task-cli list
task-cli list done

task-cli help
task-cli help add
```

Statuses are `todo`, `in-progress`, `done` and `canceled`. A new task starts
as `todo`. New tasks get the ID one above the highest ID in use.

`list` prints a table of tasks ordered by ID, with their status code and
their creation and update times; with a status code it prints only the tasks
that have that status.

`help` prints a table of every command with its name and summary; `help
<command>` prints the name, summary and details of one command.

When a command is unknown, the help listing is shown. When a command's
arguments are wrong (too many or too few, an ID that is not a number, an ID
with no task, or an unknown status) the command is not run and the problems
are printed. Other errors are printed to standard error and the command exits
with status 1.

## The task file

`todo-list.json` holds one JSON object keyed by task ID. Each entry has the
fields `ID`, `Description`, `Status` (stored as a number), `CreatedAt` and
`UpdatedAt` (RFC 3339 timestamps). A missing or unreadable file is treated as
an empty task list.

The file is written after each change, but only while at least one task
exists: deleting the last task leaves the file as it was.

## Using it from Python

```python
from tasktrack.storage import Storage, DataRow
from tasktrack.manager import build_manager, main
from tasktrack.args import parse_args

storage = Storage("todo-list.json")
manager = build_manager(storage)
manager.handle(parse_args(["task-cli", "add", "Write report"]))

# Or run the whole command on an argument list (without the program name):
main(["list"])
```

- `tasktrack.storage.Storage` keeps tasks in memory and offers `add`,
  `update`, `delete`, `get_by_id`, `get_by_status`, `get_all`, `load` and
  `save`. A missing ID raises `TaskNotFoundError`.
- `tasktrack.mark.Mark` is the status enumeration; `from_string` turns a
  status code into a `Mark` and raises `UnsupportedMarkError` for unknown
  codes.
- `Manager.handle` returns the list of validation errors (empty when the
  command ran).

## Running the tests

```
pip install ".[test]"
pytest
```