"""Validation of command parameters."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from .args import parse_int
from .mark import UnsupportedMarkError, from_string
from .storage import Storage, TaskNotFoundError


class ValidationError(ValueError):
    """A parameter failed a validation rule."""


class Handler(ABC):
    """One validation rule applied to a command's parameters."""

    @abstractmethod
    def run(self, params: Sequence[str]) -> None:
        """Raise ValidationError if the parameters break this rule."""

    @staticmethod
    def _param_at(params: Sequence[str], index: int) -> str:
        if index < 0 or index >= len(params):
            raise ValidationError(f"param with index {index} isn't exist")
        return params[index]


class Validator:
    """Runs a set of handlers over one list of parameters."""

    def __init__(self, params: Iterable[str] = (), handlers: Iterable[Handler] = ()) -> None:
        self.params = tuple(params)
        self._handlers = list(handlers)

    def add_handler(self, handler: Handler) -> None:
        """Append a handler to run."""
        self._handlers.append(handler)

    def run(self) -> list[ValidationError]:
        """Run every handler and return the errors they raised, in order."""
        errors: list[ValidationError] = []
        for handler in self._handlers:
            try:
                handler.run(self.params)
            except ValidationError as exc:
                errors.append(exc)
        return errors


@dataclass
class CountHandler(Handler):
    """Checks the number of parameters; a bound of 0 or less is unset."""

    minimum: int = 0
    maximum: int = 0

    def run(self, params: Sequence[str]) -> None:
        low, high = self.minimum, self.maximum
        if low > high > 0:
            low, high = high, low
        count = len(params)
        if count < low and low > 0 and high <= 0:
            raise ValidationError(f"invalid params count. It should be minimum {low}")
        if count > high and high > 0 and low <= 0:
            raise ValidationError(f"invalid params count. It should be less than {high}")
        if count < low or count > high:
            if low == high:
                raise ValidationError(f"invalid params count. It should be {high}")
            if low > 0 and high > 0:
                raise ValidationError(
                    f"invalid params count. It should be between {low} and {high}"
                )


@dataclass
class IntegerHandler(Handler):
    """Checks that the parameter at an index is an integer."""

    index: int = 0

    def run(self, params: Sequence[str]) -> None:
        param = self._param_at(params, self.index)
        try:
            parse_int(param)
        except ValueError:
            raise ValidationError(f"param with index {self.index} isn't an integer") from None


@dataclass
class MarkHandler(Handler):
    """Checks that the parameter at an index is a known status code."""

    index: int = 0

    def run(self, params: Sequence[str]) -> None:
        code = self._param_at(params, self.index)
        try:
            from_string(code)
        except UnsupportedMarkError:
            raise ValidationError(f'the mark with code "{code}" doesn\'t exist') from None


@dataclass
class TaskHandler(Handler):
    """Checks that the parameter at an index is the ID of a stored task."""

    storage: Storage
    index: int = 0

    def run(self, params: Sequence[str]) -> None:
        raw_id = self._param_at(params, self.index)
        error = ValidationError(f'the task with ID="{raw_id}" doesn\'t exist')
        try:
            self.storage.get_by_id(parse_int(raw_id))
        except (ValueError, TaskNotFoundError):
            raise error from None