"""StepOutcome — Continue, Break and Fail variants of a single middleware step."""

from __future__ import annotations

from typing import Generic, NoReturn, TypeVar, Union

T = TypeVar("T")


class Continue(Generic[T]):
    """The step completed; the chain moves on carrying ``value``."""

    __slots__ = ("_value",)

    def __init__(self, value: T = None) -> None:  # type: ignore[assignment]
        self._value = value

    @property
    def value(self) -> T:
        return self._value

    def is_continue(self) -> bool:
        return True

    def is_break(self) -> bool:
        return False

    def is_fail(self) -> bool:
        return False

    def unwrap(self) -> T:
        return self._value

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Continue) and other._value == self._value

    def __repr__(self) -> str:
        return f"Continue({self._value!r})"


class Break:
    """The step asked for the whole chain to end early, successfully."""

    __slots__ = ()

    def is_continue(self) -> bool:
        return False

    def is_break(self) -> bool:
        return True

    def is_fail(self) -> bool:
        return False

    def unwrap(self) -> None:
        return None

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Break)

    def __hash__(self) -> int:
        return hash("break")

    def __repr__(self) -> str:
        return "Break()"


class Fail:
    """The step failed; the chain aborts and raises ``error``."""

    __slots__ = ("_error",)

    def __init__(self, error: BaseException) -> None:
        self._error = error

    @property
    def error(self) -> BaseException:
        return self._error

    def is_continue(self) -> bool:
        return False

    def is_break(self) -> bool:
        return False

    def is_fail(self) -> bool:
        return True

    def unwrap(self) -> NoReturn:
        raise self._error

    def __repr__(self) -> str:
        return f"Fail({self._error!r})"


StepOutcome = Union[Continue[T], Break, Fail]

__all__ = ["Break", "Continue", "Fail", "StepOutcome"]
