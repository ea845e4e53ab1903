"""Ok/Err results for expected failures.

Steps return `Ok(next_state)` or `Err(step_error)` instead of raising; callers
narrow with `isinstance` or `match`:

    match discover_version(root=root):
        case Ok(found):
            console.print(f"{found} ({found.file_name})")
        case Err(error):
            print_step_error(error, console)
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, NoReturn, TypeAlias, TypeVar

__all__ = ["Err", "Ok", "Result"]

T = TypeVar("T")
E = TypeVar("E")
F = TypeVar("F")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    value: T

    def unwrap(self) -> T:
        return self.value

    def map_err(self, f: Callable[[object], F]) -> Ok[T]:
        return self

    def __repr__(self) -> str:
        return f"Ok({self.value!r})"


@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    error: E

    def unwrap(self) -> NoReturn:
        """Raise ValueError; only for tests and call sites that already checked."""
        raise ValueError(f"unwrap on Err: {self.error!r}")

    def map_err(self, f: Callable[[E], F]) -> Err[F]:
        """Translate the error, e.g. to attach the file it came from."""
        return Err(f(self.error))

    def __repr__(self) -> str:
        return f"Err({self.error!r})"


Result: TypeAlias = Ok[T] | Err[E]
