from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Generic, Iterator, TypeVar, TYPE_CHECKING

if TYPE_CHECKING:
    import asyncio
    from .logger import ConsoleLogger
    from .result import Result

T = TypeVar("T")
U = TypeVar("U")


class NoSuchElementError(LookupError):
    """Raised by ``Optional.get`` on an empty container."""

    def __init__(self, message: str = "No value present"):
        super().__init__(message)


@dataclass(frozen=True, repr=False)
class Optional(Generic[T]):
    """A container holding at most one value.

    Build instances with ``Optional.empty``, ``Optional.of`` or
    ``Optional.of_nullable``. ``of`` accepts ``None`` and wraps it as a present
    value; ``of_nullable`` treats ``None`` as absence.
    """

    _value: Any = None
    _empty: bool = False

    def __post_init__(self) -> None:
        if self._empty:
            object.__setattr__(self, "_value", None)

    @staticmethod
    def empty() -> "Optional[T]":
        return Optional(None, True)

    @staticmethod
    def of(value: T) -> "Optional[T]":
        return Optional(value)

    @staticmethod
    def of_nullable(value: T | None) -> "Optional[T]":
        if value is None:
            return Optional.empty()
        return Optional.of(value)

    @staticmethod
    def of_completion(source: Awaitable[T], *, logger: "ConsoleLogger | None" = None) -> "asyncio.Future[Optional[T]]":
        """Adapt an awaitable into a future of an Optional.

        The returned future resolves to a present container with the source's
        result, or to an empty one if the source fails or is cancelled.
        """
        from .completion import of_completion
        return of_completion(source, logger=logger)

    def is_present(self) -> bool: return not self._empty
    def is_empty(self) -> bool: return self._empty

    def get(self) -> T:
        if self.is_present():
            return self._value
        raise NoSuchElementError()

    def if_present(self, consumer: Callable[[T], Any]) -> "Optional[T]":
        if self.is_present():
            consumer(self._value)
        return self

    def if_empty(self, action: Callable[[], Any]) -> "Optional[T]":
        if self.is_empty():
            action()
        return self

    def map(self, mapper: Callable[[T], U]) -> "Optional[U]":
        if self.is_present():
            return Optional.of(mapper(self._value))
        return Optional.empty()

    def flat_map(self, mapper: Callable[[T], "Optional[U]"]) -> "Optional[U]":
        # the mapper's container is returned as is, never re-wrapped
        if self.is_present():
            return mapper(self._value)
        return Optional.empty()

    def flat_nullable(self) -> "Optional[T]":
        return self.flat_map(Optional.of_nullable)

    def filter(self, predicate: Callable[[T], bool]) -> "Optional[T]":
        if self.is_present() and predicate(self._value):
            return Optional.of(self._value)
        return Optional.empty()

    def or_else(self, other: T) -> T:
        return self._value if self.is_present() else other

    def or_else_get(self, supplier: Callable[[], T]) -> T:
        if self.is_present():
            return self._value
        return supplier()

    def or_else_raise(self, supplier: Callable[[], BaseException]) -> T:
        """Return the value, or raise the exception built by ``supplier``.

        The supplier is only called when the container is empty, and whatever
        it returns is raised unchanged.
        """
        if self.is_present():
            return self._value
        raise supplier()

    or_else_throw = or_else_raise

    def to_result(self, error: Callable[[], Any] | None = None) -> "Result[Any, T]":
        from .result import Ok, Err
        if self.is_present():
            return Ok(self._value)
        return Err(error() if error is not None else NoSuchElementError())

    def __iter__(self) -> Iterator[T]:
        if self.is_present():
            yield self._value

    def __repr__(self) -> str:
        if self._empty:
            return "Optional.empty"
        return f"Optional.of({self._value!r})"
