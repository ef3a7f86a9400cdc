"""
Result envelope for consistent success/failure handling.

Every NRS operation returns a ``Result[T]``: ``Ok[T]`` on success, ``Err[T]``
carrying an :class:`~nrs.core.errors.NrsError` on failure. Lookup misses are
expected outcomes that callers branch on ("create if missing"), so they are
values rather than exceptions.

Manifesto:
    - **Explicit over Implicit:** No hidden exceptions that callers might miss
    - **Functional composition:** Chain operations with map/flat_map without
      nested try/except blocks
    - **Deterministic:** The map performs no I/O, so there is never a retry

Architecture:
    ::

        ┌─────────────────────────────────────────────────────────────┐
        │                     Result[T]                                │
        │                    (Type Alias)                              │
        ├─────────────────┬─────────────────┬─────────────────────────┤
        │     Ok[T]       │     Err[T]      │     Utilities           │
        │   (Success)     │   (Failure)     │                         │
        ├─────────────────┼─────────────────┼─────────────────────────┤
        │ • value: T      │ • error: Exc    │ • try_result_with()     │
        │ • map()         │ • map_err()     │ • from_optional()       │
        │ • flat_map()    │ • or_else()     │                         │
        │ • unwrap()      │ • unwrap_or()   │                         │
        └─────────────────┴─────────────────┴─────────────────────────┘

Examples:
    >>> from nrs.core.result import Ok, Err, Result
    >>> nrs_map.resolve_for_full_name("sub.example")
    Ok('safe://...')
    >>> match nrs_map.get_link_for("missing"):
    ...     case Ok(link):
    ...         print(link)
    ...     case Err(error):
    ...         print(error.category.value)
    NOT_FOUND

Guardrails:
    ❌ DON'T: Use unwrap() without checking is_ok() first
    ✅ DO: Use unwrap_or() or pattern matching for safe extraction

    ❌ DON'T: Raise exceptions inside map/flat_map functions
    ✅ DO: Return Err from flat_map if the operation can fail

Tags:
    result-pattern, error-handling, functional-programming, nrs-core

Doc-Types:
    - API Reference
    - Error Handling Guide
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Generic, TypeVar, overload

from nrs.core.errors import NrsError


T = TypeVar("T")
U = TypeVar("U")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """
    Successful result containing a value.

    Immutable (frozen dataclass). map() and flat_map() transform the value
    while staying inside the Result context.

    Examples:
        >>> Ok(10).map(lambda x: x * 2).unwrap()
        20
        >>> Ok("safe://abc").is_ok()
        True
    """

    value: T

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False

    def unwrap(self) -> T:
        """Get the value. Safe for Ok."""
        return self.value

    def unwrap_or(self, default: T) -> T:
        """Get value or default (always returns value for Ok)."""
        return self.value

    def unwrap_or_else(self, f: Callable[[Exception], T]) -> T:
        """Get value or call f with error (always returns value for Ok)."""
        return self.value

    def map(self, f: Callable[[T], U]) -> Result[U]:
        """Transform the value if Ok."""
        return Ok(f(self.value))

    def flat_map(self, f: Callable[[T], Result[U]]) -> Result[U]:
        """Chain to another Result-returning function."""
        return f(self.value)

    def map_err(self, f: Callable[[Exception], Exception]) -> Result[T]:
        """Transform error if Err (no-op for Ok)."""
        return self

    def or_else(self, f: Callable[[Exception], Result[T]]) -> Result[T]:
        """Return self if Ok, otherwise call f with error."""
        return self

    def and_then(self, f: Callable[[T], Result[U]]) -> Result[U]:
        """Alias for flat_map."""
        return f(self.value)

    def inspect(self, f: Callable[[T], None]) -> Result[T]:
        """Call f with value for side effects, return self."""
        f(self.value)
        return self

    def inspect_err(self, f: Callable[[Exception], None]) -> Result[T]:
        """Call f with error for side effects (no-op for Ok)."""
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {"ok": True, "value": self.value}

    def __repr__(self) -> str:
        return f"Ok({self.value!r})"


@dataclass(frozen=True, slots=True)
class Err(Generic[T]):
    """
    Failed result containing an error.

    map() and flat_map() pass the Err through unchanged so failures propagate
    along a chain; or_else() and unwrap_or() are the recovery points.

    Examples:
        >>> from nrs.core.errors import NotFoundError
        >>> err = Err(NotFoundError("Link not found"))
        >>> err.is_err()
        True
        >>> err.unwrap_or("safe://fallback")
        'safe://fallback'
    """

    error: Exception

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True

    def unwrap(self) -> T:
        """Raise the error. Use only when you're sure it's Ok."""
        raise self.error

    def unwrap_or(self, default: T) -> T:
        """Get default since this is Err."""
        return default

    def unwrap_or_else(self, f: Callable[[Exception], T]) -> T:
        """Call f with error to get value."""
        return f(self.error)

    def map(self, f: Callable[[T], U]) -> Result[U]:
        """No-op for Err."""
        return Err(self.error)

    def flat_map(self, f: Callable[[T], Result[U]]) -> Result[U]:
        """No-op for Err."""
        return Err(self.error)

    def map_err(self, f: Callable[[Exception], Exception]) -> Result[T]:
        """Transform the error."""
        return Err(f(self.error))

    def or_else(self, f: Callable[[Exception], Result[T]]) -> Result[T]:
        """Call f with error to try recovery."""
        return f(self.error)

    def and_then(self, f: Callable[[T], Result[U]]) -> Result[U]:
        """No-op for Err."""
        return Err(self.error)

    def inspect(self, f: Callable[[T], None]) -> Result[T]:
        """No-op for Err."""
        return self

    def inspect_err(self, f: Callable[[Exception], None]) -> Result[T]:
        """Call f with error for side effects, return self."""
        f(self.error)
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        if isinstance(self.error, NrsError):
            return {"ok": False, "error": self.error.to_dict()}
        return {
            "ok": False,
            "error": {
                "error_type": type(self.error).__name__,
                "message": str(self.error),
            },
        }

    def __repr__(self) -> str:
        return f"Err({self.error!r})"


# Type alias for Result
Result = Ok[T] | Err[T]


def try_result_with(
    f: Callable[[], T],
    error_mapper: Callable[[Exception], Exception] | None = None,
) -> Result[T]:
    """
    Execute function and map exceptions to NRS error types.

    Bridges exception-raising code (json, urllib, file I/O) into the Result
    pattern.

    Examples:
        >>> import json
        >>> from nrs.core.errors import SerializationError
        >>> result = try_result_with(
        ...     lambda: json.loads("{"),
        ...     lambda e: SerializationError("Invalid snapshot", cause=e),
        ... )
        >>> type(result.error).__name__
        'SerializationError'

    Args:
        f: Zero-argument callable that may raise exceptions
        error_mapper: Optional function to transform exceptions

    Returns:
        Ok[T] if f() succeeds, Err with mapped exception if f() raises
    """
    try:
        return Ok(f())
    except Exception as e:
        if error_mapper:
            return Err(error_mapper(e))
        return Err(e)


@overload
def from_optional(value: T, error: Exception) -> Ok[T]: ...


@overload
def from_optional(value: None, error: Exception) -> Err[T]: ...


def from_optional(value: T | None, error: Exception) -> Result[T]:
    """
    Convert optional value to Result.

    Examples:
        >>> from_optional({"": "safe://a"}.get(""), KeyError("x")).unwrap()
        'safe://a'
        >>> from_optional(None, KeyError("x")).is_err()
        True
    """
    if value is not None:
        return Ok(value)
    return Err(error)


__all__ = [
    "Result",
    "Ok",
    "Err",
    "try_result_with",
    "from_optional",
]
