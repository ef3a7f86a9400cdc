"""
Structured error types for the NRS core.

Every failure the name resolution map can report is an ``NrsError`` subclass
carried inside an ``Err`` (see :mod:`nrs.core.result`). Errors carry:

- **Category:** What kind of error (not found, validation, parse, storage...)
- **Retryable:** Whether repeating the same call could succeed
- **Context:** Structured metadata (name, subname, locator, register address)
- **Cause:** Chained underlying exception for root cause analysis

Manifesto:
    - **Typed Error Hierarchy:** One class per failure the caller branches on
    - **Expected vs hard failures:** ``NotFoundError`` is a normal outcome
      (e.g. "create if missing"); ``ValidationError`` always rejects the write
    - **Rich Context:** Errors carry the offending name/locator for logging
    - **Error Chaining:** Preserve original exceptions while adding context

Architecture:
    ::

        ┌─────────────────────────────────────────────────────────────────┐
        │                          NrsError                                │
        │  (category, retryable, context, cause)                          │
        ├─────────────────────────────────────────────────────────────────┤
        │                                                                  │
        │  NotFoundError     ValidationError        MalformedNameError     │
        │  (NOT_FOUND)       (VALIDATION)           (PARSE)                │
        │                         │                                        │
        │                    UnversionedLinkError   SerializationError     │
        │                    InvalidLocatorError    (PARSE)                │
        │                                                                  │
        │  StorageError                             ConfigError            │
        │  (STORAGE)                                (CONFIG)               │
        │       │                                                          │
        │  RegisterNotFoundError                                           │
        │  EntryNotFoundError                                              │
        │  ConflictError                                                   │
        └─────────────────────────────────────────────────────────────────┘

Examples:
    >>> error = NotFoundError("Link not found in NRS Map Container for: sub")
    >>> error.category
    <ErrorCategory.NOT_FOUND: 'NOT_FOUND'>
    >>> error.retryable
    False

    Adding context:

    >>> error = UnversionedLinkError("versionable content").with_context(
    ...     locator="safe://abc?content=FilesContainer"
    ... )
    >>> error.context.locator
    'safe://abc?content=FilesContainer'

Guardrails:
    ❌ DON'T: Raise these from map operations
    ✅ DO: Return them wrapped in ``Err``

    ❌ DON'T: Swallow the original exception
    ✅ DO: Pass it as cause= for error chaining

Tags:
    error-handling, exception-hierarchy, error-context, nrs-core

Doc-Types:
    - API Reference
    - Error Handling Guide
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """
    Standard error categories for classification and routing.

    Attributes:
        NOT_FOUND: Requested entry does not exist (expected, non-fatal)
        VALIDATION: Input rejected by an invariant check
        PARSE: Name, locator, or snapshot could not be decoded
        STORAGE: Register store failures
        CONFIG: Missing or invalid settings
        INTERNAL: Bugs, unexpected state
    """

    NOT_FOUND = "NOT_FOUND"
    VALIDATION = "VALIDATION"
    PARSE = "PARSE"
    STORAGE = "STORAGE"
    CONFIG = "CONFIG"
    INTERNAL = "INTERNAL"


@dataclass
class ErrorContext:
    """
    Structured metadata context for errors.

    Typed fields cover the values NRS operations deal with; anything else
    goes into ``metadata``. ``to_dict()`` only emits fields that are set.

    Attributes:
        name: Full hierarchical name being operated on
        subname: Subname path (lookup key)
        locator: Content locator string
        address: Register address
        metadata: Additional key-value pairs
    """

    name: str | None = None
    subname: str | None = None
    locator: str | None = None
    address: str | None = None

    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        result = {}
        for key in ["name", "subname", "locator", "address"]:
            value = getattr(self, key)
            if value is not None:
                result[key] = value
        if self.metadata:
            result.update(self.metadata)
        return result


class NrsError(Exception):
    """
    Base exception for all NRS errors.

    Subclasses set ``default_category`` and ``default_retryable`` so callers
    only pass a message (and optionally context/cause).

    Examples:
        >>> error = NrsError("Something went wrong")
        >>> error.category
        <ErrorCategory.INTERNAL: 'INTERNAL'>
        >>> error.to_dict()["error_type"]
        'NrsError'
    """

    default_category: ErrorCategory = ErrorCategory.INTERNAL
    default_retryable: bool = False

    def __init__(
        self,
        message: str,
        *,
        category: ErrorCategory | None = None,
        retryable: bool | None = None,
        context: ErrorContext | None = None,
        cause: Exception | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category or self.default_category
        self.retryable = retryable if retryable is not None else self.default_retryable
        self.context = context or ErrorContext()
        self.cause = cause

        if cause is not None:
            self.__cause__ = cause

    def with_context(self, **kwargs: Any) -> NrsError:
        """
        Add context to this error (fluent API).

        Usage:
            return Err(NotFoundError("Link not found").with_context(subname="sub"))
        """
        for key, value in kwargs.items():
            if hasattr(self.context, key) and key != "metadata":
                setattr(self.context, key, value)
            else:
                self.context.metadata[key] = value
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        result = {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "category": self.category.value,
            "retryable": self.retryable,
        }

        context_dict = self.context.to_dict()
        if context_dict:
            result["context"] = context_dict

        if self.cause is not None:
            result["cause"] = str(self.cause)

        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, category={self.category.value})"


# =============================================================================
# LOOKUP ERRORS
# =============================================================================


class NotFoundError(NrsError):
    """Requested subname path has no entry in the map."""

    default_category = ErrorCategory.NOT_FOUND


# =============================================================================
# VALIDATION ERRORS (Never Retryable)
# =============================================================================


class ValidationError(NrsError):
    """
    A write was rejected because its input broke an invariant.

    The map is left unmodified whenever an operation returns this error.
    """

    default_category = ErrorCategory.VALIDATION


class UnversionedLinkError(ValidationError):
    """Link targets versionable content but carries no version anchor."""


class InvalidLocatorError(ValidationError):
    """Locator could not be decoded into content/data classification."""


# =============================================================================
# PARSE ERRORS
# =============================================================================


class MalformedNameError(NrsError):
    """Name is empty or contains an empty label (strict parsing only)."""

    default_category = ErrorCategory.PARSE


class SerializationError(NrsError):
    """Persisted map snapshot could not be decoded."""

    default_category = ErrorCategory.PARSE


# =============================================================================
# STORAGE ERRORS
# =============================================================================


class StorageError(NrsError):
    """Register store failure."""

    default_category = ErrorCategory.STORAGE


class RegisterNotFoundError(StorageError):
    """No register exists at the given address."""


class EntryNotFoundError(StorageError):
    """Register has no entry with the given hash."""


class ConflictError(StorageError):
    """
    Register holds more than one current entry.

    Produced when concurrent writers branched the register; resolving the
    branches is up to the caller.
    """


# =============================================================================
# CONFIGURATION ERRORS
# =============================================================================


class ConfigError(NrsError):
    """Missing or invalid configuration."""

    default_category = ErrorCategory.CONFIG


__all__ = [
    "ErrorCategory",
    "ErrorContext",
    "NrsError",
    "NotFoundError",
    "ValidationError",
    "UnversionedLinkError",
    "InvalidLocatorError",
    "MalformedNameError",
    "SerializationError",
    "StorageError",
    "RegisterNotFoundError",
    "EntryNotFoundError",
    "ConflictError",
    "ConfigError",
]
