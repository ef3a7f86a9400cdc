"""NRS Core -- foundation layer for the name resolution map.

Architecture::

    Layer 1 -- Type System & Errors
        errors.py          Structured error hierarchy (NrsError, NotFoundError, ...)
        result.py          Result[T] envelope (Ok / Err / try_result_with)
        enums.py           ContentType / DataType with version-anchor flags
        protocols.py       Collaborator protocols (LocatorParser, MapSerializer,
                           RegisterClient)

    Layer 2 -- Cross-Cutting Concerns
        logging.py         Structured logging (structlog)
        settings.py        NrsSettings + cached get_settings()
        hashing.py         Deterministic register entry hashing

Tags:
    nrs-core, foundation, protocol-first, result-pattern
"""

from nrs.core.enums import ContentType, DataType
from nrs.core.errors import (
    ConfigError,
    ConflictError,
    EntryNotFoundError,
    ErrorCategory,
    ErrorContext,
    InvalidLocatorError,
    MalformedNameError,
    NotFoundError,
    NrsError,
    RegisterNotFoundError,
    SerializationError,
    StorageError,
    UnversionedLinkError,
    ValidationError,
)
from nrs.core.protocols import LocatorParser, MapSerializer, RegisterClient
from nrs.core.result import Err, Ok, Result, from_optional, try_result_with

__all__ = [
    # enums
    "ContentType",
    "DataType",
    # errors
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
    # protocols
    "LocatorParser",
    "MapSerializer",
    "RegisterClient",
    # result
    "Result",
    "Ok",
    "Err",
    "try_result_with",
    "from_optional",
]
