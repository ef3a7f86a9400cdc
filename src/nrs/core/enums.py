"""
Content classifications decoded from a content locator.

A locator names content in the storage network and encodes two independent
classifications: what the content *is* (``ContentType``) and what kind of
network data holds it (``DataType``). Some classifications are versionable:
the object behind them keeps changing, so a name may only point at them when
the link pins a version.

Each member carries its own ``requires_version_anchor`` flag. Marking a new
classification as versionable is a one-line change to the table below it.

STDLIB ONLY - NO PYDANTIC.
"""

from enum import Enum


class ContentType(str, Enum):
    """What the content at a locator is."""

    RAW = "Raw"
    WALLET = "Wallet"
    FILES_CONTAINER = "FilesContainer"
    NRS_MAP_CONTAINER = "NrsMapContainer"
    MULTIMAP = "Multimap"
    MEDIA_TYPE = "MediaType"

    @property
    def requires_version_anchor(self) -> bool:
        return self in _VERSIONABLE_CONTENT_TYPES

    @classmethod
    def from_label(cls, label: str) -> "ContentType":
        """Look up a member by value, ignoring case (``filescontainer`` works)."""
        return _lookup(cls, label)

    def __str__(self) -> str:
        return self.value


class DataType(str, Enum):
    """Kind of network data object a locator addresses."""

    SAFE_KEY = "SafeKey"
    BYTES = "Bytes"
    REGISTER = "Register"

    @property
    def requires_version_anchor(self) -> bool:
        return self in _VERSIONABLE_DATA_TYPES

    @classmethod
    def from_label(cls, label: str) -> "DataType":
        """Look up a member by value, ignoring case."""
        return _lookup(cls, label)

    def __str__(self) -> str:
        return self.value


_VERSIONABLE_CONTENT_TYPES = frozenset({
    ContentType.FILES_CONTAINER,
    ContentType.NRS_MAP_CONTAINER,
})

_VERSIONABLE_DATA_TYPES = frozenset({
    DataType.REGISTER,
})


def _lookup(enum_cls, label: str):
    wanted = label.lower()
    for member in enum_cls:
        if member.value.lower() == wanted:
            return member
    raise ValueError(f"Unknown {enum_cls.__name__}: {label!r}")


__all__ = ["ContentType", "DataType"]
