"""
Collaborator protocols for the NRS core.

The name resolution map owns no URL codec, no wire format and no network
client. Each of those is injected as an object matching one of the
protocols below, so tests (and other networks) can supply their own.

Architecture:
    ::

        protocols.py
        ├── LocatorParser   : decode a locator into classification + anchor
        ├── MapSerializer   : NrsMap <-> persisted bytes, stable ordering
        └── RegisterClient  : versioned store holding serialized snapshots

    Consumers:
        naming/links.py, naming/map.py, naming/register.py, cli/

Guardrails:
    ❌ DON'T: Add implementation logic to protocol classes
    ✅ DO: Keep protocols pure contracts; implementations live in nrs.naming

Tags:
    protocol, dependency-injection, nrs-core, contracts
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from nrs.core.result import Result
    from nrs.naming.locator import DecodedLocator
    from nrs.naming.map import NrsMap
    from nrs.naming.register import Entry, EntryHash


@runtime_checkable
class LocatorParser(Protocol):
    """Decodes a content locator string."""

    def parse(self, locator: str) -> Result[DecodedLocator]:
        """Return the locator's classification, or Err(InvalidLocatorError)."""
        ...


@runtime_checkable
class MapSerializer(Protocol):
    """
    Encodes/decodes a full map to a persisted form.

    ``encode`` must iterate keys in a stable order so that repeated encodes
    of an unchanged map are byte-identical.
    """

    def encode(self, nrs_map: NrsMap) -> bytes:
        ...

    def decode(self, data: bytes) -> Result[NrsMap]:
        ...


@runtime_checkable
class RegisterClient(Protocol):
    """
    Versioned store for serialized map snapshots.

    Entries form a DAG: each write names the entries it supersedes as
    parents. The entries nobody supersedes are the register's current heads.
    """

    def create(self, name: str | None = None) -> Result[str]:
        """Create a register and return its address."""
        ...

    def read(self, address: str) -> Result[set[tuple[EntryHash, Entry]]]:
        """Current heads of the register."""
        ...

    def read_entry(self, address: str, entry_hash: EntryHash) -> Result[Entry]:
        ...

    def write(
        self, address: str, entry: Entry, parents: set[EntryHash]
    ) -> Result[EntryHash]:
        ...


__all__ = ["LocatorParser", "MapSerializer", "RegisterClient"]
