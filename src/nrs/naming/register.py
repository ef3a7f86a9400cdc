"""
Register stores and the NRS map container.

A register is a small versioned store: every write appends an entry that
names the entries it supersedes (its parents). Entries nobody supersedes are
the register's current *heads*. One writer produces a single chain with one
head; two writers that both extend the same head branch the register and
leave two heads until someone writes an entry with both as parents.

The NRS map is persisted by writing its serialized snapshot as a register
entry. :class:`NrsMapContainer` wires a register client, a serializer and a
locator parser together for that load/mutate/save cycle.

Architecture:
    ::

        NrsMapContainer.add(address, "sub.example", link)
            │
            ├── load(address)      RegisterClient.read → heads
            │                      MapSerializer.decode(head entry)
            ├── NrsMap.update(...)
            └── save(address, map) MapSerializer.encode
                                   RegisterClient.write(entry, parents=heads)

    Clients:
        InMemoryRegisterClient  : process-local dict
        FileRegisterClient      : same, persisted as one JSON document

    Every save is kept. ``load(address, version)`` reads the map as of any
    entry hash; ``version(address)`` names the current one.

Examples:
    >>> container = NrsMapContainer(InMemoryRegisterClient())
    >>> address = container.create().unwrap()
    >>> container.add(address, "example", "safe://eg1").unwrap()
    'safe://eg1'
    >>> container.resolve(address, "example").unwrap()
    'safe://eg1'
"""

from __future__ import annotations

import base64
import json
import os
import uuid
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from nrs.core.errors import (
    ConflictError,
    EntryNotFoundError,
    RegisterNotFoundError,
    SerializationError,
    StorageError,
)
from nrs.core.hashing import compute_entry_hash, compute_hash
from nrs.core.logging import get_logger
from nrs.core.protocols import LocatorParser, MapSerializer, RegisterClient
from nrs.core.result import Err, Ok, Result, from_optional, try_result_with
from nrs.naming.map import NrsMap
from nrs.naming.serialization import JsonMapSerializer

logger = get_logger(__name__)

Entry = bytes
EntryHash = str


def register_address(name: str) -> str:
    """Address of the register created for ``name`` (a top name, for NRS maps)."""
    return compute_hash("register", name)


@dataclass(frozen=True, slots=True)
class _StoredEntry:
    entry: Entry
    parents: frozenset[EntryHash]


class InMemoryRegisterClient:
    """:class:`~nrs.core.protocols.RegisterClient` kept in a dict."""

    def __init__(self) -> None:
        self._registers: dict[str, dict[EntryHash, _StoredEntry]] = {}

    def create(self, name: str | None = None) -> Result[str]:
        """Create a register; a named register is created only once."""
        address = register_address(name) if name else uuid.uuid4().hex
        if address in self._registers:
            return Ok(address)
        self._registers[address] = {}
        persisted = self._persist()
        if persisted.is_err():
            del self._registers[address]
            return Err(persisted.error)
        logger.info("register.created", address=address)
        return Ok(address)

    def read(self, address: str) -> Result[set[tuple[EntryHash, Entry]]]:
        logger.debug("register.read", address=address)
        match self._register(address):
            case Err(error):
                return Err(error)
            case Ok(entries):
                return Ok({(h, entries[h].entry) for h in self._heads(entries)})

    def read_entry(self, address: str, entry_hash: EntryHash) -> Result[Entry]:
        match self._register(address):
            case Err(error):
                return Err(error)
            case Ok(entries):
                stored = entries.get(entry_hash)
                if stored is None:
                    return Err(
                        EntryNotFoundError(
                            f"No entry {entry_hash} in register at \"{address}\""
                        ).with_context(address=address, entry_hash=entry_hash)
                    )
                return Ok(stored.entry)

    def write(
        self, address: str, entry: Entry, parents: set[EntryHash]
    ) -> Result[EntryHash]:
        match self._register(address):
            case Err(error):
                return Err(error)
            case Ok(entries):
                unknown = sorted(set(parents) - entries.keys())
                if unknown:
                    return Err(
                        EntryNotFoundError(
                            f"Parent entries not found in register at \"{address}\": "
                            + ", ".join(unknown)
                        ).with_context(address=address)
                    )
                entry_hash = compute_entry_hash(entry, parents)
                if entry_hash in entries:
                    return Ok(entry_hash)
                entries[entry_hash] = _StoredEntry(entry, frozenset(parents))
                persisted = self._persist()
                if persisted.is_err():
                    del entries[entry_hash]
                    return Err(persisted.error)
                logger.info("register.write", address=address, entry_hash=entry_hash)
                return Ok(entry_hash)

    def _register(self, address: str) -> Result[dict[EntryHash, _StoredEntry]]:
        return from_optional(
            self._registers.get(address),
            RegisterNotFoundError(f"No Register found at \"{address}\"").with_context(
                address=address
            ),
        )

    @staticmethod
    def _heads(entries: dict[EntryHash, _StoredEntry]) -> set[EntryHash]:
        superseded: set[EntryHash] = set()
        for stored in entries.values():
            superseded |= stored.parents
        return set(entries) - superseded

    def _persist(self) -> Result[None]:
        return Ok(None)


def _decode_stored(stored: dict[str, Any]) -> _StoredEntry:
    parents = stored["parents"]
    if not isinstance(parents, list) or not all(isinstance(p, str) for p in parents):
        raise TypeError(f"parents must be a list of entry hashes, got {parents!r}")
    return _StoredEntry(
        base64.b64decode(stored["entry"], validate=True), frozenset(parents)
    )


class FileRegisterClient(InMemoryRegisterClient):
    """
    Register client persisted as a single JSON document.

    Document shape::

        {"registers": {"<address>": {"<hash>": {"entry": "<base64>",
                                                "parents": ["<hash>", ...]}}}}

    Use :meth:`open` to load an existing document; every mutation rewrites
    the file atomically.
    """

    def __init__(self, path: Path) -> None:
        super().__init__()
        self.path = Path(path)

    @classmethod
    def open(cls, path: Path) -> Result[FileRegisterClient]:
        client = cls(path)
        if not client.path.exists():
            return Ok(client)

        return (
            try_result_with(
                lambda: client.path.read_text(encoding="utf-8"),
                lambda e: StorageError(
                    f"Cannot read register store {client.path}", cause=e
                ),
            )
            .flat_map(
                lambda text: try_result_with(
                    lambda: json.loads(text),
                    lambda e: SerializationError(
                        f"Register store {client.path} is corrupt", cause=e
                    ),
                )
            )
            .flat_map(client._load_document)
            .map(lambda _: client)
        )

    def _load_document(self, document: Any) -> Result[None]:
        try:
            for address, entries in document["registers"].items():
                self._registers[address] = {
                    entry_hash: _decode_stored(stored)
                    for entry_hash, stored in entries.items()
                }
        except (KeyError, TypeError, AttributeError, ValueError) as e:
            return Err(
                SerializationError(f"Register store {self.path} is corrupt", cause=e)
            )
        return Ok(None)

    def _persist(self) -> Result[None]:
        document = {
            "registers": {
                address: {
                    entry_hash: {
                        "entry": base64.b64encode(stored.entry).decode("ascii"),
                        "parents": sorted(stored.parents),
                    }
                    for entry_hash, stored in sorted(entries.items())
                }
                for address, entries in sorted(self._registers.items())
            }
        }
        return try_result_with(
            lambda: self._write_atomic(json.dumps(document, indent=2)),
            lambda e: StorageError(f"Cannot write register store {self.path}", cause=e),
        )

    def _write_atomic(self, text: str) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp.write_text(text, encoding="utf-8")
        os.replace(tmp, self.path)


class NrsMapContainer:
    """
    Loads, mutates and saves NRS maps stored in registers.

    Args:
        register: Register client holding the snapshots.
        parser: Locator Parser for validating links on update.
        serializer: Snapshot codec; defaults to :class:`JsonMapSerializer`.
        strict_names: Forwarded to every loaded map.
    """

    def __init__(
        self,
        register: RegisterClient,
        parser: LocatorParser | None = None,
        serializer: MapSerializer | None = None,
        *,
        strict_names: bool = False,
    ):
        self.register = register
        self.parser = parser
        self.serializer = serializer or JsonMapSerializer(parser, strict_names=strict_names)
        self.strict_names = strict_names

    def create(self, name: str | None = None, nrs_map: NrsMap | None = None) -> Result[str]:
        """Create a register for a map, optionally storing an initial snapshot."""
        created = self.register.create(name)
        if nrs_map is None or created.is_err():
            return created
        return self.save(created.value, nrs_map).map(lambda _: created.value)

    def load(self, address: str, version: EntryHash | None = None) -> Result[NrsMap]:
        """
        Materialize the map at ``address``.

        Without ``version`` the current head is loaded and an empty register
        is an empty map. With ``version`` the entry of that hash is loaded,
        including entries that later saves have superseded.
        """
        if version is not None:
            return self.register.read_entry(address, version).flat_map(
                self.serializer.decode
            )
        match self._head(address):
            case Err(error):
                return Err(error)
            case Ok(None):
                return Ok(NrsMap(self.parser, strict_names=self.strict_names))
            case Ok((_, entry)):
                return self.serializer.decode(entry)

    def version(self, address: str) -> Result[EntryHash | None]:
        """Hash of the current map version, or None for an empty register."""
        return self._head(address).map(lambda head: head[0] if head else None)

    def _head(self, address: str) -> Result[tuple[EntryHash, Entry] | None]:
        match self.register.read(address):
            case Err(error):
                return Err(error)
            case Ok(heads) if not heads:
                return Ok(None)
            case Ok(heads) if len(heads) > 1:
                return Err(
                    ConflictError(
                        f"Register at \"{address}\" has {len(heads)} concurrent versions of the NRS map"
                    ).with_context(address=address, heads=sorted(h for h, _ in heads))
                )
            case Ok(heads):
                return Ok(next(iter(heads)))

    def save(self, address: str, nrs_map: NrsMap) -> Result[EntryHash]:
        """Write ``nrs_map`` superseding every current head."""
        return self.register.read(address).flat_map(
            lambda heads: self.register.write(
                address, self.serializer.encode(nrs_map), {h for h, _ in heads}
            )
        )

    def add(self, address: str, full_name: str, link: str) -> Result[str]:
        return self._mutate(address, lambda nrs_map: nrs_map.update(full_name, link))

    def remove(self, address: str, subname: str) -> Result[str]:
        return self._mutate(address, lambda nrs_map: nrs_map.remove(subname))

    def resolve(
        self, address: str, full_name: str, version: EntryHash | None = None
    ) -> Result[str]:
        return self.load(address, version).flat_map(
            lambda nrs_map: nrs_map.resolve_for_full_name(full_name)
        )

    def _mutate(self, address, change) -> Result[str]:
        match self.load(address):
            case Err(error):
                return Err(error)
            case Ok(nrs_map):
                outcome = change(nrs_map)
                if outcome.is_err():
                    return outcome
                return self.save(address, nrs_map).map(lambda _: outcome.value)


__all__ = [
    "Entry",
    "EntryHash",
    "register_address",
    "InMemoryRegisterClient",
    "FileRegisterClient",
    "NrsMapContainer",
]
