"""
Deterministic JSON encoding of an NrsMap snapshot.

Wire shape::

    {"map":{"":"safe://eg1","sub":"safe://eg2","sub.sub":"safe://eg3"}}

Keys are sorted and separators compact, so encoding an unchanged map twice
produces identical bytes (and identical register entry hashes).
"""

from __future__ import annotations

import json
from typing import Any

from nrs.core.errors import SerializationError
from nrs.core.protocols import LocatorParser
from nrs.core.result import Err, Ok, Result, try_result_with
from nrs.naming.map import NrsMap

MAP_FIELD = "map"


class JsonMapSerializer:
    """
    :class:`~nrs.core.protocols.MapSerializer` backed by JSON.

    Args:
        parser: Locator Parser given to decoded maps for later updates.
        strict_names: Forwarded to decoded maps.
    """

    def __init__(self, parser: LocatorParser | None = None, *, strict_names: bool = False):
        self.parser = parser
        self.strict_names = strict_names

    def encode(self, nrs_map: NrsMap) -> bytes:
        payload = {MAP_FIELD: nrs_map.snapshot()}
        return json.dumps(
            payload, sort_keys=True, separators=(",", ":"), ensure_ascii=False
        ).encode("utf-8")

    def decode(self, data: bytes) -> Result[NrsMap]:
        return try_result_with(
            lambda: json.loads(data.decode("utf-8")),
            lambda e: SerializationError("NRS map snapshot is not valid JSON", cause=e),
        ).flat_map(self._from_payload)

    def _from_payload(self, payload: Any) -> Result[NrsMap]:
        if not isinstance(payload, dict) or not isinstance(payload.get(MAP_FIELD), dict):
            return Err(SerializationError(f"NRS map snapshot must be an object with a '{MAP_FIELD}' object"))

        entries = payload[MAP_FIELD]
        for key, value in entries.items():
            if not isinstance(value, str):
                return Err(
                    SerializationError(
                        f"NRS map entry {key!r} must map to a locator string"
                    ).with_context(subname=key)
                )

        return Ok(NrsMap.from_snapshot(entries, self.parser, strict_names=self.strict_names))


__all__ = ["JsonMapSerializer"]
