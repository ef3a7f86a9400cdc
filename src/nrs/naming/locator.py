"""
Reference Locator Parser.

Decodes content locators of the form::

    safe://<address>[/<path>]?content=<ContentType>&data=<DataType>&v=<hash>

into a :class:`DecodedLocator`. ``content`` defaults to ``Raw`` and ``data``
to ``SafeKey``; both match the enum values case-insensitively. ``v`` is the
version anchor, a hex hash pinning one immutable snapshot.

The map never depends on this class directly. It is the default
:class:`~nrs.core.protocols.LocatorParser` used by the CLI and the register
container; any object with a matching ``parse`` method can replace it.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from urllib.parse import parse_qs, urlsplit

from nrs.core.enums import ContentType, DataType
from nrs.core.errors import InvalidLocatorError
from nrs.core.result import Err, Ok, Result

_HEX_RE = re.compile(r"^[0-9a-fA-F]+$")


@dataclass(frozen=True, slots=True)
class DecodedLocator:
    """Facts a locator encodes."""

    content_type: ContentType
    data_type: DataType
    version_anchor: str | None = None

    @property
    def has_version_anchor(self) -> bool:
        return self.version_anchor is not None


class SafeUrlParser:
    """Parses ``safe://`` locators (scheme configurable)."""

    def __init__(self, scheme: str = "safe"):
        self.scheme = scheme.lower()

    def parse(self, locator: str) -> Result[DecodedLocator]:
        try:
            parts = urlsplit(locator)
        except ValueError as e:
            return self._invalid(locator, "not a URL", cause=e)

        if parts.scheme.lower() != self.scheme:
            return self._invalid(locator, f"expected scheme '{self.scheme}://'")
        if not parts.netloc:
            return self._invalid(locator, "missing content address")

        try:
            query = parse_qs(parts.query, keep_blank_values=True, strict_parsing=bool(parts.query))
        except ValueError as e:
            return self._invalid(locator, "malformed query string", cause=e)

        for key, values in query.items():
            if len(values) > 1:
                return self._invalid(locator, f"query parameter '{key}' given more than once")

        try:
            content_type = ContentType.from_label(query.get("content", ["Raw"])[0])
            data_type = DataType.from_label(query.get("data", ["SafeKey"])[0])
        except ValueError as e:
            return self._invalid(locator, str(e), cause=e)

        version_anchor = query.get("v", [None])[0]
        if version_anchor is not None and not _HEX_RE.match(version_anchor):
            return self._invalid(locator, "version anchor must be a hex hash")

        return Ok(DecodedLocator(content_type, data_type, version_anchor))

    @staticmethod
    def _invalid(locator: str, reason: str, cause: Exception | None = None) -> Err:
        return Err(
            InvalidLocatorError(
                f"Invalid content locator \"{locator}\": {reason}", cause=cause
            ).with_context(locator=locator)
        )


__all__ = ["DecodedLocator", "SafeUrlParser"]
