"""
Name Resolution Map: subname paths to content locators.

For a given top name ``example``:

    ==============  ===================  ================
    Subname key     Full name            Locator value
    ==============  ===================  ================
    ``""``          ``example``          ``safe://eg1``
    ``"sub"``       ``sub.example``      ``safe://eg2``
    ``"sub.sub"``   ``sub.sub.example``  ``safe://eg3``
    ==============  ===================  ================

The map is a plain in-memory structure. It does no I/O, holds no locks and
keeps no history: ``update`` replaces whatever was stored under the key.
Persisting it (and reconciling concurrent writers) is the job of the
register store the serialized snapshot is written to.

Lookups are exact. ``sub.sub.example`` does not fall back to the ``sub``
entry when ``sub.sub`` is missing.

Examples:
    >>> nrs_map = NrsMap()
    >>> nrs_map.update("sub.example", "safe://eg2").unwrap()
    'safe://eg2'
    >>> nrs_map.resolve(["sub"]).unwrap()
    'safe://eg2'
    >>> nrs_map.resolve_default().is_err()
    True
"""

from __future__ import annotations

from typing import Iterator, Mapping, Sequence

from nrs.core.errors import NotFoundError
from nrs.core.logging import get_logger
from nrs.core.protocols import LocatorParser
from nrs.core.result import Err, Ok, Result
from nrs.naming.links import LinkValidator
from nrs.naming.names import join_labels, parse_subname_path

logger = get_logger(__name__)


class NrsMap:
    """
    Mapping of subname paths to content locators.

    Args:
        parser: Locator Parser handed to the Link Validator on ``update``.
            Defaults to :class:`~nrs.naming.locator.SafeUrlParser`.
        strict_names: Reject full names with empty labels
            (:class:`~nrs.core.errors.MalformedNameError`) instead of
            splitting them literally.
    """

    def __init__(
        self,
        parser: LocatorParser | None = None,
        *,
        strict_names: bool = False,
    ):
        self._entries: dict[str, str] = {}
        self._validator = LinkValidator(parser)
        self.strict_names = strict_names

    @classmethod
    def from_snapshot(
        cls,
        entries: Mapping[str, str],
        parser: LocatorParser | None = None,
        *,
        strict_names: bool = False,
    ) -> NrsMap:
        """Hydrate a map from a persisted snapshot.

        Entries are trusted: they were validated when first stored.
        """
        nrs_map = cls(parser, strict_names=strict_names)
        nrs_map._entries.update(entries)
        return nrs_map

    # ── Lookups ──────────────────────────────────────────────────

    def get_link_for(self, subname: str) -> Result[str]:
        link = self._entries.get(subname)
        if link is None:
            logger.debug("nrs.resolve.miss", subname=subname)
            return Err(
                NotFoundError(
                    f"Link not found in NRS Map Container for: {subname}"
                ).with_context(subname=subname)
            )
        logger.debug("nrs.resolve.hit", subname=subname, link=link)
        return Ok(link)

    def resolve(self, labels: Sequence[str]) -> Result[str]:
        """Resolve a subname given as a label sequence (``[]`` = default)."""
        return self.get_link_for(join_labels(labels))

    def resolve_for_full_name(self, full_name: str) -> Result[str]:
        """Resolve ``sub.sub.example``-style names, top name included."""
        return parse_subname_path(full_name, strict=self.strict_names).flat_map(
            self.get_link_for
        )

    def resolve_default(self) -> Result[str]:
        return self.get_link_for("")

    # ── Mutations ────────────────────────────────────────────────

    def update(self, full_name: str, link: str) -> Result[str]:
        """
        Point ``full_name`` at ``link``, replacing any previous link.

        The link is validated first; on failure the map is unchanged and the
        ``ValidationError`` is returned.
        """
        logger.info("nrs.update", name=full_name)
        match self._validator.validate(link):
            case Err(error):
                return Err(error.with_context(name=full_name))

        match parse_subname_path(full_name, strict=self.strict_names):
            case Err(error):
                return Err(error)
            case Ok(subname):
                self._entries[subname] = link
                logger.info("nrs.update.stored", subname=subname, link=link)
                return Ok(link)

    def remove(self, subname: str) -> Result[str]:
        """Remove the entry for ``subname`` and return the link it held."""
        logger.info("nrs.remove", subname=subname)
        link = self._entries.pop(subname, None)
        if link is None:
            return Err(
                NotFoundError("Sub name not found in NRS Map Container").with_context(
                    subname=subname
                )
            )
        return Ok(link)

    # ── Snapshot access ──────────────────────────────────────────

    def snapshot(self) -> dict[str, str]:
        """Copy of all entries, sorted by subname."""
        return {key: self._entries[key] for key in sorted(self._entries)}

    def subnames(self) -> list[str]:
        return sorted(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, subname: object) -> bool:
        return subname in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(self.subnames())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, NrsMap):
            return NotImplemented
        return self._entries == other._entries

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"NrsMap({self.snapshot()!r})"


__all__ = ["NrsMap"]
