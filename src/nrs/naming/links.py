"""
Link Validator: no unversioned links to versionable content.

A name promises referential stability: resolving the same name twice must
give the same content. Files containers, NRS map containers and registers
keep changing after they are created, so a link to one of them is only
accepted when it pins a version anchor. Links to immutable content need no
anchor.

    ==================  ================  ==============  ========
    content_type        data_type         version anchor  accepted
    ==================  ================  ==============  ========
    FilesContainer      any               none            no
    NrsMapContainer     any               none            no
    any                 Register          none            no
    any                 any               present         yes
    Raw / Wallet / ...  SafeKey / Bytes   none            yes
    ==================  ================  ==============  ========
"""

from __future__ import annotations

from nrs.core.errors import UnversionedLinkError
from nrs.core.logging import get_logger
from nrs.core.protocols import LocatorParser
from nrs.core.result import Err, Ok, Result
from nrs.naming.locator import DecodedLocator, SafeUrlParser

logger = get_logger(__name__)


class LinkValidator:
    """Checks locators against the version-anchor rule.

    Args:
        parser: Locator Parser used to decode each locator.
    """

    def __init__(self, parser: LocatorParser | None = None):
        self.parser = parser or SafeUrlParser()

    def validate(self, locator: str) -> Result[None]:
        """Ok(None) if ``locator`` may be stored in a map, Err otherwise.

        Errors are :class:`~nrs.core.errors.ValidationError` subclasses:
        ``InvalidLocatorError`` when the parser rejects the locator,
        ``UnversionedLinkError`` when the rule is broken.
        """
        return self.parser.parse(locator).flat_map(
            lambda decoded: self._check_anchor(locator, decoded)
        )

    @staticmethod
    def _check_anchor(locator: str, decoded: DecodedLocator) -> Result[None]:
        if decoded.has_version_anchor:
            return Ok(None)

        if decoded.content_type.requires_version_anchor:
            classification = str(decoded.content_type)
        elif decoded.data_type.requires_version_anchor:
            classification = str(decoded.data_type)
        else:
            return Ok(None)

        logger.warning(
            "nrs.link.unversioned", locator=locator, classification=classification
        )
        return Err(
            UnversionedLinkError(
                f"The linked content ({classification}) is versionable, therefore "
                f"NRS requires the link to specify a hash: \"{locator}\""
            ).with_context(locator=locator, classification=classification)
        )


def validate_nrs_link(locator: str, parser: LocatorParser | None = None) -> Result[None]:
    """Validate a single locator with a throwaway :class:`LinkValidator`."""
    return LinkValidator(parser).validate(locator)


__all__ = ["LinkValidator", "validate_nrs_link"]
