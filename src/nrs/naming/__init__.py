"""Hierarchical name resolution: parser, validator, map, persistence."""

from nrs.naming.links import LinkValidator, validate_nrs_link
from nrs.naming.locator import DecodedLocator, SafeUrlParser
from nrs.naming.map import NrsMap
from nrs.naming.names import (
    derive_subname_path,
    join_labels,
    parse_subname_path,
    split_name,
    strip_scheme,
)
from nrs.naming.register import (
    FileRegisterClient,
    InMemoryRegisterClient,
    NrsMapContainer,
    register_address,
)
from nrs.naming.serialization import JsonMapSerializer

__all__ = [
    "NrsMap",
    "LinkValidator",
    "validate_nrs_link",
    "DecodedLocator",
    "SafeUrlParser",
    "JsonMapSerializer",
    "InMemoryRegisterClient",
    "FileRegisterClient",
    "NrsMapContainer",
    "register_address",
    "derive_subname_path",
    "join_labels",
    "parse_subname_path",
    "split_name",
    "strip_scheme",
]
