"""
Name Parser: hierarchical names to subname path keys.

A full name such as ``safe://sub.sub.example`` is made of labels separated
by dots. The last label is the *top name* (the owning domain); everything in
front of it is the *subname path*, which is the key the map stores links
under.

    ============================  ============  ==============
    Full name                     Top name      Subname path
    ============================  ============  ==============
    ``example``                   ``example``   ``""``
    ``sub.example``               ``example``   ``"sub"``
    ``safe://sub.sub.example``    ``example``   ``"sub.sub"``
    ============================  ============  ==============

Labels are taken literally: no case-folding, no trimming. Empty labels
(``a..b``, trailing dots) are kept as-is unless strict parsing is requested,
in which case they are rejected with :class:`MalformedNameError`.

A leading ``<scheme>://`` is stripped when the scheme contains no dot.
``a.b://c`` keeps its prefix and splits into the labels ``a`` and ``b://c``.
"""

from __future__ import annotations

import re
from typing import Sequence

from nrs.core.errors import MalformedNameError
from nrs.core.result import Err, Ok, Result

LABEL_SEPARATOR = "."

# "." separates labels, so it never appears in a scheme the parser strips
_SCHEME_RE = re.compile(r"^[A-Za-z][A-Za-z0-9+\-]*://")


def strip_scheme(name: str) -> str:
    """Remove a leading ``<scheme>://`` prefix, if any."""
    return _SCHEME_RE.sub("", name, count=1)


def split_name(full_name: str) -> tuple[str, str]:
    """
    Split a full name into ``(top_name, subname_path)``.

    >>> split_name("safe://sub.sub.example")
    ('example', 'sub.sub')
    >>> split_name("example")
    ('example', '')
    """
    labels = strip_scheme(full_name).split(LABEL_SEPARATOR)
    top_name = labels.pop()
    return top_name, LABEL_SEPARATOR.join(labels)


def derive_subname_path(full_name: str) -> str:
    """
    Remove the top name from a full name.

    >>> derive_subname_path("sub.sub.topname")
    'sub.sub'
    >>> derive_subname_path("sub.cooltopname")
    'sub'
    >>> derive_subname_path("lonetopname")
    ''
    """
    return split_name(full_name)[1]


def join_labels(labels: Sequence[str]) -> str:
    """
    Join subname labels into a subname path.

    >>> join_labels(["sub", "sub"])
    'sub.sub'
    >>> join_labels([])
    ''
    """
    return LABEL_SEPARATOR.join(labels)


def parse_subname_path(full_name: str, *, strict: bool = False) -> Result[str]:
    """
    Derive the subname path, optionally rejecting empty labels.

    In tolerant mode this never fails. In strict mode an empty name or any
    empty label (leading dot, trailing dot, ``a..b``) yields
    ``Err(MalformedNameError)``.
    """
    if strict:
        labels = strip_scheme(full_name).split(LABEL_SEPARATOR)
        if any(label == "" for label in labels):
            reason = "name is empty" if labels == [""] else "name contains an empty label"
            return Err(
                MalformedNameError(f"Malformed name {full_name!r}: {reason}").with_context(
                    name=full_name
                )
            )
    return Ok(derive_subname_path(full_name))


__all__ = [
    "LABEL_SEPARATOR",
    "strip_scheme",
    "split_name",
    "derive_subname_path",
    "join_labels",
    "parse_subname_path",
]
