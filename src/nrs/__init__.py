"""
NRS - hierarchical name resolution for content-addressed storage.

Maps dot-structured names (``sub.sub.example``) to versioned content
locators and resolves them back.

- nrs.core: errors, Result envelope, logging, settings, protocols
- nrs.naming: name parser, link validator, NrsMap, serializer, registers
- nrs.cli: the ``nrs`` command line
"""

__version__ = "0.1.0"

from nrs.core import *  # noqa
from nrs.naming import *  # noqa
