"""
Test support utilities for nrs tests.

Constants and collaborator fakes that are shared across test modules but
are not fixtures themselves.
"""
