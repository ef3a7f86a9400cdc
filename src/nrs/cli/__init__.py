"""``nrs`` command line interface."""
