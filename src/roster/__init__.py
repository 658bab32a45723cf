"""Roster: keeps a part-filtered list of members in sync with a REST backend."""

__version__ = "0.1.0"
