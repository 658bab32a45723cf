"""Core synchronization logic for Roster.

CRITICAL: This package must have NO UI dependencies.
"""
