"""Errors raised by the flag evaluation core."""


class InvalidConfiguration(Exception):
    """A stored flag cannot be evaluated (e.g. variant weights sum to zero)."""
