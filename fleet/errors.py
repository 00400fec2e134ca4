"""Exceptions raised by the schedule engine and store."""


class InvalidArgument(ValueError):
    """A schedule field or engine input failed validation."""
