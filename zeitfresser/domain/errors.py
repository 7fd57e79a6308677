"""Errors raised by the task core."""


class InvalidArgument(ValueError):
    """
    Raised when a required argument is missing or invalid.

    The message always names the offending parameter, e.g.
    "Argument 'task' must not be null!".
    """


def require(value, name: str):
    """Return ``value`` or raise InvalidArgument if it is None."""
    if value is None:
        raise InvalidArgument(f"Argument '{name}' must not be null!")
    return value
