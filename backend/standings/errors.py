"""Exceptions raised by the standings engine."""


class ConfigurationError(ValueError):
    """
    Invalid contest configuration (prize pool or prize tiers).

    Raised when an allocator is built, never while ranking participant data:
    bad snapshot values are coerced, bad configuration fails loudly.
    """
