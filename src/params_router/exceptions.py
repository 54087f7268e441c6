"""
params-router exceptions.
Each exception covers one kind of failure; "no match" is never one of them.
"""


class ParamsRouterException(Exception):
    """Base exception for all params-router errors."""

    def __init__(self, message: str = "An error occurred") -> None:
        self.message = message
        super().__init__(self.message)


class PatternSyntaxError(ParamsRouterException):
    """A path template could not be compiled."""

    def __init__(self, pattern: str, detail: str) -> None:
        self.pattern = pattern
        self.detail = detail
        super().__init__(f"Invalid pattern {pattern!r}: {detail}")


class PatternMismatchError(ParamsRouterException):
    """
    Stringifying failed because a required segment has no value.

    Raised instead of producing a broken path; callers building
    destinations must supply every required key.
    """

    def __init__(self, pattern: str, key: str, detail: str | None = None) -> None:
        self.pattern = pattern
        self.key = key
        super().__init__(detail or f"No value provided for key {key!r} in pattern {pattern!r}")


class DestinationError(ParamsRouterException):
    """A navigation destination could not be resolved."""
    pass
