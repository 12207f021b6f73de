"""
The ways a run of the bot can fail.
"""


class ReleaseBotError(Exception):
    pass


class ConfigError(ReleaseBotError):
    """A required environment value is missing, or a value is invalid."""


class EventParseError(ReleaseBotError):
    """The event payload is empty or isn't a pull request event."""


class MalformedTagError(ReleaseBotError):
    """An existing release tag doesn't look like vMAJOR.MINOR.PATCH."""

    def __init__(self, tag: str) -> None:
        super().__init__(f"Release tag {tag!r} is not of the form vMAJOR.MINOR.PATCH")
        self.tag = tag


class RemoteCallError(ReleaseBotError):
    """
    A call to GitHub failed.

    The underlying requests exception is chained as ``__cause__``.
    """
