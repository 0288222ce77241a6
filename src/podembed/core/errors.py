"""Custom exceptions for podembed."""


class PodembedError(Exception):
    """Base exception for all podembed errors."""

    pass


class ConfigError(PodembedError):
    """Configuration-related errors."""

    pass


class FeedFetchError(PodembedError):
    """Feed could not be fetched or parsed.

    Attributes:
        message: Underlying failure description.
        url: The feed URL that was requested.
    """

    def __init__(self, message: str, url: str) -> None:
        super().__init__(message)
        self.message = message
        self.url = url


class TranscriptFetchError(PodembedError):
    """Transcript URL was unreachable or returned a non-OK status."""

    def __init__(self, message: str, url: str) -> None:
        super().__init__(message)
        self.message = message
        self.url = url
