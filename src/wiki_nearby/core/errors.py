"""Errors raised by sources and the discovery pipeline."""


class DiscoveryError(Exception):
    """Base class for errors surfaced by discovery."""


class NoLocation(DiscoveryError):
    """Discovery was requested without a coordinate."""

    def __init__(self, message: str = "No location available") -> None:
        super().__init__(message)


class DiscoveryFailed(DiscoveryError):
    """The authoritative geosearch source failed."""

    def __init__(self, cause: Exception) -> None:
        super().__init__(f"Failed to fetch articles: {cause}")
        self.cause = cause


class SourceUnavailable(Exception):
    """A source could not be queried or its response could not be decoded."""

    def __init__(self, source: str, reason: str) -> None:
        super().__init__(f"{source}: {reason}")
        self.source = source
        self.reason = reason
