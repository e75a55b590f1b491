"""Error types raised while loading and binding captions."""


class CaptionSearchError(Exception):
    """Base class for caption search failures."""


class MalformedTimestampError(CaptionSearchError, ValueError):
    def __init__(self, timestamp: str):
        self.timestamp = timestamp
        super().__init__(f"Badly formatted timestamp: {timestamp!r}")


class NoCaptionsFoundError(CaptionSearchError, ValueError):
    def __init__(self, message: str = "Transcript does not contain properly formatted captions"):
        super().__init__(message)


class ConfigurationError(CaptionSearchError, RuntimeError):
    """A required collaborator is missing or never became ready."""
