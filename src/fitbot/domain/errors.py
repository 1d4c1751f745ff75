"""Error taxonomy shared by services, adapters and the API layer."""


class FitBotError(Exception):
    """Base class for expected application errors."""


class ValidationError(FitBotError):
    """Input is malformed or out of range."""


class AuthenticationError(FitBotError):
    """Credentials or token were rejected."""


class ConflictError(FitBotError):
    """The record being created already exists."""


class ConfigurationError(FitBotError):
    """A required setting, such as an API key, is missing."""


class NotFoundError(FitBotError):
    """A lookup found no matching record."""


class TransportError(FitBotError):
    """Talking to an external service failed or timed out."""


class UpstreamStatusError(TransportError):
    """An external service answered with a non-success HTTP status."""

    def __init__(self, service: str, status_code: int, body: str) -> None:
        super().__init__(f"{service} error: {status_code} {body}".strip())
        self.status_code = status_code
        self.body = body


class UpstreamFormatError(FitBotError):
    """An external call succeeded but the payload lacked expected content."""


class RateLimitError(FitBotError):
    """A client sent too many requests in the current window."""
