from __future__ import annotations


class UpstreamUnavailable(RuntimeError):
    """The AI provider could not produce a usable completion.

    Raised for timeouts, connection failures, non-2xx responses and provider
    payloads without message content. Callers recover by switching to the
    fallback path; this error is never shown to API clients.
    """

    def __init__(self, message: str, *, provider: str | None = None) -> None:
        super().__init__(message)
        self.provider = provider


class ParseError(ValueError):
    """AI text did not contain a usable JSON object of the expected shape."""


class InternalError(RuntimeError):
    """Unexpected failure inside the coach (e.g. database unreachable)."""

    def __init__(self, message: str, *, public_message: str = "An unexpected error occurred") -> None:
        super().__init__(message)
        self.public_message = public_message
