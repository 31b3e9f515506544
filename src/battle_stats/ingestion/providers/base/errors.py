from __future__ import annotations


class ProviderError(RuntimeError):
    """Base exception for provider-related failures."""


class TransportError(ProviderError):
    """HTTP/network/transport layer failures (timeouts, connection errors, non-2xx, etc.)."""


class DecodeError(ProviderError):
    """Response body could not be decoded into the expected JSON envelope."""


class UpstreamError(ProviderError):
    """Provider returned a well-formed response indicating an application-level error."""

    def __init__(self, message: str, *, code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.code = code

    def __str__(self) -> str:
        if self.code is None:
            return self.message
        return f"{self.message} (code={self.code})"
