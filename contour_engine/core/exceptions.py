"""Core exception types shared across layers."""


class ContourError(RuntimeError):
    """Base class for engine errors."""


class ProviderError(ContourError):
    """Raised by provider adapters when a remote lookup fails.

    ``message`` is the short text surfaced inline on the affected result.
    """

    def __init__(self, message: str, *, detail: str | None = None) -> None:
        super().__init__(detail or message)
        self.message = message


class ProviderNotFoundError(ProviderError):
    """Raised when a provider answers but has no entry for the query."""


class UnknownHandlerError(ContourError, LookupError):
    """Raised when focusing a handler id that maps to no module."""


__all__ = [
    "ContourError",
    "ProviderError",
    "ProviderNotFoundError",
    "UnknownHandlerError",
]
