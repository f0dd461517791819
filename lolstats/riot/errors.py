# riot/errors.py – Exceptions levées par le client Riot et l'orchestrateur

from __future__ import annotations

from typing import Optional


class RiotError(Exception):
    """Base exception for every error the lookup core surfaces."""

    status_code: int = 500

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class InvalidInputError(RiotError):
    """Caller supplied something we refuse to send upstream."""

    status_code = 400


class FormatError(InvalidInputError):
    """Malformed Riot ID. Keeps the raw input for diagnostics."""

    def __init__(self, raw: object):
        super().__init__(f'Invalid Riot ID format: {raw!r}. Expected format: "gameName#tagLine"')
        self.raw = raw


class InvalidRegionError(InvalidInputError):
    def __init__(self, received: object, valid: tuple[str, ...] = ()):
        valid_txt = ", ".join(valid) if valid else "americas, europe, asia"
        super().__init__(f"Invalid region {received!r}. Valid regions: {valid_txt}")
        self.received = received


class ConfigurationError(RiotError):
    """Static routing tables do not cover a value. Should never happen at runtime."""

    status_code = 500


class InvalidApiKeyError(RiotError):
    status_code = 401

    def __init__(self):
        super().__init__("Invalid API key")


class NotFoundError(RiotError):
    status_code = 404

    def __init__(self, what: str = "Player not found"):
        super().__init__(what)


class RateLimitError(RiotError):
    """Upstream throttled us. The core never retries on its own."""

    status_code = 429

    def __init__(self, retry_after: int):
        super().__init__(f"Rate limit exceeded. Retry after {retry_after} seconds")
        self.retry_after = retry_after


class UpstreamError(RiotError):
    """Any other upstream failure; keeps the upstream status when there is one."""

    def __init__(self, message: str, status_code: int = 502):
        super().__init__(message, status_code)
