"""
Exception hierarchy for the dining scraper.
"""

from __future__ import annotations

from typing import Optional


class ScraperError(Exception):
    """Base class for every error raised by the scraper."""


class ConfigError(ScraperError):
    """Configuration file is missing or does not validate."""


class TransportError(ScraperError):
    """The HTTP request could not be completed."""

    def __init__(self, url: str, message: str) -> None:
        super().__init__(f"Request to {url} failed: {message}")
        self.url = url


class DecodeError(ScraperError):
    """The response body is not JSON matching the expected schema."""

    def __init__(self, url: str, message: str) -> None:
        super().__init__(f"Could not decode response from {url}: {message}")
        self.url = url


class RetryExhaustedError(ScraperError):
    """All attempts for an operation failed."""

    def __init__(self, identifier: str, attempts: int, last_error: Optional[BaseException]) -> None:
        super().__init__(f"All {attempts} attempts failed for {identifier}: {last_error}")
        self.identifier = identifier
        self.attempts = attempts
        self.last_error = last_error
