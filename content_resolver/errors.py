"""Exceptions raised inside the resolution pipeline.

Only `UpstreamError` and `ConfigError` ever leave the package. Not-found
outcomes are turned into 404 error view models by the assembler.
"""

from __future__ import annotations


class ResolverError(Exception):
    """Base class for all resolver errors."""


class UnknownEntityType(ResolverError):
    """The API returned a `__typename` outside the supported set."""

    def __init__(self, typename: str | None):
        self.typename = typename
        super().__init__(f"Unknown entity type: {typename!r}")


class UpstreamError(ResolverError):
    """The GraphQL request failed (network, HTTP status or GraphQL errors)."""

    def __init__(self, message: str, status_code: int | None = None):
        self.status_code = status_code
        super().__init__(message)


class ConfigError(ResolverError):
    """Configuration file could not be applied."""
