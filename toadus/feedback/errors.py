"""Errors raised while fetching artifacts and building conceptual mutants."""

from __future__ import annotations


class ArtifactError(Exception):
    """An assignment artifact could not be obtained."""

    def __init__(self, message: str, url: str | None = None) -> None:
        super().__init__(message)
        self.url = url


class ArtifactNotEnabledError(ArtifactError):
    """The store has no artifacts for this assignment."""


class ArtifactTransportError(ArtifactError):
    """The store could not be reached or answered with an unexpected status."""

    def __init__(self, message: str, url: str | None = None, status_code: int | None = None) -> None:
        super().__init__(message, url=url)
        self.status_code = status_code


class MutationError(Exception):
    """A conceptual mutant could not be built from the reference model."""
