"""Capability interfaces for the pipeline's collaborators.

Each Protocol declares the single method a slot needs. Concrete classes in
this package satisfy them, but any object with the same shape will do
(structural subtyping, PEP 544).
"""

from typing import Any, Protocol


class Fetch(Protocol):
    """Retrieve the raw result for a resource identifier."""

    async def __call__(self, resource: str) -> Any: ...


class SupportsLog(Protocol):
    """Record a message as a side effect."""

    def log(self, message: str) -> None: ...


class SupportsTransform(Protocol):
    """Map a raw result to a derived result."""

    def transform(self, data: Any) -> Any: ...
