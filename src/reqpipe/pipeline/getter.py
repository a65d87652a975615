"""RequestPipeline — fetch a resource with optional logging and transformation.

The pipeline holds three slots:

- ``fetcher`` (required): async callable ``resource -> raw result``
- ``logger`` (optional): object with ``log(message)``
- ``transformer`` (optional): object with ``transform(data)``

An empty slot falls back to a no-op (logger) or identity (transformer), and
a default-constructed pipeline uses ``null_fetch``, which performs no I/O
and returns ``None``. Any slot can be swapped at any time with
``configure``; the last write wins.

``get`` always logs before fetching and transforms after the fetch
completes. Failures from the fetcher or the transformer propagate to the
caller unchanged.

Usage:
    # Zero configuration: no I/O, no logging, identity transform
    await RequestPipeline().get("/echo/json")        # None

    # Real HTTP fetcher and logger
    body = await RequestPipeline.build().get("/echo/json")
    body = await RequestPipeline.call("/echo/json")  # same thing

    # Swap collaborators
    pipeline = RequestPipeline.build()
    Decrypter.configure(pipeline)
    pipeline.configure("logger", None)
"""

import logging
from typing import Any

from reqpipe.clients.http import HttpGet
from reqpipe.collaborators.logger import Logger
from reqpipe.ports import Fetch, SupportsLog, SupportsTransform

logger = logging.getLogger(__name__)

SLOTS = ("fetcher", "logger", "transformer")


async def null_fetch(resource: str) -> None:
    """Safe substitute fetcher: succeeds with None, never touches the network."""
    return None


class RequestPipeline:
    """Orchestrates one fetch with optional logging and transformation.

    Args:
        fetcher: Async callable retrieving a resource (default: null_fetch)
        logger: Collaborator receiving the "getting ..." message (default: none)
        transformer: Collaborator applied to the fetched value (default: none)
    """

    def __init__(
        self,
        fetcher: Fetch | None = None,
        logger: SupportsLog | None = None,
        transformer: SupportsTransform | None = None,
    ) -> None:
        self.fetcher: Fetch = fetcher if fetcher is not None else null_fetch
        self.logger: SupportsLog | None = logger
        self.transformer: SupportsTransform | None = transformer

    @classmethod
    def build(cls) -> "RequestPipeline":
        """Create a pipeline with the HTTP fetcher and a real logger.

        The transformer slot is left empty.
        """
        instance = cls()
        HttpGet.configure(instance)
        Logger.configure(instance)
        return instance

    @classmethod
    async def call(cls, resource: str) -> Any:
        """Equivalent to ``RequestPipeline.build().get(resource)``."""
        return await cls.build().get(resource)

    def configure(self, role: str, collaborator: Any) -> "RequestPipeline":
        """Assign ``collaborator`` into the named slot.

        Passing None empties an optional slot.

        Args:
            role: "fetcher", "logger" or "transformer"
            collaborator: Object filling the slot

        Returns:
            This pipeline, for chaining

        Raises:
            ValueError: If ``role`` is not a slot, or the fetcher is set to None
        """
        if role not in SLOTS:
            raise ValueError(f"Unknown slot '{role}', expected one of {SLOTS}")
        if role == "fetcher" and collaborator is None:
            raise ValueError("The fetcher slot cannot be emptied")

        setattr(self, role, collaborator)
        logger.debug("Slot %s set to %r", role, collaborator)
        return self

    async def get(self, resource: str) -> Any:
        """Fetch ``resource``, logging first and transforming the result.

        Args:
            resource: Resource identifier handed to the fetcher (path or URL)

        Returns:
            The transformed result, or the raw result when no transformer is set
        """
        self.log(f"getting {resource}")
        result = await self.fetcher(resource)
        return self.transform(result)

    def log(self, message: str) -> None:
        if self.logger is not None:
            self.logger.log(message)

    def transform(self, data: Any) -> Any:
        if self.transformer is None:
            return data
        return self.transformer.transform(data)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(fetcher={self.fetcher!r}, "
            f"logger={self.logger!r}, transformer={self.transformer!r})"
        )


async def fetch(resource: str) -> Any:
    """Fetch ``resource`` through a freshly built pipeline."""
    return await RequestPipeline.call(resource)
