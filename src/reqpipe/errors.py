"""Exception types raised by reqpipe.

The pipeline itself never wraps failures: whatever the fetcher or the
transformer raises reaches the caller of ``get`` unchanged. These classes
cover the errors reqpipe's own components detect.
"""


class ReqpipeError(Exception):
    """Base exception for reqpipe errors."""


class FetchError(ReqpipeError):
    """Raised by the HTTP fetcher when a resource cannot be retrieved."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        response_body: str | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.response_body = response_body


class UnknownTransformerError(ReqpipeError, KeyError):
    """Raised when a transformer name is not registered."""

    def __init__(self, name: str, available: list[str]) -> None:
        super().__init__(name)
        self.name = name
        self.available = available

    def __str__(self) -> str:
        return f"Unknown transformer '{self.name}' (available: {', '.join(self.available)})"
