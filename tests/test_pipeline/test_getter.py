"""Tests for RequestPipeline — log → fetch → transform orchestration.

Tests the pipeline with in-memory collaborators to verify:
- Safe defaults (null fetcher, no logger, identity transform)
- Log-before-fetch and transform-after-fetch ordering
- Slot configuration (last write wins, clearing, invalid slots)
- Failure propagation from fetcher and transformer
- build() / call() wiring
"""

from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from reqpipe.clients.http import HttpGet
from reqpipe.collaborators import Decoder, Decrypter, Logger, Transformer
from reqpipe.collaborators.transformers import DECODED_PLACEHOLDER, DECRYPTED_PLACEHOLDER
from reqpipe.config import settings
from reqpipe.pipeline import RequestPipeline, fetch, null_fetch


# --- Fixtures ---


def make_fetcher(value):
    """Async fetcher double returning ``value``."""
    return AsyncMock(return_value=value)


class RecordingLogger:
    """Logger double recording messages into a shared event list."""

    def __init__(self, events: list) -> None:
        self.events = events

    def log(self, message: str) -> None:
        self.events.append(("log", message))


class TestDefaults:
    """Test a default-constructed pipeline."""

    def test_slots_after_construction(self) -> None:
        """Fetcher is the null substitute; logger and transformer are empty."""
        pipeline = RequestPipeline()
        assert pipeline.fetcher is null_fetch
        assert pipeline.logger is None
        assert pipeline.transformer is None

    @pytest.mark.asyncio
    async def test_null_fetch_returns_none(self) -> None:
        """Safe substitute succeeds with None."""
        assert await null_fetch("/anything") is None

    @pytest.mark.asyncio
    @pytest.mark.parametrize("resource", ["/echo/json", "", "https://example.com/a?b=c"])
    async def test_get_returns_substitute_value(self, resource) -> None:
        """Default pipeline returns the substitute's value unchanged."""
        assert await RequestPipeline().get(resource) is None

    @pytest.mark.asyncio
    async def test_no_logging_without_logger(self, caplog) -> None:
        """Default pipeline produces no request log output."""
        with caplog.at_level("DEBUG", logger="reqpipe.requests"):
            await RequestPipeline().get("/x")
        assert not [r for r in caplog.records if r.name == "reqpipe.requests"]

    def test_constructor_injection(self) -> None:
        """Collaborators can be passed directly to the constructor."""
        fetcher = make_fetcher("raw")
        log = Logger()
        transformer = Transformer()
        pipeline = RequestPipeline(fetcher=fetcher, logger=log, transformer=transformer)
        assert pipeline.fetcher is fetcher
        assert pipeline.logger is log
        assert pipeline.transformer is transformer


class TestGet:
    """Test the get() operation."""

    @pytest.mark.asyncio
    async def test_raw_result_without_transformer(self) -> None:
        """Fetched value is returned unchanged when no transformer is set."""
        fetcher = make_fetcher("raw")
        pipeline = RequestPipeline(fetcher=fetcher)

        assert await pipeline.get("/x") == "raw"
        fetcher.assert_awaited_once_with("/x")

    @pytest.mark.asyncio
    async def test_transformer_applied(self) -> None:
        """Transformer output becomes the final result."""
        pipeline = RequestPipeline(fetcher=make_fetcher({"a": 1}))
        Decrypter.configure(pipeline)

        assert await pipeline.get("/x") == DECRYPTED_PLACEHOLDER

    @pytest.mark.asyncio
    async def test_transformer_receives_fetched_value(self) -> None:
        """Transformer is called with exactly the fetched value."""
        fetched = {"a": 1}
        transformer = MagicMock()
        transformer.transform.return_value = "derived"
        pipeline = RequestPipeline(fetcher=make_fetcher(fetched), transformer=transformer)

        assert await pipeline.get("/x") == "derived"
        transformer.transform.assert_called_once_with(fetched)

    @pytest.mark.asyncio
    async def test_identity_transformer(self) -> None:
        """A plain Transformer leaves the value untouched."""
        fetched = {"a": 1}
        pipeline = RequestPipeline(fetcher=make_fetcher(fetched), transformer=Transformer())
        assert await pipeline.get("/x") is fetched

    @pytest.mark.asyncio
    async def test_logger_called_once_with_resource(self) -> None:
        """Logger receives one message containing the resource."""
        sink = MagicMock()
        pipeline = RequestPipeline(fetcher=make_fetcher("raw"), logger=Logger(sink))

        await pipeline.get("/echo/json")

        sink.assert_called_once()
        (message,), _ = sink.call_args
        assert "/echo/json" in message
        assert message == "getting /echo/json"

    @pytest.mark.asyncio
    async def test_log_fetch_transform_order(self) -> None:
        """Log precedes fetch, transform follows fetch."""
        events: list = []

        async def fetcher(resource):
            events.append(("fetch", resource))
            return "raw"

        def transform(data):
            events.append(("transform", data))
            return data.upper()

        pipeline = RequestPipeline(
            fetcher=fetcher,
            logger=RecordingLogger(events),
            transformer=Transformer(transform),
        )

        assert await pipeline.get("/x") == "RAW"
        assert events == [
            ("log", "getting /x"),
            ("fetch", "/x"),
            ("transform", "raw"),
        ]


class TestFailurePropagation:
    """Fetch and transform failures reach the caller unchanged."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("with_collaborators", [False, True])
    async def test_fetch_failure_propagates(self, with_collaborators) -> None:
        """The exact fetcher exception is re-raised."""
        error = ConnectionError("boom")
        fetcher = AsyncMock(side_effect=error)
        pipeline = RequestPipeline(fetcher=fetcher)
        if with_collaborators:
            pipeline.configure("logger", Logger(MagicMock()))
            Decoder.configure(pipeline)

        with pytest.raises(ConnectionError) as exc_info:
            await pipeline.get("/x")
        assert exc_info.value is error

    @pytest.mark.asyncio
    async def test_transformer_not_called_after_fetch_failure(self) -> None:
        """No transform happens when the fetch fails."""
        transformer = MagicMock()
        pipeline = RequestPipeline(
            fetcher=AsyncMock(side_effect=RuntimeError("down")),
            transformer=transformer,
        )

        with pytest.raises(RuntimeError):
            await pipeline.get("/x")
        transformer.transform.assert_not_called()

    @pytest.mark.asyncio
    async def test_transform_failure_propagates(self) -> None:
        """The exact transformer exception is re-raised."""
        error = ValueError("cannot decode")

        def broken(data):
            raise error

        pipeline = RequestPipeline(fetcher=make_fetcher("raw"), transformer=Transformer(broken))

        with pytest.raises(ValueError) as exc_info:
            await pipeline.get("/x")
        assert exc_info.value is error

    @pytest.mark.asyncio
    async def test_logger_still_called_before_failed_fetch(self) -> None:
        """Logging happens before the fetch, even one that fails."""
        sink = MagicMock()
        pipeline = RequestPipeline(
            fetcher=AsyncMock(side_effect=RuntimeError("down")),
            logger=Logger(sink),
        )

        with pytest.raises(RuntimeError):
            await pipeline.get("/x")
        sink.assert_called_once_with("getting /x")


class TestConfigure:
    """Test slot configuration."""

    @pytest.mark.asyncio
    async def test_last_write_wins(self) -> None:
        """Second transformer replaces the first."""
        pipeline = RequestPipeline(fetcher=make_fetcher("raw"))
        Decrypter.configure(pipeline)
        Decoder.configure(pipeline)

        assert await pipeline.get("/x") == DECODED_PLACEHOLDER

    @pytest.mark.asyncio
    async def test_configure_twice_is_idempotent(self) -> None:
        """Configuring the same transformer twice behaves like once."""
        transformer = Transformer(lambda data: f"<{data}>")
        once = RequestPipeline(fetcher=make_fetcher("raw"))
        once.configure("transformer", transformer)
        twice = RequestPipeline(fetcher=make_fetcher("raw"))
        twice.configure("transformer", transformer).configure("transformer", transformer)

        assert await once.get("/x") == await twice.get("/x") == "<raw>"

    @pytest.mark.asyncio
    async def test_none_clears_optional_slot(self) -> None:
        """Passing None removes a logger or transformer."""
        sink = MagicMock()
        pipeline = RequestPipeline(fetcher=make_fetcher("raw"), logger=Logger(sink))
        Decrypter.configure(pipeline)

        pipeline.configure("logger", None).configure("transformer", None)

        assert await pipeline.get("/x") == "raw"
        sink.assert_not_called()

    def test_fetcher_slot_swappable(self) -> None:
        """Fetcher can be replaced through configure."""
        fetcher = make_fetcher("raw")
        pipeline = RequestPipeline()
        pipeline.configure("fetcher", fetcher)
        assert pipeline.fetcher is fetcher

    def test_fetcher_cannot_be_emptied(self) -> None:
        """Fetcher slot is never unset."""
        pipeline = RequestPipeline()
        with pytest.raises(ValueError, match="cannot be emptied"):
            pipeline.configure("fetcher", None)
        assert pipeline.fetcher is null_fetch

    def test_unknown_slot_rejected(self) -> None:
        """Only fetcher, logger and transformer are slots."""
        with pytest.raises(ValueError, match="Unknown slot"):
            RequestPipeline().configure("decrypter", Decrypter())

    def test_configure_returns_pipeline(self) -> None:
        """configure() supports chaining."""
        pipeline = RequestPipeline()
        assert pipeline.configure("logger", Logger()) is pipeline


class TestBuildAndCall:
    """Test build() and the class-level call()."""

    def test_build_wiring(self) -> None:
        """build() installs the HTTP fetcher and a logger, no transformer."""
        pipeline = RequestPipeline.build()
        assert isinstance(pipeline.fetcher, HttpGet)
        assert pipeline.fetcher.base_url == settings.base_url
        assert isinstance(pipeline.logger, Logger)
        assert pipeline.transformer is None

    def test_build_returns_fresh_instances(self) -> None:
        """Each build() creates independent slots."""
        first = RequestPipeline.build()
        second = RequestPipeline.build()
        Decoder.configure(first)
        assert second.transformer is None

    @pytest.mark.asyncio
    async def test_call_matches_build_get(self, respx_mock) -> None:
        """call(r) behaves like build().get(r)."""
        route = respx_mock.get(f"{settings.base_url}/echo/json").mock(
            return_value=httpx.Response(200, text='{"echo": true}')
        )

        via_call = await RequestPipeline.call("/echo/json")
        via_build = await RequestPipeline.build().get("/echo/json")

        assert via_call == via_build == '{"echo": true}'
        assert route.call_count == 2

    @pytest.mark.asyncio
    async def test_call_logs_request(self, respx_mock, caplog) -> None:
        """Built pipeline logs the request at warning level."""
        respx_mock.get(f"{settings.base_url}/echo/json").mock(
            return_value=httpx.Response(200, text="ok")
        )

        with caplog.at_level("WARNING", logger="reqpipe.requests"):
            await RequestPipeline.call("/echo/json")

        messages = [r.getMessage() for r in caplog.records if r.name == "reqpipe.requests"]
        assert messages == ["getting /echo/json"]

    @pytest.mark.asyncio
    async def test_fetch_function(self, mocker) -> None:
        """fetch() delegates to RequestPipeline.call."""
        call = mocker.patch.object(RequestPipeline, "call", AsyncMock(return_value="body"))

        assert await fetch("/echo/json") == "body"
        call.assert_awaited_once_with("/echo/json")
