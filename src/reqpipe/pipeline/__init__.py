"""Request pipeline — log → fetch → transform.

Components:
- RequestPipeline: the orchestrator owning the fetcher, logger and transformer slots
- fetch: one-shot convenience over RequestPipeline.call
"""

from reqpipe.pipeline.getter import RequestPipeline, fetch, null_fetch

__all__ = ["RequestPipeline", "fetch", "null_fetch"]
