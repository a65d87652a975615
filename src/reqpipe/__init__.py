"""reqpipe — a pluggable request pipeline.

A RequestPipeline performs one fetch, optionally logs before it and
optionally transforms the result. Each collaborator can be swapped on its
own and defaults to a safe no-op.
"""

from reqpipe.collaborators import Decoder, Decrypter, Logger, Transformer
from reqpipe.errors import FetchError, ReqpipeError, UnknownTransformerError
from reqpipe.pipeline import RequestPipeline, fetch

__version__ = "0.1.0"

__all__ = [
    "RequestPipeline",
    "fetch",
    "Logger",
    "Transformer",
    "Decrypter",
    "Decoder",
    "ReqpipeError",
    "FetchError",
    "UnknownTransformerError",
    "__version__",
]
