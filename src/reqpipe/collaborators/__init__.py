"""Optional pipeline collaborators.

- Logger: records the pipeline's messages (no-op unless built)
- Transformer: maps fetched results (identity unless built)
- Decrypter, Decoder: placeholder transformer variants
"""

from reqpipe.collaborators.logger import Logger
from reqpipe.collaborators.transformers import (
    TRANSFORMERS,
    Decoder,
    Decrypter,
    Transformer,
    get_transformer,
)

__all__ = [
    "Logger",
    "Transformer",
    "Decrypter",
    "Decoder",
    "TRANSFORMERS",
    "get_transformer",
]
