"""Transformer collaborators — map a fetched result to a derived result.

Every transformer wraps one pure function. Plain construction gives the
identity function; ``build()`` gives the variant's own function.

Decrypter and Decoder are placeholders: their built functions ignore the
input and return a fixed message. They do not decrypt or decode anything.

Usage:
    pipeline = RequestPipeline()
    Decoder.configure(pipeline)            # decoding pipeline

    Decrypter.call(333)                    # 'Decrypted: winter is over!'
    Transformer(str.upper).transform("a")  # 'A'
"""

from collections.abc import Callable
from typing import Any

from reqpipe.errors import UnknownTransformerError

TransformFunc = Callable[[Any], Any]

DECRYPTED_PLACEHOLDER = "Decrypted: winter is over!"
DECODED_PLACEHOLDER = "Decoded: This lunch & learn is le Awesome! Especially the lunch"


def identity(data: Any) -> Any:
    return data


class Transformer:
    """Wraps a single-argument function applied to fetched results.

    Args:
        func: Function mapping raw → derived (default: identity)
    """

    def __init__(self, func: TransformFunc | None = None) -> None:
        self._func = func if func is not None else identity

    @staticmethod
    def built_function() -> TransformFunc:
        """Function installed by ``build()``; subclasses override this."""
        return identity

    @classmethod
    def build(cls) -> "Transformer":
        return cls(cls.built_function())

    @classmethod
    def configure(cls, receiver: Any) -> None:
        """Put a freshly built transformer into ``receiver``'s transformer slot."""
        receiver.configure("transformer", cls.build())

    @classmethod
    def call(cls, data: Any) -> Any:
        """Transform ``data`` with a freshly built instance."""
        return cls.build().transform(data)

    def transform(self, data: Any) -> Any:
        return self._func(data)

    def __call__(self, data: Any) -> Any:
        return self.transform(data)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(func={self._func!r})"


class Decrypter(Transformer):
    """Placeholder decrypting transformer."""

    @staticmethod
    def built_function() -> TransformFunc:
        return lambda data: DECRYPTED_PLACEHOLDER


class Decoder(Transformer):
    """Placeholder decoding transformer."""

    @staticmethod
    def built_function() -> TransformFunc:
        return lambda data: DECODED_PLACEHOLDER


# Names accepted by the CLI --transform option
TRANSFORMERS: dict[str, type[Transformer]] = {
    "identity": Transformer,
    "decrypt": Decrypter,
    "decode": Decoder,
}


def get_transformer(name: str) -> type[Transformer]:
    """Look up a transformer class by its registered name.

    Raises:
        UnknownTransformerError: If no transformer is registered under ``name``
    """
    try:
        return TRANSFORMERS[name.lower()]
    except KeyError:
        raise UnknownTransformerError(name, sorted(TRANSFORMERS)) from None
